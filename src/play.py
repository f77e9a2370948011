"""
Interactive terminal session for Grid 2048.

Asks for a seed and a difficulty, then loops: print the board, read a move,
apply it. Ends with "You win!" when the target tile appears, "You lose." when
no move can change the board, or silently on Q / end of input.

Usage:
    python -m src.play
    python -m src.play --seed 42 --mode M
"""

import argparse

from src.game.config import Difficulty, MOVE_KEYS
from src.game.grid_engine import GridEngine
from src.game.rng import SeededRandom

SEED_PROMPT = "Enter random seed: "
MODE_PROMPT = "Choose game mode: Easy (E), Medium (M), or Hard (H): "
MOVE_PROMPT = "Enter move: U, D, L, or R. Q to quit: "


def _ask(read, prompt):
    """Returns the stripped answer, or None once input is exhausted."""
    try:
        return read(prompt).strip()
    except EOFError:
        return None


def read_seed(read, write):
    while True:
        answer = _ask(read, SEED_PROMPT)
        if answer is None:
            return None
        try:
            return int(answer)
        except ValueError:
            write("Error: Invalid seed.")


def read_mode(read, write):
    valid_modes = [difficulty.value for difficulty in Difficulty]
    while True:
        answer = _ask(read, MODE_PROMPT)
        if answer is None:
            return None
        if answer in valid_modes:
            return Difficulty(answer)
        write("Error: Invalid mode.")


def run_session(game, read=None, write=None):
    """
    Plays one game on an already built engine.

    Returns:
        str: "win", "lose" or "quit".
    """
    read = read if read is not None else input
    write = write if write is not None else print

    while not game.is_terminal():
        write(str(game))

        move_input = _ask(read, MOVE_PROMPT)
        if move_input is None or move_input.upper() == 'Q':
            return "quit"

        if len(move_input) != 1 or move_input.upper() not in MOVE_KEYS:
            write("Error: Invalid move.")
            continue

        if not game.move(MOVE_KEYS[move_input.upper()]):
            write("Invalid move direction.")
            continue

        if game.check_win():
            write(str(game))
            write("You win!")
            return "win"

    write(str(game))
    write("You lose.")
    return "lose"


def play(seed=None, mode=None, read=None, write=None):
    """Full session: prompts for whatever was not given, then runs the game."""
    read = read if read is not None else input
    write = write if write is not None else print

    if seed is None:
        seed = read_seed(read, write)
        if seed is None:
            return "quit"

    if mode is None:
        mode = read_mode(read, write)
        if mode is None:
            return "quit"

    game = GridEngine(mode, rng=SeededRandom(seed))
    return run_session(game, read, write)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play Grid 2048 in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (prompted for if omitted).")
    parser.add_argument("--mode", type=str, choices=["E", "M", "H"], default=None,
                        help="Difficulty: E (256), M (512) or H (1024).")
    args = parser.parse_args(argv)

    play(seed=args.seed, mode=Difficulty(args.mode) if args.mode else None)
    return 0


if __name__ == "__main__":
    main()
