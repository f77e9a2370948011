"""
Random Baseline Agent for Grid 2048.

Picks uniformly among the moves that would change the board, which gives a
floor to compare other players against. The evaluation entry point plays a
batch of seeded games and reports how often each difficulty is beaten.

Usage:
    python -m src.agents.random_agent --mode E --episodes 100 --seed 0
"""

import argparse
import time
from datetime import timedelta

import numpy as np
from tqdm import tqdm

from src.game.config import Difficulty
from src.game.grid_engine import GridEngine
from src.game.rng import SeededRandom

# Safety cap to prevent infinite loops in broken agents
MAX_STEPS_PER_EPISODE = 5000


class RandomAgent:

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else SeededRandom()

    def choose_action(self, game):
        '''
        Picks a random move among those that change the board, or None.
        '''
        valid_actions = game.get_valid_moves()
        if not valid_actions:
            return None
        return valid_actions[self.rng.choose_random_number(0, len(valid_actions) - 1)]


def play_game(agent, game, max_steps=MAX_STEPS_PER_EPISODE, print_board=False):
    '''
    Plays until the game is won, no move is left, or the step cap is hit.
    '''
    steps = 0
    while steps < max_steps and not game.is_terminal():
        if print_board:
            print(game)

        action = agent.choose_action(game)
        if action is None:
            break

        game.move(action)
        steps += 1

        if game.check_win():
            break

    return {
        "won": game.check_win(),
        "max_tile": game.get_max_tile(),
        "steps": steps,
    }


def evaluate_agent(argv=None):
    """
    Runs a series of seeded episodes and prints win rate and tile statistics.
    """
    parser = argparse.ArgumentParser(description="Evaluates the random baseline agent.")
    parser.add_argument("--mode", type=str, choices=["E", "M", "H"], default="E")
    parser.add_argument("--episodes", type=int, default=100)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args(argv)
    if args.episodes < 1:
        parser.error("--episodes must be at least 1")

    difficulty = Difficulty(args.mode)
    agent = RandomAgent(SeededRandom(args.seed))

    all_max_tiles = []
    all_steps = []
    wins = 0

    print(f"*** Starting Random Agent Evaluation ***")
    print(f"Mode: {difficulty.name}, Episodes: {args.episodes}\n")

    start_time = time.time()

    for i in tqdm(range(args.episodes)):
        game = GridEngine(difficulty, rng=SeededRandom(args.seed + i))
        result = play_game(agent, game)

        all_max_tiles.append(result["max_tile"])
        all_steps.append(result["steps"])
        if result["won"]:
            wins += 1

    total_duration = time.time() - start_time

    print("\n*** Final Results ***")
    print(f"Win Rate:       {wins / args.episodes:.2%}")
    print(f"Avg Max Tile:   {np.mean(all_max_tiles):.2f}")
    print(f"Highest Tile:   {np.max(all_max_tiles)}")
    print(f"Avg Moves:      {np.mean(all_steps):.1f}")
    print(f"Total Time:     {str(timedelta(seconds=int(total_duration)))}")
    return wins


def main(argv=None):
    evaluate_agent(argv)
    return 0


if __name__ == "__main__":
    main()
