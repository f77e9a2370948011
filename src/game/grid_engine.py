"""
Core Game Logic for Grid 2048.

This module implements the board-state transition rules: sliding and merging,
random tile spawning, and win / terminal detection.

Key Points:
1.  Numba JIT Compilation: the per-row slide/merge loop is compiled with
    `@njit`, so automated players can run many games quickly.
2.  One merge implementation: only "slide left" exists. Every other direction
    rotates the board so it points left, slides, and rotates back.
3.  Logic Separation: `preview` calculates a move *without* mutating the
    board or spawning, `move` commits it. Agents use the former to find legal
    moves.
4.  Injected randomness: all draws go through the engine's RandomSource.
"""

import numpy as np
from numba import njit

from src.game.config import (
    BOARD_SIZE, Difficulty, ROTATIONS_TO_LEFT, SPAWN_ROLL_HIGH, SPAWN_ROLL_LOW,
    TWO_TILE_THRESHOLDS, WIN_TARGETS,
)
from src.game.rng import SeededRandom


@njit
def slide_row_left(row):
    """
    Core Logic: compresses and merges a 1D row toward index 0.

    Each tile is compared with the last tile written to the output. Equal
    values merge, unless that output tile was itself produced by a merge in
    this pass:
    - [2, 2, 4, 0] -> [4, 4, 0, 0]
    - [2, 2, 2, 2] -> [4, 4, 0, 0]
    - [2, 4, 2, 4] -> [2, 4, 2, 4]

    Args:
        row (np.array): A 1D row from the board.

    Returns:
        np.array: The new row, right-padded with zeros.
    """
    length = row.shape[0]
    result = np.zeros(length, dtype=np.int64)
    write_idx = 0
    last_merged = False

    for read_idx in range(length):
        value = row[read_idx]
        if value == 0:
            continue
        if write_idx > 0 and not last_merged and result[write_idx - 1] == value:
            # Merge into the previous output tile
            result[write_idx - 1] = value * 2
            last_merged = True
        else:
            result[write_idx] = value
            write_idx += 1
            last_merged = False

    return result


@njit
def slide_board_left(board):
    """Applies `slide_row_left` to every row of a C-contiguous 2D board."""
    rows, cols = board.shape
    result = np.zeros((rows, cols), dtype=np.int64)
    for r in range(rows):
        result[r] = slide_row_left(board[r])
    return result


def rotate_grid(board, quarter_turns):
    """
    Rotates the board by `quarter_turns` counter-clockwise quarter turns
    (negative values turn clockwise). Returns a new array; the input is left
    untouched. Four turns in the same direction give back the original board.
    """
    return np.ascontiguousarray(np.rot90(board, k=quarter_turns))


def _rotations_for(direction):
    """Quarter turns that align `direction` with Left, or None if invalid."""
    if isinstance(direction, bool) or not isinstance(direction, (int, np.integer)):
        return None
    return ROTATIONS_TO_LEFT.get(int(direction))


class GridEngine:
    def __init__(self, difficulty=Difficulty.EASY, rng=None):
        """
        The Game Engine. Manages the board, moves, spawns and win/loss checks.

        Args:
            difficulty (Difficulty | str): Difficulty or its letter ('E', 'M', 'H').
            rng (RandomSource | None): Source of every random draw. A fresh,
                unseeded SeededRandom is used when omitted.
        """
        self.size = BOARD_SIZE
        self.difficulty = Difficulty.parse(difficulty)
        self.win_target = WIN_TARGETS[self.difficulty]
        self.rng = rng if rng is not None else SeededRandom()
        self.board = np.zeros((self.size, self.size), dtype=np.int64)

        self._add_new_tile()
        self._add_new_tile()

    def empty_cells(self):
        """(row, col) of every empty cell, in row-major order."""
        rows, cols = np.where(self.board == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def _add_new_tile(self):
        """
        Spawns a 2 or a 4 in a uniformly chosen empty cell.

        The first draw picks the cell, the second rolls the tile value against
        the difficulty's threshold. Does nothing on a full board.
        """
        empty_cells = self.empty_cells()
        if not empty_cells:
            return

        row, col = empty_cells[self.rng.choose_random_number(0, len(empty_cells) - 1)]
        roll = self.rng.choose_random_number(SPAWN_ROLL_LOW, SPAWN_ROLL_HIGH)
        self.board[row, col] = 2 if roll <= TWO_TILE_THRESHOLDS[self.difficulty] else 4

    def preview(self, direction):
        """
        Calculates the result of a move *without* spawning new tiles.

        Args:
            direction (Direction | int): 0:Up, 1:Down, 2:Left, 3:Right

        Returns:
            (np.ndarray, bool): The new board and whether the board changed.
            An invalid direction gives back the current board and False.
        """
        k = _rotations_for(direction)
        if k is None:
            return self.board.copy(), False

        rotated_board = rotate_grid(self.board, k)
        final_board = rotate_grid(slide_board_left(rotated_board), -k)

        board_changed = not np.array_equal(self.board, final_board)
        return final_board, board_changed

    def move(self, direction):
        """
        Executes a move.

        Side Effects (only when the board changed):
            1. Updates self.board
            2. Spawns exactly one new tile

        Returns:
            bool: True if any cell changed.
        """
        final_board, board_changed = self.preview(direction)

        if board_changed:
            self.board = final_board
            self._add_new_tile()

        return board_changed

    def fast_copy(self):
        """
        Creates a lightweight clone of the engine.

        Bypasses `__init__` so no tiles are spawned. The clone shares the
        RandomSource but owns its own board.
        """
        new_game = self.__class__.__new__(self.__class__)
        new_game.size = self.size
        new_game.difficulty = self.difficulty
        new_game.win_target = self.win_target
        new_game.rng = self.rng
        new_game.board = np.copy(self.board)
        return new_game

    def is_move_possible(self, direction):
        """Checks if a specific move would change the board."""
        _, board_changed = self.preview(direction)
        return board_changed

    def get_valid_moves(self):
        """Returns a list of all legal move indices [0, 1, 2, 3]."""
        return [direction for direction in range(4) if self.is_move_possible(direction)]

    def check_win(self):
        """True iff some cell holds the difficulty's win target."""
        return bool(np.any(self.board == self.win_target))

    def is_terminal(self):
        """
        True iff the board is full and no two horizontally or vertically
        adjacent cells are equal. No slide can change such a board.
        """
        if np.any(self.board == 0):
            return False

        # Horizontal neighbours
        if np.any(self.board[:, :-1] == self.board[:, 1:]):
            return False

        # Vertical neighbours
        if np.any(self.board[:-1, :] == self.board[1:, :]):
            return False

        return True

    def cell_at(self, row, col):
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board")
        return int(self.board[row, col])

    def get_max_tile(self):
        return int(np.max(self.board))

    def __str__(self):
        """Bordered table, each cell right-aligned in 4 characters."""
        border = "-" * (5 * self.size + 1)
        lines = [border]
        for row in self.board:
            cells = "".join(("    " if value == 0 else f"{int(value):4d}") + "|" for value in row)
            lines.append("|" + cells)
            lines.append(border)
        return "\n".join(lines)
