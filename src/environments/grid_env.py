import gymnasium
from gymnasium import spaces
import numpy as np

from src.game.config import BOARD_SIZE, Difficulty, Direction
from src.game.grid_engine import GridEngine
from src.game.rng import SeededRandom


class GridEnv(gymnasium.Env):
    """
    Gymnasium wrapper for the Grid 2048 engine.

    Lets automated players drive the engine through the standard
    reset/step API. Responsibilities:
    1.  Seeding: the engine's RandomSource draws from gymnasium's `np_random`,
        so `reset(seed=...)` reproduces a whole episode.
    2.  Reward: sparse and binary. +1 for reaching the difficulty's target,
        -1 for a terminal board without it, 0 for every other step.
    """
    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, difficulty=Difficulty.EASY, render_mode=None):
        super().__init__()
        self.difficulty = Difficulty.parse(difficulty)
        self.game = None

        # 0:Up, 1:Down, 2:Left, 3:Right
        self.action_space = spaces.Discrete(4)
        self.observation_space = spaces.Box(low=0,
                                            high=np.inf,
                                            shape=(BOARD_SIZE, BOARD_SIZE),
                                            dtype=np.int64)
        self.render_mode = render_mode

    def _get_info(self, moved=False):
        return {
            "moved": moved,
            "max_tile": self.game.get_max_tile(),
            "num_empty_cells": len(self.game.empty_cells()),
        }

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)
        self.game = GridEngine(self.difficulty, rng=SeededRandom(generator=self.np_random))

        if self.render_mode == "human":
            self.render()
        return self.game.board.copy(), self._get_info()

    def step(self, action):
        if self.game is None:
            raise RuntimeError("Call reset() before step()")
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}. Must be 0 (up), 1 (down), 2 (left) or 3 (right).")

        moved = self.game.move(Direction(int(action)))

        won = self.game.check_win()
        terminal = self.game.is_terminal()

        # Sparse Binary Reward
        reward = 0.0
        if won:
            reward = 1.0
        elif terminal:
            reward = -1.0

        terminated = won or terminal
        truncated = False

        if self.render_mode == "human":
            self.render()

        return self.game.board.copy(), reward, terminated, truncated, self._get_info(moved)

    def get_valid_moves_mask(self):
        """Boolean mask [Up, Down, Left, Right] of moves that change the board."""
        return [self.game.is_move_possible(direction) for direction in Direction]

    def render(self):
        if self.render_mode == "human":
            print(self.game)
        elif self.render_mode == "ansi":
            return str(self.game)
