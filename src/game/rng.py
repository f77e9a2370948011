"""
Random number capability used by the game engine.

The engine never touches a global generator. Every draw goes through
`choose_random_number(low, high)` on an object handed to it, so a session can
be replayed from its seed and tests can script the exact sequence of draws.
"""

import numpy as np


def _fold_seed(seed):
    """Maps any integer seed onto the unsigned 32-bit range numpy accepts."""
    return None if seed is None else int(seed) & 0xFFFFFFFF


class RandomSource:
    """Interface: uniform integer in [low, high], both bounds inclusive."""

    def choose_random_number(self, low, high):
        raise NotImplementedError


class SeededRandom(RandomSource):
    """
    numpy-backed RandomSource.

    Args:
        seed (int | None): Seed for a fresh generator. Ignored when
            `generator` is given.
        generator (np.random.Generator | None): Existing generator to draw
            from (the gymnasium environment passes its `np_random`).
    """
    def __init__(self, seed=None, generator=None):
        self.generator = generator if generator is not None else np.random.default_rng(_fold_seed(seed))

    def seed(self, value):
        """Restarts the sequence so later draws are reproducible."""
        self.generator = np.random.default_rng(_fold_seed(value))

    def choose_random_number(self, low, high):
        if low > high:
            raise ValueError(f"Empty range: low={low} is greater than high={high}")
        return int(self.generator.integers(low, high, endpoint=True))
