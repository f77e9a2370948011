"""
Game Configuration for Grid 2048.

Central table of the constants every other module reads:
1.  Board geometry (the grid is always square).
2.  Difficulty profiles: the tile that wins the game and how often a freshly
    spawned tile is a 4 rather than a 2.
3.  Direction indices shared by the engine, the terminal session and the
    gymnasium environment.

Spawn Bias Note:
    A spawn rolls a number in [SPAWN_ROLL_LOW, SPAWN_ROLL_HIGH]. Rolls at or
    below the difficulty's threshold produce a 2, anything higher a 4. Hard
    has the highest threshold, so it spawns the fewest 4s even though its
    target is the highest.
"""

from enum import Enum, IntEnum

# --- Board Configuration ---
BOARD_SIZE = 4


class Difficulty(Enum):
    EASY = "E"
    MEDIUM = "M"
    HARD = "H"

    @classmethod
    def parse(cls, value):
        """Accepts a Difficulty or its letter. Raises ValueError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown difficulty: {value!r}. Must be 'E', 'M' or 'H'.") from None


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# --- Difficulty Profiles ---
# The objective tile. Reaching it ends the session with a win.
WIN_TARGETS = {
    Difficulty.EASY: 256,
    Difficulty.MEDIUM: 512,
    Difficulty.HARD: 1024,
}

# Highest roll that still spawns a 2.
TWO_TILE_THRESHOLDS = {
    Difficulty.EASY: 5,     # 50% fours
    Difficulty.MEDIUM: 7,   # 30% fours
    Difficulty.HARD: 9,     # 10% fours
}

SPAWN_ROLL_LOW = 1
SPAWN_ROLL_HIGH = 10

# --- Direction Dispatch ---
# Counter-clockwise quarter turns that point 'direction' to the Left.
# Up(0) -> Left requires 1 rotation (CCW)
ROTATIONS_TO_LEFT = {
    Direction.UP: 1,
    Direction.DOWN: 3,
    Direction.LEFT: 0,
    Direction.RIGHT: 2,
}

# Single-letter commands used by the terminal session.
MOVE_KEYS = {
    'U': Direction.UP,
    'D': Direction.DOWN,
    'L': Direction.LEFT,
    'R': Direction.RIGHT,
}
