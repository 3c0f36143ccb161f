"""Shared constants and enumerations for the puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CellState(str, Enum):
    """Edit state of a grid cell."""

    EMPTY = "empty"
    FILLED = "filled"
    LOCKED = "locked"


class Validation(str, Enum):
    """Verdict attached to a cell once its row was validated."""

    NONE = "none"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class GameMode(str, Enum):
    """Game variants. ``ACTION`` freezes every row after validation."""

    PUZZLE = "puzzle"
    ACTION = "action"


class RuleTileType(str, Enum):
    """Discriminator tag of the rule tile sum type."""

    HARD_MATCH = "hardMatch"
    SOFT_MATCH = "softMatch"
    FORBIDDEN_MATCH = "forbiddenMatch"


class TilePosition(str, Enum):
    """Which member of a hard-match pair a tile is."""

    TOP = "top"
    BOTTOM = "bottom"

    @property
    def opposite(self) -> "TilePosition":
        return TilePosition.BOTTOM if self is TilePosition.TOP else TilePosition.TOP


class PlacementStrategy(str, Enum):
    """How the generator distributes rule tiles."""

    RANDOM = "random"
    CPSAT = "cpsat"


WORD_ROWS = 7
MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 5
GRID_COLS = 9
CENTER_COL = 4

MIN_RULE_TILES_PER_WORD = 1
MAX_PLACEMENT_ATTEMPTS = 100

# Words shorter than this are never spell-checked.
MIN_CHECKABLE_LENGTH = 3

SUPPORTED_WORD_LENGTHS = (3, 4, 5, 6)


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
