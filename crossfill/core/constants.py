"""Shared constants and enumerations for the crossword filler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BLACK = "#"
BLANK = "_"
NO_SLOT = -1

# Runs this short are never searched; they take letters from crossing fills.
MIN_PATTERN_LENGTH = 2
MAX_WORD_POOL_LENGTH = 10
DEFAULT_REFRESH_RATE = 100


class Direction(str, Enum):
    """Slot directions supported by the grid."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @property
    def opposite(self) -> "Direction":
        if self is Direction.HORIZONTAL:
            return Direction.VERTICAL
        return Direction.HORIZONTAL


class SolveStatus(str, Enum):
    """Outcome of one solve attempt."""

    PENDING = "PENDING"
    SOLVED = "SOLVED"
    FAILED = "FAILED"
    STEP_LIMIT = "STEP_LIMIT"
    INFEASIBLE = "INFEASIBLE"


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
