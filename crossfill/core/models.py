"""Data models supporting the crossword filler."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import BLACK, BLANK, NO_SLOT, Direction


@dataclass
class Cell:
    """One grid square.

    ``fill_count`` is the number of owning slots currently claiming a letter
    here (0, 1 or 2); the letter is blank exactly when nobody claims it.
    """

    letter: str = BLANK
    h_slot: int = NO_SLOT
    v_slot: int = NO_SLOT
    fill_count: int = 0
    conflicted: bool = False

    def is_black(self) -> bool:
        return self.letter == BLACK

    def is_blank(self) -> bool:
        return self.letter == BLANK

    def set(self, letter: str) -> None:
        self.letter = letter
        self.fill_count += 1
        self.conflicted = False

    def clear(self) -> None:
        if self.fill_count == 1:
            self.letter = BLANK
        self.fill_count -= 1

    def mark_conflicted(self) -> None:
        self.conflicted = True

    def slot_for(self, direction: Direction) -> int:
        return self.h_slot if direction == Direction.HORIZONTAL else self.v_slot


@dataclass(frozen=True)
class SlotRun:
    """A maximal run of white cells found while scanning the grid."""

    id: int
    direction: Direction
    start_row: int
    start_col: int
    length: int
