"""Slots: contiguous runs of white cells with a candidate-word domain."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..core.constants import BLANK, Direction
from ..core.models import SlotRun
from .grid import CrosswordGrid


def matches_mask(word: str, mask: Sequence[str]) -> bool:
    """True when ``word`` agrees with every fixed letter of ``mask``."""

    return all(fixed == BLANK or letter == fixed for letter, fixed in zip(word, mask))


class Slot:
    """One across or down entry of the puzzle.

    The slot keeps its own working domain (``options``) plus the untouched
    dictionary pool for its length, from which the domain can be rebuilt.
    ``stamp`` is the search step of the last fill, 0 while unfilled.
    """

    def __init__(self, grid: CrosswordGrid, run: SlotRun, pool: Sequence[str]) -> None:
        self.grid = grid
        self.id = run.id
        self.direction = run.direction
        self.row = run.start_row
        self.col = run.start_col
        self.length = run.length
        self.pool: Tuple[str, ...] = tuple(pool)
        self.options: List[str] = list(self.pool)
        self.stamp = 0
        if self.direction == Direction.HORIZONTAL:
            self.cells = [(self.row, self.col + i) for i in range(self.length)]
        else:
            self.cells = [(self.row + i, self.col) for i in range(self.length)]

    def __repr__(self) -> str:
        return (
            f"Slot(id={self.id}, {self.direction.value}, at=({self.row},{self.col}), "
            f"len={self.length}, options={len(self.options)}, stamp={self.stamp})"
        )

    # ------------------------------------------------------------------
    # Domain maintenance
    # ------------------------------------------------------------------
    def crossing_offsets(self, other: "Slot") -> Tuple[int, int]:
        """Return (index in this slot, index in ``other``) of the shared cell."""

        if self.direction == Direction.HORIZONTAL:
            return other.col - self.col, self.row - other.row
        return other.row - self.row, self.col - other.col

    def filter_options(self, word: str, other: "Slot") -> List[str]:
        """Candidates that agree with ``word`` placed in the crossing ``other``."""

        index, letter_index = self.crossing_offsets(other)
        letter = word[letter_index]
        return [option for option in self.options if option[index] == letter]

    def prune_options(self) -> None:
        """Narrow the current domain to the letters of conflicted cells."""

        mask = [
            cell.letter if cell.conflicted else BLANK
            for cell in (self.grid.cell(r, c) for r, c in self.cells)
        ]
        self.options = [option for option in self.options if matches_mask(option, mask)]

    def restore_options(self) -> None:
        """Rebuild the domain from the full pool against the fixed letters."""

        mask = self.letters
        if all(letter == BLANK for letter in mask):
            self.options = list(self.pool)
            return
        self.options = [option for option in self.pool if matches_mask(option, mask)]

    def update_options(self, options: Sequence[str]) -> None:
        self.options = list(options)

    # ------------------------------------------------------------------
    # Fill / undo
    # ------------------------------------------------------------------
    def fill(self, word: str, step: int) -> None:
        self.stamp = step
        self.options = [option for option in self.options if option != word]
        for (r, c), letter in zip(self.cells, word):
            self.grid.cell(r, c).set(letter)

    def undo(self) -> List[int]:
        """Release this slot's claim on its cells.

        Returns the ids of crossing slots whose shared cell is now blank.
        """

        self.stamp = 0
        released: List[int] = []
        crossing = self.direction.opposite
        for r, c in self.cells:
            cell = self.grid.cell(r, c)
            cell.clear()
            if cell.fill_count == 0:
                released.append(cell.slot_for(crossing))
        return released

    def mark_conflicted(self) -> None:
        for r, c in self.cells:
            self.grid.cell(r, c).mark_conflicted()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def conflicted(self) -> bool:
        return any(self.grid.cell(r, c).conflicted for r, c in self.cells)

    @property
    def dependents(self) -> List[Tuple[int, int]]:
        """(fill_count, crossing slot id) for every cell of the slot."""

        crossing = self.direction.opposite
        result = []
        for r, c in self.cells:
            cell = self.grid.cell(r, c)
            result.append((cell.fill_count, cell.slot_for(crossing)))
        return result

    @property
    def letters(self) -> List[str]:
        return [self.grid.cell(r, c).letter for r, c in self.cells]

    @property
    def word(self) -> str:
        return "".join(self.letters)

    @property
    def count(self) -> int:
        return len(self.options)

    @property
    def filled(self) -> bool:
        return self.stamp > 0
