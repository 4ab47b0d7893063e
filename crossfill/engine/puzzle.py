"""Puzzle: a grid plus the slots scanned from it."""

from __future__ import annotations

from typing import List, Sequence

from ..core.constants import MIN_PATTERN_LENGTH, Direction
from ..data.dictionary import WordDictionary
from ..io.puzzle_file import parse_puzzle
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .slot import Slot


LOGGER = get_logger(__name__)


class Puzzle:
    """Owns the cell grid and every horizontal and vertical slot.

    A puzzle serves exactly one solve attempt; a new attempt builds a new
    puzzle from the same rows.
    """

    def __init__(
        self,
        rows: Sequence[str],
        dictionary: WordDictionary,
        min_pattern_length: int = MIN_PATTERN_LENGTH,
    ) -> None:
        self.dictionary = dictionary
        self.min_pattern_length = min_pattern_length
        self.grid = CrosswordGrid(rows)
        self.slots: List[Slot] = [
            Slot(self.grid, run, dictionary.lookup(run.length)) for run in self.grid.runs
        ]
        self.horizontal = [s for s in self.slots if s.direction == Direction.HORIZONTAL]
        self.vertical = [s for s in self.slots if s.direction == Direction.VERTICAL]
        LOGGER.debug(
            "Puzzle built: %d horizontal, %d vertical, %d searchable slots",
            len(self.horizontal),
            len(self.vertical),
            len(self.searchable_slots()),
        )

    @classmethod
    def from_text(cls, text: str, dictionary: WordDictionary, **options) -> "Puzzle":
        return cls(parse_puzzle(text), dictionary, **options)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def slot(self, slot_id: int) -> Slot:
        return self.slots[slot_id]

    def is_searchable(self, slot: Slot) -> bool:
        return slot.length > self.min_pattern_length

    def searchable_slots(self) -> List[Slot]:
        """Slots the solver assigns directly, in construction order."""

        return [slot for slot in self.slots if self.is_searchable(slot)]

    def crossings(self, slot: Slot) -> List[Slot]:
        return [self.slots[slot_id] for _, slot_id in slot.dependents]

    def render(self) -> List[str]:
        return self.grid.rows()
