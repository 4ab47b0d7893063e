"""Deterministic checks over a solved puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..core.exceptions import ValidationError
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .puzzle import Puzzle


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]
    mismatches: List[str] = field(default_factory=list)


class GridValidator:
    """Re-checks a filled puzzle against the grid invariants and the dictionary.

    Slots no longer than the puzzle's ``min_pattern_length`` are skipped, the
    same way the solver never searches them.
    """

    def __init__(self, dictionary: WordDictionary) -> None:
        self.dictionary = dictionary

    def mismatched_words(self, puzzle: Puzzle) -> List[str]:
        """Words of searchable slots that are not in the dictionary pool."""

        mismatches: List[str] = []
        for slot in puzzle.searchable_slots():
            word = slot.word
            if word not in self.dictionary.lookup(len(word)):
                mismatches.append(word)
        return mismatches

    def validate(self, puzzle: Puzzle) -> ValidationResult:
        messages: List[str] = []
        mismatches = self.mismatched_words(puzzle)
        try:
            self._check_fill_counts(puzzle)
            self._check_complete(puzzle)
            self._check_words(mismatches)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages, mismatches=mismatches)
        return ValidationResult(ok=True, messages=[], mismatches=[])

    def assert_valid(self, puzzle: Puzzle) -> None:
        result = self.validate(puzzle)
        if not result.ok:
            raise ValidationError("; ".join(result.messages))

    def _check_fill_counts(self, puzzle: Puzzle) -> None:
        for r, c, cell in puzzle.grid.iter_cells():
            if cell.is_black():
                continue
            claims = sum(
                1 for slot_id in (cell.h_slot, cell.v_slot) if puzzle.slot(slot_id).filled
            )
            if cell.fill_count != claims:
                raise ValidationError(
                    f"Cell ({r},{c}) has fill count {cell.fill_count} but {claims} filled slots"
                )
            if cell.is_blank() != (cell.fill_count == 0):
                raise ValidationError(
                    f"Cell ({r},{c}) letter '{cell.letter}' disagrees with fill count {cell.fill_count}"
                )

    def _check_complete(self, puzzle: Puzzle) -> None:
        for slot in puzzle.searchable_slots():
            if not slot.filled:
                raise ValidationError(
                    f"Slot {slot.id} at ({slot.row},{slot.col}) is unfilled"
                )

    @staticmethod
    def _check_words(mismatches: List[str]) -> None:
        if mismatches:
            raise ValidationError(f"Words missing from dictionary: {', '.join(mismatches)}")
