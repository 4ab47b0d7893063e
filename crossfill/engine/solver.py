"""Backjumping constraint solver that fills a puzzle slot by slot.

Each step picks the unfilled slot with the fewest remaining candidates,
samples a handful of its candidates and keeps the one that leaves the most
room in the crossing slots. A slot with no candidates triggers a backjump:
the most recent fill responsible for the dead end is undone together with
every later fill that depends on it, and all of them go back on the worklist.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from ..core.constants import DEFAULT_REFRESH_RATE, MAX_WORD_POOL_LENGTH, SolveStatus
from ..utils.logger import get_logger
from ..utils.pretty import format_grid
from .puzzle import Puzzle
from .slot import Slot
from .validator import GridValidator


LOGGER = get_logger(__name__)


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        """Return an integer in ``[0, stop)``."""


@dataclass
class SolverConfig:
    refresh_rate: int = DEFAULT_REFRESH_RATE
    max_steps: Optional[int] = None
    seed: Optional[int] = None
    max_word_pool_length: int = MAX_WORD_POOL_LENGTH


@dataclass(frozen=True)
class CandidateScore:
    """A sampled word together with the crossing domains it would leave."""

    word: str
    score: float
    crossings: Tuple[Tuple[int, Tuple[str, ...]], ...]

    @classmethod
    def build(cls, word: str, filtered: Sequence[Tuple[int, Sequence[str]]]) -> "CandidateScore":
        score = 1.0
        for _, options in filtered:
            score *= math.log(1.0 + len(options))
        crossings = tuple((slot_id, tuple(options)) for slot_id, options in filtered)
        return cls(word=word, score=score, crossings=crossings)


class BackjumpStrategy(Protocol):
    name: str

    def find_target(self, puzzle: Puzzle, dead_end: Slot) -> Optional[Slot]:
        """Return the filled slot to unwind to, or None."""


class RecentCrossingStrategy:
    """Jump to the most recently filled slot crossing the dead end."""

    name = "recent-crossing"

    def find_target(self, puzzle: Puzzle, dead_end: Slot) -> Optional[Slot]:
        latest = max(puzzle.crossings(dead_end), key=lambda slot: slot.stamp)
        return latest if latest.filled else None


class ConflictedScanStrategy:
    """Jump to the most recently filled slot anywhere that touches a conflict.

    Used when no crossing slot is filled, so the dead end is not caused by a
    recent choice. The dead end's own domain is rebuilt from the full pool
    before scanning.
    """

    name = "conflicted-scan"

    def find_target(self, puzzle: Puzzle, dead_end: Slot) -> Optional[Slot]:
        dead_end.restore_options()
        conflicted = [
            slot for slot in puzzle.slots if slot.conflicted and puzzle.is_searchable(slot)
        ]
        latest = max(conflicted, key=lambda slot: slot.stamp, default=None)
        if latest is None or not latest.filled:
            return None
        return latest


class CrosswordSolver:
    """Runs one randomized solve attempt over a freshly built puzzle."""

    def __init__(
        self,
        puzzle: Puzzle,
        config: Optional[SolverConfig] = None,
        rng: Optional[RandomSource] = None,
        strategies: Optional[Sequence[BackjumpStrategy]] = None,
    ) -> None:
        self.puzzle = puzzle
        self.config = config or SolverConfig()
        self.rng: RandomSource = rng if rng is not None else random.Random(self.config.seed)
        self.strategies: Tuple[BackjumpStrategy, ...] = tuple(
            strategies or (RecentCrossingStrategy(), ConflictedScanStrategy())
        )
        self.validator = GridValidator(puzzle.dictionary)
        self.worklist: List[Slot] = puzzle.searchable_slots()
        self.step = 1
        self.fills = 0
        self.backjumps = 0
        self.status = SolveStatus.PENDING

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def solve(self, refresh_rate: Optional[int] = None) -> bool:
        """Run until every searchable slot is filled or no backjump is possible.

        ``refresh_rate`` only controls how often a progress snapshot is
        logged; it defaults to the configured rate.
        """

        if self.status != SolveStatus.PENDING:
            return self.status == SolveStatus.SOLVED

        rate = self.config.refresh_rate if refresh_rate is None else refresh_rate
        max_steps = self.config.max_steps
        while True:
            if rate > 0 and self.step % rate == 0:
                self._report_progress()
            if max_steps is not None and self.step > max_steps:
                self.status = SolveStatus.STEP_LIMIT
                LOGGER.warning(
                    "Step limit %d reached with %d slots unfilled", max_steps, len(self.worklist)
                )
                return False

            current = self.select_slot()
            if current is None:
                self.status = SolveStatus.SOLVED
                LOGGER.info(
                    "Solved after %d steps (%d fills, %d backjumps)",
                    self.step - 1,
                    self.fills,
                    self.backjumps,
                )
                return True

            choice = self.choose_word(current)
            if choice is not None:
                self._commit(current, choice)
            else:
                undone = self.backjump(current)
                if undone is None:
                    self.status = SolveStatus.FAILED
                    LOGGER.info(
                        "No backjump target at step %d; %d slots left unfilled",
                        self.step,
                        len(self.worklist),
                    )
                    return False
                self.worklist = undone + self.worklist
            self.step += 1

    def check(self) -> List[str]:
        return self.validator.mismatched_words(self.puzzle)

    def render(self) -> List[str]:
        return self.puzzle.render()

    # ------------------------------------------------------------------
    # Heuristics
    # ------------------------------------------------------------------
    def select_slot(self) -> Optional[Slot]:
        """Most constrained slot on the worklist; earliest wins ties."""

        if not self.worklist:
            return None
        return min(self.worklist, key=lambda slot: slot.count)

    def sample_indices(self, count: int) -> List[int]:
        draws = min(count, self.config.max_word_pool_length)
        picked = {self.rng.randrange(count) for _ in range(draws)}
        return sorted(picked, reverse=True)

    def choose_word(self, slot: Slot) -> Optional[CandidateScore]:
        if slot.count == 0:
            return None

        open_crossings = [
            self.puzzle.slot(slot_id)
            for fill_count, slot_id in slot.dependents
            if fill_count == 0
        ]
        open_crossings = [c for c in open_crossings if self.puzzle.is_searchable(c)]

        scored = []
        for index in self.sample_indices(slot.count):
            word = slot.options[index]
            filtered = [(c.id, c.filter_options(word, slot)) for c in open_crossings]
            scored.append(CandidateScore.build(word, filtered))
        return max(scored, key=lambda candidate: candidate.score)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def _commit(self, slot: Slot, choice: CandidateScore) -> None:
        slot.fill(choice.word, self.step)
        for slot_id, options in choice.crossings:
            self.puzzle.slot(slot_id).update_options(options)
        self.worklist.remove(slot)
        self.fills += 1
        LOGGER.debug(
            "Step %d: slot %d <- %s (score %.3f)", self.step, slot.id, choice.word, choice.score
        )

    def find_target(self, dead_end: Slot) -> Optional[Slot]:
        for strategy in self.strategies:
            target = strategy.find_target(self.puzzle, dead_end)
            if target is not None:
                LOGGER.debug(
                    "Step %d: dead end at slot %d, %s strategy picked slot %d",
                    self.step,
                    dead_end.id,
                    strategy.name,
                    target.id,
                )
                return target
        return None

    def conflict_set(self, target: Slot) -> List[Slot]:
        """Slots reachable from ``target`` through crossings filled later."""

        found: Dict[int, Slot] = {}
        frontier = [target]
        while frontier:
            current = frontier.pop(0)
            for crossing in self.puzzle.crossings(current):
                if crossing.stamp > current.stamp and crossing.id not in found:
                    found[crossing.id] = crossing
                    frontier.append(crossing)
        return list(found.values())

    def backjump(self, dead_end: Slot) -> Optional[List[Slot]]:
        """Undo the fills behind a dead end; return the slots to re-queue."""

        dead_end.mark_conflicted()
        target = self.find_target(dead_end)
        if target is None:
            return None

        undo = [target] + self.conflict_set(target)
        undo.sort(key=lambda slot: slot.stamp, reverse=True)

        touched: Dict[int, Slot] = {}
        for slot in undo:
            if slot is target:
                slot.prune_options()
            for slot_id in slot.undo():
                crossing = self.puzzle.slot(slot_id)
                if self.puzzle.is_searchable(crossing):
                    touched.setdefault(slot_id, crossing)
        for slot in touched.values():
            slot.restore_options()

        self.backjumps += 1
        LOGGER.debug(
            "Step %d: undid %d slots, restored %d domains",
            self.step,
            len(undo),
            len(touched),
        )
        return undo

    def _report_progress(self) -> None:
        LOGGER.info(
            "Step %d, %d slots queued\n%s",
            self.step,
            len(self.worklist),
            format_grid(self.puzzle.grid),
        )
