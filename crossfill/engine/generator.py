"""Attempt orchestration: fresh puzzle, fresh seed, solve, check."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..core.constants import DEFAULT_REFRESH_RATE, SolveStatus
from ..data.dictionary import DictionaryConfig, WordDictionary
from ..io.puzzle_file import read_puzzle
from ..utils.logger import get_logger
from .feasibility import FeasibilityResult, check_feasibility
from .grid import CrosswordGrid
from .puzzle import Puzzle
from .solver import CrosswordSolver, SolverConfig


LOGGER = get_logger(__name__)


@dataclass
class FillerConfig:
    puzzle_path: Path | str
    dictionary_path: Path | str
    seed: Optional[int] = None
    retry_limit: int = 1
    refresh_rate: int = DEFAULT_REFRESH_RATE
    max_steps: Optional[int] = None
    check_feasible: bool = False
    feasibility_timeout: float = 10.0

    def to_solver_config(self, seed_override: Optional[int] = None) -> SolverConfig:
        return SolverConfig(
            refresh_rate=self.refresh_rate,
            max_steps=self.max_steps,
            seed=seed_override if seed_override is not None else self.seed,
        )

    def to_dictionary_config(self) -> DictionaryConfig:
        return DictionaryConfig(path=self.dictionary_path)


@dataclass
class FillResult:
    solved: bool
    status: SolveStatus
    grid: CrosswordGrid
    mismatches: List[str] = field(default_factory=list)
    steps: int = 0
    backjumps: int = 0
    attempt: int = 0
    seed: Optional[int] = None

    @property
    def rows(self) -> List[str]:
        return self.grid.rows()


class CrosswordFiller:
    """Loads inputs once and runs independent solve attempts over them.

    Both input files are read up front, so a missing or malformed file fails
    before any attempt is made.
    """

    def __init__(self, config: FillerConfig, dictionary: Optional[WordDictionary] = None) -> None:
        self.config = config
        self.rng = random.Random(config.seed)
        self.dictionary = dictionary or WordDictionary(config.to_dictionary_config())
        self.rows = read_puzzle(config.puzzle_path)
        self.feasibility: Optional[FeasibilityResult] = None

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def fill(self) -> FillResult:
        """Retry until solved or ``retry_limit`` attempts have failed."""

        if self.config.check_feasible:
            feasibility = self.check_feasible()
            if feasibility.feasible is False:
                LOGGER.warning("Grid is provably unfillable; skipping solve attempts")
                return FillResult(
                    solved=False,
                    status=SolveStatus.INFEASIBLE,
                    grid=self.new_puzzle().grid,
                )

        attempts = max(1, self.config.retry_limit)
        for attempt in range(1, attempts + 1):
            LOGGER.info("Fill attempt %s/%s", attempt, attempts)
            result = self.attempt(attempt)
            if result.solved:
                return result
            LOGGER.warning("Fill attempt %s ended with %s", attempt, result.status.value)
        return result

    def attempt(self, number: int = 1) -> FillResult:
        seed = self.rng.randint(0, 1_000_000)
        puzzle = self.new_puzzle()
        solver = CrosswordSolver(puzzle, self.config.to_solver_config(seed_override=seed))
        solved = solver.solve()
        mismatches = solver.check() if solved else []
        if mismatches:
            LOGGER.error("Solved grid contains unknown words: %s", mismatches)
        return FillResult(
            solved=solved,
            status=solver.status,
            grid=puzzle.grid,
            mismatches=mismatches,
            steps=solver.step - 1,
            backjumps=solver.backjumps,
            attempt=number,
            seed=seed,
        )

    def new_puzzle(self) -> Puzzle:
        return Puzzle(self.rows, self.dictionary)

    def check_feasible(self) -> FeasibilityResult:
        if self.feasibility is None:
            self.feasibility = check_feasibility(
                self.new_puzzle(), timeout=self.config.feasibility_timeout
            )
        return self.feasibility
