"""Exact fill feasibility check using OR-Tools CP-SAT."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from ortools.sat.python import cp_model

from ..utils.logger import get_logger
from .puzzle import Puzzle

LOGGER = get_logger(__name__)


@dataclass
class FeasibilityResult:
    """Outcome of an exact search.

    ``feasible`` is None when the time limit ran out before CP-SAT could
    decide either way.
    """

    feasible: Optional[bool]
    status: str
    words: Dict[int, str] = field(default_factory=dict)


def check_feasibility(
    puzzle: Puzzle,
    timeout: float = 10.0,
    num_workers: int = 4,
) -> FeasibilityResult:
    """Decide whether the puzzle's searchable slots can be filled at all.

    Every searchable slot becomes a table constraint over per-cell letter
    variables, using the slot's full dictionary pool. Short slots are left
    unconstrained, mirroring the randomized solver. Letters already in the
    grid are ignored.
    """

    slots = puzzle.searchable_slots()
    if not slots:
        return FeasibilityResult(feasible=True, status="TRIVIAL")

    for slot in slots:
        if not slot.pool:
            LOGGER.debug(
                "No candidates for slot %d at (%d,%d) len=%d",
                slot.id, slot.row, slot.col, slot.length,
            )
            return FeasibilityResult(feasible=False, status="NO_CANDIDATES")

    alphabet = sorted({char for slot in slots for word in slot.pool for char in word})
    codes = {char: index for index, char in enumerate(alphabet)}

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Cell letter variables
    # ------------------------------------------------------------------
    cell_vars: Dict[Tuple[int, int], cp_model.IntVar] = {}
    for slot in slots:
        for r, c in slot.cells:
            if (r, c) not in cell_vars:
                cell_vars[(r, c)] = model.new_int_var(0, len(alphabet) - 1, f"L_{r}_{c}")

    # ------------------------------------------------------------------
    # Per-slot table constraints
    # ------------------------------------------------------------------
    for slot in slots:
        cell_list = [cell_vars[cell] for cell in slot.cells]
        tuples = [[codes[char] for char in word] for word in slot.pool]
        model.add_allowed_assignments(cell_list, tuples)

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = num_workers

    LOGGER.info(
        "CP-SAT: %d slots, %d cell vars, solving (timeout=%0.1fs)...",
        len(slots), len(cell_vars), timeout,
    )
    status = solver.solve(model)
    status_name = solver.status_name(status)

    if status in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        words = {
            slot.id: "".join(alphabet[solver.value(cell_vars[cell])] for cell in slot.cells)
            for slot in slots
        }
        LOGGER.info("CP-SAT: fill exists (found in %.2fs)", solver.wall_time)
        return FeasibilityResult(feasible=True, status=status_name, words=words)
    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: grid cannot be filled from this dictionary")
        return FeasibilityResult(feasible=False, status=status_name)

    LOGGER.warning("CP-SAT: undecided (status=%s)", status_name)
    return FeasibilityResult(feasible=None, status=status_name)
