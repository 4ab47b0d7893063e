"""Grid representation and slot scanning."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..core.constants import BLACK, Bounds, Direction
from ..core.exceptions import PuzzleLoadError
from ..core.models import Cell, SlotRun
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GridSnapshot:
    cells: List[List[Cell]]


class CrosswordGrid:
    """Owns every cell of the puzzle.

    Slots never hold cells themselves; they address cells by coordinate
    through :meth:`cell`. Slot ids are global: horizontal runs are numbered
    first in row-major order, vertical runs follow in column-major order.
    """

    def __init__(self, rows: Sequence[str]) -> None:
        if not rows:
            raise PuzzleLoadError("Cannot build a grid without rows")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise PuzzleLoadError("Grid rows must all have the same length")
        self.bounds = Bounds(rows=len(rows), cols=width)
        self.cells: List[List[Cell]] = [
            [Cell(letter=BLACK) if char == BLACK else Cell() for char in row] for row in rows
        ]
        self.runs: List[SlotRun] = []
        self._scan_horizontal()
        self._scan_vertical()
        LOGGER.debug(
            "Grid %sx%s scanned into %d slots",
            self.bounds.rows,
            self.bounds.cols,
            len(self.runs),
        )

    # ------------------------------------------------------------------
    # Initialization helpers
    # ------------------------------------------------------------------
    def _scan_horizontal(self) -> None:
        for r in range(self.bounds.rows):
            for c in range(self.bounds.cols):
                cell = self.cells[r][c]
                if cell.is_black():
                    continue
                if c == 0 or self.cells[r][c - 1].is_black():
                    self.runs.append(self._open_run(r, c, Direction.HORIZONTAL))
                    cell.h_slot = self.runs[-1].id
                else:
                    cell.h_slot = self.cells[r][c - 1].h_slot

    def _scan_vertical(self) -> None:
        for c in range(self.bounds.cols):
            for r in range(self.bounds.rows):
                cell = self.cells[r][c]
                if cell.is_black():
                    continue
                if r == 0 or self.cells[r - 1][c].is_black():
                    self.runs.append(self._open_run(r, c, Direction.VERTICAL))
                    cell.v_slot = self.runs[-1].id
                else:
                    cell.v_slot = self.cells[r - 1][c].v_slot

    def _open_run(self, row: int, col: int, direction: Direction) -> SlotRun:
        dr, dc = (0, 1) if direction == Direction.HORIZONTAL else (1, 0)
        length = 0
        r, c = row, col
        while self.bounds.contains(r, c) and not self.cells[r][c].is_black():
            length += 1
            r += dr
            c += dc
        return SlotRun(
            id=len(self.runs),
            direction=direction,
            start_row=row,
            start_col=col,
            length=length,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def iter_cells(self) -> Iterable[Tuple[int, int, Cell]]:
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                yield r, c, cell

    def is_empty(self) -> bool:
        return all(cell.is_black() or cell.is_blank() for _, _, cell in self.iter_cells())

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(cells=copy.deepcopy(self.cells))

    def rows(self) -> List[str]:
        """Return the grid as strings; black cells are ``#``, blanks ``_``."""

        return ["".join(cell.letter for cell in row) for row in self.cells]
