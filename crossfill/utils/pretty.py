"""Pretty-print helpers for crossword grids."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from ..engine.grid import CrosswordGrid


def render_rows(grid: CrosswordGrid) -> List[str]:
    """Rows of cell symbols: letters, ``#`` for black and ``_`` for blank."""

    return grid.rows()


def format_grid(grid: CrosswordGrid) -> str:
    width = grid.bounds.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(render_rows(grid)):
        row_render = " ".join(f"{symbol:>2}" for symbol in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_plain(grid: CrosswordGrid) -> str:
    """Space-separated letters, one grid row per line."""

    return "\n".join(" ".join(row) for row in render_rows(grid))
