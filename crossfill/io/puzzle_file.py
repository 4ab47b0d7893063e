"""Reading puzzle grids from line-oriented text files."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..core.exceptions import PuzzleLoadError


def parse_puzzle(text: str) -> List[str]:
    """Split puzzle text into rows, one per non-empty line.

    ``#`` marks a black cell; any other character is a white cell whose
    content is ignored.
    """

    rows = [line.rstrip("\r\n") for line in text.splitlines()]
    rows = [row for row in rows if row]
    if not rows:
        raise PuzzleLoadError("Puzzle contains no rows")
    width = len(rows[0])
    for index, row in enumerate(rows):
        if len(row) != width:
            raise PuzzleLoadError(
                f"Puzzle row {index} has {len(row)} cells, expected {width}"
            )
    return rows


def read_puzzle(path: Path | str, encoding: str = "utf-8") -> List[str]:
    source = Path(path)
    if not source.exists():
        raise PuzzleLoadError(f"Missing puzzle file: {source}")
    try:
        text = source.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise PuzzleLoadError(f"Unable to read puzzle {source}: {exc}") from exc
    return parse_puzzle(text)
