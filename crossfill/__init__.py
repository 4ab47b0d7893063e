"""Crossword grid filler for American-style puzzles.

This package exposes the public API surface via:

- ``crossfill.engine.solver.CrosswordSolver``: backjumping fill search.
- ``crossfill.engine.puzzle.Puzzle``: grid and slots built from puzzle text.
- ``crossfill.engine.generator.CrosswordFiller``: attempt/retry orchestration.
- ``crossfill.data.dictionary.WordDictionary``: per-length word pools.
"""

from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.generator import CrosswordFiller, FillerConfig, FillResult
from .engine.puzzle import Puzzle
from .engine.solver import CrosswordSolver, SolverConfig

__all__ = [
    "CrosswordFiller",
    "CrosswordSolver",
    "DictionaryConfig",
    "FillResult",
    "FillerConfig",
    "Puzzle",
    "SolverConfig",
    "WordDictionary",
]

__version__ = "0.1.0"
