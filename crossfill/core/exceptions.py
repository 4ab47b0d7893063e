"""Custom exception hierarchy for crossword filling."""


class CrosswordError(Exception):
    """Base exception for filler failures."""


class DictionaryLoadError(CrosswordError):
    """Raised when the word list cannot be read."""


class PuzzleLoadError(CrosswordError):
    """Raised when the puzzle grid file is missing or malformed."""


class ValidationError(CrosswordError):
    """Raised when a filled grid fails the post-solve checks."""
