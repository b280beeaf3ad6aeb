"""Error types raised by the puzzle solvers."""

from __future__ import annotations

from typing import Optional, Tuple


class GridPuzzleError(Exception):
    """Base class for every error raised by :mod:`grid_puzzles`."""


class ParseError(GridPuzzleError, ValueError):
    """Input text could not be turned into a grid or field."""


class InvalidTileError(ParseError):
    """A character that is not part of the tile alphabet was found."""

    def __init__(self, character: str, position: Optional[Tuple[int, int]] = None):
        self.character = character
        self.position = position
        message = f"Invalid tile character {character!r}"
        if position is not None:
            message += f" at {position}"
        super().__init__(message)


class MissingSeparatorError(ParseError):
    """The rock field has no line break to derive the row length from."""

    def __init__(self) -> None:
        super().__init__("Input should be separated with line breaks")


class RaggedInputError(ParseError):
    """Rows of the input do not all have the same length."""

    def __init__(self, row: int, expected: int, actual: int, ignored: int = 0):
        self.row = row
        self.expected = expected
        self.actual = actual
        self.ignored = ignored
        message = f"Row {row} has {actual} cells but {expected} were expected"
        if ignored:
            message += f" ({ignored} unrecognised characters dropped)"
        super().__init__(message)


class InvariantViolation(GridPuzzleError, AssertionError):
    """Internal state broke an assumption the solvers rely on."""
