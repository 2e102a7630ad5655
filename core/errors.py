"""
Error taxonomy shared by the board, the catalog and the level loader.

Every error derives from ``PipeworksError`` so a caller can catch the whole
family at once, and from the builtin it specialises so generic handlers
(``except IndexError`` around grid access, ``except ValueError`` around
parsing) keep working.
"""
from __future__ import annotations


class PipeworksError(Exception):
    """Base class for every error raised by the puzzle core."""


class OutOfBounds(PipeworksError, IndexError):
    def __init__(self, row: int, col: int, height: int, width: int):
        super().__init__(
            f"Position ({row}, {col}) is outside the {height}x{width} board"
        )
        self.row, self.col = row, col


class NotACellError(PipeworksError, ValueError):
    def __init__(self, row: int, col: int):
        super().__init__(f"Position ({row}, {col}) is a border, not a cell")
        self.row, self.col = row, col


class InvalidPipeKind(PipeworksError, ValueError):
    def __init__(self, kind: object):
        super().__init__(f"Unknown pipe kind: {kind!r}")
        self.kind = kind


class InvalidBorderShape(PipeworksError, ValueError):
    def __init__(self, shape: object):
        super().__init__(f"Unknown border shape: {shape!r}")
        self.shape = shape


class LevelFormatError(PipeworksError, ValueError):
    """A level definition does not follow the level grammar."""

    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line
