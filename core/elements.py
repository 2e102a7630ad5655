"""
The two kinds of board element.

The perimeter of a board is made of ``Border`` pieces, fixed at load time;
everything inside is a ``Cell`` holding a pipe.  ``Element`` is the closed
union of both and code dispatches on it with ``isinstance``.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union

from core.errors import InvalidBorderShape
from core.pipes import PathColor, Pipe, PipeKind


class BorderShape(enum.Enum):
    CORNER = "corner"
    SIDE   = "side"


@dataclass(frozen=True)
class Border:
    shape: BorderShape
    orientation: int    # clockwise quarter turns, decided by the position

    def __post_init__(self):
        if not isinstance(self.shape, BorderShape):
            raise InvalidBorderShape(self.shape)


@dataclass(frozen=True)
class Cell:
    pipe: Pipe
    attached: bool = False   # given by the puzzle, cannot be moved

    @property
    def is_empty(self) -> bool:
        return self.pipe.is_empty

    @property
    def is_source(self) -> bool:
        return self.pipe.is_source

    @property
    def movable(self) -> bool:
        """Whether a player may pick this cell's pipe up."""
        return not (self.attached or self.is_empty or self.is_source)

    @classmethod
    def empty(cls, rotation: int = 0, attached: bool = False) -> "Cell":
        return cls(Pipe(PipeKind.EMPTY, rotation), attached)

    @classmethod
    def of(cls, kind: PipeKind, rotation: int = 0,
           color: PathColor = PathColor.GRAY, attached: bool = False) -> "Cell":
        return cls(Pipe(kind, rotation, color), attached)


Element = Union[Border, Cell]


def border_for_position(row: int, col: int, height: int, width: int) -> Border | None:
    """
    Border piece for a perimeter position: corners at the four corners,
    sides elsewhere, each turned to face the inside.  Interior positions
    return None.
    """
    last_row, last_col = height - 1, width - 1
    if row == 0:
        if col == 0:
            return Border(BorderShape.CORNER, 0)
        if col == last_col:
            return Border(BorderShape.CORNER, 1)
        return Border(BorderShape.SIDE, 0)
    if row == last_row:
        if col == 0:
            return Border(BorderShape.CORNER, 3)
        if col == last_col:
            return Border(BorderShape.CORNER, 2)
        return Border(BorderShape.SIDE, 2)
    if col == 0:
        return Border(BorderShape.SIDE, 3)
    if col == last_col:
        return Border(BorderShape.SIDE, 1)
    return None
