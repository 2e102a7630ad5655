"""
Pipes and their path components.

A pipe is a kind plus a rotation (clockwise quarter turns).  What it connects
is described by its *path components*: each component is a set of directions
that are joined inside the cell and carries one colour.  Most pipes have a
single component; OVER has two that cross without touching.

``components_for`` is the catalog: it maps (kind, rotation) to the direction
sets, in a fixed order, and is the only place pipe shapes are defined.
"""
from __future__ import annotations

import enum
from typing import Dict, FrozenSet, Iterable, List, Tuple

from core.errors import InvalidPipeKind


class Direction(enum.Enum):
    TOP    = 0
    RIGHT  = 1
    BOTTOM = 2
    LEFT   = 3

    @property
    def opposite(self) -> "Direction":
        return Direction((self.value + 2) % 4)

    @property
    def offset(self) -> Tuple[int, int]:
        """(d_row, d_col) of the neighbour lying in this direction."""
        return _OFFSETS[self]

    def rotated(self, quarter_turns: int) -> "Direction":
        return Direction((self.value + quarter_turns) % 4)

    @classmethod
    def between(cls, row: int, col: int, other_row: int, other_col: int) -> "Direction":
        """Direction in which (other_row, other_col) lies, seen from (row, col)."""
        if row == other_row:
            return cls.RIGHT if col < other_col else cls.LEFT
        return cls.BOTTOM if row < other_row else cls.TOP


_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.TOP:    (-1, 0),
    Direction.RIGHT:  (0, 1),
    Direction.BOTTOM: (1, 0),
    Direction.LEFT:   (0, -1),
}


class PipeKind(enum.Enum):
    SOURCE = "source"
    LINE   = "line"
    OVER   = "over"
    TURN   = "turn"
    FORK   = "fork"
    CROSS  = "cross"
    EMPTY  = "empty"


class PathColor(enum.Enum):
    GRAY      = "gray"        # unpowered
    RED       = "red"
    GREEN     = "green"
    BLUE      = "blue"
    YELLOW    = "yellow"
    DARK_GRAY = "dark_gray"   # two or more source colours meet


Shape = FrozenSet[Direction]

# rotation 0 shapes; every other rotation is derived by turning each direction
_BASE_SHAPES: Dict[PipeKind, Tuple[Tuple[Direction, ...], ...]] = {
    PipeKind.EMPTY:  (),
    PipeKind.SOURCE: ((Direction.TOP,),),
    PipeKind.LINE:   ((Direction.TOP, Direction.BOTTOM),),
    PipeKind.TURN:   ((Direction.TOP, Direction.RIGHT),),
    PipeKind.FORK:   ((Direction.TOP, Direction.RIGHT, Direction.BOTTOM),),
    PipeKind.CROSS:  ((Direction.TOP, Direction.RIGHT, Direction.BOTTOM, Direction.LEFT),),
    PipeKind.OVER:   ((Direction.TOP, Direction.BOTTOM), (Direction.LEFT, Direction.RIGHT)),
}


def normalize_rotation(rotation: int) -> int:
    return rotation % 4


def components_for(kind: PipeKind, rotation: int) -> Tuple[Shape, ...]:
    """
    Return the direction sets making up a pipe of *kind* turned *rotation*
    quarter turns clockwise.  Negative and large rotations wrap around.
    """
    if not isinstance(kind, PipeKind):
        raise InvalidPipeKind(kind)
    turns = normalize_rotation(rotation)
    return tuple(
        frozenset(d.rotated(turns) for d in base)
        for base in _BASE_SHAPES[kind]
    )


class PathComponent:
    """
    One connector inside a pipe.  The shape never changes after creation,
    the colour is rewritten by colour propagation.  Two components are the
    same only if they are the same object.
    """
    __slots__ = ("directions", "color")

    def __init__(self, directions: Iterable[Direction], color: PathColor = PathColor.GRAY):
        self.directions: Shape = frozenset(directions)
        self.color = color

    def connects_to(self, other: "PathComponent", towards: Direction) -> bool:
        """True if *other*, lying in direction *towards*, joins this component."""
        return towards in self.directions and towards.opposite in other.directions

    def __repr__(self) -> str:
        dirs = ",".join(d.name for d in sorted(self.directions, key=lambda d: d.value))
        return f"PathComponent({dirs}, {self.color.name})"


class Pipe:
    __slots__ = ("kind", "rotation", "components")

    def __init__(self, kind: PipeKind, rotation: int = 0,
                 color: PathColor = PathColor.GRAY):
        self.kind      = kind
        self.rotation  = normalize_rotation(rotation)
        self.components: List[PathComponent] = [
            PathComponent(shape, color) for shape in components_for(kind, self.rotation)
        ]

    @property
    def is_source(self) -> bool:
        return self.kind is PipeKind.SOURCE

    @property
    def is_empty(self) -> bool:
        return self.kind is PipeKind.EMPTY

    @property
    def key(self) -> Tuple[PipeKind, int]:
        """Stock key of this pipe."""
        return self.kind, self.rotation

    def colors(self) -> Tuple[PathColor, ...]:
        return tuple(pc.color for pc in self.components)

    # value comparison is only used to compare snapshots; traversal never
    # relies on it
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pipe):
            return NotImplemented
        return (self.kind, self.rotation, self.colors()) == \
               (other.kind, other.rotation, other.colors())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Pipe({self.kind.name}, {self.rotation}, {list(self.colors())})"
