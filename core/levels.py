"""
Level files.

A level is a small text file::

    4 5
    X  X  X  X  X
    X  R1 .  *T2 X
    X  L0 .  G0 X
    X  X  X  X  X

The first line gives ``height width``, then one line per board row with
``width`` tokens.  A token is an optional ``*`` (the piece is fixed in
place), a kind letter and an optional rotation digit 0-3:

    X border   R G B Y source   . empty   L line   F fork   C cross
    T turn     O over

Loose (non ``*``) pipes are not put on the board: they go into the stock and
leave an empty cell behind.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, NamedTuple, Tuple

from core.elements import Cell, Element, border_for_position
from core.errors import LevelFormatError
from core.pipes import PathColor, PipeKind
from core.stock import PipeStock

logger = logging.getLogger(__name__)

LEVEL_SUFFIX = ".p"

BORDER_CODE = "X"
EMPTY_CODE  = "."

SOURCE_CODES: Dict[str, PathColor] = {
    "R": PathColor.RED,
    "G": PathColor.GREEN,
    "B": PathColor.BLUE,
    "Y": PathColor.YELLOW,
}

PIPE_CODES: Dict[str, PipeKind] = {
    "L": PipeKind.LINE,
    "F": PipeKind.FORK,
    "C": PipeKind.CROSS,
    "T": PipeKind.TURN,
    "O": PipeKind.OVER,
}

_TOKEN_RE  = re.compile(r"^(\*?)(.)(.*)$")
_NUMBER_RE = re.compile(r"(\d+)$")


class Token(NamedTuple):
    code: str
    rotation: int
    attached: bool


@dataclass(frozen=True)
class LevelDefinition:
    height: int
    width: int
    rows: Tuple[Tuple[Token, ...], ...]
    name: str = "custom"
    number: int | None = None


# ─────────────────────────────── parsing ───────────────────────────────
def parse_token(text: str, line: int | None = None) -> Token:
    match = _TOKEN_RE.match(text)
    if match is None:
        raise LevelFormatError("empty token", line)
    star, code, rest = match.groups()
    if code != BORDER_CODE and code != EMPTY_CODE \
            and code not in SOURCE_CODES and code not in PIPE_CODES:
        raise LevelFormatError(f"unknown kind letter {code!r} in {text!r}", line)
    if rest == "":
        rotation = 0
    elif len(rest) == 1 and rest in "0123":
        rotation = int(rest)
    else:
        raise LevelFormatError(f"bad rotation {rest!r} in {text!r}", line)
    return Token(code, rotation, bool(star))


def _parse_dimensions(header: str) -> Tuple[int, int]:
    parts = header.split()
    if len(parts) != 2:
        raise LevelFormatError(f"expected '<height> <width>', got {header!r}", 1)
    try:
        height, width = int(parts[0]), int(parts[1])
    except ValueError:
        raise LevelFormatError(f"non-numeric dimensions {header!r}", 1) from None
    if height <= 0 or width <= 0:
        raise LevelFormatError(f"dimensions must be positive, got {height}x{width}", 1)
    return height, width


def parse_level(text: str, name: str = "custom", number: int | None = None) -> LevelDefinition:
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise LevelFormatError("level is empty", 1)

    height, width = _parse_dimensions(lines[0])
    body = lines[1:]
    if len(body) != height:
        raise LevelFormatError(f"expected {height} rows, found {len(body)}", len(lines))

    rows: List[Tuple[Token, ...]] = []
    for r, raw in enumerate(body):
        line_no = r + 2
        texts = raw.split()
        if len(texts) != width:
            raise LevelFormatError(f"expected {width} tokens, found {len(texts)}", line_no)
        row = tuple(parse_token(t, line_no) for t in texts)
        for c, token in enumerate(row):
            on_edge = r in (0, height - 1) or c in (0, width - 1)
            if on_edge != (token.code == BORDER_CODE):
                where = "perimeter" if on_edge else "interior"
                raise LevelFormatError(
                    f"{token.code!r} at ({r}, {c}) is not allowed on the {where}", line_no
                )
        rows.append(row)

    return LevelDefinition(height, width, tuple(rows), name, number)


def level_number(path: Path) -> int | None:
    match = _NUMBER_RE.search(path.stem)
    return int(match.group(1)) if match else None


def load_level(path: Path | str) -> LevelDefinition:
    path = Path(path)
    definition = parse_level(
        path.read_text(encoding="utf-8"), name=path.stem, number=level_number(path)
    )
    logger.info("Loaded level %r (%dx%d)", definition.name, definition.height, definition.width)
    return definition


def discover_levels(directory: Path | str) -> List[Path]:
    """Level files in *directory*, ordered by level number then name."""
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Level directory %s does not exist", directory)
        return []
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix == LEVEL_SUFFIX]

    def order(p: Path):
        number = level_number(p)
        return (number is None, number or 0, p.stem)

    return sorted(files, key=order)


# ───────────────────────────── construction ─────────────────────────────
def build_element(token: Token, row: int, col: int,
                  height: int, width: int, stock: PipeStock) -> Element:
    code, rotation, attached = token
    if code == BORDER_CODE:
        border = border_for_position(row, col, height, width)
        if border is None:
            raise LevelFormatError(f"'X' at ({row}, {col}) is not on the perimeter")
        return border
    if code in SOURCE_CODES:
        return Cell.of(PipeKind.SOURCE, rotation, SOURCE_CODES[code], attached)
    if code == EMPTY_CODE:
        return Cell.empty(rotation, attached)
    kind = PIPE_CODES[code]
    if attached:
        return Cell.of(kind, rotation, PathColor.GRAY, attached=True)
    stock.add_pipe(kind, rotation)
    return Cell.empty(rotation)


def build_contents(definition: LevelDefinition) -> Tuple[List[List[Element]], PipeStock]:
    """Fresh grid and stock for *definition*."""
    stock = PipeStock()
    grid: List[List[Element]] = [
        [
            build_element(token, r, c, definition.height, definition.width, stock)
            for c, token in enumerate(row)
        ]
        for r, row in enumerate(definition.rows)
    ]
    return grid, stock
