"""
Shared fixtures for the puzzle tests.

Levels are written inline with ``bordered`` so a test only spells out the
interior rows; the perimeter of ``X`` tokens is added around them.
"""
import pytest

from boards.grid_board import GridBoard
from core.levels import parse_level


def bordered(*rows: str) -> str:
    """Level text for the given interior rows, wrapped in a border."""
    interior = [row.split() for row in rows]
    width = len(interior[0]) + 2
    edge = " ".join(["X"] * width)
    lines = [f"{len(interior) + 2} {width}", edge]
    lines += [" ".join(["X", *tokens, "X"]) for tokens in interior]
    lines.append(edge)
    return "\n".join(lines) + "\n"


def board_for(*rows: str) -> GridBoard:
    return GridBoard(parse_level(bordered(*rows), name="test"))


@pytest.fixture
def make_board():
    """Factory building a GridBoard from interior rows."""
    return board_for


@pytest.fixture
def levels_dir(tmp_path):
    """A directory with three level files, written out of order."""
    (tmp_path / "level 10.p").write_text(bordered("R1 . R3"), encoding="utf-8")
    (tmp_path / "level 2.p").write_text(bordered("G1 L1 G3"), encoding="utf-8")
    (tmp_path / "level 1.p").write_text(bordered("B1 . B3"), encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not a level", encoding="utf-8")
    return tmp_path
