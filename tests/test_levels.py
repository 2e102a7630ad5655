"""Tests for level parsing, discovery and construction."""

from pathlib import Path

import pytest

from core.elements import Border, BorderShape, Cell
from core.errors import LevelFormatError
from core.levels import (
    Token, LevelDefinition, build_contents, discover_levels, level_number, load_level,
    parse_level, parse_token,
)
from core.pipes import PathColor, PipeKind

from conftest import bordered


class TestParseToken:
    """Tests for parse_token."""

    def test_plain(self):
        assert parse_token("L1") == Token("L", 1, False)

    def test_attached(self):
        assert parse_token("*T3") == Token("T", 3, True)

    def test_rotation_defaults_to_zero(self):
        assert parse_token("C") == Token("C", 0, False)
        assert parse_token(".") == Token(".", 0, False)

    @pytest.mark.parametrize("text", ["Q1", "*", "l0"])
    def test_unknown_letter(self, text):
        with pytest.raises(LevelFormatError):
            parse_token(text)

    @pytest.mark.parametrize("text", ["L4", "L12", "Lx", "*F-1"])
    def test_bad_rotation(self, text):
        with pytest.raises(LevelFormatError):
            parse_token(text)


class TestParseLevel:
    """Tests for parse_level."""

    def test_minimal(self):
        level = parse_level("3 3\nX X X\nX . X\nX X X\n")
        assert (level.height, level.width) == (3, 3)
        assert level.rows[1][1] == Token(".", 0, False)

    def test_trailing_blank_lines(self):
        level = parse_level(bordered("R1 L1 G3") + "\n\n   \n")
        assert level.height == 3

    def test_name_and_number(self):
        level = parse_level(bordered("."), name="level 4", number=4)
        assert level.name == "level 4"
        assert level.number == 4

    @pytest.mark.parametrize("text, line", [
        ("", 1),
        ("3\nX X X", 1),
        ("a b\n", 1),
        ("0 3\n", 1),
        ("3 3\nX X X\nX . X\n", 3),
        ("3 3\nX X X\nX . . X\nX X X\n", 3),
        ("3 3\nX X X\nX Q X\nX X X\n", 3),
        ("3 3\nX X X\nX L4 X\nX X X\n", 3),
        ("3 3\nX X X\nX X X\nX X X\n", 3),
        ("3 3\nX . X\nX . X\nX X X\n", 2),
        ("3 3\nX X X\nX . X\nX X R0\n", 4),
    ])
    def test_errors_carry_the_line(self, text, line):
        with pytest.raises(LevelFormatError) as info:
            parse_level(text)
        assert info.value.line == line
        assert str(info.value).startswith(f"line {line}:")

    def test_format_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_level("nonsense")


class TestBuildContents:
    """Tests for build_contents."""

    def test_borders_surround_cells(self):
        grid, _ = build_contents(parse_level(bordered(". .")))
        assert grid[0][0] == Border(BorderShape.CORNER, 0)
        assert grid[0][1] == Border(BorderShape.SIDE, 0)
        assert grid[1][3] == Border(BorderShape.SIDE, 1)
        assert isinstance(grid[1][1], Cell)

    def test_sources_keep_their_colour(self):
        grid, _ = build_contents(parse_level(bordered("Y2")))
        cell = grid[1][1]
        assert cell.is_source
        assert cell.pipe.rotation == 2
        assert cell.pipe.colors() == (PathColor.YELLOW,)

    def test_loose_pipes_go_to_the_stock(self):
        grid, stock = build_contents(parse_level(bordered("L1 T2 L1")))
        assert all(grid[1][c].is_empty for c in (1, 2, 3))
        assert stock.quantity(PipeKind.LINE, 1) == 2
        assert stock.quantity(PipeKind.TURN, 2) == 1

    def test_attached_pipes_stay(self):
        grid, stock = build_contents(parse_level(bordered("*O0")))
        cell = grid[1][1]
        assert cell.attached
        assert cell.pipe.kind is PipeKind.OVER
        assert stock.total() == 0

    def test_empty_cells_keep_rotation(self):
        grid, _ = build_contents(parse_level(bordered(".2")))
        assert grid[1][1].pipe.rotation == 2


class TestLevelFiles:
    """Tests for level file discovery and loading."""

    def test_level_number(self):
        assert level_number(Path("level 12.p")) == 12
        assert level_number(Path("intro.p")) is None

    def test_discovery_orders_by_number(self, levels_dir):
        names = [p.stem for p in discover_levels(levels_dir)]
        assert names == ["level 1", "level 2", "level 10"]

    def test_unnumbered_levels_come_last(self, levels_dir):
        (levels_dir / "bonus.p").write_text(bordered("."), encoding="utf-8")
        assert discover_levels(levels_dir)[-1].stem == "bonus"

    def test_missing_directory(self, tmp_path):
        assert discover_levels(tmp_path / "nowhere") == []

    def test_load_level(self, levels_dir):
        level = load_level(levels_dir / "level 2.p")
        assert level.name == "level 2"
        assert level.number == 2
        assert level.rows[1][2] == Token("L", 1, False)

    def test_bundled_levels_parse(self):
        bundled = Path(__file__).resolve().parent.parent / "levels"
        paths = discover_levels(bundled)
        assert paths
        for path in paths:
            load_level(path)


class TestBuildElementChecks:
    """Tests for definitions built without parse_level."""

    def test_interior_border_token(self):
        x = Token("X", 0, False)
        definition = LevelDefinition(3, 3, ((x, x, x), (x, x, x), (x, x, x)))
        with pytest.raises(LevelFormatError, match=r"\(1, 1\)"):
            build_contents(definition)
