"""Tests for colour propagation."""

import pytest

from core.connectivity import network_of, propagate, recompute_component, resolve_color
from core.elements import Cell
from core.levels import build_contents, parse_level
from core.pipes import PathColor, PipeKind

from conftest import bordered


def grid_for(*rows):
    grid, _ = build_contents(parse_level(bordered(*rows)))
    for r, line in enumerate(grid):
        for c, element in enumerate(line):
            if isinstance(element, Cell) and not element.is_empty:
                propagate(grid, r, c)
    return grid


def colors_at(grid, row, col):
    return grid[row][col].pipe.colors()


class TestResolveColor:
    """Tests for resolve_color."""

    def test_no_source(self):
        assert resolve_color(set()) is PathColor.GRAY

    def test_single_colour(self):
        assert resolve_color({PathColor.BLUE}) is PathColor.BLUE

    def test_conflict(self):
        assert resolve_color({PathColor.RED, PathColor.YELLOW}) is PathColor.DARK_GRAY


class TestPropagation:
    """Tests for propagate over small boards."""

    def test_two_colours_conflict(self):
        grid = grid_for("R1 *L1 G3")
        assert colors_at(grid, 1, 2) == (PathColor.DARK_GRAY,)

    def test_same_colour_joins(self):
        grid = grid_for("R1 *L1 R3")
        assert colors_at(grid, 1, 2) == (PathColor.RED,)

    def test_sources_are_never_recoloured(self):
        grid = grid_for("R1 *L1 G3")
        assert colors_at(grid, 1, 1) == (PathColor.RED,)
        assert colors_at(grid, 1, 3) == (PathColor.GREEN,)

    def test_isolated_line_is_gray(self):
        grid = grid_for(". *L1 .")
        assert colors_at(grid, 1, 2) == (PathColor.GRAY,)

    def test_source_facing_away(self):
        grid = grid_for("R0 *L1 .")
        assert colors_at(grid, 1, 2) == (PathColor.GRAY,)

    def test_only_facing_sources_count(self):
        grid = grid_for("R3 *L1 G3")
        assert colors_at(grid, 1, 2) == (PathColor.GREEN,)

    def test_colour_follows_turns(self):
        grid = grid_for(
            "R1 *T2",
            ".  *L0",
            ".  *T0",
        )
        assert colors_at(grid, 1, 2) == (PathColor.RED,)
        assert colors_at(grid, 2, 2) == (PathColor.RED,)
        assert colors_at(grid, 3, 2) == (PathColor.RED,)

    def test_over_keeps_paths_apart(self):
        grid = grid_for(
            ".  R2  .",
            "B1 *O0 B3",
            ".  *L0 .",
        )
        assert colors_at(grid, 2, 2) == (PathColor.RED, PathColor.BLUE)
        assert colors_at(grid, 3, 2) == (PathColor.RED,)

    def test_cross_joins_every_side(self):
        grid = grid_for(
            ".  R2  .",
            "B1 *C0 B3",
            ".  *L0 .",
        )
        assert colors_at(grid, 2, 2) == (PathColor.DARK_GRAY,)
        assert colors_at(grid, 3, 2) == (PathColor.DARK_GRAY,)

    def test_stable_network_refreshes_nothing(self):
        grid = grid_for("R1 *L1 *L1 R3")
        assert propagate(grid, 1, 2) == set()

    def test_border_position_is_ignored(self):
        grid = grid_for("R1 *L1 G3")
        assert propagate(grid, 0, 0) == set()


class TestPlacementRecolouring:
    """Tests for recolouring after a cell changes in place."""

    def test_new_pipe_colours_neighbours(self):
        grid = grid_for("R1 . *L1 *L1")
        assert colors_at(grid, 1, 3) == (PathColor.GRAY,)
        grid[1][2] = Cell.of(PipeKind.LINE, 1)
        refreshed = propagate(grid, 1, 2)
        assert refreshed == {(1, 2), (1, 3), (1, 4)}
        assert colors_at(grid, 1, 4) == (PathColor.RED,)

    def test_emptied_slot_clears_stale_colour(self):
        grid = grid_for("R1 . *L1")
        grid[1][2] = Cell.of(PipeKind.LINE, 1)
        propagate(grid, 1, 2)
        assert colors_at(grid, 1, 3) == (PathColor.RED,)

        grid[1][2] = Cell.empty()
        refreshed = propagate(grid, 1, 2)
        assert (1, 3) in refreshed
        assert colors_at(grid, 1, 3) == (PathColor.GRAY,)

    def test_emptied_slot_splits_a_conflict(self):
        grid = grid_for("R1 *L1 . *L1 G3")
        grid[1][3] = Cell.of(PipeKind.LINE, 1)
        propagate(grid, 1, 3)
        assert colors_at(grid, 1, 2) == (PathColor.DARK_GRAY,)

        grid[1][3] = Cell.empty()
        propagate(grid, 1, 3)
        assert colors_at(grid, 1, 2) == (PathColor.RED,)
        assert colors_at(grid, 1, 4) == (PathColor.GREEN,)


class TestNetworkQueries:
    """Tests for network_of and recompute_component."""

    def test_network_of(self):
        grid = grid_for("R1 *L1 G3")
        nodes, colors = network_of(grid, 1, 2)
        assert set(nodes) == {(1, 1, 0), (1, 2, 0), (1, 3, 0)}
        assert colors == {PathColor.RED, PathColor.GREEN}

    def test_network_of_second_over_component(self):
        grid = grid_for(
            ".  R2  .",
            "B1 *O0 B3",
            ".  .   .",
        )
        nodes, colors = network_of(grid, 2, 2, 1)
        assert (1, 2, 0) not in nodes
        assert colors == {PathColor.BLUE}

    def test_recompute_component(self):
        grid = grid_for("R1 *L1 G3")
        grid[1][3] = Cell.of(PipeKind.SOURCE, 3, PathColor.RED)
        assert recompute_component(grid, 1, 2, 0) == {(1, 2)}
        assert colors_at(grid, 1, 2) == (PathColor.RED,)

    @pytest.mark.parametrize("start", [(1, 1), (1, 2), (1, 3)])
    def test_result_does_not_depend_on_seed(self, start):
        grid = grid_for("R1 . *L1")
        grid[1][2] = Cell.of(PipeKind.LINE, 1)
        propagate(grid, *start)
        propagate(grid, 1, 2)
        assert colors_at(grid, 1, 3) == (PathColor.RED,)
