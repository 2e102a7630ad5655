"""
Colour propagation.

After a cell changes, every network of path components touching it is
rediscovered and recoloured:

    no source reached           -> GRAY
    sources of a single colour  -> that colour
    two or more source colours  -> DARK_GRAY

Components are addressed by ``(row, col, index)`` where *index* is the
position of the component inside its pipe.  Discovery is an iterative
depth-first search over those addresses; a source is a terminal: its colour
is collected but the search does not go past it.  Sources are never
recoloured.

A single board change may seed several recomputations that overlap.  Each
one is run in full; recolouring a stable network is idempotent so the final
colours do not depend on the order.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Sequence, Set, Tuple

from core.elements import Cell, Element
from core.pipes import Direction, PathColor, PathComponent, PipeKind, components_for

logger = logging.getLogger(__name__)

Grid = Sequence[Sequence[Element]]
Node = Tuple[int, int, int]
Position = Tuple[int, int]

VIRTUAL = -1   # component index of the stand-in used by _reseed_around


def resolve_color(source_colors: Set[PathColor]) -> PathColor:
    if not source_colors:
        return PathColor.GRAY
    if len(source_colors) == 1:
        return next(iter(source_colors))
    return PathColor.DARK_GRAY


class _Network:
    """Read access to a grid, plus the optional virtual stand-in components."""

    def __init__(self, grid: Grid):
        self.grid   = grid
        self.height = len(grid)
        self.width  = len(grid[0]) if grid else 0
        self.virtual: Dict[Node, PathComponent] = {}

    def cell(self, row: int, col: int) -> Cell | None:
        if 0 <= row < self.height and 0 <= col < self.width:
            element = self.grid[row][col]
            if isinstance(element, Cell):
                return element
        return None

    def component(self, node: Node) -> PathComponent:
        row, col, index = node
        if index == VIRTUAL:
            return self.virtual[node]
        return self.grid[row][col].pipe.components[index]

    def is_source(self, node: Node) -> bool:
        if node[2] == VIRTUAL:
            return False
        return self.grid[node[0]][node[1]].is_source

    def neighbours(self, node: Node) -> Iterator[Node]:
        """Components in adjacent cells joined end to end with *node*."""
        row, col, _ = node
        current = self.component(node)
        for direction in Direction:
            if direction not in current.directions:
                continue
            d_row, d_col = direction.offset
            n_row, n_col = row + d_row, col + d_col
            neighbour = self.cell(n_row, n_col)
            if neighbour is None or neighbour.is_empty:
                continue
            for index, other in enumerate(neighbour.pipe.components):
                if current.connects_to(other, direction):
                    yield n_row, n_col, index

    # ──────────────────────────── passes ────────────────────────────
    def discover(self, start: Node) -> Tuple[List[Node], Set[PathColor]]:
        """Return every node reachable from *start* and the source colours met."""
        visited: Set[Node] = {start}
        order:   List[Node] = []
        colors:  Set[PathColor] = set()
        stack = [start]
        while stack:
            node = stack.pop()
            order.append(node)
            if self.is_source(node):
                colors.add(self.component(node).color)
                if node != start:
                    continue
            for nxt in self.neighbours(node):
                if nxt not in visited:
                    visited.add(nxt)
                    stack.append(nxt)
        return order, colors

    def assign(self, start: Node, color: PathColor) -> Set[Position]:
        """Colour every non-source node reachable from *start*."""
        refreshed: Set[Position] = set()
        visited: Set[Node] = {start}
        stack = [start]
        while stack:
            node = stack.pop()
            if self.is_source(node):
                if node != start:
                    continue
            elif node[2] != VIRTUAL:
                component = self.component(node)
                if component.color is not color:
                    component.color = color
                    refreshed.add((node[0], node[1]))
            for nxt in self.neighbours(node):
                if nxt not in visited:
                    visited.add(nxt)
                    stack.append(nxt)
        return refreshed

    def recompute(self, start: Node) -> Set[Position]:
        _, colors = self.discover(start)
        return self.assign(start, resolve_color(colors))


def recompute_component(grid: Grid, row: int, col: int, index: int) -> Set[Position]:
    """Recolour the network containing component *index* of the pipe at (row, col)."""
    return _Network(grid).recompute((row, col, index))


def network_of(grid: Grid, row: int, col: int, index: int = 0) -> Tuple[List[Node], Set[PathColor]]:
    """Nodes of the network containing the given component and its source colours."""
    return _Network(grid).discover((row, col, index))


def _reseed_around(net: _Network, row: int, col: int) -> Set[Position]:
    """
    Recolour the networks of the components abutting (row, col).  A straight
    line stands in for the cell to find them, so neighbours that lost their
    connection through it are recoloured too.
    """
    refreshed: Set[Position] = set()
    virtual_node: Node = (row, col, VIRTUAL)
    for direction in Direction:
        d_row, d_col = direction.offset
        neighbour = net.cell(row + d_row, col + d_col)
        if neighbour is None or neighbour.is_source or neighbour.is_empty:
            continue
        horizontal = d_row == 0
        net.virtual[virtual_node] = PathComponent(
            components_for(PipeKind.LINE, 1 if horizontal else 0)[0]
        )
        seeds = [n for n in net.neighbours(virtual_node) if not net.is_source(n)]
        del net.virtual[virtual_node]
        for seed in seeds:
            refreshed |= net.recompute(seed)
    return refreshed


def propagate(grid: Grid, row: int, col: int) -> Set[Position]:
    """
    Recolour everything affected by the cell at (row, col) having just
    changed.  Returns the positions whose colours were rewritten.
    """
    net = _Network(grid)
    placed = net.cell(row, col)
    if placed is None:
        return set()

    refreshed: Set[Position] = set()
    for index in range(len(placed.pipe.components)):
        refreshed |= net.recompute((row, col, index))
    refreshed |= _reseed_around(net, row, col)

    logger.debug("propagated from (%d, %d): %d cells refreshed", row, col, len(refreshed))
    return refreshed
