"""
GridBoard – the play-field of one pipe level.

The board owns:
    1. A height × width matrix whose perimeter is made of borders and whose
       inside is made of cells (fixed when the level loads).
    2. The stock of spare pipes.
    3. The undo/redo history.

Every mutating call (``place``, ``swap``) snapshots the state first, applies
the change, then recolours whatever networks the change touched.  Callers
(the level scene) re-read the board after each call; nothing is pushed to
them.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List, Set, Tuple

from core.connectivity import Position, propagate
from core.elements import Cell, Element
from core.errors import NotACellError, OutOfBounds
from core.history import GameState, History
from core.levels import LevelDefinition, build_contents, load_level
from core.stock import PipeStock

logger = logging.getLogger(__name__)


class GridBoard:
    def __init__(self, definition: LevelDefinition):
        self.definition = definition
        self.rows = definition.height
        self.cols = definition.width
        self.history = History(self.snapshot, self.restore)
        self.grid: List[List[Element]] = []
        self.stock = PipeStock()
        self._load()

    @classmethod
    def from_file(cls, path: Path | str) -> "GridBoard":
        return cls(load_level(path))

    # ───────────────────────────── loading ─────────────────────────────
    def _load(self) -> None:
        self.grid, self.stock = build_contents(self.definition)
        # attached pipes next to sources start out coloured
        for row, col, cell in list(self.cells()):
            if not cell.is_empty:
                propagate(self.grid, row, col)

    def reset(self, definition: LevelDefinition | None = None) -> None:
        """Rebuild from the level definition and forget all history."""
        if definition is not None:
            self.definition = definition
            self.rows = definition.height
            self.cols = definition.width
        self._load()
        self.history.reset()
        logger.info("Board reset to level %r", self.definition.name)

    # ───────────────────────────── access ──────────────────────────────
    @property
    def height(self) -> int:
        return self.rows

    @property
    def width(self) -> int:
        return self.cols

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def get(self, row: int, col: int) -> Element:
        if not self.in_bounds(row, col):
            raise OutOfBounds(row, col, self.rows, self.cols)
        return self.grid[row][col]

    get_element = get

    def get_stock(self) -> PipeStock:
        return self.stock

    def _cell_at(self, row: int, col: int) -> Cell:
        element = self.get(row, col)
        if not isinstance(element, Cell):
            raise NotACellError(row, col)
        return element

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        for r, line in enumerate(self.grid):
            for c, element in enumerate(line):
                if isinstance(element, Cell):
                    yield r, c, element

    # ───────────────────────────── history ─────────────────────────────
    def snapshot(self) -> GameState:
        return GameState.capture(self.grid, self.stock)

    def restore(self, state: GameState) -> None:
        self.grid, self.stock = state.materialize()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    # ──────────────────────────── mutation ─────────────────────────────
    def place(self, row: int, col: int, cell: Cell) -> Set[Position]:
        """
        Put *cell* at (row, col).  The target must be a cell position; the
        caller is responsible for only dropping onto empty, unattached cells.
        Returns the positions whose colours changed.
        """
        self._cell_at(row, col)
        self.history.push_for_mutation()
        self.grid[row][col] = cell
        logger.debug("place %s at (%d, %d)", cell.pipe, row, col)
        return propagate(self.grid, row, col)

    def swap(self, row1: int, col1: int, row2: int, col2: int) -> Set[Position]:
        """Exchange two unattached cells; a no-op for one cell or attached ones."""
        if (row1, col1) == (row2, col2):
            return set()
        first  = self._cell_at(row1, col1)
        second = self._cell_at(row2, col2)
        if first.attached or second.attached:
            return set()

        self.history.push_for_mutation()
        self.grid[row1][col1] = second
        self.grid[row2][col2] = first
        logger.debug("swap (%d, %d) <-> (%d, %d)", row1, col1, row2, col2)
        refreshed = propagate(self.grid, row2, col2)
        refreshed |= propagate(self.grid, row1, col1)
        return refreshed
