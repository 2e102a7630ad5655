"""
Undo / redo by whole-state snapshots.

Each mutating board call first pushes a ``GameState`` (a deep copy of the
grid and the stock) onto the undo stack and drops the redo stack.  Undo and
redo swap the live state with the top of the relevant stack, snapshotting
the live state onto the other one first.
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Callable, List

from core.elements import Element
from core.stock import PipeStock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    grid: List[List[Element]]
    stock: PipeStock

    @classmethod
    def capture(cls, grid: List[List[Element]], stock: PipeStock) -> "GameState":
        return cls(copy.deepcopy(grid), copy.deepcopy(stock))

    def materialize(self) -> tuple[List[List[Element]], PipeStock]:
        """Independent copies of the stored grid and stock, safe to mutate."""
        return copy.deepcopy(self.grid), copy.deepcopy(self.stock)


class History:
    """
    Two snapshot stacks bound to a board through *snapshot* (read the live
    state) and *restore* (replace it).
    """

    def __init__(self,
                 snapshot: Callable[[], GameState],
                 restore: Callable[[GameState], None]):
        self._snapshot = snapshot
        self._restore  = restore
        self.undo_stack: List[GameState] = []
        self.redo_stack: List[GameState] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def push_for_mutation(self) -> None:
        self.undo_stack.append(self._snapshot())
        self.redo_stack.clear()

    def undo(self) -> bool:
        if not self.undo_stack:
            return False
        self.redo_stack.append(self._snapshot())
        self._restore(self.undo_stack.pop())
        logger.debug("undo (%d left, %d redoable)", len(self.undo_stack), len(self.redo_stack))
        return True

    def redo(self) -> bool:
        if not self.redo_stack:
            return False
        self.undo_stack.append(self._snapshot())
        self._restore(self.redo_stack.pop())
        logger.debug("redo (%d undoable, %d left)", len(self.undo_stack), len(self.redo_stack))
        return True

    def reset(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()
