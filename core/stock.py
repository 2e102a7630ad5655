"""
PipeStock – the spare pipes a player can still place.

Counts are keyed by (kind, rotation).  The stock does not know about the
board: whoever places a pipe is expected to call ``remove_pipe`` and whoever
takes one back calls ``add_pipe``.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Tuple

from core.pipes import PipeKind, normalize_rotation

logger = logging.getLogger(__name__)

StockKey = Tuple[PipeKind, int]

# fixed order of the slots shown in the stock panel
STOCK_PALETTE: List[StockKey] = [
    (PipeKind.CROSS, 0), (PipeKind.OVER, 0),
    (PipeKind.LINE, 0),  (PipeKind.LINE, 1),
    (PipeKind.TURN, 1),  (PipeKind.TURN, 2),
    (PipeKind.TURN, 0),  (PipeKind.TURN, 3),
    (PipeKind.FORK, 0),  (PipeKind.FORK, 1),
    (PipeKind.FORK, 3),  (PipeKind.FORK, 2),
]


class PipeStock:
    def __init__(self, counts: Dict[StockKey, int] | None = None):
        self._counts: Dict[StockKey, int] = {}
        for (kind, rotation), qty in (counts or {}).items():
            if qty > 0:
                self._counts[(kind, normalize_rotation(rotation))] = qty

    # ─────────────────────────── ledger ───────────────────────────
    def add_pipe(self, kind: PipeKind, rotation: int) -> None:
        key = (kind, normalize_rotation(rotation))
        self._counts[key] = self._counts.get(key, 0) + 1
        logger.debug("stock + %s/%d -> %d", kind.name, key[1], self._counts[key])

    def remove_pipe(self, kind: PipeKind, rotation: int) -> None:
        """Take one pipe out; nothing happens if none is left."""
        key = (kind, normalize_rotation(rotation))
        qty = self._counts.get(key, 0)
        if qty > 0:
            self._counts[key] = qty - 1
            logger.debug("stock - %s/%d -> %d", kind.name, key[1], qty - 1)

    def quantity(self, kind: PipeKind, rotation: int) -> int:
        return self._counts.get((kind, normalize_rotation(rotation)), 0)

    # ─────────────────────────── views ────────────────────────────
    def items(self) -> Iterator[Tuple[StockKey, int]]:
        """Non-zero entries, in insertion order."""
        return ((k, q) for k, q in self._counts.items() if q > 0)

    def total(self) -> int:
        return sum(self._counts.values())

    def copy(self) -> "PipeStock":
        return PipeStock(self._counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PipeStock):
            return NotImplemented
        return dict(self.items()) == dict(other.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{k.name}{r}: {q}" for (k, r), q in self.items())
        return f"PipeStock({body})"
