"""Peephole coalescing of adjacent cell and pointer operations.

Runs of ``+``/``-`` become one counted cell operation and runs of ``>``/``<``
become one counted move. Loops and I/O are barriers: nothing is folded across
them, so tape contents, output and loop behaviour are unchanged.
"""
from __future__ import annotations

import enum
import logging
from typing import Iterable, List

from .ops import (
    ARITHMETIC_OPS,
    CELL_MODULUS,
    POINTER_OPS,
    DecrementCell,
    IncrementCell,
    MoveLeft,
    MoveRight,
    Operation,
    Program,
    count_ops,
)

logger = logging.getLogger(__name__)


class CoalesceState(enum.Enum):
    IDLE = "idle"
    ARITHMETIC = "arithmetic"
    POINTER = "pointer"


class Coalescer:
    """Left-to-right folding scan with one accumulator per operation class."""

    def __init__(self) -> None:
        self.state = CoalesceState.IDLE
        self.cell_delta = 0
        self.ptr_delta = 0
        self.out: List[Operation] = []

    def feed(self, op: Operation) -> None:
        if isinstance(op, ARITHMETIC_OPS):
            if self.state is CoalesceState.POINTER:
                self._flush_pointer()
            self.cell_delta += op.count if isinstance(op, IncrementCell) else -op.count
            self.state = CoalesceState.ARITHMETIC
        elif isinstance(op, POINTER_OPS):
            if self.state is CoalesceState.ARITHMETIC:
                self._flush_arithmetic()
            self.ptr_delta += op.count if isinstance(op, MoveRight) else -op.count
            self.state = CoalesceState.POINTER
        else:
            self._flush_all()
            self.out.append(op)

    def finish(self) -> Program:
        self._flush_all()
        return tuple(self.out)

    def _flush_all(self) -> None:
        self._flush_arithmetic()
        self._flush_pointer()
        self.state = CoalesceState.IDLE

    def _flush_arithmetic(self) -> None:
        d = self.cell_delta
        self.cell_delta = 0
        # the counted field is 8 bits wide; a multiple of 256 is a no-op
        if d > 0 and d % CELL_MODULUS:
            self.out.append(IncrementCell(d % CELL_MODULUS))
        elif d < 0 and -d % CELL_MODULUS:
            self.out.append(DecrementCell(-d % CELL_MODULUS))

    def _flush_pointer(self) -> None:
        d = self.ptr_delta
        self.ptr_delta = 0
        if d > 0:
            self.out.append(MoveRight(d))
        elif d < 0:
            self.out.append(MoveLeft(-d))


def optimize(program: Iterable[Operation]) -> Program:
    ops = tuple(program)
    c = Coalescer()
    for op in ops:
        c.feed(op)
    out = c.finish()
    logger.debug(
        "optimized %d ops (%d primitive) into %d ops",
        len(ops), count_ops(ops), len(out),
    )
    return out
