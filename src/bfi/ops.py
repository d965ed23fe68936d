from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

CELL_MODULUS = 256


# ---------------- Operations ----------------
@dataclass(frozen=True)
class IncrementCell:
    count: int = 1  # 0..255, applied modulo 256


@dataclass(frozen=True)
class DecrementCell:
    count: int = 1


@dataclass(frozen=True)
class MoveRight:
    count: int = 1  # cells


@dataclass(frozen=True)
class MoveLeft:
    count: int = 1


@dataclass(frozen=True)
class LoopStart:
    pass


@dataclass(frozen=True)
class LoopEnd:
    pass


@dataclass(frozen=True)
class Output:
    pass


@dataclass(frozen=True)
class Input:
    pass


Operation = Union[IncrementCell, DecrementCell, MoveRight, MoveLeft, LoopStart, LoopEnd, Output, Input]
Program = Tuple[Operation, ...]

ARITHMETIC_OPS = (IncrementCell, DecrementCell)
POINTER_OPS = (MoveRight, MoveLeft)

SYMBOLS = {
    IncrementCell: "+",
    DecrementCell: "-",
    MoveRight: ">",
    MoveLeft: "<",
    LoopStart: "[",
    LoopEnd: "]",
    Output: ".",
    Input: ",",
}


def op_width(op: Operation) -> int:
    """Number of primitive commands a single operation stands for."""
    if isinstance(op, ARITHMETIC_OPS + POINTER_OPS):
        return op.count
    return 1


def render(program: Iterable[Operation]) -> str:
    out: List[str] = []
    for op in program:
        out.append(SYMBOLS[type(op)] * op_width(op))
    return "".join(out)


def count_ops(program: Iterable[Operation]) -> int:
    """Static primitive command count of the rendered program."""
    return sum(op_width(op) for op in program)


def describe(op: Operation) -> str:
    if isinstance(op, ARITHMETIC_OPS + POINTER_OPS):
        return f"{type(op).__name__}({op.count})"
    return type(op).__name__
