from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .ops import Operation, describe


def _build_context(program: Sequence[Operation], position: int, *, context: int = 2) -> str:
    if not program:
        return "  (empty program)"
    idx = min(max(0, position), len(program) - 1)
    start = max(0, idx - context)
    end = min(len(program) - 1, idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == position else ' '
        out.append(f"{prefix} {i:6d} | {describe(program[i])}")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == 'unmatched-end':
        return 'Every "]" needs an earlier "[" at the same nesting level.'
    if kind == 'unmatched-start':
        return 'Check for a missing "]" after this "[".'
    if kind == 'bounds':
        return 'The tape has a fixed size; the pointer starts in the middle of it.'
    if kind == 'input':
        return 'Supply a non-blank line on standard input for every ",".'
    return None


@dataclass
class BFIError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class UnmatchedLoopEndError(BFIError):
    position: int
    context: str


@dataclass
class UnmatchedLoopStartError(BFIError):
    position: int
    context: str


@dataclass
class TapeBoundsError(BFIError):
    position: int
    pointer: int
    context: str


@dataclass
class InputExhaustedError(BFIError):
    position: int
    context: str


def _format(kind: str, title: str, message: str, ctx: str) -> str:
    hint = _hint_for(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return f"{title}: {message}\n{ctx}{hint_block}"


def make_unmatched_end_error(*, program: Sequence[Operation], position: int) -> UnmatchedLoopEndError:
    ctx = _build_context(program, position)
    return UnmatchedLoopEndError(
        message=_format('unmatched-end', 'StructuralError', f"unexpected loop end at operation {position}", ctx),
        position=position,
        context=ctx,
    )


def make_unmatched_start_error(*, program: Sequence[Operation], position: int) -> UnmatchedLoopStartError:
    ctx = _build_context(program, position)
    return UnmatchedLoopStartError(
        message=_format('unmatched-start', 'StructuralError', f"loop start at operation {position} is never closed", ctx),
        position=position,
        context=ctx,
    )


def make_bounds_error(*, program: Sequence[Operation], position: int, pointer: int, tape_size: int) -> TapeBoundsError:
    ctx = _build_context(program, position)
    return TapeBoundsError(
        message=_format(
            'bounds',
            'BoundsError',
            f"tape pointer moved to {pointer}, outside [0, {tape_size}) at operation {position}",
            ctx,
        ),
        position=position,
        pointer=pointer,
        context=ctx,
    )


def make_input_error(*, program: Sequence[Operation], position: int) -> InputExhaustedError:
    ctx = _build_context(program, position)
    return InputExhaustedError(
        message=_format('input', 'InputError', f"standard input exhausted at operation {position}", ctx),
        position=position,
        context=ctx,
    )
