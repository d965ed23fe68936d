from typing import Dict, List

from .ops import (
    DecrementCell,
    IncrementCell,
    Input,
    LoopEnd,
    LoopStart,
    MoveLeft,
    MoveRight,
    Operation,
    Output,
    Program,
)

_COMMANDS: Dict[str, Operation] = {
    '>': MoveRight(1),
    '<': MoveLeft(1),
    '+': IncrementCell(1),
    '-': DecrementCell(1),
    '[': LoopStart(),
    ']': LoopEnd(),
    ',': Input(),
    '.': Output(),
}


def is_code_char(ch: str) -> bool:
    return ch in _COMMANDS


def lex(source: str) -> Program:
    """Translate source text into unit-count operations.

    Every character outside the eight commands is a comment and is dropped.
    Bracket balance is not checked here.
    """
    ops: List[Operation] = [_COMMANDS[ch] for ch in source if ch in _COMMANDS]
    return tuple(ops)
