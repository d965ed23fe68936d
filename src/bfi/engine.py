"""Tape machine that executes a program one operation at a time.

Loops are run without a precomputed jump table: a zero cell at ``[`` scans
forward counting nesting depth, and a non-zero cell pushes the loop onto a
stack that ``]`` consults to re-test the cell and jump back to the body.
"""
from __future__ import annotations

import enum
import logging
import sys
from typing import List, Optional, Sequence, TextIO

import numpy as np

from .errors import (
    make_bounds_error,
    make_input_error,
    make_unmatched_end_error,
    make_unmatched_start_error,
)
from .ops import (
    CELL_MODULUS,
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

logger = logging.getLogger(__name__)

TAPE_SIZE = 3000
TAPE_START = TAPE_SIZE // 2


class EngineState(enum.Enum):
    DISPATCHING = "dispatching"
    SKIPPING_LOOP = "skipping-loop"
    RUNNING_LOOP_BODY = "running-loop-body"


class Engine:
    """Executes a Program against a fresh 8-bit tape."""

    def __init__(self, program: Sequence[Operation], *, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        self.program: Program = tuple(program)
        self.stdin = stdin
        self.stdout = stdout
        self.reset()

    def reset(self) -> None:
        self.tape = np.zeros(TAPE_SIZE, dtype=np.uint8)
        self.pointer = TAPE_START
        self.pc = 0
        self.steps = 0
        self.skipping = False
        # indices of the LoopStart of every loop whose body is executing
        self.loops: List[int] = []

    @property
    def state(self) -> EngineState:
        if self.skipping:
            return EngineState.SKIPPING_LOOP
        if self.loops:
            return EngineState.RUNNING_LOOP_BODY
        return EngineState.DISPATCHING

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.program)

    @property
    def cell(self) -> int:
        return int(self.tape[self.pointer])

    def step(self) -> bool:
        """Execute the operation at pc. Returns False once the program has ended."""
        if self.finished:
            self._check_closed()
            return False

        op = self.program[self.pc]
        self.steps += 1

        if isinstance(op, IncrementCell):
            self.tape[self.pointer] = np.uint8((self.cell + op.count) % CELL_MODULUS)
        elif isinstance(op, DecrementCell):
            self.tape[self.pointer] = np.uint8((self.cell - op.count) % CELL_MODULUS)
        elif isinstance(op, MoveRight):
            self._move(self.pointer + op.count)
        elif isinstance(op, MoveLeft):
            self._move(self.pointer - op.count)
        elif isinstance(op, Output):
            self._write(chr(self.cell))
        elif isinstance(op, Input):
            self.tape[self.pointer] = np.uint8(self._read() & 0xFF)
        elif isinstance(op, LoopStart):
            if self.cell == 0:
                self._skip_loop()
                return self._running()
            self.loops.append(self.pc)
        elif isinstance(op, LoopEnd):
            if not self.loops:
                raise make_unmatched_end_error(program=self.program, position=self.pc)
            if self.cell != 0:
                self.pc = self.loops[-1] + 1
                return self._running()
            self.loops.pop()

        self.pc += 1
        return self._running()

    def run(self) -> "Engine":
        while self.step():
            pass
        logger.debug("program finished after %d steps, pointer at %d", self.steps, self.pointer)
        return self

    def _running(self) -> bool:
        if self.finished:
            self._check_closed()
            return False
        return True

    def _check_closed(self) -> None:
        if self.loops:
            raise make_unmatched_start_error(program=self.program, position=self.loops[-1])

    def _skip_loop(self) -> None:
        start = self.pc
        self.skipping = True
        depth = 1
        pc = start + 1
        while pc < len(self.program):
            op = self.program[pc]
            if isinstance(op, LoopStart):
                depth += 1
            elif isinstance(op, LoopEnd):
                depth -= 1
                if depth == 0:
                    self.pc = pc + 1
                    self.skipping = False
                    return
            pc += 1
        self.skipping = False
        raise make_unmatched_start_error(program=self.program, position=start)

    def _move(self, target: int) -> None:
        if not 0 <= target < TAPE_SIZE:
            raise make_bounds_error(program=self.program, position=self.pc, pointer=target, tape_size=TAPE_SIZE)
        self.pointer = target

    def _write(self, ch: str) -> None:
        out = self.stdout if self.stdout is not None else sys.stdout
        out.write(ch)
        out.flush()

    def _read(self) -> int:
        src = self.stdin if self.stdin is not None else sys.stdin
        while True:
            line = src.readline()
            if not line:
                raise make_input_error(program=self.program, position=self.pc)
            text = line.strip()
            if text:
                return ord(text[0])


def execute(program: Sequence[Operation], *, stdin: Optional[TextIO] = None,
            stdout: Optional[TextIO] = None) -> Engine:
    return Engine(program, stdin=stdin, stdout=stdout).run()
