from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

import numpy as np

from .engine import Engine
from .lexer import lex
from .optimizer import optimize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    optimize: bool = True


@dataclass(frozen=True)
class RunResult:
    output: str
    tape: np.ndarray
    pointer: int
    steps: int
    program_length: int


class _Tee(io.StringIO):
    """Captures output while forwarding it to another stream."""

    def __init__(self, target: Optional[TextIO]):
        super().__init__()
        self._target = target

    def write(self, s: str) -> int:
        if self._target is not None:
            self._target.write(s)
        return super().write(s)

    def flush(self) -> None:
        if self._target is not None:
            self._target.flush()
        super().flush()


def run_string(source: str, *, options: Optional[RunOptions] = None, stdin: Optional[TextIO] = None,
               stdout: Optional[TextIO] = None) -> RunResult:
    opts = options or RunOptions()
    program = lex(source)
    if opts.optimize:
        program = optimize(program)
    sink = _Tee(stdout)
    engine = Engine(program, stdin=stdin, stdout=sink).run()
    logger.debug("ran %d ops in %d steps", len(program), engine.steps)
    return RunResult(
        output=sink.getvalue(),
        tape=engine.tape.copy(),
        pointer=engine.pointer,
        steps=engine.steps,
        program_length=len(program),
    )


def run_file(path: str | Path, *, options: Optional[RunOptions] = None, encoding: str = "utf-8",
             stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), options=options, stdin=stdin, stdout=stdout)
