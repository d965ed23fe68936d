from .api import RunOptions, RunResult, run_file, run_string
from .engine import TAPE_SIZE, TAPE_START, Engine, EngineState, execute
from .errors import (
    BFIError,
    InputExhaustedError,
    TapeBoundsError,
    UnmatchedLoopEndError,
    UnmatchedLoopStartError,
)
from .lexer import lex
from .optimizer import optimize

__all__ = [
    'lex',
    'optimize',
    'execute',
    'Engine',
    'EngineState',
    'TAPE_SIZE',
    'TAPE_START',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'BFIError',
    'UnmatchedLoopEndError',
    'UnmatchedLoopStartError',
    'TapeBoundsError',
    'InputExhaustedError',
]
