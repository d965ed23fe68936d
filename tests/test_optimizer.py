#!/usr/bin/env python3
"""
Optimizer: coalescing runs and keeping observable behaviour.
"""

import io
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest

from bfi.engine import Engine
from bfi.lexer import lex
from bfi.ops import (
    DecrementCell,
    IncrementCell,
    Input,
    LoopEnd,
    LoopStart,
    MoveLeft,
    MoveRight,
    Output,
    count_ops,
)
from bfi.optimizer import Coalescer, CoalesceState, optimize

HELLO = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>."
    ">---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def _opt(src):
    return optimize(lex(src))


def test_run_of_increments():
    assert _opt("+++") == (IncrementCell(3),)
    assert _opt("---") == (DecrementCell(3),)


def test_mixed_arithmetic_nets_out():
    assert _opt("+++--") == (IncrementCell(1),)
    assert _opt("+--") == (DecrementCell(1),)
    assert _opt("++--") == ()
    assert _opt("++--.") == (Output(),)


def test_pointer_runs():
    assert _opt(">>><") == (MoveRight(2),)
    assert _opt("<<>") == (MoveLeft(1),)
    assert _opt("><") == ()


def test_long_runs_do_not_overflow():
    assert _opt("+" * 300) == (IncrementCell(44),)
    assert _opt("-" * 257) == (DecrementCell(1),)
    assert _opt("+" * 512) == ()
    assert _opt(">" * 5000) == (MoveRight(5000),)


def test_class_change_flushes():
    assert _opt("+>+") == (IncrementCell(1), MoveRight(1), IncrementCell(1))
    assert _opt(">>++<<") == (MoveRight(2), IncrementCell(2), MoveLeft(2))


def test_barriers_are_kept():
    assert _opt("+[-]>.,<") == (
        IncrementCell(1),
        LoopStart(),
        DecrementCell(1),
        LoopEnd(),
        MoveRight(1),
        Output(),
        Input(),
        MoveLeft(1),
    )
    assert _opt("+.+") == (IncrementCell(1), Output(), IncrementCell(1))


def test_idempotent():
    once = _opt(HELLO)
    assert optimize(once) == once


def test_shrinks_typical_code():
    ops = lex(HELLO)
    assert len(_opt(HELLO)) < len(ops)
    assert count_ops(_opt(HELLO)) == count_ops(ops)


def test_coalescer_states():
    c = Coalescer()
    assert c.state is CoalesceState.IDLE
    c.feed(IncrementCell(1))
    assert c.state is CoalesceState.ARITHMETIC
    assert c.out == []
    c.feed(MoveRight(1))
    assert c.state is CoalesceState.POINTER
    assert c.out == [IncrementCell(1)]
    c.feed(Output())
    assert c.state is CoalesceState.IDLE
    assert c.out == [IncrementCell(1), MoveRight(1), Output()]
    c.feed(MoveLeft(3))
    assert c.finish() == (IncrementCell(1), MoveRight(1), Output(), MoveLeft(3))


@pytest.mark.parametrize("src,stdin", [
    (HELLO, ""),
    ("++>+++++[<+>-]<.", ""),
    ("+++[>+++[>++<-]<-]>>.", ""),
    (",[.-]", "D\n"),
    (",>,<[->+<]>.", "a\nb\n"),
    ("-" * 300 + ".>" + "+" * 700 + ".<<<.", ""),
    ("++[>++[-]<-]+[>]<.", ""),
])
def test_optimized_run_matches_plain_run(src, stdin):
    plain_out, opt_out = io.StringIO(), io.StringIO()
    plain = Engine(lex(src), stdin=io.StringIO(stdin), stdout=plain_out).run()
    opt = Engine(_opt(src), stdin=io.StringIO(stdin), stdout=opt_out).run()
    assert plain_out.getvalue() == opt_out.getvalue()
    assert np.array_equal(plain.tape, opt.tape)
    assert plain.pointer == opt.pointer
    assert opt.steps <= plain.steps
