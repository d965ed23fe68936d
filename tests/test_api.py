#!/usr/bin/env python3
"""
run_string / run_file end to end.
"""

import io
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi import (
    TAPE_START,
    RunOptions,
    UnmatchedLoopEndError,
    run_file,
    run_string,
)

HELLO = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>."
    ">---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def test_hello_world():
    result = run_string(HELLO)
    assert result.output == "Hello World!\n"


def test_transfer_scenario():
    result = run_string("++>+++++[<+>-]<.")
    assert result.output == "\x07"
    assert result.pointer == TAPE_START
    assert result.tape[TAPE_START + 1] == 0


def test_optimize_option_changes_length_not_output():
    fast = run_string(HELLO)
    slow = run_string(HELLO, options=RunOptions(optimize=False))
    assert fast.output == slow.output
    assert fast.program_length < slow.program_length
    assert fast.steps < slow.steps
    assert (fast.tape == slow.tape).all()


def test_echo_with_stdin_and_stdout():
    sink = io.StringIO()
    result = run_string(",.", stdin=io.StringIO("\nZebra\n"), stdout=sink)
    assert result.output == "Z"
    assert sink.getvalue() == "Z"


def test_fatal_error_propagates():
    with pytest.raises(UnmatchedLoopEndError):
        run_string("]")


def test_result_tape_is_a_copy():
    result = run_string("+")
    result.tape[TAPE_START] = 9
    assert run_string("+").tape[TAPE_START] == 1


def test_run_file(tmp_path):
    p = tmp_path / "seven.b"
    p.write_text("two ++ move > five +++++ [<+>-] back < print .\n", encoding="utf-8")
    result = run_file(p)
    assert result.output == "\x07"
    assert run_file(str(p), options=RunOptions(optimize=False)).output == "\x07"


def test_bundled_examples():
    root = os.path.join(os.path.dirname(__file__), '..', 'examples')
    assert run_file(os.path.join(root, 'hello.b')).output == "Hello World!\n"
    echoed = run_file(os.path.join(root, 'echo.b'), stdin=io.StringIO("q\n"))
    assert echoed.output == "q"
