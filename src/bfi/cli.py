from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .errors import BFIError
from .lexer import lex
from .ops import render
from .engine import execute
from .optimizer import optimize


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Run a tape-language program on a 3000-cell byte tape.",
    )
    parser.add_argument("file", help="program source file")
    parser.add_argument("--no-optimize", action="store_true", help="run the unit operations as lexed")
    parser.add_argument("--emit", action="store_true", help="print the program as source instead of running it")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging on stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        with open(args.file, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Couldn't read {args.file}: {getattr(e, 'strerror', None) or e}", file=sys.stderr)
        return 1

    program = lex(source)
    if not args.no_optimize:
        program = optimize(program)

    if args.emit:
        sys.stdout.write(render(program) + "\n")
        return 0

    try:
        execute(program)
    except BFIError as e:
        sys.stdout.flush()
        print(f"\n{e}", file=sys.stderr)
        return 1

    if args.verbose:
        print("\nDone", file=sys.stderr)
    return 0
