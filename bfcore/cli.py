#!/usr/bin/env python3
"""Command-line entry point: run a Brainfuck program file against stdin/stdout."""

import argparse
import sys

from . import __version__
from .brainfuck import BrainfuckInterpreter
from .brainfuck_debugger import BrainfuckDebugger
from .config import InterpreterConfig
from .errors import BrainfuckError
from .program import load_file


def positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return value


def build_parser(defaults: InterpreterConfig) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bfcore", description="Run a Brainfuck program")
    ap.add_argument("program", help="Path to the Brainfuck source file")
    ap.add_argument("-c", "--cells", type=positive_int, default=defaults.cells,
                    help="Initial number of tape cells (default: %(default)s)")
    ap.add_argument("--tape-limit", type=positive_int, default=None,
                    help=f"Maximum number of tape cells (default: {defaults.tape_limit})")
    growth = ap.add_mutually_exclusive_group()
    growth.add_argument("-e", "--extensible", dest="extensible", action="store_true",
                        default=defaults.extensible, help="Let the tape grow up to the limit")
    growth.add_argument("--fixed", dest="extensible", action="store_false",
                        help="Never grow the tape past its initial size")
    ap.add_argument("--list", action="store_true", help="Print the instruction listing and exit")
    ap.add_argument("--trace", action="store_true", help="Print every step to stderr")
    ap.add_argument("--no-newline", action="store_true",
                    help="Do not add a final newline when the output lacks one")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv=None) -> int:
    try:
        defaults = InterpreterConfig.from_env()
    except ValueError as e:
        print(f"bfcore: {e}", file=sys.stderr)
        return 1
    args = build_parser(defaults).parse_args(argv)

    limit = args.tape_limit
    if limit is None:
        limit = max(defaults.tape_limit, args.cells)
    try:
        config = InterpreterConfig(cells=args.cells, tape_limit=limit, extensible=args.extensible)
        program = load_file(args.program)
    except (OSError, BrainfuckError, ValueError) as e:
        print(f"bfcore: {e}", file=sys.stderr)
        return 1

    if args.list:
        for line in program.listing():
            print(line)
        return 0

    out = sys.stdout.buffer
    if args.trace:
        vm = BrainfuckDebugger(program, sys.stdin.buffer, out, config)
    else:
        vm = BrainfuckInterpreter(program, sys.stdin.buffer, out, config)

    try:
        vm.run()
    except BrainfuckError as e:
        out.flush()
        print(f"bfcore: {e}", file=sys.stderr)
        return 1

    if not args.no_newline and vm.last_output != 0x0A:
        out.write(b"\n")
    out.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
