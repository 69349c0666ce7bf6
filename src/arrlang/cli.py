"""Run an arrlang program file."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .driver import run_program
from .environment import Environment
from .parser import ParseError
from .values import format_value


def _get_log_level() -> int:
    """Log level from the LOGLEVEL environment variable, WARNING by default."""
    loglevel_env = os.getenv("LOGLEVEL", "").upper()
    if loglevel_env:
        level = getattr(logging, loglevel_env, None)
        if isinstance(level, int):
            return level
    return logging.WARNING


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="arrlang", description=__doc__)
    parser.add_argument("program", type=Path, help="source file, one statement per line")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="report a failing line and continue with the next one",
    )
    parser.add_argument(
        "--show-env",
        action="store_true",
        help="print the final variable bindings after the run",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=_get_log_level(), format="%(message)s", stream=sys.stderr)

    try:
        source = args.program.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        logging.error(f"Error reading {args.program}: {err}")
        return 2

    try:
        result = run_program(source, Environment(), keep_going=args.keep_going)
    except ParseError as err:
        logging.error(f"{args.program}: {err}")
        return 2

    for line in result.errors:
        logging.error(f"{args.program}: statement {line.index + 1}: {type(line.error).__name__}: {line.error}")

    if args.show_env:
        for name, value in result.env.items():
            print(f"{name} = {format_value(value)}")

    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
