"""Command-line front end: run a glisp source file.

    glisp FILE [--show-vals] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse
import logging
import sys

from glisp import __version__
from glisp.config import get_log_level, get_show_vals
from glisp.errors import GlispError
from glisp.interpreter import Interpreter
from glisp.types.nil import NilValue


logger = logging.getLogger("glisp")


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="glisp",
        description="Run a glisp source file",
    )
    parser.add_argument("file", help="glisp source file to run")
    parser.add_argument(
        "--show-vals",
        action="store_true",
        default=get_show_vals(),
        help="print the value of every top-level expression that is not nil",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="logging level (default: $GLISP_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def _configure_logging(level_name: str | None) -> None:
    level = get_log_level()
    if level_name:
        named = logging.getLevelName(level_name.upper())
        if isinstance(named, int):
            level = named
    logging.basicConfig(level=level, format="%(name)s: %(levelname)s: %(message)s")


def run(path: str, show_vals: bool = False) -> int:
    """Parse and evaluate `path`; return the process exit status."""
    interp = Interpreter()

    try:
        exprs = interp.parse_file(path)
    except (GlispError, OSError, UnicodeDecodeError) as e:
        logger.error("Parse error in '%s': %s", path, e)
        return 1

    for expr in exprs:
        try:
            (value,) = interp.eval_exprs([expr])
        except GlispError as e:
            logger.error("Execution error in '%s': %s", path, e)
            return 1
        if show_vals and not isinstance(value, NilValue):
            print(value.inspect_str())
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    _configure_logging(args.log_level)
    return run(args.file, show_vals=args.show_vals)


if __name__ == "__main__":
    sys.exit(main())
