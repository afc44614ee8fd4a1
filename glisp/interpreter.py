from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from glisp import Value
from glisp.ast import Expr
from glisp.builtin.env_builtin import builtin_environment
from glisp.config import get_recursion_limit
from glisp.errors import EvalError, ParseError
from glisp.evaluation.evaluator import evaluate
from glisp.reader.parser import parse, parse_file
from glisp.types.nil import Nil
from glisp.types.position import ScannerPosition


class Interpreter:
    """
    Evaluates glisp source in a single script frame.
    The script frame is a child of the shared built-in frame, so bindings made
    with `let` persist across calls to eval() on the same interpreter.
    """
    def __init__(self, prelude: str | None = None):
        self.logger = logging.getLogger("Interpreter")
        self.env = builtin_environment().sub_environment()

        limit = get_recursion_limit()
        if limit is not None:
            self.logger.debug("setting recursion limit to %d", limit)
            sys.setrecursionlimit(limit)

        if prelude:
            self.eval_all(prelude, "<prelude>")

    def parse(self, code: str | TextIO, source_name: str = "<string>") -> list[Expr]:
        """Parse source without evaluating it."""
        try:
            exprs = parse(code, source_name)
        except RecursionError as e:
            raise ParseError("expressions nested too deeply", pos=ScannerPosition(source_name)) from e
        self.logger.debug("parsed %d expressions from %s", len(exprs), source_name)
        return exprs

    def parse_file(self, path: str | os.PathLike) -> list[Expr]:
        try:
            exprs = parse_file(path)
        except RecursionError as e:
            raise ParseError(
                "expressions nested too deeply", pos=ScannerPosition(os.fspath(path))
            ) from e
        self.logger.debug("parsed %d expressions from %s", len(exprs), os.fspath(path))
        return exprs

    def eval_exprs(self, exprs: list[Expr]) -> list[Value]:
        """Evaluate parsed expressions in order in the script frame."""
        results = []
        for expr in exprs:
            try:
                if self.logger.isEnabledFor(logging.DEBUG):
                    self.logger.debug("evaluating %s", expr.code_str())
                results.append(evaluate(expr, self.env))
            except RecursionError as e:
                raise EvalError("maximum recursion depth exceeded", expr.pos) from e
        return results

    def eval_all(self, code: str | TextIO, source_name: str = "<string>") -> list[Value]:
        """Parse and evaluate code; return the value of every top-level expression."""
        return self.eval_exprs(self.parse(code, source_name))

    def eval(self, code: str | TextIO, source_name: str = "<string>") -> Value:
        """Parse and evaluate code; return the last value (nil for empty input)."""
        results = self.eval_all(code, source_name)
        if not results:
            return Nil
        return results[-1]

    def eval_file(self, path: str | os.PathLike) -> list[Value]:
        return self.eval_exprs(self.parse_file(path))
