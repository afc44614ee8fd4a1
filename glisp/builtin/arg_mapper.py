"""Argument mapper: declarative, typed extraction of built-in arguments.

A built-in describes the shape of its arguments as one chain of reads and
finishes with complete():

    first, rest = (ArgMapper.values("+", args)
                   .read_number()
                   .read_numbers()
                   .complete())

Each read consumes one argument position (the plural reads consume all
remaining positions). Errors are not raised while reading: the first type
mismatch or missing argument is recorded and every later read becomes a
no-op. complete() raises the recorded error, raises if arguments were left
unconsumed, and otherwise returns the read results in call order.

Arguments come either from already-evaluated values or from expressions that
are evaluated lazily, one at a time, only when a read asks for them.
"""

from __future__ import annotations

from typing import Iterator, Optional

from glisp import Value
from glisp.ast import Expr
from glisp.errors import ArgumentError, GlispError
from glisp.evaluation.evaluator import evaluate
from glisp.types.environment import Environment
from glisp.types.values import (
    BoolValue,
    FunctionValue,
    ListValue,
    MapValue,
    NumberValue,
    PairValue,
    StringValue,
    kind_of,
)


def _value_source(vals: list[Value]) -> Iterator[Value]:
    yield from vals


def _expr_source(env: Environment, exprs: list[Expr]) -> Iterator[Value]:
    for expr in exprs:
        yield evaluate(expr, env)


class ArgMapper:
    """Stateful, chainable argument validator for one built-in call."""

    def __init__(self, fn_name: str, source: Iterator[Value]):
        self.fn_name = fn_name
        self._source = source
        self._index = 0
        self._results: list = []
        self.err: Optional[GlispError] = None

    @classmethod
    def values(cls, fn_name: str, vals: list[Value]) -> ArgMapper:
        """Map over already-evaluated values."""
        return cls(fn_name, _value_source(list(vals)))

    @classmethod
    def exprs(cls, fn_name: str, env: Environment, exprs: list[Expr]) -> ArgMapper:
        """Map over expressions, evaluating each in `env` only when read."""
        return cls(fn_name, _expr_source(env, list(exprs)))

    # --- single-position reads ---
    def read_number(self) -> ArgMapper:
        return self._read(NumberValue)

    def read_string(self) -> ArgMapper:
        return self._read(StringValue)

    def read_bool(self) -> ArgMapper:
        return self._read(BoolValue)

    def read_function(self) -> ArgMapper:
        return self._read(FunctionValue)

    def read_pair(self) -> ArgMapper:
        return self._read(PairValue)

    def read_list(self) -> ArgMapper:
        return self._read(ListValue)

    def read_map(self) -> ArgMapper:
        return self._read(MapValue)

    def read_value(self) -> ArgMapper:
        """Read one argument of any kind; it must be present."""
        return self._read(None)

    def maybe_read_value(self) -> ArgMapper:
        """Read one argument of any kind if present; records None otherwise."""
        self._results.append(self._maybe_next())
        return self

    # --- remaining-position reads ---
    def read_numbers(self) -> ArgMapper:
        return self._read_remaining(NumberValue)

    def read_strings(self) -> ArgMapper:
        return self._read_remaining(StringValue)

    def read_bools(self) -> ArgMapper:
        return self._read_remaining(BoolValue)

    def read_values(self) -> ArgMapper:
        return self._read_remaining(None)

    def complete(self) -> tuple:
        """Finish the mapping: raise the first error, or return the results."""
        if self.err is None and self._maybe_next() is not None:
            self.err = ArgumentError(
                self.fn_name,
                self._index - 1,
                "unprocessed arguments remaining at end of mapping",
            )
        if self.err is not None:
            raise self.err
        return tuple(self._results)

    # --- internals ---
    def _read(self, cls: Optional[type]) -> ArgMapper:
        expected = cls.kind if cls is not None else "value"
        value = self._next(expected)
        if value is not None and cls is not None and not isinstance(value, cls):
            self._type_error(expected, value)
            value = None
        self._results.append(value)
        return self

    def _read_remaining(self, cls: Optional[type]) -> ArgMapper:
        vals: list[Value] = []
        while (value := self._maybe_next()) is not None:
            if cls is not None and not isinstance(value, cls):
                self._type_error(cls.kind, value)
                break
            vals.append(value)
        self._results.append(vals)
        return self

    def _type_error(self, expected: str, value: Value) -> None:
        actual = kind_of(value)
        self.err = ArgumentError(
            self.fn_name,
            self._index - 1,
            f"expected '{expected}', got '{actual}'",
            expected,
            actual,
        )

    def _next(self, expected: str) -> Optional[Value]:
        if self.err is not None:
            return None
        value = self._maybe_next()
        if value is None and self.err is None:
            self.err = ArgumentError(
                self.fn_name, self._index, "not enough arguments", expected
            )
        return value

    def _maybe_next(self) -> Optional[Value]:
        if self.err is not None:
            return None
        try:
            value = next(self._source, None)
        except GlispError as e:
            # lazily evaluated argument failed; it is reported at complete()
            self.err = e
            return None
        if value is not None:
            self._index += 1
        return value
