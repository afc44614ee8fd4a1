"""Runtime values for glisp.

The value model is a closed union: NumberValue, StringValue, BoolValue, Nil,
PairValue, ListValue, MapValue and FunctionValue. Values are immutable once
constructed. Each class exposes a `kind` name (used in type and argument
errors) and `inspect_str()`, the user-facing rendering used by `print`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Union

from glisp import BuiltinFn
from glisp.types.nil import Nil, NilValue

if TYPE_CHECKING:
    from glisp.types.environment import Environment


def format_number(num: float) -> str:
    """Exact, shortest positional rendering of a float (no exponent)."""
    if math.isnan(num):
        return "nan"
    if math.isinf(num):
        return "inf" if num > 0 else "-inf"
    return format(Decimal(repr(num)), "f")


@dataclass(frozen=True)
class NumberValue:
    val: float
    kind: ClassVar[str] = "number"

    def __post_init__(self):
        object.__setattr__(self, "val", float(self.val))

    def inspect_str(self) -> str:
        text = format_number(self.val)
        return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True)
class StringValue:
    val: str
    kind: ClassVar[str] = "string"

    def inspect_str(self) -> str:
        return f'"{self.val}"'


@dataclass(frozen=True)
class BoolValue:
    val: bool
    kind: ClassVar[str] = "bool"

    def inspect_str(self) -> str:
        return "true" if self.val else "false"


@dataclass(frozen=True)
class PairValue:
    """A cons cell. Either slot may hold any value, including another pair."""

    left: Value = Nil
    right: Value = Nil
    kind: ClassVar[str] = "pair"

    def inspect_str(self) -> str:
        return f"({self.left.inspect_str()} . {self.right.inspect_str()})"


@dataclass(frozen=True)
class ListValue:
    vals: tuple = ()
    kind: ClassVar[str] = "list"

    def __post_init__(self):
        object.__setattr__(self, "vals", tuple(self.vals))

    def __len__(self) -> int:
        return len(self.vals)

    def inspect_str(self) -> str:
        return "[" + " ".join(v.inspect_str() for v in self.vals) + "]"


@dataclass(frozen=True)
class MapValue:
    """String-keyed mapping. Iteration follows insertion order."""

    vals: dict = field(default_factory=dict)
    kind: ClassVar[str] = "map"

    def __post_init__(self):
        object.__setattr__(self, "vals", dict(self.vals))

    def __len__(self) -> int:
        return len(self.vals)

    def inspect_str(self) -> str:
        items = ", ".join(f'"{k}": {v.inspect_str()}' for k, v in self.vals.items())
        return "{" + items + "}"


@dataclass(frozen=True, eq=False)
class FunctionValue:
    """A callable value: either a native built-in or a closure over an `fn`."""

    fn: BuiltinFn
    name: str = ""
    kind: ClassVar[str] = "function"

    def call(self, env: Environment, args: list[Value]) -> Value:
        return self.fn(env, list(args))

    def inspect_str(self) -> str:
        return f"<func {self.name}>" if self.name else "<func>"


Value = Union[
    NumberValue, StringValue, BoolValue, NilValue,
    PairValue, ListValue, MapValue, FunctionValue,
]


def kind_of(value: object) -> str:
    """Name of the runtime kind of `value`, for error messages."""
    return getattr(value, "kind", type(value).__name__)
