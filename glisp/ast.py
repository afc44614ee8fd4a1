"""AST node types for glisp.

The node set is closed: literals (identifier, number, string, bool, nil and
native function), calls, and the three special forms `if`, `fn` and `let`.
Nodes are immutable and may be evaluated any number of times. Each node
records the source position it was parsed from (ignored by equality) and can
render itself back to source text with code_str().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from glisp import BuiltinFn
from glisp.types.position import ScannerPosition
from glisp.types.values import format_number

_NO_POS = ScannerPosition()


@dataclass(frozen=True)
class IdentifierLiteral:
    name: str
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return self.name


@dataclass(frozen=True)
class NumberLiteral:
    num: float
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return format_number(float(self.num))


@dataclass(frozen=True)
class StringLiteral:
    text: str
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class BoolLiteral:
    flag: bool
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return "true" if self.flag else "false"


@dataclass(frozen=True)
class NilLiteral:
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return "nil"


@dataclass(frozen=True)
class FunctionLiteral:
    """A native function placed directly in the tree (operators)."""

    name: str
    fn: BuiltinFn
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return self.name


@dataclass(frozen=True)
class CallExpr:
    """A call; the first expression is the callee, the rest are arguments."""

    exprs: tuple = ()
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "exprs", tuple(self.exprs))

    def code_str(self) -> str:
        return "(" + " ".join(e.code_str() for e in self.exprs) + ")"


@dataclass(frozen=True)
class IfExpr:
    cond: Expr
    then_branch: Expr = NilLiteral()
    else_branch: Expr = NilLiteral()
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return (
            f"(if {self.cond.code_str()} "
            f"{self.then_branch.code_str()} {self.else_branch.code_str()})"
        )


@dataclass(frozen=True)
class FnExpr:
    params: tuple = ()
    body: tuple = ()
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "body", tuple(self.body))

    def code_str(self) -> str:
        parts = [f"(fn ({' '.join(self.params)})"]
        parts.extend(e.code_str() for e in self.body)
        return " ".join(parts) + ")"


@dataclass(frozen=True)
class LetExpr:
    ident: IdentifierLiteral
    value: Expr
    pos: ScannerPosition = field(default=_NO_POS, compare=False)

    def code_str(self) -> str:
        return f"(let {self.ident.name} {self.value.code_str()})"


Expr = Union[
    IdentifierLiteral, NumberLiteral, StringLiteral, BoolLiteral, NilLiteral,
    FunctionLiteral, CallExpr, IfExpr, FnExpr, LetExpr,
]
