from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from glisp.types.position import ScannerPosition


class TokenType(Enum):
    """Kinds of token produced by the lexer."""

    INVALID = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    IDENT = auto()
    OPERATOR = auto()
    NUMBER = auto()
    STRING = auto()
    COMMENT = auto()


@dataclass(frozen=True)
class ScannedToken:
    typ: TokenType
    value: str
    pos: ScannerPosition = ScannerPosition()

    def __str__(self) -> str:
        return f"{self.typ.name}({self.value!r})"
