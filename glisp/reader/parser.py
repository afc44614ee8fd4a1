"""
  Recursive descent parser: tokens -> AST.

- `(` followed by the identifier `if`, `fn` or `let` is a special form with its
  own grammar; any other parenthesized form is a call.
- `nil`, `true` and `false` are literals, not identifiers.
- Operator tokens are resolved against the operator table at parse time, so an
  unknown operator is a parse error rather than a runtime one.
- The first error aborts the parse.
"""

from __future__ import annotations

import math
import os
from typing import Callable, Optional, TextIO

from glisp.ast import (
    BoolLiteral,
    CallExpr,
    Expr,
    FnExpr,
    FunctionLiteral,
    IdentifierLiteral,
    IfExpr,
    LetExpr,
    NilLiteral,
    NumberLiteral,
    StringLiteral,
)
from glisp.builtin.env_builtin import OPERATORS
from glisp.errors import ParseError, UnexpectedEOFError
from glisp.reader.char_scanner import CharScanner
from glisp.reader.lexer import TokenScanner
from glisp.reader.tokens import ScannedToken, TokenType


class Parser:
    """Builds top-level expressions from a TokenScanner."""

    def __init__(self, tokens: TokenScanner):
        self.ts = tokens
        self._special_forms: dict[str, Callable[[ScannedToken], Expr]] = {
            "if": self._parse_if_tail,
            "fn": self._parse_fn_tail,
            "let": self._parse_let_tail,
        }

    def parse(self) -> list[Expr]:
        """Parse the whole token stream into a list of expressions."""
        self.ts.advance()
        exprs = self._maybe_parse_exprs()
        if self.ts.token is not None:
            raise ParseError("unexpected close paren", self.ts.token)
        return exprs

    def _maybe_parse_exprs(self) -> list[Expr]:
        """Read expressions until end of input or a close paren."""
        exprs: list[Expr] = []
        while (expr := self._maybe_parse_expr()) is not None:
            exprs.append(expr)
        return exprs

    def _maybe_parse_expr(self) -> Optional[Expr]:
        token = self.ts.token
        if token is None:
            return None

        match token.typ:
            case TokenType.CLOSE_PAREN:
                return None
            case TokenType.OPEN_PAREN:
                return self._parse_call()
            case TokenType.IDENT:
                self.ts.advance()
                return _ident_value(token)
            case TokenType.OPERATOR:
                self.ts.advance()
                return _operator_value(token)
            case TokenType.NUMBER:
                self.ts.advance()
                return _number_value(token)
            case TokenType.STRING:
                self.ts.advance()
                return _string_value(token)
            case _:
                raise ParseError("invalid token", token)

    def _parse_call(self) -> Expr:
        start = self.ts.token
        self.ts.advance()
        head = self.ts.token
        if head is None:
            raise UnexpectedEOFError("parse ended inside of call", self.ts.pos)
        if head.typ is TokenType.IDENT and head.value in self._special_forms:
            return self._special_forms[head.value](start)

        exprs = self._maybe_parse_exprs()
        self._expect_close()
        return CallExpr(exprs, pos=start.pos)

    def _parse_if_tail(self, start: ScannedToken) -> Expr:
        head = self.ts.token
        self.ts.advance()
        body = self._maybe_parse_exprs()
        if not body:
            raise ParseError("if statement must have condition", head)
        if len(body) > 3:
            raise ParseError("if statement can have no more than 3 expressions", head)
        self._expect_close()

        cond, *branches = body
        then_branch = branches[0] if len(branches) > 0 else NilLiteral(pos=start.pos)
        else_branch = branches[1] if len(branches) > 1 else NilLiteral(pos=start.pos)
        return IfExpr(cond, then_branch, else_branch, pos=start.pos)

    def _parse_fn_tail(self, start: ScannedToken) -> Expr:
        self.ts.advance()
        params = self._parse_fn_params()
        body = self._maybe_parse_exprs()
        self._expect_close()
        return FnExpr(params, body, pos=start.pos)

    def _parse_fn_params(self) -> list[str]:
        self._expect_open()
        params: list[str] = []
        while True:
            token = self.ts.token
            if token is None:
                raise UnexpectedEOFError("file ended in function args", self.ts.pos)
            self.ts.advance()
            match token.typ:
                case TokenType.IDENT:
                    params.append(token.value)
                case TokenType.CLOSE_PAREN:
                    return params
                case _:
                    raise ParseError("args can only contain idents", token)

    def _parse_let_tail(self, start: ScannedToken) -> Expr:
        head = self.ts.token
        self.ts.advance()
        body = self._maybe_parse_exprs()
        if len(body) != 2:
            raise ParseError(f"let expects 2 arguments, got {len(body)}", head)
        ident, value = body
        if not isinstance(ident, IdentifierLiteral):
            raise ParseError("let expects an ident as first argument", head)
        self._expect_close()
        return LetExpr(ident, value, pos=start.pos)

    def _expect_open(self) -> None:
        token = self.ts.token
        if token is None:
            raise UnexpectedEOFError("unexpected end of input", self.ts.pos)
        if token.typ is not TokenType.OPEN_PAREN:
            raise ParseError("expected open paren", token)
        self.ts.advance()

    def _expect_close(self) -> None:
        token = self.ts.token
        if token is None:
            raise UnexpectedEOFError("unexpected end of input", self.ts.pos)
        if token.typ is not TokenType.CLOSE_PAREN:
            raise ParseError("expected close paren", token)
        self.ts.advance()


def _ident_value(token: ScannedToken) -> Expr:
    match token.value:
        case "nil":
            return NilLiteral(pos=token.pos)
        case "true":
            return BoolLiteral(True, pos=token.pos)
        case "false":
            return BoolLiteral(False, pos=token.pos)
        case name:
            return IdentifierLiteral(name, pos=token.pos)


def _operator_value(token: ScannedToken) -> Expr:
    fn = OPERATORS.get(token.value)
    if fn is None:
        raise ParseError("unrecognized operator", token)
    return FunctionLiteral(token.value, fn, pos=token.pos)


def _number_value(token: ScannedToken) -> Expr:
    try:
        num = float(token.value)
    except ValueError as e:
        raise ParseError(f"could not parse number ({token.value})", token) from e
    if not math.isfinite(num):
        raise ParseError(f"could not parse number ({token.value}) - value out of range", token)
    return NumberLiteral(num, pos=token.pos)


def _string_value(token: ScannedToken) -> Expr:
    return StringLiteral(token.value[1:-1], pos=token.pos)


def parse(source: str | TextIO, source_name: str = "<string>") -> list[Expr]:
    """Parse source text (or a text stream) into top-level expressions."""
    return Parser(TokenScanner(CharScanner(source, source_name))).parse()


def parse_file(path: str | os.PathLike) -> list[Expr]:
    """Parse a source file into top-level expressions."""
    with open(path, encoding="utf-8") as f:
        return parse(f, os.fspath(path))
