"""
  Lexer: turns a character stream into classified tokens.

- One token per call to TokenScanner.next(); whitespace and `;` comments are
  skipped transparently.
- Each token class has its own small state machine (`_parse_*`). A token is
  only valid when the character after its last matched character is a
  boundary: whitespace, `(`, `)`, or end of input. Anything else turns the
  whole run into an INVALID token.
- Scanning stops after the first INVALID token.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional, TextIO

from glisp.reader.char_scanner import CharScanner
from glisp.reader.tokens import ScannedToken, TokenType
from glisp.types.position import ScannerPosition

OPERATOR_CHARS = frozenset("-+/*&^%!|<>=")
DIGITS = frozenset("0123456789")


class _SubTokenScanner:
    """Buffers the in-progress token on top of a CharScanner."""

    def __init__(self, src: CharScanner):
        self.src = src
        self.buf: list[str] = []
        self.start: ScannerPosition = src.pos

    @property
    def done(self) -> bool:
        return self.src.done

    @property
    def char(self) -> str:
        return self.src.char

    def begin(self) -> None:
        self.buf.clear()
        self.start = self.src.pos

    def advance(self) -> None:
        """Add the current character to the buffer and move on."""
        if self.src.done:
            return
        self.buf.append(self.src.char)
        self.src.advance()

    def skip(self) -> None:
        """Move on without buffering the current character."""
        if self.src.done:
            return
        self.src.advance()

    def complete(self, typ: TokenType) -> ScannedToken:
        token = ScannedToken(typ, "".join(self.buf), self.start)
        self.buf.clear()
        return token

    # --- character classes ---
    def at_boundary(self) -> bool:
        return self.done or self.at_space() or self.char in ("(", ")")

    def at_space(self) -> bool:
        return not self.done and self.char.isspace()

    def at_digit(self) -> bool:
        return not self.done and self.char in DIGITS

    def at_operator(self) -> bool:
        return not self.done and self.char in OPERATOR_CHARS

    def at_decimal(self) -> bool:
        return not self.done and self.char == "."

    def at_double_quote(self) -> bool:
        return not self.done and self.char == '"'

    def at_newline(self) -> bool:
        return not self.done and self.char == "\n"

    def at_ident_start(self) -> bool:
        return not self.done and self.char.isalpha()

    def at_ident(self) -> bool:
        return not self.done and (self.char.isalpha() or self.char.isdigit())


def _try_parse_comment(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.char != ";":
        return None
    while not s.done and not s.at_newline():
        s.advance()
    return s.complete(TokenType.COMMENT)


def _try_parse_open_paren(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.char == "(":
        s.advance()
        return s.complete(TokenType.OPEN_PAREN)
    return None


def _try_parse_close_paren(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.char == ")":
        s.advance()
        return s.complete(TokenType.CLOSE_PAREN)
    return None


def _try_parse_signed_value(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.char != "-":
        return None
    s.advance()
    if s.at_digit():
        s.advance()
        return _parse_number(s)
    return _parse_operator(s)


def _try_parse_operator(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.at_operator():
        s.advance()
        return _parse_operator(s)
    return None


def _parse_operator(s: _SubTokenScanner) -> ScannedToken:
    while s.at_operator():
        s.advance()
    if s.at_boundary():
        return s.complete(TokenType.OPERATOR)
    s.advance()
    return s.complete(TokenType.INVALID)


def _try_parse_number(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.at_digit():
        s.advance()
        return _parse_number(s)
    return None


def _parse_number(s: _SubTokenScanner) -> ScannedToken:
    seen_decimal = False
    while True:
        if s.at_digit():
            s.advance()
            continue
        if s.at_decimal():
            s.advance()
            # one decimal point, and it must be followed by a digit
            if seen_decimal or not s.at_digit():
                return s.complete(TokenType.INVALID)
            seen_decimal = True
            s.advance()
            continue
        if s.at_boundary():
            return s.complete(TokenType.NUMBER)
        s.advance()
        return s.complete(TokenType.INVALID)


def _try_parse_string(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.at_double_quote():
        s.advance()
        return _parse_string(s)
    return None


def _parse_string(s: _SubTokenScanner) -> ScannedToken:
    # No escape sequences: the first `"` closes the string.
    while True:
        if s.done or s.at_newline():
            return s.complete(TokenType.INVALID)
        if s.at_double_quote():
            s.advance()
            if s.at_boundary():
                return s.complete(TokenType.STRING)
            s.advance()
            return s.complete(TokenType.INVALID)
        s.advance()


def _try_parse_ident(s: _SubTokenScanner) -> Optional[ScannedToken]:
    if s.at_ident_start():
        s.advance()
        return _parse_ident(s)
    return None


def _parse_ident(s: _SubTokenScanner) -> ScannedToken:
    while True:
        if s.at_boundary():
            return s.complete(TokenType.IDENT)
        if s.at_ident():
            s.advance()
            continue
        s.advance()
        return s.complete(TokenType.INVALID)


_TRY_PARSERS: tuple[Callable[[_SubTokenScanner], Optional[ScannedToken]], ...] = (
    _try_parse_comment,
    _try_parse_open_paren,
    _try_parse_close_paren,
    _try_parse_signed_value,
    _try_parse_operator,
    _try_parse_number,
    _try_parse_string,
    _try_parse_ident,
)


def _scan_next_token(s: _SubTokenScanner) -> Optional[ScannedToken]:
    while s.at_space():
        s.skip()
    if s.done:
        return None

    s.begin()
    for try_parse in _TRY_PARSERS:
        if (token := try_parse(s)) is not None:
            return token

    s.advance()
    return s.complete(TokenType.INVALID)


class TokenScanner:
    """Reads characters from a CharScanner and produces tokens.

    Besides next(), the scanner keeps a one-token cursor (`token`, advance())
    for the parser, which needs to peek at the current token before
    consuming it.
    """

    def __init__(self, chars: CharScanner):
        self._chars = chars
        self._st = _SubTokenScanner(chars)
        self._halted = False
        self.token: Optional[ScannedToken] = None

    @property
    def done(self) -> bool:
        """True when no further tokens will be produced."""
        return self._halted or self._chars.done

    @property
    def pos(self) -> ScannerPosition:
        """Position of the underlying character scanner."""
        return self._chars.pos

    def next(self) -> Optional[ScannedToken]:
        """Scan and return the next non-comment token, or None at the end."""
        if self._halted:
            return None
        if not self._chars.started:
            self._chars.advance()
        while True:
            token = _scan_next_token(self._st)
            if token is None:
                self._halted = True
                return None
            if token.typ is TokenType.COMMENT:
                continue
            if token.typ is TokenType.INVALID:
                self._halted = True
            return token

    def advance(self) -> Optional[ScannedToken]:
        """Move the cursor to the next token and return it."""
        self.token = self.next()
        return self.token

    def __iter__(self) -> Iterator[ScannedToken]:
        while (token := self.next()) is not None:
            yield token


def tokenize(source: str | TextIO, source_name: str = "<string>") -> list[ScannedToken]:
    """Convert the provided source to a list of tokens."""
    return list(TokenScanner(CharScanner(source, source_name)))
