"""Error hierarchy for glisp.

Every failure raised by the scanner, lexer, parser, evaluator or a built-in
derives from GlispError. Errors carry structured data (position, expected and
actual kinds) so the command-line front end can render them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from glisp.reader.tokens import ScannedToken
    from glisp.types.position import ScannerPosition


def _where(pos: Optional[ScannerPosition]) -> str:
    return f" ({pos})" if pos is not None else ""


class GlispError(Exception):
    """ Base class for all glisp errors"""
    pass


class ForbiddenCharacterError(GlispError):
    """ Raised when the scanner meets a code point that may not appear in source"""

    def __init__(self, char: str, pos: ScannerPosition):
        super().__init__(f"Forbidden character {ord(char):#x} found in scan of {pos}")
        self.char = char
        self.pos = pos


class ParseError(GlispError):
    """ Raised when the token sequence does not form a valid program"""

    def __init__(self, msg: str, token: Optional[ScannedToken] = None, pos: Optional[ScannerPosition] = None):
        if pos is None and token is not None:
            pos = token.pos
        text = f"Parse error {msg}"
        if token is not None:
            text += f" for token `{token.value}`"
        super().__init__(text + _where(pos))
        self.msg = msg
        self.token = token
        self.pos = pos


class UnexpectedEOFError(ParseError):
    """ Raised when input ends inside an unfinished expression"""

    def __init__(self, msg: str, pos: Optional[ScannerPosition] = None):
        super().__init__(msg, None, pos)


class GlispTypeError(GlispError):
    """ Raised when a value of the wrong kind is used where another was required"""

    def __init__(self, expected: str, actual: str, pos: Optional[ScannerPosition] = None):
        super().__init__(f"Type error: expected '{expected}', got '{actual}'" + _where(pos))
        self.expected = expected
        self.actual = actual
        self.pos = pos


class EvalError(GlispError):
    """ Raised for runtime failures that are not simple type mismatches"""

    def __init__(self, msg: str, pos: Optional[ScannerPosition] = None):
        super().__init__(f"Eval error: {msg}" + _where(pos))
        self.msg = msg
        self.pos = pos


class ArgumentError(GlispError):
    """ Raised when a built-in receives the wrong number or kinds of arguments"""

    def __init__(
        self,
        fn_name: str,
        arg_index: int,
        msg: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ):
        super().__init__(f"Argument error in '{fn_name}' at arg {arg_index}: {msg}")
        self.fn_name = fn_name
        self.arg_index = arg_index
        self.msg = msg
        self.expected = expected
        self.actual = actual
