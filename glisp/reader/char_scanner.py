"""Character scanner: streams source text one code point at a time.

The scanner tracks the position of the current character. Positions are
1-based; the character following a newline starts a new row at column 1.
"""

from __future__ import annotations

import io
from typing import Optional, TextIO

from glisp.errors import ForbiddenCharacterError
from glisp.types.position import ScannerPosition

FORBIDDEN_CHARS = frozenset("\x00")


class CharScanner:
    """Iteratively read a source for characters."""

    def __init__(self, source: str | TextIO, source_name: str = "<string>"):
        self._src: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._source_name = source_name
        self._row = 1
        self._col = 0
        self.char: str = ""
        self.err: Optional[ForbiddenCharacterError] = None
        self.exhausted = False

    @property
    def pos(self) -> ScannerPosition:
        """Location of the current character."""
        return ScannerPosition(self._source_name, self._row, self._col)

    @property
    def done(self) -> bool:
        """True once the source is exhausted or a forbidden character was seen."""
        return self.exhausted or self.err is not None

    @property
    def started(self) -> bool:
        return self._col > 0 or self.done

    def advance(self) -> None:
        """Move to the next character.

        Raises ForbiddenCharacterError when a forbidden code point is read; the
        scanner is done from then on and further calls do nothing.
        """
        if self.done:
            return
        c = self._src.read(1)
        if not c:
            self.exhausted = True
            self.char = ""
            return

        if self.char == "\n":
            self._row += 1
            self._col = 1
        else:
            self._col += 1

        if c in FORBIDDEN_CHARS:
            self.char = ""
            self.err = ForbiddenCharacterError(c, self.pos)
            raise self.err

        self.char = c
