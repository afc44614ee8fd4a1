from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScannerPosition:
    """Location of a character or token within a named source."""

    source_file: str = "<string>"
    row: int = 1
    col: int = 1

    def __str__(self) -> str:
        return f"{self.source_file}:{self.row}:{self.col}"
