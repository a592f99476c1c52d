"""Source location information for AST nodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class SourceLocation:
    """
    Represents a location in source code.

    Lines are 1-based, columns 0-based, matching what editors show for the
    line and what tree-sitter reports for the column.
    """
    line: int
    column: int = 0
    file: Optional[str] = None

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


__all__ = ["SourceLocation"]
