"""Unified error model for cssmodulize."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        if self.line is not None:
            return f"line {self.line}"
        return "unknown location"


class CssModulizeError(Exception):
    """Base class for all migration errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def with_path(self, path: str) -> "CssModulizeError":
        """Attach the file being processed once the caller knows it."""
        self.path = path
        self.location.path = path
        return self

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class ClassNameRewriteError(CssModulizeError):
    """Raised when a class attribute value cannot be rewritten safely."""

    code = "CMZ100"


class UnsafeCallTargetError(ClassNameRewriteError):
    """Raised for a call that is not the merge utility but carries class tokens."""

    code = "CMZ101"
    hint = "Inline the call or wrap its class strings in the merge utility, then rerun."


class UnsupportedOperatorError(ClassNameRewriteError):
    """Raised for a binary operator other than ``+`` in a class expression."""

    code = "CMZ102"
    hint = "Only string concatenation with '+' can be rewritten; edit this value by hand."


class AmbiguousTemplateFusionError(ClassNameRewriteError):
    """Raised when several class arguments would have to be glued to static text."""

    code = "CMZ103"
    hint = "Separate the dynamic part from the surrounding text with a space."


class SourceParseError(CssModulizeError):
    """Raised when a script file cannot be parsed."""

    code = "CMZ200"


class StyleCompilationError(CssModulizeError):
    """Raised when a stylesheet cannot be compiled or analysed."""

    code = "CMZ300"


class VcsError(CssModulizeError):
    """Raised when a style file cannot be renamed."""

    code = "CMZ400"


class ConfigError(CssModulizeError):
    """Raised for invalid configuration values."""

    code = "CMZ500"


__all__ = [
    "CssModulizeError",
    "ClassNameRewriteError",
    "UnsafeCallTargetError",
    "UnsupportedOperatorError",
    "AmbiguousTemplateFusionError",
    "SourceParseError",
    "StyleCompilationError",
    "VcsError",
    "ConfigError",
    "ErrorLocation",
]
