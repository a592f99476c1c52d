"""Class token splitting and the CSS-module local name convention."""

from __future__ import annotations

import re
from typing import List

_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+(\w)")


def split_tokens(text: str) -> List[str]:
    """Split ``text`` on whitespace runs, keeping empty edge tokens.

    A leading or trailing whitespace run yields an empty first or last token
    so callers can tell that the string was separated from its neighbours:

        >>> split_tokens(" card  bg-white")
        ['', 'card', 'bg-white']
    """
    return _WHITESPACE_RUN.split(text)


def class_tokens(text: str) -> List[str]:
    """Non-empty class tokens of ``text`` in source order."""
    return [token for token in split_tokens(text) if token]


def local_name(class_name: str) -> str:
    """Convert a class name to the key CSS modules export it under.

    Hyphen runs followed by a word character collapse into that character
    upper-cased. The first letter keeps its case, unlike the ``camelCaseOnly``
    convention of postcss-modules.
    """
    return _HYPHEN_RUN.sub(lambda match: match.group(1).upper(), class_name)


__all__ = ["split_tokens", "class_tokens", "local_name"]
