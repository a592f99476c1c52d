"""Keep framework-provided global classes global once a stylesheet becomes a module.

Component libraries such as Taro UI style their markup with classes like
``.at-icon``. After the stylesheet is renamed to ``*.module.scss`` those
selectors would be scoped and stop matching, so they are wrapped in
``:global(...)`` first. Only selector preludes are touched; declarations,
comments, strings and interpolations are copied through unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

DEFAULT_GLOBAL_PREFIXES = ("at-",)

_NESTED_PROPERTY = re.compile(r"^[\w-]+\s*:\s*$")
_SPECIAL = re.compile(r"/\*|//|#\{|[\"'{};]")


@dataclass
class GlobalSelectorResult:
    css: str
    changed: bool


def _selector_pattern(prefixes: Sequence[str]) -> "re.Pattern[str]":
    alternatives = "|".join(re.escape(prefix) for prefix in prefixes)
    return re.compile(r"(?<![\w-])(?<!:global\()(\.(?:%s)[\w-]*)" % alternatives)


def _scan_string(source: str, start: int) -> int:
    quote = source[start]
    index = start + 1
    while index < len(source):
        char = source[index]
        if char == "\\":
            index += 2
            continue
        if char == quote or char == "\n":
            return index + 1
        index += 1
    return len(source)


def _scan_interpolation(source: str, start: int) -> int:
    depth = 0
    index = start + 1
    while index < len(source):
        char = source[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return len(source)


def _is_selector(prelude: List[Tuple[str, bool]]) -> bool:
    code = "".join(text for text, is_code in prelude if is_code).strip()
    if not code or code.startswith("@"):
        return False
    return not _NESTED_PROPERTY.match(code)


def preserve_global_selectors(
    source: str, prefixes: Sequence[str] = DEFAULT_GLOBAL_PREFIXES
) -> GlobalSelectorResult:
    """Wrap class selectors starting with one of ``prefixes`` in ``:global()``."""
    if not prefixes:
        return GlobalSelectorResult(css=source, changed=False)
    pattern = _selector_pattern(prefixes)
    out: List[str] = []
    prelude: List[Tuple[str, bool]] = []

    def flush(is_selector: bool) -> None:
        for text, is_code in prelude:
            out.append(pattern.sub(r":global(\1)", text) if is_selector and is_code else text)
        prelude.clear()

    def add_code(text: str) -> None:
        if prelude and prelude[-1][1]:
            prelude[-1] = (prelude[-1][0] + text, True)
        else:
            prelude.append((text, True))

    index = 0
    length = len(source)
    while index < length:
        match = _SPECIAL.search(source, index)
        if match is None:
            add_code(source[index:])
            break
        if match.start() > index:
            add_code(source[index:match.start()])
        index = match.start()
        token = match.group()
        if token == "/*":
            end = source.find("*/", index + 2)
            end = length if end < 0 else end + 2
            prelude.append((source[index:end], False))
        elif token == "//":
            if index > 0 and source[index - 1] == ":":
                # protocol separator inside url()
                add_code(token)
                end = index + 2
            else:
                end = source.find("\n", index)
                end = length if end < 0 else end
                prelude.append((source[index:end], False))
        elif token in ("\"", "'"):
            end = _scan_string(source, index)
            prelude.append((source[index:end], False))
        elif token == "#{":
            end = _scan_interpolation(source, index)
            prelude.append((source[index:end], False))
        else:
            flush(token == "{" and _is_selector(prelude))
            out.append(token)
            end = index + 1
        index = end
    flush(False)
    css = "".join(out)
    return GlobalSelectorResult(css=css, changed=css != source)


__all__ = [
    "DEFAULT_GLOBAL_PREFIXES",
    "GlobalSelectorResult",
    "preserve_global_selectors",
]
