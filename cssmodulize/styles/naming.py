"""Naming rules for global and module stylesheets."""

from __future__ import annotations

import re

STYLE_EXTENSIONS = ("css", "scss", "sass", "less", "styl")

_GLOBAL_STYLE = re.compile(r"(?<!\.module)\.(?:%s)$" % "|".join(STYLE_EXTENSIONS))
_STYLE_SUFFIX = re.compile(r"\.(%s)$" % "|".join(STYLE_EXTENSIONS))


def is_global_style(path: str) -> bool:
    """True for a stylesheet path that is not already a CSS module."""
    return bool(_GLOBAL_STYLE.search(str(path)))


def module_style_name(value: str) -> str:
    """``./card.scss`` becomes ``./card.module.scss``."""
    if not is_global_style(value):
        return value
    return _STYLE_SUFFIX.sub(r".module.\1", value)


__all__ = ["STYLE_EXTENSIONS", "is_global_style", "module_style_name"]
