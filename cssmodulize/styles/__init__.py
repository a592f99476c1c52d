"""Stylesheet naming, global selector preservation and class map extraction."""

from .compiler import StyleAnalysis, analyze_stylesheet, collect_class_map, compile_stylesheet, scoped_name
from .globals import DEFAULT_GLOBAL_PREFIXES, GlobalSelectorResult, preserve_global_selectors
from .naming import STYLE_EXTENSIONS, is_global_style, module_style_name

__all__ = [
    "DEFAULT_GLOBAL_PREFIXES",
    "GlobalSelectorResult",
    "STYLE_EXTENSIONS",
    "StyleAnalysis",
    "analyze_stylesheet",
    "collect_class_map",
    "compile_stylesheet",
    "is_global_style",
    "module_style_name",
    "preserve_global_selectors",
    "scoped_name",
]
