"""Reading JavaScript and TypeScript sources with tree-sitter."""

from .expressions import ExpressionBuilder, decode_escapes
from .queries import (
    ClassAttribute,
    MergeImport,
    StyleImport,
    collect_bound_names,
    detect_newline,
    find_class_attributes,
    find_merge_import,
    find_style_imports,
    import_statements,
)
from .source import ParsedSource, iter_nodes, language_for_path, parse_source

__all__ = [
    "ClassAttribute",
    "ExpressionBuilder",
    "MergeImport",
    "ParsedSource",
    "StyleImport",
    "collect_bound_names",
    "decode_escapes",
    "detect_newline",
    "find_class_attributes",
    "find_merge_import",
    "find_style_imports",
    "import_statements",
    "iter_nodes",
    "language_for_path",
    "parse_source",
]
