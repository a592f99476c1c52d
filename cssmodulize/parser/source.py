"""Tree-sitter parsing of JavaScript and TypeScript sources."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser

from ..errors import SourceParseError

_PARSER_CACHE: Dict[str, Any] = {}


@dataclass
class ParsedSource:
    """A parsed script together with the bytes its node offsets refer to."""

    path: Optional[str]
    source: bytes
    tree: Any

    @property
    def root(self) -> Any:
        return self.tree.root_node

    def text(self, node: Any) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8")


def language_for_path(path: Optional[Path]) -> str:
    """Grammar used for a file: TypeScript for ``.ts``, TSX for everything else."""
    if path is not None and Path(path).suffix == ".ts":
        return "typescript"
    return "tsx"


def get_parser(language: str) -> Any:
    if language not in _PARSER_CACHE:
        if language == "typescript":
            grammar = Language(tree_sitter_typescript.language_typescript())
        elif language == "tsx":
            grammar = Language(tree_sitter_typescript.language_tsx())
        else:
            raise ValueError(f"Unsupported language {language!r}")
        _PARSER_CACHE[language] = Parser(grammar)
    return _PARSER_CACHE[language]


def iter_nodes(node: Any) -> Iterator[Any]:
    """Pre-order traversal of ``node`` and all its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _first_error(root: Any) -> Optional[Any]:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def parse_source(source: bytes, path: Optional[Path] = None) -> ParsedSource:
    """Parse ``source`` and fail on syntax errors.

    Raises:
        SourceParseError: when tree-sitter had to recover from invalid syntax.
    """
    parser = get_parser(language_for_path(path))
    tree = parser.parse(source)
    path_str = str(path) if path is not None else None
    if tree.root_node.has_error:
        error = _first_error(tree.root_node) or tree.root_node
        row, column = error.start_point
        raise SourceParseError(
            "Source contains syntax errors",
            path=path_str,
            line=row + 1,
            column=column,
        )
    return ParsedSource(path=path_str, source=source, tree=tree)


__all__ = ["ParsedSource", "parse_source", "get_parser", "iter_nodes", "language_for_path"]
