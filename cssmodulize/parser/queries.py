"""Locate imports, class attributes and bound names in a parsed script."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Set

from ..styles.naming import is_global_style
from .source import ParsedSource, iter_nodes

_BINDING_NODES = {"identifier", "shorthand_property_identifier_pattern"}


@dataclass
class StyleImport:
    """A side-effect stylesheet import such as ``import './card.scss'``."""

    node: Any
    specifier: str

    @property
    def line(self) -> int:
        return self.node.start_point[0] + 1


@dataclass
class MergeImport:
    """Default import of a class merge utility (``import cx from 'classnames'``)."""

    node: Any
    module: str
    local_name: str


@dataclass
class ClassAttribute:
    """A JSX class attribute and its value node."""

    node: Any
    name: str
    value: Any

    @property
    def line(self) -> int:
        return self.node.start_point[0] + 1


def import_statements(parsed: ParsedSource) -> List[Any]:
    """Top-level ``import`` statements in source order."""
    return [node for node in parsed.root.named_children if node.type == "import_statement"]


def _import_source(parsed: ParsedSource, statement: Any) -> Optional[str]:
    source = statement.child_by_field_name("source")
    if source is None or source.type != "string":
        return None
    return parsed.text(source)[1:-1]


def _import_clause(statement: Any) -> Optional[Any]:
    for child in statement.named_children:
        if child.type == "import_clause":
            return child
    return None


def find_style_imports(parsed: ParsedSource) -> List[StyleImport]:
    """Side-effect imports of global stylesheets, in source order."""
    found: List[StyleImport] = []
    for statement in import_statements(parsed):
        if _import_clause(statement) is not None:
            continue
        specifier = _import_source(parsed, statement)
        if specifier is not None and is_global_style(specifier):
            found.append(StyleImport(node=statement, specifier=specifier))
    return found


def find_merge_import(parsed: ParsedSource, modules: Sequence[str]) -> Optional[MergeImport]:
    """First default import from one of ``modules``."""
    for statement in import_statements(parsed):
        module = _import_source(parsed, statement)
        if module not in modules:
            continue
        clause = _import_clause(statement)
        if clause is None:
            continue
        for child in clause.named_children:
            if child.type == "identifier":
                return MergeImport(node=statement, module=module, local_name=parsed.text(child))
    return None


def find_class_attributes(parsed: ParsedSource, names: Iterable[str] = ("className",)) -> List[ClassAttribute]:
    """JSX attributes named in ``names`` that carry a value.

    Attributes nested inside the value of another matching attribute are
    left out so that the returned byte ranges never overlap.
    """
    wanted = set(names)
    found: List[ClassAttribute] = []
    covered_until = -1
    for node in iter_nodes(parsed.root):
        if node.type != "jsx_attribute" or node.start_byte < covered_until:
            continue
        children = node.named_children
        if len(children) < 2:
            continue
        name = parsed.text(children[0])
        if name not in wanted:
            continue
        found.append(ClassAttribute(node=node, name=name, value=children[-1]))
        covered_until = node.end_byte
    return found


def collect_bound_names(parsed: ParsedSource) -> Set[str]:
    """Every identifier spelled anywhere in the file."""
    return {parsed.text(node) for node in iter_nodes(parsed.root) if node.type in _BINDING_NODES}


def detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


__all__ = [
    "ClassAttribute",
    "MergeImport",
    "StyleImport",
    "collect_bound_names",
    "detect_newline",
    "find_class_attributes",
    "find_merge_import",
    "find_style_imports",
    "import_statements",
]
