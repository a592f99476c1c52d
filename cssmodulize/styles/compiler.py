"""Compile stylesheets and extract the classes a CSS module would export."""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import cssutils
import sass

from ..errors import StyleCompilationError
from ..rewrite.tokens import local_name

logger = logging.getLogger(__name__)

SASS_SUFFIXES = (".scss", ".sass")
_GLOBAL_WRAPPER = re.compile(r":global\(([^()]*)\)")
_LOCAL_WRAPPER = re.compile(r":local\(([^()]*)\)")
_ATTRIBUTE = re.compile(r"\[[^\]]*\]")
_CLASS = re.compile(r"\.(-?[_a-zA-Z][\w-]*)")
_PARTIAL_SUFFIXES = (".scss", ".sass", ".css")
_MODULE_RULE = re.compile(r"^\s*@(use|forward)\b", re.MULTILINE)


@dataclass
class StyleAnalysis:
    """A compiled stylesheet and the classes it defines."""

    path: Path
    css: str
    class_map: Dict[str, str] = field(default_factory=dict)
    preserved_css: Optional[str] = None


def _tilde_candidates(target: Path) -> Iterable[Path]:
    yield target
    for suffix in _PARTIAL_SUFFIXES:
        yield target.with_name(target.name + suffix)
        yield target.with_name("_" + target.name + suffix)
    for suffix in _PARTIAL_SUFFIXES:
        yield target / ("_index" + suffix)
        yield target / ("index" + suffix)


def _tilde_importer(root: Path):
    """libsass importer resolving ``~package/file`` against ``node_modules``."""

    def importer(url: str, prev: str):
        if not url.startswith("~"):
            return None
        target = root / "node_modules" / url[1:]
        for candidate in _tilde_candidates(target):
            if candidate.is_file():
                return [(str(candidate), candidate.read_text(encoding="utf-8"))]
        return None

    return importer


def compile_stylesheet(
    path: Path,
    load_paths: Sequence[Path] = (),
    root: Optional[Path] = None,
    source: Optional[str] = None,
) -> str:
    """Return the CSS for ``path``.

    ``.scss`` and ``.sass`` files are compiled with libsass, with ``root`` and
    ``root/node_modules`` on the include path. Plain ``.css`` is read as is.
    ``source`` replaces the file contents when the caller already holds an
    edited copy of the stylesheet.

    Raises:
        StyleCompilationError: when the file is missing, uses an unsupported
            syntax or fails to compile.
    """
    path = Path(path)
    root = Path(root) if root is not None else path.parent
    if not path.is_file():
        raise StyleCompilationError("Stylesheet does not exist", path=str(path))
    if path.suffix == ".css":
        return source if source is not None else path.read_text(encoding="utf-8")
    if path.suffix not in SASS_SUFFIXES:
        raise StyleCompilationError(
            f"Cannot compile '{path.suffix}' stylesheets",
            path=str(path),
            hint="Only .css, .scss and .sass stylesheets can be migrated",
        )
    text = source if source is not None else path.read_text(encoding="utf-8")
    module_rule = _MODULE_RULE.search(text)
    if module_rule is not None:
        raise StyleCompilationError(
            f"Stylesheet uses '@{module_rule.group(1)}', which libsass cannot compile",
            path=str(path),
            hint="libsass only understands @import; rewrite @use and @forward rules as @import",
        )
    include_paths = [str(root), str(root / "node_modules")] + [str(p) for p in load_paths]
    options = dict(
        include_paths=include_paths,
        importers=[(0, _tilde_importer(root))],
        output_style="expanded",
    )
    try:
        if source is None:
            return sass.compile(filename=str(path), **options)
        options["include_paths"] = [str(path.parent)] + include_paths
        return sass.compile(string=source, indented=path.suffix == ".sass", **options)
    except sass.CompileError as exc:
        raise StyleCompilationError(
            f"Sass compilation failed: {exc}",
            path=str(path),
            hint="Fix the Sass error or add the directory of its imports to load_paths",
        ) from exc


def scoped_name(class_name: str, path: Path) -> str:
    """Deterministic module name for ``class_name`` declared in ``path``."""
    digest = hashlib.sha1(f"{Path(path).as_posix()}:{class_name}".encode("utf-8")).hexdigest()
    return f"_{class_name}_{digest[:5]}"


def _mask_wrappers(css: str) -> str:
    # cssutils rejects selectors as pseudo-class arguments
    css = _GLOBAL_WRAPPER.sub(":global", css)
    return _LOCAL_WRAPPER.sub(r"\1", css)


def _selector_classes(selector_text: str) -> List[str]:
    return _CLASS.findall(_ATTRIBUTE.sub("", selector_text))


def _collect_rules(rules, found: List[str], parser) -> None:
    for rule in rules:
        if rule.type == rule.STYLE_RULE:
            found.extend(_selector_classes(rule.selectorText))
        elif hasattr(rule, "cssRules"):
            _collect_rules(rule.cssRules, found, parser)
        elif rule.type == rule.UNKNOWN_RULE:
            # @supports, @container and friends: parse the block body
            text = rule.cssText
            start, end = text.find("{"), text.rfind("}")
            if 0 <= start < end:
                nested = parser.parseString(text[start + 1:end])
                _collect_rules(nested.cssRules, found, parser)


def collect_class_map(css: str, path: Path) -> Dict[str, str]:
    """Map every local class of ``css`` to its scoped module name.

    Keys use the camel-case convention of :func:`local_name`; classes wrapped
    in ``:global(...)`` are not exported.
    """
    parser = cssutils.CSSParser(loglevel=logging.CRITICAL, raiseExceptions=False, validate=False)
    sheet = parser.parseString(_mask_wrappers(css))
    found: List[str] = []
    _collect_rules(sheet.cssRules, found, parser)
    class_map: Dict[str, str] = {}
    for class_name in found:
        class_map.setdefault(local_name(class_name), scoped_name(class_name, path))
    return class_map


def analyze_stylesheet(
    path: Path,
    load_paths: Sequence[Path] = (),
    root: Optional[Path] = None,
    source: Optional[str] = None,
) -> StyleAnalysis:
    """Compile ``path`` and collect its class map."""
    css = compile_stylesheet(path, load_paths=load_paths, root=root, source=source)
    class_map = collect_class_map(css, path)
    logger.debug("Collected %d classes from %s", len(class_map), path)
    return StyleAnalysis(path=Path(path), css=css, class_map=class_map)


__all__ = [
    "StyleAnalysis",
    "analyze_stylesheet",
    "collect_class_map",
    "compile_stylesheet",
    "scoped_name",
]
