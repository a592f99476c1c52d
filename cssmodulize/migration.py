"""
Per-file migration pipeline.

A script qualifies when it imports a global stylesheet for its side effect
(``import './card.scss'``). For each such import the stylesheet is analysed,
the import is turned into a module import (``import styles from
'./card.module.scss'``) and every class attribute value is rewritten with the
stylesheet's class map. Edits are spliced into the original bytes so the rest
of the file keeps its exact formatting. Stylesheets are renamed only after
every script has been processed, since several scripts may share one.
"""

from __future__ import annotations

import difflib
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .ast import CallExpression, Expression
from .bindings import BindingAllocator, merge_binding
from .codegen import print_expression, quote_string
from .config import MigrationConfig
from .errors import CssModulizeError, VcsError
from .observability import get_logger
from .parser import (
    ExpressionBuilder,
    collect_bound_names,
    detect_newline,
    find_class_attributes,
    find_merge_import,
    find_style_imports,
    import_statements,
    parse_source,
)
from .rewrite import ClassNameRewriter, synthesize
from .styles import StyleAnalysis, analyze_stylesheet, module_style_name, preserve_global_selectors
from .vcs import rename_style_file

logger = get_logger(__name__)


class FileStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class FileReport:
    """Outcome of migrating one script."""

    path: Path
    status: FileStatus
    style_files: List[Path] = field(default_factory=list)
    rewritten: int = 0
    error: Optional[CssModulizeError] = None
    diff: Optional[str] = None


@dataclass
class MigrationReport:
    """Outcome of a whole run."""

    files: List[FileReport] = field(default_factory=list)
    renamed: List[Path] = field(default_factory=list)
    errors: List[CssModulizeError] = field(default_factory=list)

    def _with_status(self, status: FileStatus) -> List[FileReport]:
        return [report for report in self.files if report.status is status]

    @property
    def succeeded(self) -> List[FileReport]:
        return self._with_status(FileStatus.OK)

    @property
    def skipped(self) -> List[FileReport]:
        return self._with_status(FileStatus.SKIPPED)

    @property
    def failed(self) -> List[FileReport]:
        return self._with_status(FileStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed and not self.errors

    def style_files(self) -> List[Path]:
        """Stylesheets used by successfully migrated scripts, first use first."""
        seen: List[Path] = []
        for report in self.succeeded:
            for style_file in report.style_files:
                if style_file not in seen:
                    seen.append(style_file)
        return seen


@dataclass
class _Edit:
    start: int
    end: int
    text: str


def _glob_to_regex(pattern: str) -> "re.Pattern[str]":
    pieces: List[str] = []
    index = 0
    while index < len(pattern):
        if pattern.startswith("**/", index):
            pieces.append("(?:.*/)?")
            index += 3
        elif pattern.startswith("**", index):
            pieces.append(".*")
            index += 2
        elif pattern[index] == "*":
            pieces.append("[^/]*")
            index += 1
        elif pattern[index] == "?":
            pieces.append("[^/]")
            index += 1
        else:
            pieces.append(re.escape(pattern[index]))
            index += 1
    return re.compile("^" + "".join(pieces) + "$")


def matches_any(relative: str, patterns: Sequence[str]) -> bool:
    """True when the posix ``relative`` path matches one of the glob ``patterns``."""
    return any(_glob_to_regex(pattern).match(relative) for pattern in patterns)


def splice(source: bytes, edits: Sequence[_Edit]) -> bytes:
    """Apply non-overlapping byte-range edits, last one first."""
    result = source
    for edit in sorted(edits, key=lambda item: (item.start, item.end), reverse=True):
        result = result[:edit.start] + edit.text.encode("utf-8") + result[edit.end:]
    return result


class Migrator:
    """Migrate the scripts of one project from global classes to CSS modules."""

    def __init__(
        self,
        config: MigrationConfig,
        *,
        on_file: Optional[Callable[[FileReport], None]] = None,
    ) -> None:
        self.config = config
        self.on_file = on_file
        self._analyses: Dict[Path, StyleAnalysis] = {}

    def discover_files(self) -> List[Path]:
        root = self.config.root.resolve()
        found = set()
        for pattern in self.config.include:
            for path in root.glob(pattern):
                if path.is_file():
                    found.add(path.resolve())
        return sorted(
            path for path in found if not matches_any(path.relative_to(root).as_posix(), self.config.ignore)
        )

    def run(self) -> MigrationReport:
        """Migrate every discovered script, then rename the stylesheets they used."""
        report = self.migrate_all()
        if not self.config.dry_run:
            self.rename_style_files(report)
        return report

    def migrate_all(self) -> MigrationReport:
        report = MigrationReport()
        files = self.discover_files()
        logger.info("Found %d script files under %s", len(files), self.config.root)
        for path in files:
            file_report = self.migrate_file(path)
            report.files.append(file_report)
            if file_report.status is FileStatus.FAILED and file_report.error is not None:
                report.errors.append(file_report.error)
            if self.on_file is not None:
                self.on_file(file_report)
        return report

    def rename_style_files(self, report: MigrationReport) -> None:
        for style_file in report.style_files():
            try:
                target = rename_style_file(style_file, use_git=self.config.use_git)
            except VcsError as exc:
                logger.error("Rename failed: %s", exc.format())
                report.errors.append(exc)
                continue
            report.renamed.append(target)
            analysis = self._analyses.get(style_file)
            if analysis is not None and analysis.preserved_css is not None:
                target.write_text(analysis.preserved_css, encoding="utf-8")
                logger.info("Marked global selectors in %s", target)

    def migrate_file(self, path: Path) -> FileReport:
        """Migrate one script; failures are reported, never raised."""
        path = Path(path)
        try:
            report = self._migrate(path)
        except CssModulizeError as exc:
            if exc.path is None:
                exc.with_path(str(path))
            logger.error("FAIL %s", exc.format())
            return FileReport(path=path, status=FileStatus.FAILED, error=exc)
        if report.status is FileStatus.SKIPPED:
            logger.info("SKIP %s", path)
        else:
            logger.info("OK %s (%d class attributes rewritten)", path, report.rewritten)
        return report

    def _analyze(self, style_path: Path) -> StyleAnalysis:
        cached = self._analyses.get(style_path)
        if cached is not None:
            return cached
        source = None
        marked = None
        if style_path.is_file():
            original = style_path.read_text(encoding="utf-8")
            preserved = preserve_global_selectors(original, self.config.global_selector_prefixes)
            source = preserved.css
            if preserved.changed:
                marked = preserved.css
        analysis = analyze_stylesheet(
            style_path,
            load_paths=self.config.load_paths,
            root=self.config.root,
            source=source,
        )
        # rename_style_files writes it once the stylesheet has been renamed
        analysis.preserved_css = marked
        self._analyses[style_path] = analysis
        return analysis

    def _import_text(self, statement, binding: str, specifier: str, source: bytes) -> str:
        original = source[statement.start_byte:statement.end_byte].decode("utf-8")
        terminator = ";" if original.rstrip().endswith(";") else ""
        return f"import {binding} from {quote_string(specifier, self.config.quote)}{terminator}"

    def _migrate(self, path: Path) -> FileReport:  # noqa: C901 - linear pipeline
        raw = path.read_bytes()
        parsed = parse_source(raw, path)
        style_imports = find_style_imports(parsed)
        if not style_imports:
            return FileReport(path=path, status=FileStatus.SKIPPED)

        allocator = BindingAllocator(collect_bound_names(parsed))
        existing = find_merge_import(parsed, self.config.merge_modules)
        merge_name, needs_import = merge_binding(
            existing.local_name if existing else None,
            self.config.merge_default_name,
            allocator,
        )

        builder = ExpressionBuilder(parsed)
        attributes = find_class_attributes(parsed, self.config.class_attributes)
        values: List[Optional[Expression]] = [builder.build_attribute_value(item.value) for item in attributes]
        changed = [False] * len(values)

        edits: List[_Edit] = []
        style_files: List[Path] = []
        for style_import in style_imports:
            style_path = (path.parent / style_import.specifier).resolve()
            style_name = allocator.allocate(self.config.style_object_prefix)
            analysis = self._analyze(style_path)
            rewriter = ClassNameRewriter(analysis.class_map, style_name, merge_name, path=str(path))
            for index, value in enumerate(values):
                if value is None:
                    continue
                arguments = rewriter.rewrite(value)
                if arguments is None:
                    continue
                values[index] = synthesize(arguments, merge_name)
                changed[index] = True
            edits.append(
                _Edit(
                    start=style_import.node.start_byte,
                    end=style_import.node.end_byte,
                    text=self._import_text(style_import.node, style_name, module_style_name(style_import.specifier), raw),
                )
            )
            style_files.append(style_path)

        uses_merge = False
        for attribute, value, was_changed in zip(attributes, values, changed):
            if not was_changed:
                continue
            uses_merge = uses_merge or isinstance(value, CallExpression)
            edits.append(
                _Edit(
                    start=attribute.value.start_byte,
                    end=attribute.value.end_byte,
                    text="{" + print_expression(value, self.config.quote) + "}",
                )
            )

        if needs_import and uses_merge:
            last_import = import_statements(parsed)[-1]
            newline = detect_newline(raw.decode("utf-8"))
            terminator = ";" if parsed.text(last_import).rstrip().endswith(";") else ""
            module = quote_string(self.config.merge_import_module, self.config.quote)
            edits.append(
                _Edit(
                    start=last_import.end_byte,
                    end=last_import.end_byte,
                    text=f"{newline}import {merge_name} from {module}{terminator}",
                )
            )

        updated = splice(raw, edits)
        report = FileReport(
            path=path,
            status=FileStatus.OK,
            style_files=style_files,
            rewritten=sum(changed),
        )
        if self.config.dry_run:
            report.diff = "".join(
                difflib.unified_diff(
                    raw.decode("utf-8").splitlines(keepends=True),
                    updated.decode("utf-8").splitlines(keepends=True),
                    fromfile=str(path),
                    tofile=str(path),
                )
            )
            logger.info("Dry run diff for %s:\n%s", path, report.diff)
        elif updated != raw:
            path.write_bytes(updated)
        return report


__all__ = [
    "FileReport",
    "FileStatus",
    "MigrationReport",
    "Migrator",
    "matches_any",
    "splice",
]
