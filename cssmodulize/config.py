"""Project configuration support for the cssmodulize CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

from .errors import ConfigError

CONFIG_FILE_NAMES = ("cssmodulize.toml", "pyproject.toml", ".cssmodulizerc")

DEFAULT_INCLUDE = (
    "src/**/*.js",
    "src/**/*.ts",
    "src/**/*.jsx",
    "src/**/*.tsx",
)
DEFAULT_IGNORE = (
    "**/*.d.ts",
    "src/app.*",
    "**/*.config.*",
    "**/node_modules/**",
    "dist/**",
)
QUOTE_STYLES = ("single", "double")


@dataclass
class MigrationConfig:
    """Resolved settings for one migration run."""

    root: Path
    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    ignore: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORE))
    style_object_prefix: str = "styles"
    merge_modules: List[str] = field(default_factory=lambda: ["classnames", "clsx"])
    merge_import_module: str = "classnames"
    merge_default_name: str = "clsx"
    class_attributes: List[str] = field(default_factory=lambda: ["className"])
    global_selector_prefixes: List[str] = field(default_factory=lambda: ["at-"])
    load_paths: List[Path] = field(default_factory=list)
    quote: str = "single"
    use_git: bool = True
    dry_run: bool = False
    source: Optional[Path] = None


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON: {exc.msg}", path=str(path), line=exc.lineno) from exc


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise ConfigError("TOML parsing requires Python 3.11 or later.", path=str(path))
    with path.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML: {exc}", path=str(path)) from exc
    if path.name == "pyproject.toml":
        return data.get("tool", {}).get("cssmodulize", {})
    return data


def _string_list(data: Dict[str, Any], key: str, default: Sequence[str], path: Optional[Path]) -> List[str]:
    value = data.get(key)
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return list(value)
    raise ConfigError(f"'{key}' must be a string or a list of strings", path=str(path) if path else None)


def _string(data: Dict[str, Any], key: str, default: str, path: Optional[Path]) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string", path=str(path) if path else None)
    return value


def _bool(data: Dict[str, Any], key: str, default: bool, path: Optional[Path]) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false", path=str(path) if path else None)
    return value


def parse_config(data: Dict[str, Any], root: Path, path: Optional[Path] = None) -> MigrationConfig:
    """Build a :class:`MigrationConfig` from a decoded configuration table."""
    defaults = MigrationConfig(root=root)
    quote = _string(data, "quote", defaults.quote, path)
    if quote not in QUOTE_STYLES:
        raise ConfigError(
            f"Unknown quote style '{quote}'",
            path=str(path) if path else None,
            hint="Use 'single' or 'double'",
        )
    load_paths = []
    for entry in _string_list(data, "load_paths", [], path):
        load_path = Path(entry)
        load_paths.append(load_path if load_path.is_absolute() else (root / load_path).resolve())
    return MigrationConfig(
        root=root,
        include=_string_list(data, "include", defaults.include, path),
        ignore=_string_list(data, "ignore", defaults.ignore, path),
        style_object_prefix=_string(data, "style_object_prefix", defaults.style_object_prefix, path),
        merge_modules=_string_list(data, "merge_modules", defaults.merge_modules, path),
        merge_import_module=_string(data, "merge_import_module", defaults.merge_import_module, path),
        merge_default_name=_string(data, "merge_default_name", defaults.merge_default_name, path),
        class_attributes=_string_list(data, "class_attributes", defaults.class_attributes, path),
        global_selector_prefixes=_string_list(data, "global_selector_prefixes", defaults.global_selector_prefixes, path),
        load_paths=load_paths,
        quote=quote,
        use_git=_bool(data, "use_git", defaults.use_git, path),
        dry_run=_bool(data, "dry_run", defaults.dry_run, path),
        source=path,
    )


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError("Configuration file does not exist", path=str(explicit))
        return explicit
    for candidate in CONFIG_FILE_NAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_config(root: Path, explicit: Optional[Path] = None) -> MigrationConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return MigrationConfig(root=root)

    if config_path.suffix == ".toml":
        data = _read_toml_config(config_path)
    else:
        data = _read_json_config(config_path)
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a table of settings", path=str(config_path))
    return parse_config(data, root, config_path)


def apply_cli_overrides(
    config: MigrationConfig,
    *,
    dry_run: Optional[bool] = None,
    ignore_patterns: Optional[Sequence[str]] = None,
    use_git: Optional[bool] = None,
    quote: Optional[str] = None,
) -> MigrationConfig:
    """Layer command-line flags over the file configuration."""
    if quote is not None and quote not in QUOTE_STYLES:
        raise ConfigError(f"Unknown quote style '{quote}'", hint="Use 'single' or 'double'")
    ignore = list(config.ignore)
    for pattern in ignore_patterns or ():
        if pattern not in ignore:
            ignore.append(pattern)
    return replace(
        config,
        ignore=ignore,
        dry_run=config.dry_run if dry_run is None else dry_run,
        use_git=config.use_git if use_git is None else use_git,
        quote=quote or config.quote,
    )


__all__ = [
    "CONFIG_FILE_NAMES",
    "DEFAULT_IGNORE",
    "DEFAULT_INCLUDE",
    "MigrationConfig",
    "apply_cli_overrides",
    "load_config",
    "locate_config_file",
    "parse_config",
]
