"""
Classmap command implementation.

Prints the class map a stylesheet would export as a CSS module, which is
handy to check what a migration will rewrite before running it.
"""

import argparse
import json
from pathlib import Path

from cssmodulize.config import load_config
from cssmodulize.styles import analyze_stylesheet, preserve_global_selectors
from cssmodulize.styles.compiler import SASS_SUFFIXES

from ..errors import CLIFileNotFoundError, CLIValidationError, handle_cli_exception


def cmd_classmap(args: argparse.Namespace) -> None:
    """
    Handle the 'classmap' subcommand.

    Args:
        args: Parsed command-line arguments containing:
            - style_file: Stylesheet to analyse
            - root: Project root for ``~`` imports (optional)
    """
    verbose = getattr(args, "verbose", False)
    try:
        style_path = Path(args.style_file).resolve()
        if not style_path.is_file():
            raise CLIFileNotFoundError(f"Stylesheet not found: {args.style_file}")
        if style_path.suffix not in (".css",) + SASS_SUFFIXES:
            raise CLIValidationError(
                f"Unsupported stylesheet type: {style_path.name}",
                hint="Pass a .css, .scss or .sass file",
            )
        root = Path(args.root).resolve() if getattr(args, "root", None) else Path.cwd()
        config_path = Path(args.config).resolve() if getattr(args, "config", None) else None
        config = load_config(root, config_path)

        preserved = preserve_global_selectors(
            style_path.read_text(encoding="utf-8"),
            config.global_selector_prefixes,
        )
        analysis = analyze_stylesheet(
            style_path,
            load_paths=config.load_paths,
            root=config.root,
            source=preserved.css,
        )
        print(json.dumps(analysis.class_map, indent=2, sort_keys=True))
    except Exception as exc:
        handle_cli_exception(exc, verbose=verbose)
