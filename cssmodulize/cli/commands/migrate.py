"""
Migrate command implementation.

This module handles the 'migrate' subcommand which rewrites a project's
scripts to CSS modules and renames the stylesheets they import.
"""

import argparse
from pathlib import Path

from cssmodulize.config import apply_cli_overrides, load_config
from cssmodulize.migration import Migrator

from ..errors import CLIFileNotFoundError, CLIMigrationError, handle_cli_exception
from ..output import console, print_file_report, print_info, print_summary, print_warning


def cmd_migrate(args: argparse.Namespace) -> None:
    """
    Handle the 'migrate' subcommand.

    This command:
    1. Resolves configuration from the project directory and CLI flags
    2. Migrates every matching script, printing one status line per file
    3. Renames the stylesheets used by migrated scripts (unless dry run)
    4. Prints a summary and exits non-zero when any file failed

    Args:
        args: Parsed command-line arguments containing:
            - project_dir: Project root directory
            - dry: Only print the result, do not modify files (optional)
            - ignore_pattern: Extra ignore globs (optional)
            - no_git: Rename stylesheets without git (optional)
            - quote: Quote style for generated strings (optional)

    Raises:
        SystemExit: On any error or when files failed to migrate
    """
    verbose = getattr(args, "verbose", False)
    try:
        project_dir = Path(args.project_dir).resolve()
        if not project_dir.is_dir():
            raise CLIFileNotFoundError(
                f"Project directory not found: {args.project_dir}",
                hint="Pass the root of the project, e.g. './'",
            )
        config_path = Path(args.config).resolve() if getattr(args, "config", None) else None
        config = apply_cli_overrides(
            load_config(project_dir, config_path),
            dry_run=True if getattr(args, "dry", False) else None,
            ignore_patterns=getattr(args, "ignore_pattern", None),
            use_git=False if getattr(args, "no_git", False) else None,
            quote=getattr(args, "quote", None),
        )

        migrator = Migrator(config, on_file=print_file_report)
        report = migrator.migrate_all()
        if not report.files:
            print_warning("No script files matched the include patterns")
        print_info(f"Script files done: {len(report.files)}")

        if not config.dry_run:
            with console.status("[bold green]Renaming stylesheets..."):
                migrator.rename_style_files(report)

        print_summary(report, dry_run=config.dry_run)
        if not report.ok:
            raise CLIMigrationError(
                f"Migration finished with {len(report.errors)} errors",
                hint="Fix the reported values by hand and rerun; migrated files are skipped",
            )
    except Exception as exc:
        handle_cli_exception(exc, verbose=verbose)
