"""
cssmodulize CLI entry point.

This module provides the command-line interface, dispatching commands to
focused command modules while still accepting the bare ``cssmodulize <dir>``
invocation of the first releases.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from cssmodulize import __version__
from cssmodulize.observability import configure_logging

from .commands import cmd_classmap, cmd_migrate

VALID_COMMANDS = {'migrate', 'classmap', 'help'}


def _configure_logging(args) -> None:
    """Configure the package logger from the CLI flag or CSSMODULIZE_LOG_LEVEL."""
    configure_logging(getattr(args, 'log_level', None))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Migrate a JSX project from global CSS classes to CSS modules",
        prog="cssmodulize"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a cssmodulize.toml or .cssmodulizerc configuration file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set CSSMODULIZE_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level (or set CSSMODULIZE_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Migrate subcommand
    migrate_parser = subparsers.add_parser(
        'migrate',
        help='Rewrite className values to CSS modules and rename stylesheets'
    )
    migrate_parser.add_argument('project_dir', help='The project root directory, such as "./"')
    migrate_parser.add_argument(
        '-d', '--dry', action='store_true',
        help='Dry run: print the result, do not modify any file'
    )
    migrate_parser.add_argument(
        '--ignore-pattern',
        nargs='+',
        default=[],
        metavar='PATTERN',
        help='Ignore files matching the given glob patterns'
    )
    migrate_parser.add_argument(
        '--no-git', action='store_true',
        help='Rename stylesheets with a plain rename instead of git mv'
    )
    migrate_parser.add_argument(
        '--quote',
        choices=['single', 'double'],
        default=None,
        help='Quote style for generated strings (default: single)'
    )
    migrate_parser.set_defaults(func=cmd_migrate)

    # Classmap subcommand
    classmap_parser = subparsers.add_parser(
        'classmap',
        help='Print the CSS module class map of one stylesheet as JSON'
    )
    classmap_parser.add_argument('style_file', help='Path to a .css, .scss or .sass file')
    classmap_parser.add_argument(
        '--root',
        default=None,
        help='Project root used for ~ imports and configuration (default: current directory)'
    )
    classmap_parser.set_defaults(func=cmd_classmap)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        Migrate a project:
        >>> main(['migrate', './'])  # doctest: +SKIP

        Preview the changes only:
        >>> main(['migrate', './', '--dry'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    # Legacy invocation support: a bare project directory means 'migrate'
    if (
        len(argv) > 0
        and not argv[0].startswith('-')
        and argv[0] not in VALID_COMMANDS
        and Path(argv[0]).is_dir()
    ):
        print(
            "Note: Using legacy invocation. Consider using 'cssmodulize migrate' instead.",
            file=sys.stderr
        )
        argv = ['migrate'] + list(argv)

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    args.verbose = getattr(args, "verbose", False)

    # Configure logging level
    _configure_logging(args)

    # Execute command
    args.func(args)


__all__ = ["main", "build_parser"]


if __name__ == '__main__':  # pragma: no cover
    main()
