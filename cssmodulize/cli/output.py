"""
Output formatting for CLI operations.

Status lines and run summaries are printed through a shared rich console.
"""

from rich.console import Console
from rich.markup import escape

from ..migration import FileReport, FileStatus, MigrationReport

console = Console()

_STATUS_BADGES = {
    FileStatus.OK: "[black on green] OK [/]",
    FileStatus.SKIPPED: "[white on grey37]SKIP[/]",
    FileStatus.FAILED: "[white on red]FAIL[/]",
}


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Migration completed")  # doctest: +SKIP
        ✓ Migration completed
    """
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print error message with cross prefix."""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print warning message with warning prefix."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_info(message: str) -> None:
    """Print informational message with info prefix."""
    console.print(f"ℹ {escape(message)}")


def print_file_report(report: FileReport) -> None:
    """Print one ``OK``/``SKIP``/``FAIL`` line, with the error for failures."""
    console.print(f"{_STATUS_BADGES[report.status]} {escape(str(report.path))}")
    if report.error is not None:
        console.print(f"     [red]{escape(report.error.format())}[/red]")
    if report.diff:
        console.print(escape(report.diff), highlight=False)


def print_summary(report: MigrationReport, *, dry_run: bool = False) -> None:
    """Print totals for a finished run."""
    console.print()
    print_success(
        f"Processed {len(report.succeeded)} script files, "
        f"skipped {len(report.skipped)}, failed {len(report.failed)}"
    )
    if dry_run:
        print_info("Dry run: no files were written or renamed")
    else:
        print_success(f"Renamed {len(report.renamed)} stylesheets to CSS modules")
    reported = {id(item.error) for item in report.failed}
    for error in report.errors:
        if id(error) not in reported:
            print_error(error.format())
    if report.succeeded:
        print_info("Please review the changes before committing")
