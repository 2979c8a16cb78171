"""CLI for project-indexer."""

from pathlib import Path
from typing import List, NoReturn, Optional
import json
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .constants import DEFAULT_SNAPSHOT_NAME
from .core import ChangeSet
from .errors import IndexerError, NotFoundError
from .ops import check_paths, index_paths


app = typer.Typer(help="""\
Content-hash index of a project tree. Record which files exist and what
they contain, then check later whether anything was added, modified or
removed - useful for skipping rebuilds in CI when nothing changed.""")

console = Console(soft_wrap=True)


PATHS_ARGUMENT = typer.Argument(..., help="Directories (or files) to scan")
FILENAME_OPTION = typer.Option(
    None, "--filename", "-f",
    help=f"Snapshot file to read and write (default: {DEFAULT_SNAPSHOT_NAME}). "
         "A value not ending in .idx is treated as a directory.",
)
IGNORE_OPTION = typer.Option(
    None, "--ignore", "-i",
    help="Ignore files matching a gitignore-style pattern (repeatable)",
)
STRICT_ROOT_OPTION = typer.Option(
    None, "--strict-root/--no-strict-root",
    help="Fail if no .git or node_modules directory is found above a path",
)
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logging")


_log_handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)


def _configure_logging(verbose: bool) -> None:
    """Send package logs to stderr; debug records only with --verbose."""
    pkg_logger = logging.getLogger("project_indexer")
    if _log_handler not in pkg_logger.handlers:
        pkg_logger.addHandler(_log_handler)
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _fail(message: str) -> NoReturn:
    """Print a one-line diagnostic and exit non-zero."""
    console.print(f"[red]✗[/red] {escape(message)}")
    raise typer.Exit(1)


def _print_section(title: str, paths: List[str]) -> None:
    if not paths:
        return
    console.print(f"[bold]{title}[/bold]")
    for path in paths:
        console.print(f"   {escape(path)}")


def _print_changes(changes: ChangeSet) -> None:
    if changes.is_empty:
        console.print("[green]No changes detected.[/green]")
        return
    _print_section("Added files:", changes.added)
    _print_section("Modified files:", changes.modified)
    _print_section("Removed files:", changes.removed)


@app.command()
def index(
    paths: List[Path] = PATHS_ARGUMENT,
    filename: Optional[str] = FILENAME_OPTION,
    ignore: Optional[List[str]] = IGNORE_OPTION,
    strict_root: Optional[bool] = STRICT_ROOT_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Scan paths and write a snapshot of their content fingerprints.

    Examples:
        project-indexer index .
        project-indexer index src public --filename build/
    """
    _configure_logging(verbose)
    try:
        result = index_paths(paths, filename=filename, ignore=ignore or (), strict_root=strict_root)
    except IndexerError as e:
        _fail(f"Error indexing: {e}")

    console.print(f"Indexed {len(result.snapshot)} files")
    console.print(f"Index written to {escape(str(result.target))}")


@app.command()
def check(
    paths: List[Path] = PATHS_ARGUMENT,
    filename: Optional[str] = FILENAME_OPTION,
    ignore: Optional[List[str]] = IGNORE_OPTION,
    strict_root: Optional[bool] = STRICT_ROOT_OPTION,
    as_json: bool = typer.Option(False, "--json", help="Print changes as JSON"),
    verbose: bool = VERBOSE_OPTION,
):
    """Rescan paths and report changes against the stored snapshot.

    Exits 0 when nothing changed and 1 when files were added, modified or
    removed (or the check failed).

    Examples:
        project-indexer check . || npm run build
    """
    _configure_logging(verbose)
    try:
        result = check_paths(paths, filename=filename, ignore=ignore or (), strict_root=strict_root)
    except NotFoundError as e:
        _fail(str(e))
    except IndexerError as e:
        _fail(f"Error checking: {e}")

    changes = result.changes
    if as_json:
        typer.echo(json.dumps(changes.model_dump(), indent=2))
    else:
        _print_changes(changes)

    if changes.has_changes:
        raise typer.Exit(1)


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
