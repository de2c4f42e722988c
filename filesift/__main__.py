from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from filesift import __version__
from filesift.models import FilterCancelled
from filesift.rendering import format_result_row
from filesift.scanner import scan_project
from filesift.search import filter_and_rank
from filesift.tui import FuzzyFindTui

__all__ = [
    "FuzzyFindTui",
    "cli",
    "run",
]


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"filesift {__version__}")
    raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


cli = typer.Typer(
    add_completion=False,
    help="Fuzzy-find files in a project tree.",
)


@cli.command()
def run(
    root: Path = typer.Argument(
        Path("."),
        help="Project directory to scan.",
    ),
    query: str | None = typer.Option(
        None,
        "--query",
        "-q",
        help="Print the ranked matches for this expression instead of opening the TUI.",
    ),
    limit: int = typer.Option(
        20,
        "--limit",
        "-n",
        min=1,
        help="Maximum number of matches printed with --query.",
    ),
    scores: bool = typer.Option(
        False,
        "--scores",
        help="Show the match score next to each result.",
    ),
    hidden: bool = typer.Option(
        False,
        "--hidden",
        help="Include hidden files and directories.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log scanning and filtering details to stderr.",
    ),
    _version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    _configure_logging(verbose)
    try:
        entries = scan_project(root, include_hidden=hidden)
    except OSError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if query is None:
        selected = FuzzyFindTui(entries, show_scores=scores).run()
        if selected is not None:
            typer.echo(selected)
        return

    outcome = filter_and_rank(query, entries)
    if isinstance(outcome, FilterCancelled):
        typer.echo("Filtering was cancelled.", err=True)
        raise typer.Exit(code=1)
    matches = list(outcome)[:limit]
    if not matches:
        typer.echo("No matches.", err=True)
        raise typer.Exit(code=1)

    console = Console(highlight=False)
    for entry in matches:
        console.print(format_result_row(entry, show_score=scores))


if __name__ == "__main__":
    cli()
