"""Typer CLI entrypoint for git-revert-file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__, git
from .batch import revert_files, stash_files
from .config import Config, load_config
from .exceptions import RevertFileError
from .interactive import confirm_discard, prompt_stash_message
from .locator import locate
from .logs import configure_logging
from .models import BatchReport, OutcomeStatus
from .presence import classify

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Revert files to their previous committed version, optionally stashing the undone content.",
)

_STATUS_STYLES = {
    OutcomeStatus.REVERTED: "green",
    OutcomeStatus.STASHED: "green",
    OutcomeStatus.SKIPPED: "yellow",
    OutcomeStatus.CANCELLED: "yellow",
    OutcomeStatus.FAILED: "red",
}


@dataclass(slots=True)
class AppState:
    config: Config
    console: Console
    verbose: bool = False


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-revert-file {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-revert-file version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    console = Console()
    try:
        config = load_config()
    except RevertFileError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc
    configure_logging(verbose, config.log_level)
    ctx.obj = AppState(config=config, console=console, verbose=verbose)


def _require_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if not isinstance(state, AppState):  # pragma: no cover
        raise typer.Exit(1)
    return state


@app.command(help="Revert files to their content in the previous commit (HEAD^).")
def revert(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(..., help="Files to revert, processed in order."),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Discard uncommitted changes without asking.",
    ),
) -> None:
    state = _require_state(ctx)
    confirm = None if (yes or state.config.assume_yes) else confirm_discard
    report = revert_files(paths, confirm=confirm)
    _render_report(state.console, report)
    if not report.ok:
        _fail_summary(state.console, "Error reverting file(s)", report)
    state.console.print(
        f"[green]Successfully reverted {report.processed} file(s) to previous version.[/green]"
    )


@app.command(help="Amend files out of HEAD, keeping their content in a stash entry per file.")
def stash(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(..., help="Files to revert and stash, processed in order."),
    message: Optional[str] = typer.Option(
        None,
        "--message",
        "-m",
        help="Stash message. Prompted for when omitted; an empty message leaves the stash unlabeled.",
    ),
) -> None:
    state = _require_state(ctx)
    preset = message if message is not None else state.config.stash_message
    if preset is not None:

        def get_message() -> str:
            return preset

    else:
        get_message = prompt_stash_message
    report = stash_files(
        paths,
        get_message=get_message,
        snapshot_dirname=state.config.snapshot_dirname,
    )
    if report.cancelled:
        state.console.print("[yellow]Stash cancelled; repository left unchanged.[/yellow]")
        raise typer.Exit(1)
    _render_report(state.console, report)
    if not report.ok:
        _fail_summary(state.console, "Error reverting and stashing file(s)", report)
    state.console.print(
        f"[green]Successfully reverted {report.processed} file(s) and stashed changes.[/green]"
    )


@app.command(help="Show how each file would be treated, without changing anything.")
def inspect(
    ctx: typer.Context,
    paths: list[Path] = typer.Argument(..., help="Files to inspect."),
) -> None:
    state = _require_state(ctx)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Presence")
    table.add_column("Uncommitted changes")
    failed = False
    for path in paths:
        try:
            location = locate(path)
            presence = classify(location)
            dirty = git.has_uncommitted_changes(location.root, location.relative_path)
        except RevertFileError as exc:
            failed = True
            table.add_row(str(path), "[red]error[/red]", escape(str(exc)))
            continue
        table.add_row(location.relative_path, presence.label, "yes" if dirty else "no")
    state.console.print(table)
    if failed:
        raise typer.Exit(1)


def _render_report(console: Console, report: BatchReport) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Path")
    table.add_column("Result")
    table.add_column("Details")
    for outcome in report.outcomes:
        style = _STATUS_STYLES[outcome.status]
        details = escape(outcome.message.splitlines()[0]) if outcome.message else ""
        table.add_row(str(outcome.path), f"[{style}]{outcome.status.value}[/{style}]", details)
    console.print(table)


def _fail_summary(console: Console, heading: str, report: BatchReport) -> None:
    for outcome in report.failures:
        console.print(f"[red]{heading}:[/red] {escape(outcome.message)}", highlight=False)
    console.print(f"{report.processed} file(s) processed, {len(report.failures)} failed.")
    raise typer.Exit(1)


__all__ = ["app"]
