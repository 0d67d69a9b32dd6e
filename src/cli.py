"""CLI interface for wordpace."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.progress_bar import ProgressBar
from rich.table import Table

from wordpace.clock import today_in
from wordpace.config import WordpaceConfig, load_config, merge_cli_overrides
from wordpace.core import (
    close_project_day,
    make_cache,
    project_progress,
    reanchor_project_goal,
    set_goal,
)
from wordpace.errors import WordpaceError
from wordpace.models import WEEKDAY_COUNT, DailyInfo, GoalMode, ProgressSnapshot
from wordpace.store import load_project

app = typer.Typer(
    name="wordpace",
    help="Track word-count goals and daily writing pace.",
)
goal_app = typer.Typer(help="Create and inspect writing goals.")
ledger_app = typer.Typer(help="Maintain the day-keyed word ledger.")
app.add_typer(goal_app, name="goal")
app.add_typer(ledger_app, name="ledger")

console = Console()
_stderr_console = Console(stderr=True)

_state: dict[str, Optional[Path]] = {"config_path": None}

WEEKDAY_LETTERS = "MTWTFSS"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from wordpace import __version__

        console.print(f"wordpace {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
    config_path: Annotated[
        Optional[Path], typer.Option("--config", help="Path to a .wordpace.toml file.")
    ] = None,
) -> None:
    """Wordpace - pace writing projects toward their deadlines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _state["config_path"] = config_path


def _config(**overrides: object) -> WordpaceConfig:
    try:
        return merge_cli_overrides(load_config(_state["config_path"]), **overrides)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _fail(message: str) -> None:
    _stderr_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _parse_date(value: str, option: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=option) from None


def _parse_writing_days(mask: str) -> list[bool]:
    """Parse a mask like ``MTWTF--`` where ``-`` marks a rest day."""
    if len(mask) != WEEKDAY_COUNT:
        raise typer.BadParameter("expected 7 characters, Monday first", param_hint="--writing-days")
    return [ch not in "-_." for ch in mask]


def _format_writing_days(days: list[bool] | None) -> str:
    if days is None:
        return "-------"
    return "".join(letter if on else "-" for letter, on in zip(WEEKDAY_LETTERS, days))


def _pace_label(info: DailyInfo) -> str:
    if info.is_ahead:
        return "[green]ahead[/green]"
    if info.is_behind:
        return "[yellow]behind[/yellow]"
    if info.is_ahead is None:
        return "[dim]deadline reached[/dim]"
    return "on pace"


def _render_progress(name: str, snapshot: ProgressSnapshot) -> None:
    table = Table(title=f"Progress: {name}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Words", f"{snapshot.total_words:,} / {snapshot.word_goal:,}")
    table.add_row(
        "Complete",
        ProgressBar(total=100, completed=snapshot.percentage, width=30),
    )
    table.add_row("Percent", f"{snapshot.percentage}%")

    info = snapshot.daily_info
    if snapshot.goal is not None and snapshot.goal.deadline is not None:
        table.add_row("Deadline", snapshot.goal.deadline.isoformat())
        table.add_row("Mode", snapshot.goal.mode.value)
    if info is not None:
        table.add_row("Today", f"{info.today_words:,} / {info.target:,}")
        table.add_row("Pace", _pace_label(info))
        table.add_row("Writing days left", str(info.remaining))
        table.add_row("Words remaining", f"{info.words_remaining:,}")
    console.print(table)


@app.command(name="progress")
def progress_cmd(
    project_dir: Annotated[Path, typer.Argument(help="Project folder.")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the snapshot as JSON.")] = False,
    no_cache: Annotated[bool, typer.Option("--no-cache", help="Bypass the progress cache.")] = False,
    on: Annotated[
        Optional[str], typer.Option("--on", help="Compute for this day (YYYY-MM-DD).")
    ] = None,
    timezone: Annotated[
        Optional[str], typer.Option("--timezone", help="Timezone that defines today.")
    ] = None,
) -> None:
    """Show word progress and today's pacing for a project."""
    config = _config(timezone=timezone)
    today = _parse_date(on, "--on") if on else None
    cache = None if no_cache else make_cache(config)
    try:
        snapshot = project_progress(project_dir, config, cache=cache, today=today)
    except WordpaceError as exc:
        _fail(str(exc))
        return

    if as_json:
        console.print_json(json.dumps(snapshot.to_json_dict()))
    else:
        _render_progress(project_dir.resolve().name, snapshot)


@goal_app.command(name="set")
def goal_set_cmd(
    project_dir: Annotated[Path, typer.Argument(help="Project folder.")],
    target: Annotated[int, typer.Option("--target", help="Total words to reach.")],
    deadline: Annotated[str, typer.Option("--deadline", help="Deadline (YYYY-MM-DD).")],
    mode: Annotated[
        Optional[GoalMode], typer.Option("--mode", help="elastic or strict.")
    ] = None,
    writing_days: Annotated[
        Optional[str],
        typer.Option("--writing-days", help="Weekly mask, Monday first, '-' for rest (e.g. MTWTF--)."),
    ] = None,
    day_off: Annotated[
        Optional[list[str]], typer.Option("--day-off", help="Date to skip (repeatable).")
    ] = None,
) -> None:
    """Create or replace a project's writing goal."""
    config = _config()
    try:
        goal = set_goal(
            project_dir,
            target,
            _parse_date(deadline, "--deadline"),
            config,
            mode=mode,
            writing_days=_parse_writing_days(writing_days) if writing_days else None,
            days_off=[_parse_date(d, "--day-off") for d in day_off or []],
            cache=make_cache(config),
        )
    except WordpaceError as exc:
        _fail(str(exc))
        return
    console.print(
        f"Goal saved: {goal.target:,} words by {goal.deadline.isoformat()} ({goal.mode.value})"
    )


@goal_app.command(name="show")
def goal_show_cmd(
    project_dir: Annotated[Path, typer.Argument(help="Project folder.")],
) -> None:
    """Print a project's goal."""
    config = _config()
    try:
        load = load_project(project_dir, default_word_goal=config.pacing.default_word_goal)
    except WordpaceError as exc:
        _fail(str(exc))
        return
    for issue in load.issues:
        _stderr_console.print(f"[yellow]Warning:[/yellow] {issue.summary_text()}")
    goal = load.goal
    if goal is None:
        console.print("No goal configured.")
        return

    table = Table(title=f"Goal: {load.project_id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Target", f"{goal.target:,}")
    table.add_row("Deadline", goal.deadline.isoformat() if goal.deadline else "-")
    table.add_row("Mode", goal.mode.value)
    table.add_row("Started", goal.start_date.isoformat() if goal.start_date else "-")
    table.add_row("Writing days", _format_writing_days(goal.writing_days))
    table.add_row("Days off", ", ".join(d.isoformat() for d in goal.days_off) or "-")
    table.add_row("Ledger entries", str(len(goal.ledger)))
    console.print(table)


@goal_app.command(name="reanchor")
def goal_reanchor_cmd(
    project_dir: Annotated[Path, typer.Argument(help="Project folder.")],
    on: Annotated[
        Optional[str],
        typer.Option("--date", help="New strict-mode start (YYYY-MM-DD). Defaults to today."),
    ] = None,
) -> None:
    """Restart the strict-mode baseline at a new start date."""
    config = _config()
    day = _parse_date(on, "--date") if on else today_in(config.pacing.timezone)
    try:
        reanchor_project_goal(project_dir, day, config, cache=make_cache(config))
    except WordpaceError as exc:
        _fail(str(exc))
        return
    console.print(f"Goal re-anchored at {day.isoformat()}")


@ledger_app.command(name="close-day")
def ledger_close_day_cmd(
    project_dir: Annotated[Path, typer.Argument(help="Project folder.")],
    on: Annotated[
        Optional[str], typer.Option("--date", help="Day to close (YYYY-MM-DD). Defaults to today.")
    ] = None,
) -> None:
    """Credit a day's words to the ledger."""
    config = _config()
    day = _parse_date(on, "--date") if on else today_in(config.pacing.timezone)
    try:
        goal = close_project_day(project_dir, day, config, cache=make_cache(config))
    except WordpaceError as exc:
        _fail(str(exc))
        return
    console.print(f"Closed {day.isoformat()}: {goal.ledger[day]:,} words")


if __name__ == "__main__":
    app()
