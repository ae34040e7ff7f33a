"""CLI interface using Typer."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from weighttrack.agent.response import AgentResponse, create_response, error_response
from weighttrack.config import get_settings
from weighttrack.config.settings import VALID_HISTORY_ORDERS
from weighttrack.export.formatters import (
    JSONFormatter,
    TableFormatter,
    chart_series,
    format_kg,
    history_rows,
)
from weighttrack.store import get_store
from weighttrack.tracking.models import ValidationError
from weighttrack.tracking.session import TrackerSession

app = typer.Typer(
    help="Personal weight tracking with BMI and goal progress",
    no_args_is_help=True,
)
console = Console()

# Subcommand groups
config_app = typer.Typer(help="Manage height, initial weight and goal weight")
weight_app = typer.Typer(help="Log, list and remove weight entries")

app.add_typer(config_app, name="config")
app.add_typer(weight_app, name="weight")


# ============================================================================
# Helpers
# ============================================================================


def emit(response: AgentResponse) -> None:
    """Print a response envelope as JSON on stdout."""
    print(response.to_json())


def open_session() -> TrackerSession:
    """Load the session from the configured store."""
    return TrackerSession.open(get_store())


def fail_validation(command: str, error: ValidationError, json_output: bool) -> None:
    """Report a rejected input and exit with status 1."""
    if json_output:
        emit(
            error_response(
                command,
                str(error),
                data={"field": error.field, "reason": error.reason},
            )
        )
    else:
        console.print(f"[red]Invalid {error.field}:[/red] {escape(error.reason)}")
    raise typer.Exit(1)


def print_status(session: TrackerSession) -> None:
    """One-line status printed after each change."""
    summary = session.summary()
    line = f"[blue]Current:[/blue] {format_kg(summary.current_weight)}"
    if summary.progress_percent is not None:
        line += f"  [blue]Progress:[/blue] {summary.progress_percent:.0f}%"
    console.print(line)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Track body weight against a goal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("set")
def config_set(
    height: float = typer.Option(..., "--height", help="Height in cm (100-250)"),
    initial: float = typer.Option(..., "--initial", help="Initial weight in kg"),
    goal: float = typer.Option(..., "--goal", help="Goal weight in kg (below initial)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Save the body config (replaces any previous config)."""
    session = open_session()
    try:
        config = session.save_config(height, initial, goal)
    except ValidationError as e:
        fail_validation("config set", e, json_output)
        return

    if json_output:
        emit(
            create_response(
                "config set",
                data=JSONFormatter().config_to_dict(config),
                human_summary="Config saved",
                warnings=session.load_warnings,
            )
        )
    else:
        console.print("[green]Config saved[/green]")
        console.print(
            f"  Height: {config.height_cm:.0f} cm, "
            f"initial: {format_kg(config.initial_weight)}, goal: {format_kg(config.goal_weight)}"
        )


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the body config."""
    session = open_session()
    config = session.config

    if json_output:
        emit(
            create_response(
                "config show",
                data=JSONFormatter().config_to_dict(config),
                human_summary="Configured" if config.is_configured else "Not configured",
                warnings=session.load_warnings,
            )
        )
        return

    if not config.is_configured:
        console.print("[yellow]No body config saved[/yellow]")
        console.print("Set one with: weighttrack config set --height 170 --initial 90 --goal 70")
        return

    console.print("[bold]Body Config[/bold]")
    console.print(f"  Height: {config.height_cm:.0f} cm")
    console.print(f"  Initial weight: {format_kg(config.initial_weight)}")
    console.print(f"  Goal weight: {format_kg(config.goal_weight)}")


# ============================================================================
# Weight Commands
# ============================================================================


@weight_app.command("add")
def weight_add(
    weight: float = typer.Argument(..., help="Weight in kg (30-300)"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    note: str = typer.Option("", "--note", "-n", help="Optional note"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Add a weight entry (one per date)."""
    session = open_session()
    if not json_output:
        session.subscribe(print_status)

    day = date_str if date_str is not None else date.today()
    try:
        entry = session.add_entry(day, weight, note)
    except ValidationError as e:
        fail_validation("weight add", e, json_output)
        return

    if json_output:
        emit(
            create_response(
                "weight add",
                data={
                    "date": entry.date.isoformat(),
                    "weight_kg": entry.weight,
                    "note": entry.note,
                    "summary": JSONFormatter().summary_to_dict(session.summary()),
                },
                human_summary=f"Logged {entry.weight:.1f} kg on {entry.date.isoformat()}",
                warnings=session.load_warnings,
            )
        )
    else:
        console.print(f"[green]Logged:[/green] {format_kg(entry.weight)} on {entry.date.isoformat()}")


@weight_app.command("remove")
def weight_remove(
    date_str: str = typer.Argument(..., help="Date of the entry to remove (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Remove the entry for a date (no-op if none exists)."""
    session = open_session()
    if not json_output:
        session.subscribe(print_status)

    removed = session.remove_entry(date_str)

    if json_output:
        emit(
            create_response(
                "weight remove",
                data={"date": date_str, "removed": removed},
                human_summary=f"Removed entry for {date_str}" if removed else f"No entry for {date_str}",
                warnings=session.load_warnings,
            )
        )
    elif removed:
        console.print(f"[green]Removed entry for {escape(date_str)}[/green]")
    else:
        console.print(f"[yellow]No entry for {escape(date_str)}[/yellow]")


@weight_app.command("list")
def weight_list(
    order: Optional[str] = typer.Option(
        None, "--order", "-o", help="Sort by date: desc (newest first) or asc"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List weight history with change and BMI per entry."""
    settings = get_settings()
    order = (order or settings.display.history_order).lower()
    if order not in VALID_HISTORY_ORDERS:
        message = f"Unknown order '{order}'"
        if json_output:
            emit(
                error_response(
                    "weight list",
                    message,
                    suggestions=["Use --order asc or --order desc"],
                    data={"field": "order", "reason": "must be asc or desc"},
                )
            )
        else:
            console.print(f"[red]{escape(message)}. Use 'asc' or 'desc'.[/red]")
        raise typer.Exit(1)

    session = open_session()
    rows = history_rows(session.config, session.log, descending=order == "desc")

    if json_output:
        emit(
            create_response(
                "weight list",
                data={"order": order, "entries": JSONFormatter().rows_to_list(rows)},
                human_summary=f"{len(rows)} entries",
                warnings=session.load_warnings,
            )
        )
        return

    if not rows:
        console.print("No weight entries found")
        console.print("Add one with: weighttrack weight add 82.5")
        return

    TableFormatter(console, settings.display.date_format).format_history(rows)


@weight_app.command("clear")
def weight_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete ALL weight entries."""
    if not yes:
        if json_output:
            emit(
                error_response(
                    "weight clear",
                    "Confirmation required",
                    suggestions=["Re-run with --yes to delete all entries"],
                )
            )
            raise typer.Exit(1)
        if not typer.confirm("Delete ALL weight entries?"):
            console.print("Cancelled")
            raise typer.Exit(0)

    session = open_session()
    removed = session.clear_entries()

    if json_output:
        emit(
            create_response(
                "weight clear",
                data={"removed": removed},
                human_summary=f"Deleted {removed} entries",
                warnings=session.load_warnings,
            )
        )
    else:
        console.print(f"[green]Deleted {removed} entries[/green]")


# ============================================================================
# Stats and Chart
# ============================================================================


@app.command("stats")
def stats(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show current weight, BMI, weight lost/remaining and goal progress."""
    session = open_session()
    summary = session.summary()

    if json_output:
        formatter = JSONFormatter()
        emit(
            create_response(
                "stats",
                data={
                    "config": formatter.config_to_dict(session.config),
                    "summary": formatter.summary_to_dict(summary),
                    "entry_count": len(session.log),
                },
                human_summary=f"Current weight: {format_kg(summary.current_weight)}",
                warnings=session.load_warnings,
            )
        )
        return

    if not session.log:
        console.print("[yellow]No weight entries yet[/yellow]")
        console.print("Add one with: weighttrack weight add 82.5")

    TableFormatter(console, get_settings().display.date_format).format_summary(
        summary, session.config
    )


@app.command("chart")
def chart(
    height: Optional[int] = typer.Option(None, "--height", help="Chart height in rows"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the weight line chart with the goal line."""
    settings = get_settings()
    session = open_session()
    series = chart_series(session.config, session.log, settings.display.date_format)

    if json_output:
        emit(
            create_response(
                "chart",
                data=JSONFormatter().series_to_dict(series),
                human_summary=f"{len(series.weights)} points",
                warnings=session.load_warnings,
            )
        )
        return

    if not series.weights:
        console.print("No weight entries found")
        return

    TableFormatter(console, settings.display.date_format).format_chart(
        series, height or settings.display.chart_height
    )


if __name__ == "__main__":
    app()
