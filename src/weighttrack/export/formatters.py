"""Output formatters for weight stats, history and chart."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from weighttrack.tracking.models import BodyConfig, EntryLog
from weighttrack.tracking.stats import (
    BMICategory,
    EntryStats,
    Summary,
    Trend,
    entry_rows,
)

EMPTY = "—"
DEFAULT_DATE_FORMAT = "%d/%m/%Y"
CHART_PADDING_KG = 2.0

# Label and Rich style per BMI band
BMI_DISPLAY = {
    BMICategory.UNDER: ("Underweight", "cyan"),
    BMICategory.NORMAL: ("Normal", "green"),
    BMICategory.OVER: ("Overweight", "yellow"),
    BMICategory.OBESE: ("Obese", "red"),
}

TREND_STYLES = {
    Trend.LOSS: "green",
    Trend.GAIN: "red",
    Trend.SAME: "dim",
}


def format_number(value: Optional[float], decimals: int = 1) -> str:
    """Format a number with fixed decimals, or a dash when absent."""
    if value is None:
        return EMPTY
    return f"{value:.{decimals}f}"


def format_kg(value: Optional[float]) -> str:
    """Format a weight as '82.0 kg', or a dash when absent."""
    if value is None:
        return EMPTY
    return f"{value:.1f} kg"


def format_delta(delta: Optional[float]) -> str:
    """Format a change in weight with an explicit sign for gains."""
    if delta is None:
        return EMPTY
    sign = "+" if delta > 0 else ""
    return f"{sign}{delta:.1f} kg"


def format_date(day: date, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a date for display."""
    return day.strftime(date_format)


def bmi_display(category: Optional[BMICategory]) -> tuple[str, str]:
    """Return (label, style) for a BMI band; empty label when absent."""
    if category is None:
        return "", ""
    return BMI_DISPLAY[category]


# ============================================================================
# Chart
# ============================================================================


@dataclass
class ChartSeries:
    """Data for the weight line chart."""

    labels: list[str]
    weights: list[float]
    goal_line: list[float] = field(default_factory=list)  # empty without a goal

    @property
    def y_min(self) -> Optional[float]:
        return min(self.weights) - CHART_PADDING_KG if self.weights else None

    @property
    def y_max(self) -> Optional[float]:
        return max(self.weights) + CHART_PADDING_KG if self.weights else None


def chart_series(
    config: BodyConfig,
    log: EntryLog,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> ChartSeries:
    """Build the chart series in ascending date order."""
    weights = [e.weight for e in log]
    goal_line = [config.goal_weight] * len(weights) if config.goal_weight is not None else []
    return ChartSeries(
        labels=[format_date(e.date, date_format) for e in log],
        weights=weights,
        goal_line=goal_line,
    )


def render_chart(series: ChartSeries, height: int = 10) -> str:
    """Render the series as a text line chart.

    One column per entry; weights are drawn as dots and the goal line as
    dashes when it falls inside the plotted range.
    """
    if not series.weights:
        return ""

    height = max(height, 2)
    y_min, y_max = series.y_min, series.y_max
    span = y_max - y_min  # type: ignore[operator]

    def row_for(value: float) -> Optional[int]:
        if not y_min <= value <= y_max:  # type: ignore[operator]
            return None
        return round((y_max - value) / span * (height - 1))  # type: ignore[operator]

    grid = [[" "] * len(series.weights) for _ in range(height)]
    for col, goal in enumerate(series.goal_line):
        row = row_for(goal)
        if row is not None:
            grid[row][col] = "-"
    for col, weight in enumerate(series.weights):
        grid[row_for(weight)][col] = "●"  # type: ignore[index]

    top = f"{y_max:.1f} kg"
    bottom = f"{y_min:.1f} kg"
    width = max(len(top), len(bottom))
    lines = []
    for i, row in enumerate(grid):
        if i == 0:
            axis = top.rjust(width)
        elif i == height - 1:
            axis = bottom.rjust(width)
        else:
            axis = " " * width
        lines.append(f"{axis} │{''.join(row)}")
    lines.append(" " * width + " └" + "─" * len(series.weights))
    lines.append(" " * (width + 2) + f"{series.labels[0]} .. {series.labels[-1]}")
    return "\n".join(lines)


# ============================================================================
# History
# ============================================================================


def history_rows(
    config: BodyConfig,
    log: EntryLog,
    descending: bool = True,
) -> list[EntryStats]:
    """Per-entry stats for the history table, newest first by default.

    Deltas are always relative to the chronologically previous entry,
    whatever the display order.
    """
    rows = entry_rows(config, log)
    if descending:
        rows.reverse()
    return rows


class TableFormatter:
    """Format stats as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None, date_format: str = DEFAULT_DATE_FORMAT):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
            date_format: strftime format for dates
        """
        self.console = console or Console()
        self.date_format = date_format

    def format_summary(self, summary: Summary, config: BodyConfig) -> None:
        """Print the stat cards and the progress bar."""
        label, style = bmi_display(summary.bmi_category)
        bmi_text = format_number(summary.bmi)
        if style:
            bmi_text = f"[{style}]{bmi_text}[/{style}] {label}"

        cards = Table.grid(padding=(0, 3))
        cards.add_column(style="bold")
        cards.add_column(justify="right")
        cards.add_row("Current weight", format_kg(summary.current_weight))
        cards.add_row("Goal weight", format_kg(summary.goal_weight))
        cards.add_row("Lost", format_kg(summary.weight_lost))
        cards.add_row("Remaining", format_kg(summary.weight_remaining))
        cards.add_row("BMI", bmi_text)
        cards.add_row(
            "Progress",
            EMPTY if summary.progress_percent is None else f"{summary.progress_percent:.0f}%",
        )

        parts: list[Any] = [cards]
        if summary.progress_percent is not None:
            parts.append("")
            parts.append(ProgressBar(total=100, completed=summary.progress_percent, width=40))
            parts.append(
                f"[dim]{format_kg(config.initial_weight)} → {format_kg(config.goal_weight)}[/dim]"
            )

        self.console.print(Panel(Group(*parts), title="Weight Summary"))

        if not config.is_configured:
            self.console.print("[yellow]Body config not set; some stats are unavailable.[/yellow]")

    def format_history(self, rows: list[EntryStats]) -> None:
        """Print the history table."""
        table = Table(title="Weight History")
        table.add_column("Date", style="cyan")
        table.add_column("Weight", justify="right")
        table.add_column("Change", justify="right")
        table.add_column("BMI", justify="right")
        table.add_column("Note", max_width=40)

        for row in rows:
            trend_style = TREND_STYLES[row.trend]
            _, bmi_style = bmi_display(row.bmi_category)
            bmi_text = format_number(row.bmi)
            if bmi_style:
                bmi_text = f"[{bmi_style}]{bmi_text}[/{bmi_style}]"
            table.add_row(
                format_date(row.date, self.date_format),
                f"[bold]{format_kg(row.weight)}[/bold]",
                f"[{trend_style}]{format_delta(row.delta)}[/{trend_style}]",
                bmi_text,
                escape(row.note) if row.note else f"[dim]{EMPTY}[/dim]",
            )

        self.console.print(table)

    def format_chart(self, series: ChartSeries, height: int = 10) -> None:
        """Print the line chart."""
        legend = "[green]●[/green] Weight"
        if series.goal_line:
            legend += f"   [dim]- Goal ({format_kg(series.goal_line[0])})[/dim]"
        self.console.print(Panel(render_chart(series, height), title="Weight Chart", subtitle=legend))


class JSONFormatter:
    """Format stats as JSON-ready dicts for programmatic use."""

    @staticmethod
    def _round(value: Optional[float]) -> Optional[float]:
        return round(value, 2) if value is not None else None

    def config_to_dict(self, config: BodyConfig) -> dict[str, Any]:
        return {
            "configured": config.is_configured,
            "height_cm": config.height_cm,
            "initial_weight_kg": config.initial_weight,
            "goal_weight_kg": config.goal_weight,
        }

    def summary_to_dict(self, summary: Summary) -> dict[str, Any]:
        return {
            "current_weight_kg": summary.current_weight,
            "goal_weight_kg": summary.goal_weight,
            "weight_lost_kg": self._round(summary.weight_lost),
            "weight_remaining_kg": self._round(summary.weight_remaining),
            "bmi": self._round(summary.bmi),
            "bmi_category": summary.bmi_category.value if summary.bmi_category else None,
            "progress_percent": self._round(summary.progress_percent),
        }

    def rows_to_list(self, rows: list[EntryStats]) -> list[dict[str, Any]]:
        return [
            {
                "date": row.date.isoformat(),
                "weight_kg": row.weight,
                "delta_kg": self._round(row.delta),
                "trend": row.trend.value,
                "bmi": self._round(row.bmi),
                "bmi_category": row.bmi_category.value if row.bmi_category else None,
                "note": row.note,
            }
            for row in rows
        ]

    def series_to_dict(self, series: ChartSeries) -> dict[str, Any]:
        return {
            "labels": series.labels,
            "weights": series.weights,
            "goal_line": series.goal_line,
            "y_min": series.y_min,
            "y_max": series.y_max,
        }

    def format(self, data: dict[str, Any]) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False)
