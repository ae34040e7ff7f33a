"""Tests for display formatting, chart series and history rows."""

from __future__ import annotations

import json

import pytest
from rich.console import Console

from weighttrack.export.formatters import (
    EMPTY,
    JSONFormatter,
    TableFormatter,
    bmi_display,
    chart_series,
    format_date,
    format_delta,
    format_kg,
    history_rows,
    render_chart,
)
from weighttrack.tracking.entry_log import add_entry
from weighttrack.tracking.models import BodyConfig, EntryLog
from weighttrack.tracking.stats import BMICategory, summarize


class TestNumberFormatting:
    """Tests for the small formatting helpers."""

    def test_format_kg(self) -> None:
        assert format_kg(82) == "82.0 kg"
        assert format_kg(82.46) == "82.5 kg"
        assert format_kg(None) == EMPTY

    def test_zero_is_not_absent(self) -> None:
        assert format_kg(0.0) == "0.0 kg"

    def test_format_delta(self) -> None:
        assert format_delta(1.5) == "+1.5 kg"
        assert format_delta(-3) == "-3.0 kg"
        assert format_delta(0) == "0.0 kg"
        assert format_delta(None) == EMPTY

    def test_format_date(self, sample_log) -> None:
        assert format_date(sample_log[1].date) == "15/01/2024"
        assert format_date(sample_log[1].date, "%Y-%m-%d") == "2024-01-15"

    def test_bmi_display(self) -> None:
        assert bmi_display(BMICategory.OVER) == ("Overweight", "yellow")
        assert bmi_display(None) == ("", "")


class TestChart:
    """Tests for chart_series and render_chart."""

    def test_series(self, sample_config, sample_log) -> None:
        series = chart_series(sample_config, sample_log)
        assert series.labels == ["01/01/2024", "15/01/2024", "01/02/2024"]
        assert series.weights == [90, 85, 82]
        assert series.goal_line == [70, 70, 70]
        assert series.y_min == pytest.approx(80)
        assert series.y_max == pytest.approx(92)

    def test_no_goal_line_without_config(self, sample_log) -> None:
        series = chart_series(BodyConfig.unconfigured(), sample_log)
        assert series.goal_line == []

    def test_empty(self, sample_config) -> None:
        series = chart_series(sample_config, EntryLog())
        assert series.weights == []
        assert series.y_min is None
        assert render_chart(series) == ""

    def test_render(self, sample_config, sample_log) -> None:
        text = render_chart(chart_series(BodyConfig.unconfigured(), sample_log), height=5)
        lines = text.splitlines()

        assert len(lines) == 7  # 5 rows, axis, labels
        assert lines[0].startswith("92.0 kg")
        assert lines[4].startswith("80.0 kg")
        assert text.count("●") == 3
        assert "01/01/2024 .. 01/02/2024" in lines[-1]

    def test_goal_line_drawn_when_in_range(self) -> None:
        from weighttrack.tracking.entry_log import add_entry

        log = add_entry(EntryLog(), "2024-01-01", 72)
        log = add_entry(log, "2024-01-02", 71)
        text = render_chart(chart_series(BodyConfig(170, 90, 70), log), height=9)
        assert "-" in text.replace(" kg", "")


class TestHistoryRows:
    """Tests for history_rows ordering."""

    def test_newest_first_by_default(self, sample_config, sample_log) -> None:
        rows = history_rows(sample_config, sample_log)
        assert [r.weight for r in rows] == [82, 85, 90]
        # Deltas are chronological regardless of display order
        assert rows[0].delta == pytest.approx(-3)
        assert rows[-1].delta is None

    def test_ascending(self, sample_config, sample_log) -> None:
        rows = history_rows(sample_config, sample_log, descending=False)
        assert [r.weight for r in rows] == [90, 85, 82]


class TestTableFormatter:
    """Smoke tests for Rich output."""

    def test_summary_and_history(self, sample_config, sample_log) -> None:
        console = Console(record=True, width=100)
        formatter = TableFormatter(console)
        formatter.format_summary(summarize(sample_config, sample_log), sample_config)
        formatter.format_history(history_rows(sample_config, sample_log))

        text = console.export_text()
        assert "82.0 kg" in text
        assert "Overweight" in text
        assert "40%" in text
        assert "-3.0 kg" in text
        assert "start" in text

    def test_unconfigured_warning(self, sample_log) -> None:
        console = Console(record=True, width=100)
        config = BodyConfig.unconfigured()
        TableFormatter(console).format_summary(summarize(config, sample_log), config)
        assert "Body config not set" in console.export_text()

    @pytest.mark.parametrize("note", ["[/]", "[red]warning[/red]", "[bold"])
    def test_note_printed_literally(self, note) -> None:
        console = Console(record=True, width=120)
        config = BodyConfig.unconfigured()
        entries = add_entry(EntryLog(), "2024-01-01", 80, note)
        TableFormatter(console).format_history(history_rows(config, entries))
        assert note in console.export_text()


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_summary_dict(self, sample_config, sample_log) -> None:
        data = JSONFormatter().summary_to_dict(summarize(sample_config, sample_log))
        assert data["current_weight_kg"] == 82
        assert data["bmi"] == pytest.approx(28.37)
        assert data["bmi_category"] == "over"
        assert data["progress_percent"] == pytest.approx(40)

    def test_rows_serializable(self, sample_config, sample_log) -> None:
        formatter = JSONFormatter()
        rows = formatter.rows_to_list(history_rows(sample_config, sample_log))
        decoded = json.loads(formatter.format({"entries": rows}))
        assert decoded["entries"][0]["trend"] == "loss"
        assert decoded["entries"][-1]["delta_kg"] is None
