"""Tests for TrackerSession persistence and change notification."""

from __future__ import annotations

from datetime import date

import pytest

from weighttrack.store.schema import CONFIG_KEY, ENTRIES_KEY
from weighttrack.tracking.models import BodyConfig, ValidationError
from weighttrack.tracking.session import TrackerSession


class TestOpen:
    """Loading a session from the store."""

    def test_empty_store(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        assert session.config == BodyConfig.unconfigured()
        assert len(session.log) == 0

    def test_malformed_slots_fall_back(self, temp_store) -> None:
        temp_store.write_raw(CONFIG_KEY, "{oops")
        temp_store.write_raw(ENTRIES_KEY, "not json")

        session = TrackerSession.open(temp_store)
        assert not session.config.is_configured
        assert len(session.log) == 0

    def test_reopen_sees_saved_state(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        session.save_config(170, 90, 70)
        session.add_entry("2024-01-15", 85)
        session.add_entry("2024-01-01", 90)

        reopened = TrackerSession.open(temp_store)
        assert reopened.config == session.config
        assert reopened.log == session.log
        assert reopened.log.dates == [date(2024, 1, 1), date(2024, 1, 15)]

    def test_bad_stored_records_become_warnings(self, temp_store) -> None:
        temp_store.write_json(CONFIG_KEY, {"height": 170, "initialWeight": 70, "goalWeight": 90})
        temp_store.write_json(
            ENTRIES_KEY,
            [
                {"date": "2024-01-01", "weight": 90, "note": 5},
                {"date": "2024-01-02", "weight": 89, "note": "ok"},
            ],
        )

        session = TrackerSession.open(temp_store)
        assert not session.config.is_configured
        assert [e.note for e in session.log] == ["ok"]
        assert len(session.load_warnings) == 2

    def test_clean_store_has_no_warnings(self, temp_store) -> None:
        TrackerSession.open(temp_store).add_entry("2024-01-01", 90)
        assert TrackerSession.open(temp_store).load_warnings == []


class TestMutations:
    """Mutations persist and are all-or-nothing."""

    def test_rejected_config_keeps_stored_config(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        saved = session.save_config(170, 90, 70)

        with pytest.raises(ValidationError):
            session.save_config(170, 80, 80)

        assert session.config == saved
        assert TrackerSession.open(temp_store).config == saved

    def test_config_replaced_wholesale(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        session.save_config(170, 90, 70)
        session.save_config(180, 100, 85)
        assert TrackerSession.open(temp_store).config == BodyConfig(180, 100, 85)

    def test_duplicate_entry_not_written(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        session.add_entry("2024-01-01", 90)

        with pytest.raises(ValidationError):
            session.add_entry("2024-01-01", 88)

        assert len(session.log) == 1
        assert temp_store.read_json(ENTRIES_KEY, []) == [
            {"date": "2024-01-01", "weight": 90.0, "note": ""}
        ]

    def test_add_returns_stored_entry(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        entry = session.add_entry(date(2024, 1, 1), 90, " first ")
        assert entry.date == date(2024, 1, 1)
        assert entry.note == "first"

    def test_remove_and_clear(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        session.add_entry("2024-01-01", 90)
        session.add_entry("2024-01-02", 89)

        assert session.remove_entry("2024-01-01") is True
        assert session.remove_entry("2024-01-01") is False
        assert session.clear_entries() == 1
        assert TrackerSession.open(temp_store).log.latest is None

    def test_clear_drops_entries_slot(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        session.save_config(170, 90, 70)
        session.add_entry("2024-01-01", 90)

        session.clear_entries()
        assert temp_store.read_raw(ENTRIES_KEY) is None
        assert temp_store.read_raw(CONFIG_KEY) is not None


class TestSubscribe:
    """Change notification."""

    def test_notified_after_successful_mutations_only(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        seen = []
        session.subscribe(lambda s: seen.append(len(s.log)))

        session.add_entry("2024-01-01", 90)
        with pytest.raises(ValidationError):
            session.add_entry("2024-01-01", 91)
        session.remove_entry("2030-01-01")  # no-op
        session.add_entry("2024-01-02", 89)

        assert seen == [1, 2]

    def test_unsubscribe(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        seen = []
        unsubscribe = session.subscribe(lambda s: seen.append(s.config))
        session.save_config(170, 90, 70)
        unsubscribe()
        session.save_config(170, 95, 70)

        assert len(seen) == 1

    def test_summary_reflects_latest_state(self, temp_store) -> None:
        session = TrackerSession.open(temp_store)
        session.save_config(170, 90, 70)
        session.add_entry("2024-01-01", 90)
        assert session.summary().progress_percent == pytest.approx(0)

        session.add_entry("2024-02-01", 80)
        assert session.summary().progress_percent == pytest.approx(50)
        assert session.rows()[-1].delta == pytest.approx(-10)
