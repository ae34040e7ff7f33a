"""Pytest fixtures for weighttrack tests."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from weighttrack.store.connection import KeyValueStore, set_store
from weighttrack.tracking.config_manager import save_config
from weighttrack.tracking.entry_log import add_entry
from weighttrack.tracking.models import EntryLog


@pytest.fixture
def temp_store():
    """Create a temporary store with schema."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    store = KeyValueStore(db_path)
    store.initialize_schema()

    yield store

    # Cleanup
    db_path.unlink(missing_ok=True)


@pytest.fixture
def global_store(temp_store):
    """Install the temporary store as the process-wide store."""
    set_store(temp_store)
    yield temp_store
    set_store(None)


@pytest.fixture
def sample_config():
    """Config: 170 cm, starting at 90 kg, aiming for 70 kg."""
    return save_config(170, 90, 70)


@pytest.fixture
def sample_log():
    """Three entries over January/February 2024, inserted out of order."""
    log = EntryLog()
    log = add_entry(log, "2024-02-01", 82)
    log = add_entry(log, "2024-01-01", 90, "start")
    log = add_entry(log, "2024-01-15", 85)
    return log
