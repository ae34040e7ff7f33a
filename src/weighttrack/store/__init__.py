"""Persistent key/value store."""

from __future__ import annotations

from weighttrack.store.connection import KeyValueStore, get_store, set_store
from weighttrack.store.schema import CONFIG_KEY, ENTRIES_KEY

__all__ = ["CONFIG_KEY", "ENTRIES_KEY", "KeyValueStore", "get_store", "set_store"]
