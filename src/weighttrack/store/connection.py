"""Key/value store backed by raw sqlite3.

Each slot holds a single UTF-8 JSON document. Reads are fail-soft: a missing
or malformed slot yields the caller's default.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from weighttrack.store.schema import get_schema_sql
from weighttrack.tracking.models import StoreReadError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Manages named JSON slots in a SQLite database."""

    def __init__(self, db_path: Path):
        """Initialize the store.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        """Create parent directories if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections.

        Commits on success and rolls back if the block raises.

        Example:
            with store.get_connection() as conn:
                row = conn.execute("SELECT value FROM kv_slots").fetchone()
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create the slot table if it doesn't exist."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())

    def read_raw(self, key: str) -> Optional[str]:
        """Return the raw text stored in a slot, or None if absent."""
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_slots WHERE key = ?", (key,)
            ).fetchone()
        return row["value"] if row else None

    def write_raw(self, key: str, text: str) -> None:
        """Replace the raw text of a slot."""
        with self.get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO kv_slots (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                """,
                (key, text),
            )

    def decode(self, key: str, text: str) -> Any:
        """Parse a slot's JSON text.

        Raises:
            StoreReadError: If the text is not valid JSON
        """
        try:
            return json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise StoreReadError(key, str(e)) from e

    def read_json(self, key: str, default: Any) -> Any:
        """Read a JSON document, falling back to ``default``.

        The default is returned when the slot is missing, holds malformed
        JSON, or holds ``null``. Never raises for a bad document.
        """
        text = self.read_raw(key)
        if text is None:
            return default
        try:
            value = self.decode(key, text)
        except StoreReadError as e:
            logger.warning("%s; using default", e)
            return default
        return default if value is None else value

    def write_json(self, key: str, value: Any) -> None:
        """Replace a slot with the JSON encoding of ``value``."""
        self.write_raw(key, json.dumps(value, ensure_ascii=False))
        logger.debug("Wrote slot '%s'", key)

    def delete(self, key: str) -> None:
        """Remove a slot if present."""
        with self.get_connection() as conn:
            conn.execute("DELETE FROM kv_slots WHERE key = ?", (key,))


# Global store instance (lazy loaded)
_store: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """Get the global store instance.

    Lazily builds the store from settings and makes sure the schema exists.
    """
    global _store
    if _store is None:
        from weighttrack.config import get_settings

        settings = get_settings()
        _store = KeyValueStore(settings.store.path)
        _store.initialize_schema()
    return _store


def set_store(store: Optional[KeyValueStore]) -> None:
    """Set the global store instance.

    Useful for testing with a temporary database. Passing None resets it.
    """
    global _store
    _store = store
