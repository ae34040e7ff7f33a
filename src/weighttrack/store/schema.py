"""SQLite schema for the key/value store."""

# Slot names for the two persisted documents
CONFIG_KEY = "config"
ENTRIES_KEY = "entries"

SCHEMA_SQL = """
-- One JSON document per named slot
CREATE TABLE IF NOT EXISTS kv_slots (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
