"""Tracker session: current config and log, persisted on every change."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Callable, Optional, Union

from weighttrack.store.schema import CONFIG_KEY, ENTRIES_KEY
from weighttrack.tracking import entry_log
from weighttrack.tracking.config_manager import save_config
from weighttrack.tracking.models import BodyConfig, EntryLog, WeightEntry
from weighttrack.tracking.serialization import (
    EMPTY_CONFIG_DOC,
    deserialize_config,
    deserialize_entries,
    serialize_config,
    serialize_entries,
)
from weighttrack.tracking.stats import EntryStats, Summary, entry_rows, summarize

if TYPE_CHECKING:
    from weighttrack.store.connection import KeyValueStore

logger = logging.getLogger(__name__)

Listener = Callable[["TrackerSession"], None]


class TrackerSession:
    """Holds the user's config and entry log for one store.

    Mutations validate first, then write the full document, then notify
    subscribers. A rejected mutation raises ValidationError, writes nothing
    and notifies nobody.
    """

    def __init__(
        self,
        store: "KeyValueStore",
        config: Optional[BodyConfig] = None,
        log: Optional[EntryLog] = None,
    ):
        self.store = store
        self.config = config or BodyConfig.unconfigured()
        self.log = log or EntryLog()
        self._listeners: list[Listener] = []
        # Problems found in the stored documents when the session was opened
        self.load_warnings: list[str] = []

    @classmethod
    def open(cls, store: "KeyValueStore") -> "TrackerSession":
        """Load config and entries from the store.

        Invalid stored records are dropped and listed in ``load_warnings``.
        """
        problems: list[str] = []
        config = deserialize_config(store.read_json(CONFIG_KEY, dict(EMPTY_CONFIG_DOC)), problems)
        log = deserialize_entries(store.read_json(ENTRIES_KEY, []), problems)
        session = cls(store, config=config, log=log)
        session.load_warnings = problems
        return session

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callback run after each successful mutation.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        logger.debug("State changed; notifying %d listener(s)", len(self._listeners))
        for listener in list(self._listeners):
            listener(self)

    def _commit_log(self, log: EntryLog) -> None:
        self.store.write_json(ENTRIES_KEY, serialize_entries(log))
        self.log = log
        self._notify()

    # Mutations

    def save_config(
        self,
        height: Optional[float],
        initial_weight: Optional[float],
        goal_weight: Optional[float],
    ) -> BodyConfig:
        """Validate and replace the whole config."""
        config = save_config(height, initial_weight, goal_weight)
        self.store.write_json(CONFIG_KEY, serialize_config(config))
        self.config = config
        self._notify()
        return config

    def add_entry(
        self,
        day: Union[date, str, None],
        weight: Optional[float],
        note: Optional[str] = "",
    ) -> WeightEntry:
        """Validate and add one entry.

        Returns:
            The entry as stored (parsed date, stripped note)
        """
        new_log = entry_log.add_entry(self.log, day, weight, note)
        self._commit_log(new_log)
        added = entry_log.parse_date(day)
        return next(e for e in new_log if e.date == added)

    def remove_entry(self, day: Union[date, str]) -> bool:
        """Remove the entry for a date.

        Returns:
            True if an entry was removed
        """
        new_log = entry_log.remove_entry(self.log, day)
        if len(new_log) == len(self.log):
            return False
        self._commit_log(new_log)
        return True

    def clear_entries(self) -> int:
        """Delete every entry. Returns how many were removed."""
        removed = len(self.log)
        self.store.delete(ENTRIES_KEY)
        self.log = entry_log.clear(self.log)
        self._notify()
        return removed

    # Derived values

    def summary(self) -> Summary:
        return summarize(self.config, self.log)

    def rows(self) -> list[EntryStats]:
        return entry_rows(self.config, self.log)
