"""Data models for body configuration and the weight entry log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Optional


# Validation limits (metric units)
MIN_HEIGHT_CM = 100.0
MAX_HEIGHT_CM = 250.0
MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 300.0


@dataclass(frozen=True)
class BodyConfig:
    """User body parameters and weight goal.

    Either every field is set and consistent, or every field is None
    (unconfigured). Use ``save_config`` to build a validated instance.
    """

    height_cm: Optional[float] = None
    initial_weight: Optional[float] = None
    goal_weight: Optional[float] = None

    @classmethod
    def unconfigured(cls) -> "BodyConfig":
        """Return the empty configuration."""
        return cls()

    @property
    def is_configured(self) -> bool:
        """True when height, initial weight and goal weight are all set."""
        return (
            self.height_cm is not None
            and self.initial_weight is not None
            and self.goal_weight is not None
        )


@dataclass(frozen=True)
class WeightEntry:
    """A single dated weight observation."""

    date: date
    weight: float
    note: str = ""


@dataclass(frozen=True)
class EntryLog:
    """Weight entries kept unique by date and sorted ascending.

    Instances are immutable; the functions in ``weighttrack.tracking.entry_log``
    return new logs.
    """

    entries: tuple[WeightEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[WeightEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> WeightEntry:
        return self.entries[index]

    def __contains__(self, day: object) -> bool:
        return any(e.date == day for e in self.entries)

    @property
    def dates(self) -> list[date]:
        return [e.date for e in self.entries]

    @property
    def latest(self) -> Optional[WeightEntry]:
        """The entry with the maximum date, or None when empty."""
        return self.entries[-1] if self.entries else None


# Custom exceptions


class WeightTrackError(Exception):
    """Base exception for weighttrack errors."""

    pass


class ValidationError(WeightTrackError, ValueError):
    """Raised when config or entry input is rejected.

    Attributes:
        field: Name of the offending input field
        reason: Human-readable constraint that was violated
    """

    def __init__(self, field: str, reason: str):
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class StoreReadError(WeightTrackError):
    """Raised when a persisted document cannot be decoded."""

    def __init__(self, key: str, message: str):
        super().__init__(f"Malformed document in slot '{key}': {message}")
        self.key = key
