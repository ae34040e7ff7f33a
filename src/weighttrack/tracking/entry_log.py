"""Validation and mutation of the weight entry log.

All functions are pure: they take an ``EntryLog`` and return a new one,
raising ``ValidationError`` without touching the input when a call is rejected.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional, Union

from weighttrack.tracking.models import (
    MAX_WEIGHT_KG,
    MIN_WEIGHT_KG,
    EntryLog,
    ValidationError,
    WeightEntry,
)

DateLike = Union[date, str]


def parse_date(value: Optional[DateLike]) -> date:
    """Parse an ISO 8601 day (YYYY-MM-DD) into a date.

    Raises:
        ValidationError: If the value is empty or not a valid day
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("date", "a date is required")
    if not isinstance(value, str):
        raise ValidationError("date", f"must be a YYYY-MM-DD string, got {type(value).__name__}")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError("date", f"'{text}' is not a valid YYYY-MM-DD date")


def validate_weight(weight: Optional[float]) -> float:
    """Check that a weight is a finite number in the accepted range."""
    if weight is None:
        raise ValidationError("weight", "a weight is required")
    try:
        value = float(weight)
    except OverflowError:
        raise ValidationError("weight", "number is too large")
    except (TypeError, ValueError):
        raise ValidationError("weight", f"'{weight}' is not a number")
    if not math.isfinite(value) or not MIN_WEIGHT_KG <= value <= MAX_WEIGHT_KG:
        raise ValidationError(
            "weight", f"must be between {MIN_WEIGHT_KG:.0f} and {MAX_WEIGHT_KG:.0f} kg"
        )
    return value


def validate_note(note: Optional[str]) -> str:
    """Return the stripped note; None counts as no note."""
    if note is None:
        return ""
    if not isinstance(note, str):
        raise ValidationError("note", f"must be text, got {type(note).__name__}")
    return note.strip()


def add_entry(
    log: EntryLog,
    day: Optional[DateLike],
    weight: Optional[float],
    note: Optional[str] = "",
) -> EntryLog:
    """Return a new log with the entry inserted in date order.

    Args:
        log: Current log
        day: Entry date (date or YYYY-MM-DD string)
        weight: Weight in kg, 30-300
        note: Optional free-text note

    Raises:
        ValidationError: On a bad weight, a bad date, a non-text note or a date already logged
    """
    value = validate_weight(weight)
    entry_date = parse_date(day)
    text = validate_note(note)

    if entry_date in log:
        raise ValidationError(
            "date",
            f"an entry for {entry_date.isoformat()} already exists; remove it first",
        )

    entry = WeightEntry(date=entry_date, weight=value, note=text)
    entries = sorted([*log.entries, entry], key=lambda e: e.date)
    return EntryLog(entries=tuple(entries))


def remove_entry(log: EntryLog, day: DateLike) -> EntryLog:
    """Return a new log without the entry for ``day``.

    Removing a date that isn't logged is a no-op.
    """
    try:
        target = parse_date(day)
    except ValidationError:
        return log

    if target not in log:
        return log
    return EntryLog(entries=tuple(e for e in log.entries if e.date != target))


def clear(log: EntryLog) -> EntryLog:
    """Return an empty log.

    Destructive: callers should confirm with the user first.
    """
    return EntryLog()


def is_well_formed(log: EntryLog) -> bool:
    """True if the log is strictly ascending by date (so no duplicates)."""
    dates = log.dates
    return all(a < b for a, b in zip(dates, dates[1:]))
