"""Derived statistics for the weight log.

Every function here is pure and recomputed on each call. Absent values are
``None``; a weight of 0 is never valid input, but it is never used to mean
"unset" either.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Sequence

from weighttrack.tracking.models import BodyConfig, WeightEntry


class BMICategory(Enum):
    """BMI bands (lower bound of each band inclusive)."""
    UNDER = "under"      # < 18.5
    NORMAL = "normal"    # 18.5 - 24.9
    OVER = "over"        # 25 - 29.9
    OBESE = "obese"      # >= 30


class Trend(Enum):
    """Direction of change from the previous entry."""
    LOSS = "loss"
    GAIN = "gain"
    SAME = "same"


# Lower bounds of the NORMAL, OVER and OBESE bands
BMI_NORMAL_MIN = 18.5
BMI_OVER_MIN = 25.0
BMI_OBESE_MIN = 30.0


@dataclass
class Summary:
    """Headline figures for the current state of the log."""

    current_weight: Optional[float]
    goal_weight: Optional[float]
    weight_lost: Optional[float]
    weight_remaining: Optional[float]
    bmi: Optional[float]
    bmi_category: Optional[BMICategory]
    progress_percent: Optional[float]


@dataclass
class EntryStats:
    """Per-entry figures used for the history table."""

    date: date
    weight: float
    note: str
    delta: Optional[float]  # vs previous entry, sign preserved
    trend: Trend
    bmi: Optional[float]
    bmi_category: Optional[BMICategory]


def bmi(weight: Optional[float], height_cm: Optional[float]) -> Optional[float]:
    """Body Mass Index in kg/m².

    Returns None when the height is missing or zero.
    """
    if weight is None or not height_cm:
        return None
    height_m = height_cm / 100
    return weight / (height_m * height_m)


def bmi_category(value: float) -> BMICategory:
    """Classify a BMI value into its band."""
    if value < BMI_NORMAL_MIN:
        return BMICategory.UNDER
    if value < BMI_OVER_MIN:
        return BMICategory.NORMAL
    if value < BMI_OBESE_MIN:
        return BMICategory.OVER
    return BMICategory.OBESE


def current_weight(entries: Sequence[WeightEntry]) -> Optional[float]:
    """Weight of the most recent entry (max date), or None if empty."""
    if not entries:
        return None
    return max(entries, key=lambda e: e.date).weight


def weight_lost(config: BodyConfig, current: Optional[float]) -> Optional[float]:
    """Weight lost since the start, floored at 0 (a gain reports 0)."""
    if config.initial_weight is None or current is None:
        return None
    return max(0.0, config.initial_weight - current)


def weight_remaining(config: BodyConfig, current: Optional[float]) -> Optional[float]:
    """Weight still to lose to reach the goal, floored at 0."""
    if not config.is_configured or current is None:
        return None
    return max(0.0, current - config.goal_weight)  # type: ignore[operator]


def progress_percent(config: BodyConfig, current: Optional[float]) -> Optional[float]:
    """Share of the initial->goal interval already covered, clamped to [0, 100].

    Returns None for an incomplete config or an empty/inverted interval.
    """
    if not config.is_configured or current is None:
        return None
    total = config.initial_weight - config.goal_weight  # type: ignore[operator]
    if total <= 0:
        return None
    done = config.initial_weight - current  # type: ignore[operator]
    return min(100.0, max(0.0, done / total * 100))


def delta_to_previous(entries: Sequence[WeightEntry], index: int) -> Optional[float]:
    """Change in weight from the previous entry (entries sorted ascending).

    Raises:
        IndexError: If index is outside the log
    """
    if not 0 <= index < len(entries):
        raise IndexError(f"entry index {index} out of range for {len(entries)} entries")
    if index == 0:
        return None
    return entries[index].weight - entries[index - 1].weight


def trend_class(delta: Optional[float]) -> Trend:
    """Classify a delta as loss, gain or no change."""
    if delta is None or delta == 0:
        return Trend.SAME
    return Trend.LOSS if delta < 0 else Trend.GAIN


def summarize(config: BodyConfig, entries: Sequence[WeightEntry]) -> Summary:
    """Compute all headline figures for the given state."""
    current = current_weight(entries)
    current_bmi = bmi(current, config.height_cm)
    return Summary(
        current_weight=current,
        goal_weight=config.goal_weight,
        weight_lost=weight_lost(config, current),
        weight_remaining=weight_remaining(config, current),
        bmi=current_bmi,
        bmi_category=bmi_category(current_bmi) if current_bmi is not None else None,
        progress_percent=progress_percent(config, current),
    )


def entry_rows(config: BodyConfig, entries: Sequence[WeightEntry]) -> list[EntryStats]:
    """Per-entry delta, trend and BMI, in ascending date order."""
    rows = []
    for i, entry in enumerate(entries):
        delta = delta_to_previous(entries, i)
        entry_bmi = bmi(entry.weight, config.height_cm)
        rows.append(
            EntryStats(
                date=entry.date,
                weight=entry.weight,
                note=entry.note,
                delta=delta,
                trend=trend_class(delta),
                bmi=entry_bmi,
                bmi_category=bmi_category(entry_bmi) if entry_bmi is not None else None,
            )
        )
    return rows
