"""Weight tracking: body config, entry log and derived statistics.

Key components:
- Config validation (height, initial and goal weight)
- Entry log kept unique by date and sorted ascending
- Statistics engine: BMI, progress, weight lost/remaining, per-entry trend
"""

from __future__ import annotations

from weighttrack.tracking.config_manager import save_config
from weighttrack.tracking.entry_log import add_entry, clear, remove_entry
from weighttrack.tracking.models import (
    BodyConfig,
    EntryLog,
    StoreReadError,
    ValidationError,
    WeightEntry,
    WeightTrackError,
)
from weighttrack.tracking.stats import (
    BMICategory,
    Trend,
    bmi,
    bmi_category,
    current_weight,
    delta_to_previous,
    progress_percent,
    summarize,
    trend_class,
    weight_lost,
    weight_remaining,
)

__all__ = [
    "BMICategory",
    "BodyConfig",
    "EntryLog",
    "StoreReadError",
    "Trend",
    "ValidationError",
    "WeightEntry",
    "WeightTrackError",
    "add_entry",
    "bmi",
    "bmi_category",
    "clear",
    "current_weight",
    "delta_to_previous",
    "progress_percent",
    "remove_entry",
    "save_config",
    "summarize",
    "trend_class",
    "weight_lost",
    "weight_remaining",
]
