"""Validation for saving the body configuration."""

from __future__ import annotations

import math
from typing import Optional

from weighttrack.tracking.models import (
    MAX_HEIGHT_CM,
    MIN_HEIGHT_CM,
    MIN_WEIGHT_KG,
    BodyConfig,
    ValidationError,
)


def _as_number(field: str, value: Optional[float]) -> float:
    if value is None:
        raise ValidationError(field, "a value is required")
    try:
        number = float(value)
    except OverflowError:
        raise ValidationError(field, "number is too large")
    except (TypeError, ValueError):
        raise ValidationError(field, f"'{value}' is not a number")
    if not math.isfinite(number):
        raise ValidationError(field, "must be a finite number")
    return number


def save_config(
    height: Optional[float],
    initial_weight: Optional[float],
    goal_weight: Optional[float],
) -> BodyConfig:
    """Validate and build a complete body configuration.

    The result replaces any previous configuration wholesale.

    Args:
        height: Height in cm, 100-250
        initial_weight: Starting weight in kg, at least 30
        goal_weight: Goal weight in kg, at least 30 and below the starting weight

    Returns:
        Fully populated BodyConfig

    Raises:
        ValidationError: Naming the first field that fails
    """
    h = _as_number("height", height)
    if not MIN_HEIGHT_CM <= h <= MAX_HEIGHT_CM:
        raise ValidationError(
            "height", f"must be between {MIN_HEIGHT_CM:.0f} and {MAX_HEIGHT_CM:.0f} cm"
        )

    iw = _as_number("initial_weight", initial_weight)
    if iw < MIN_WEIGHT_KG:
        raise ValidationError("initial_weight", f"must be at least {MIN_WEIGHT_KG:.0f} kg")

    gw = _as_number("goal_weight", goal_weight)
    if gw < MIN_WEIGHT_KG:
        raise ValidationError("goal_weight", f"must be at least {MIN_WEIGHT_KG:.0f} kg")

    if gw >= iw:
        raise ValidationError("goal_weight", "must be less than the initial weight")

    return BodyConfig(height_cm=h, initial_weight=iw, goal_weight=gw)
