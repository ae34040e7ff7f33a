"""Conversion between models and the JSON documents kept in the store.

Document shapes:
    config:  {"height": 170.0, "initialWeight": 90.0, "goalWeight": 70.0}
    entries: [{"date": "2024-01-01", "weight": 90.0, "note": ""}, ...]

Deserialization is fail-soft: records that no longer pass validation are
dropped with a warning rather than raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from weighttrack.tracking.config_manager import save_config
from weighttrack.tracking.entry_log import add_entry
from weighttrack.tracking.models import BodyConfig, EntryLog, ValidationError

logger = logging.getLogger(__name__)

EMPTY_CONFIG_DOC: dict[str, Any] = {"height": None, "initialWeight": None, "goalWeight": None}


def _report(problems: Optional[list[str]], message: str) -> None:
    logger.warning(message)
    if problems is not None:
        problems.append(message)


def serialize_config(config: BodyConfig) -> dict[str, Any]:
    """Convert a BodyConfig to its JSON document."""
    return {
        "height": config.height_cm,
        "initialWeight": config.initial_weight,
        "goalWeight": config.goal_weight,
    }


def deserialize_config(data: Any, problems: Optional[list[str]] = None) -> BodyConfig:
    """Build a BodyConfig from a stored document.

    An all-null, partial or inconsistent document yields the unconfigured state.
    Each problem found is logged and, if given, appended to ``problems``.
    """
    if not isinstance(data, dict):
        if data is not None:
            _report(problems, f"Ignoring config document of type {type(data).__name__}")
        return BodyConfig.unconfigured()

    values = (data.get("height"), data.get("initialWeight"), data.get("goalWeight"))
    if all(v is None for v in values):
        return BodyConfig.unconfigured()

    try:
        return save_config(*values)
    except ValidationError as e:
        _report(problems, f"Stored config is invalid ({e}); treating as unconfigured")
        return BodyConfig.unconfigured()


def serialize_entries(log: EntryLog) -> list[dict[str, Any]]:
    """Convert an EntryLog to its JSON document."""
    return [
        {"date": e.date.isoformat(), "weight": e.weight, "note": e.note}
        for e in log
    ]


def deserialize_entries(data: Any, problems: Optional[list[str]] = None) -> EntryLog:
    """Build a sorted, duplicate-free EntryLog from a stored document.

    Records that fail validation are dropped and reported like in
    ``deserialize_config``.
    """
    if not isinstance(data, list):
        if data is not None:
            _report(problems, f"Ignoring entries document of type {type(data).__name__}")
        return EntryLog()

    log = EntryLog()
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            _report(problems, f"Dropping stored entry {i}: not an object")
            continue
        try:
            log = add_entry(log, item.get("date"), item.get("weight"), item.get("note"))
        except ValidationError as e:
            _report(problems, f"Dropping stored entry {i} ({e})")
    return log
