"""Configuration management."""

from __future__ import annotations

from weighttrack.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
