"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


VALID_HISTORY_ORDERS = ("asc", "desc")


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".weighttrack"


def _default_store_path() -> Path:
    """Return the default store path."""
    return _default_config_dir() / "weighttrack.db"


@dataclass
class StoreConfig:
    """Persistent store configuration."""

    path: Path = field(default_factory=_default_store_path)


@dataclass
class DisplayConfig:
    """Options for rendering stats, history and chart."""

    date_format: str = "%d/%m/%Y"
    history_order: str = "desc"  # "desc" (newest first) or "asc"
    chart_height: int = 10


@dataclass
class Settings:
    """Main application settings."""

    store: StoreConfig = field(default_factory=StoreConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.weighttrack/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        # Parse store config
        if "store" in data:
            store_data = data["store"] or {}
            if "path" in store_data:
                settings.store.path = Path(store_data["path"]).expanduser()

        # Parse display config
        if "display" in data:
            disp_data = data["display"] or {}
            if "date_format" in disp_data:
                settings.display.date_format = str(disp_data["date_format"])
            if "history_order" in disp_data:
                order = str(disp_data["history_order"]).lower()
                if order not in VALID_HISTORY_ORDERS:
                    raise ValueError(
                        f"display.history_order must be one of {VALID_HISTORY_ORDERS}, got '{order}'"
                    )
                settings.display.history_order = order
            if "chart_height" in disp_data:
                settings.display.chart_height = int(disp_data["chart_height"])

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.weighttrack/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "store": {
                "path": str(self.store.path),
            },
            "display": {
                "date_format": self.display.date_format,
                "history_order": self.display.history_order,
                "chart_height": self.display.chart_height,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings

