"""Tests for body config validation."""

from __future__ import annotations

import pytest

from weighttrack.tracking.config_manager import save_config
from weighttrack.tracking.models import BodyConfig, ValidationError


class TestSaveConfig:
    """Tests for save_config."""

    def test_valid(self) -> None:
        config = save_config(170, 90, 70)
        assert config == BodyConfig(height_cm=170.0, initial_weight=90.0, goal_weight=70.0)
        assert config.is_configured

    def test_accepts_numeric_strings(self) -> None:
        config = save_config("180.5", "100", "85")  # type: ignore[arg-type]
        assert config.height_cm == 180.5

    @pytest.mark.parametrize(
        "args, field",
        [
            ((99, 90, 70), "height"),
            ((251, 90, 70), "height"),
            ((None, 90, 70), "height"),
            ((170, 29, 25), "initial_weight"),
            ((170, None, 70), "initial_weight"),
            ((170, 90, 29), "goal_weight"),
            ((170, 90, None), "goal_weight"),
            ((170, 80, 80), "goal_weight"),
            ((170, 80, 85), "goal_weight"),
            ((170, "abc", 70), "initial_weight"),
            ((float("nan"), 90, 70), "height"),
        ],
    )
    def test_rejections_name_the_field(self, args, field: str) -> None:
        with pytest.raises(ValidationError) as exc:
            save_config(*args)
        assert exc.value.field == field
        assert exc.value.reason
        assert str(exc.value).startswith(f"{field}: ")

    def test_inverted_goal_reason(self) -> None:
        with pytest.raises(ValidationError, match="less than the initial weight"):
            save_config(170, 80, 80)

    @pytest.mark.parametrize("height", [100, 250])
    def test_height_bounds_inclusive(self, height: float) -> None:
        assert save_config(height, 90, 70).height_cm == height


class TestBodyConfig:
    """Tests for the BodyConfig model."""

    def test_unconfigured(self) -> None:
        config = BodyConfig.unconfigured()
        assert not config.is_configured
        assert config.height_cm is None

    def test_partial_is_not_configured(self) -> None:
        assert not BodyConfig(height_cm=170).is_configured
