"""Tests for the configuration section models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from chronolane.config.models import ChronoConfig, PaletteConfig, ScaleConfig


class TestScaleConfig:
    def test_defaults(self) -> None:
        scale = ScaleConfig()
        assert scale.pixels_per_month == 20.0
        assert scale.pad_months == 1
        assert scale.row_height == 64.0
        assert scale.rail_offset == 32.0
        assert scale.min_width == 2.0
        assert scale.ruler_height == 40.0
        assert scale.min_canvas_width == 800.0
        assert scale.auto_rails is False

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("pixels_per_month", 0),
            ("pad_months", -1),
            ("row_height", 0),
            ("min_width", -0.5),
            ("bar_height", 0),
        ],
    )
    def test_rejects_out_of_range(self, field: str, value: float) -> None:
        with pytest.raises(ValidationError):
            ScaleConfig(**{field: value})

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            ScaleConfig().pad_months = 2  # type: ignore[misc]


class TestChronoConfig:
    def test_sparse_sections(self) -> None:
        config = ChronoConfig.model_validate({"palette": {"default_fill": "#123456"}})
        assert config.palette.default_fill == "#123456"
        assert config.palette.dark_label == PaletteConfig().dark_label
        assert config.scale == ScaleConfig()

    def test_unknown_keys_ignored(self) -> None:
        config = ChronoConfig.model_validate({"scale": {"zoom": 3}})
        assert config.scale == ScaleConfig()
