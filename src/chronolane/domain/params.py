"""Layout parameters.

Every geometric constant of a layout pass lives on :class:`ScaleConfig`;
consumers pass one in rather than redefining constants. Both models are
reused as the ``[scale]`` and ``[palette]`` sections of chronolane.toml.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ScaleConfig(BaseModel):
    """Geometry of one layout pass (``[scale]`` section)."""

    model_config = {"frozen": True}

    pixels_per_month: float = Field(default=20.0, gt=0)
    pad_months: int = Field(default=1, ge=0)
    row_height: float = Field(default=64.0, gt=0)
    rail_offset: float = Field(default=32.0, ge=0)
    min_width: float = Field(default=2.0, ge=0)
    lane_gap: float = Field(default=12.0, ge=0)
    ruler_height: float = Field(default=40.0, ge=0)
    min_canvas_width: float = Field(default=800.0, ge=0)
    bar_height: float = Field(default=20.0, gt=0)
    point_radius: float = Field(default=6.0, gt=0)
    label_inset: float = Field(default=8.0, ge=0)
    auto_rails: bool = False


class PaletteConfig(BaseModel):
    """Label and fallback colors (``[palette]`` section). Passed through untouched."""

    model_config = {"frozen": True}

    default_fill: str = "#6b7280"
    light_label: str = "#ffffff"
    dark_label: str = "#111827"
    lane_label: str = "#374151"
    year_label: str = "#4b5563"
