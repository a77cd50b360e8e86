"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, chronolane.toml only contains
overrides. The section models themselves live in the domain layer so the
layout engine never imports configuration code.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chronolane.domain.params import PaletteConfig, ScaleConfig

__all__ = ["ChronoConfig", "PaletteConfig", "ScaleConfig"]


class ChronoConfig(BaseModel):
    """Root configuration composing all chronolane.toml sections."""

    model_config = {"frozen": True}

    scale: ScaleConfig = Field(default_factory=ScaleConfig)
    palette: PaletteConfig = Field(default_factory=PaletteConfig)
