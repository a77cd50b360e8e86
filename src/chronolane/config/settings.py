"""ChronoSettings — CLI flags, environment and chronolane.toml merged.

Precedence, highest first:

1. keyword arguments (the CLI's global flags)
2. ``CHRONOLANE_*`` environment variables, ``__`` between nested keys
   (``CHRONOLANE_SCALE__PAD_MONTHS=0``)
3. the ``[scale]`` / ``[palette]`` tables of chronolane.toml
4. defaults baked into the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from chronolane.config.discovery import find_config
from chronolane.config.models import ChronoConfig, PaletteConfig, ScaleConfig

# pydantic-settings builds its sources inside __init__, so the TOML path
# chosen by from_cli() is handed over through this variable.
_toml_path: ContextVar[Path | None] = ContextVar("chronolane_toml_path", default=None)


def _read_toml(path: Path | None) -> dict[str, Any]:
    if path is None or not path.is_file():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise click.ClickException(f"Invalid TOML in {path}: {exc}") from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one chronolane.toml file."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = _read_toml(path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class ChronoSettings(BaseSettings):
    """Everything a CLI invocation needs: output flags plus layout config."""

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="CHRONOLANE_",
        env_nested_delimiter="__",
    )

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    scale: ScaleConfig = Field(default_factory=ScaleConfig)
    palette: PaletteConfig = Field(default_factory=PaletteConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, TomlSettingsSource(settings_cls, _toml_path.get())

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **flags: Any,
    ) -> ChronoSettings:
        """Build settings for one invocation.

        An explicit *config_path* is used only if the file exists; without
        one, chronolane.toml is searched for upward from *start* (the cwd
        by default).
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(start)

        token = _toml_path.set(toml_path)
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _toml_path.reset(token)

    def with_scale(self, **overrides: Any) -> ChronoSettings:
        """Copy with ``[scale]`` fields replaced; ``None`` values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        scale = ScaleConfig.model_validate({**self.scale.model_dump(), **changes})
        return self.model_copy(update={"scale": scale})

    def to_config(self) -> ChronoConfig:
        """The layout-relevant sections, without the CLI flags."""
        return ChronoConfig(scale=self.scale, palette=self.palette)
