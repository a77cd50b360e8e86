"""Dataset file I/O.

Reads raw dataset mappings from JSON, TOML or YAML files and writes
layout models back out as JSON. Validation of the mapping's contents is
:func:`chronolane.domain.ingest.ingest`'s job; this module only deals
with files and formats.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from chronolane.domain.errors import InvalidDataset

if TYPE_CHECKING:
    from chronolane.domain.layout import LayoutModel

SUPPORTED_SUFFIXES = frozenset({".json", ".toml", ".yaml", ".yml"})


def _load_yaml(text: str) -> Any:
    # A fresh safe loader per call; YAML instances carry parser state.
    return YAML(typ="safe").load(text)


def read_dataset(path: Path) -> dict[str, Any]:
    """Parse *path* into a raw dataset mapping.

    Raises:
        FileNotFoundError: If *path* does not exist.
        InvalidDataset: If the suffix is unsupported, the file does not
            parse, or its top level is not a mapping.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        msg = f"Unsupported dataset format {suffix or '(none)'!r}; use .json, .toml or .yaml"
        raise InvalidDataset(msg)

    text = path.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            data = json.loads(text)
        elif suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = _load_yaml(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, YAMLError) as exc:
        raise InvalidDataset(f"Could not parse {path.name}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidDataset(f"{path.name}: top level must be a table/object")
    return data


def write_layout(path: Path, layout: LayoutModel) -> Path:
    """Write *layout* as indented JSON, creating parent directories."""
    path = path.resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(layout.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return path
