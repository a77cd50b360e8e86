"""Locate chronolane.toml for the settings layer.

``CHRONOLANE_CONFIG`` pins the file; otherwise the nearest
chronolane.toml from the working directory upward is used.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "chronolane.toml"
CONFIG_ENV_VAR = "CHRONOLANE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Path of the config file that applies at *start* (default: cwd), if any.

    A ``CHRONOLANE_CONFIG`` pointing at a missing file disables discovery.
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        return Path(pinned) if Path(pinned).is_file() else None

    origin = (start or Path.cwd()).resolve()
    candidates = (d / CONFIG_FILENAME for d in (origin, *origin.parents))
    return next((c for c in candidates if c.is_file()), None)
