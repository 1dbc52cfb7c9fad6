"""Locate ``investctl.toml``.

``INVESTCTL_CONFIG`` names the file outright.  Otherwise the nearest
``investctl.toml`` in the start directory or one of its ancestors is
used, so running investctl anywhere below a portfolio directory picks up
that portfolio's storage and display settings.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "investctl.toml"
CONFIG_ENV_VAR = "INVESTCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
