"""Locate signsheet.toml.

Resolution order: the SIGNSHEET_CONFIG env var, then a walk up from the
starting directory (like git looking for .git/). The directory holding
the config file becomes the store root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "signsheet.toml"
CONFIG_ENV_VAR = "SIGNSHEET_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest signsheet.toml at or above *start* (default: cwd).

    A SIGNSHEET_CONFIG value pointing at a missing file disables
    discovery instead of falling back to the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
