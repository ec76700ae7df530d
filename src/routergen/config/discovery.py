"""Config file discovery.

Walk-up finder locates routergen.toml, similar to how git finds .git/.
Supports the ROUTERGEN_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "routergen.toml"
CONFIG_ENV_VAR = "ROUTERGEN_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for routergen.toml.

    Returns the path to the config file, or None if not found.
    Checks ROUTERGEN_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def resolve_config_path(explicit: str | None, start: Path | None = None) -> Path | None:
    """Pick the config file for this invocation.

    An explicit ``--config`` path wins when it names an existing file;
    a missing explicit path means "no config", not "discover instead".
    """
    if explicit:
        p = Path(explicit)
        return p if p.is_file() else None
    return find_config(start)
