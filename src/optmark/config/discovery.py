"""Config file discovery.

Walk-up finder locates optmark.toml, similar to how git finds .git/, so a
build step run from any crate subdirectory picks up the crate's
``[resolver]``, ``[directives]`` and ``[schema_metadata]`` sections.
Supports the OPTMARK_CONFIG env var and the --config CLI flag as overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

CONFIG_FILENAME = "optmark.toml"
CONFIG_ENV_VAR = "OPTMARK_CONFIG"

logger = logging.getLogger(__name__)


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for optmark.toml.

    Returns the path to the config file, or None if not found.
    Checks OPTMARK_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        logger.warning("%s points to a missing file: %s", CONFIG_ENV_VAR, p)
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            logger.debug("Found %s", candidate)
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
