"""Centralized path constants for the heap dump rotator."""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_ENV_VAR = "HEAPDUMP_ROTATOR_CONFIG"
USER_STATE_DIR = Path.home() / ".heapdump_rotator"


def default_config_path() -> Path:
    """Config file to read when the caller does not name one."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return USER_STATE_DIR / "config.txt"


__all__ = [
    "CONFIG_ENV_VAR",
    "USER_STATE_DIR",
    "default_config_path",
]
