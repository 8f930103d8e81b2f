"""Root logging setup driven by the rotator config file."""

from __future__ import annotations

import contextlib
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
_MAX_LOG_BYTES = 256 * 1024
_LOG_BACKUPS = 2

# Handlers installed by configure_logging; anything else on the root is left alone.
_installed: list = []


def coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.strip().upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level '{level}'")
        return value
    return int(level)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    *,
    console: bool = True,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """Install console and optional rotating-file handlers on the root logger.

    Calling again replaces the handlers from the previous call, so a launcher
    can reconfigure after reading the config file.

    Args:
        level: Logging level (int or name such as "info").
        console: Whether to emit logs to stdout.
        log_file: Optional path for a rotating file handler.
    """
    numeric_level = coerce_level(level)
    root = logging.getLogger()

    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        with contextlib.suppress(Exception):
            handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    handlers: list = []

    if console:
        handlers.append(logging.StreamHandler(sys.stdout))

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_path,
                maxBytes=_MAX_LOG_BYTES,
                backupCount=_LOG_BACKUPS,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        root.addHandler(handler)
        _installed.append(handler)

    root.setLevel(numeric_level)


__all__ = ["configure_logging", "coerce_level", "LOG_FORMAT", "LOG_DATEFMT"]
