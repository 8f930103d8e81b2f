"""Rotate JVM heap dumps out of the way before a managed process restarts."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Optional, Sequence

from .core.clock import Clock, FixedClock, SystemClock
from .core.config_manager import RotatorSettings
from .core.rotator import HeapDumpRotator

try:
    __version__ = metadata.version("heapdump-rotator")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


def rotate_heap_dumps(
    max_retained_dumps: Optional[int] = None,
    launch_arguments: Optional[Sequence[str]] = None,
    clock: Optional[Clock] = None,
) -> None:
    """Convenience wrapper: build a rotator and run one rotation pass."""
    HeapDumpRotator(max_retained_dumps, launch_arguments, clock).rotate()


def rotate_from_config(
    config_path: Optional[Path] = None,
    *,
    launch_arguments: Optional[Sequence[str]] = None,
    clock: Optional[Clock] = None,
    console: bool = True,
) -> RotatorSettings:
    """Load settings, configure logging from them, then run one rotation pass."""
    settings = RotatorSettings.load(config_path)
    settings.apply_logging(console=console)
    settings.create_rotator(launch_arguments=launch_arguments, clock=clock).rotate()
    return settings


__all__ = [
    "__version__",
    "Clock",
    "FixedClock",
    "SystemClock",
    "HeapDumpRotator",
    "RotatorSettings",
    "rotate_from_config",
    "rotate_heap_dumps",
]
