"""Launch argument lookup for the process whose heap dumps we rotate.

The rotator only needs the command line of the managed process. By default
that is the current process; supervisors can pass the pid of a child that is
about to be restarted instead.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import psutil

from heapdump_rotator.core.logging_utils import get_module_logger

logger = get_module_logger("LaunchArgs")

HEAP_DUMP_PATH_PREFIX = "-XX:HeapDumpPath="


def get_launch_arguments(pid: Optional[int] = None) -> List[str]:
    """Return the command line of ``pid`` (default: this process).

    Args:
        pid: Process id to inspect, or None for the current process

    Returns:
        List of argument strings, empty if the process cannot be inspected
    """
    try:
        return list(psutil.Process(pid).cmdline())
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess) as exc:
        logger.debug("Cannot read launch arguments for pid=%s: %s", pid, exc)
        return []


def find_dump_path_argument(
    arguments: Iterable[str],
    prefix: str = HEAP_DUMP_PATH_PREFIX,
) -> Optional[str]:
    """Return the value of the first argument starting with ``prefix``."""
    for argument in arguments:
        if argument.startswith(prefix):
            return argument[len(prefix):]
    return None


__all__ = ["HEAP_DUMP_PATH_PREFIX", "get_launch_arguments", "find_dump_path_argument"]
