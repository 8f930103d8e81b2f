"""Startup rotation of JVM heap dumps.

A JVM started with ``-XX:+HeapDumpOnOutOfMemoryError -XX:HeapDumpPath=...``
writes its snapshot to the same path every time, so a restart after an
out-of-memory crash would clobber the evidence. ``HeapDumpRotator.rotate()``
runs once before the process is (re)started: it renames existing dumps to
``<name>-<epoch seconds><ext>`` and optionally keeps only the newest N
rotated dumps.

Usage:
    rotator = HeapDumpRotator(max_retained_dumps=5, launch_arguments=jvm_args)
    rotator.rotate()
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from heapdump_rotator.core.clock import Clock, SystemClock, epoch_seconds
from heapdump_rotator.core.dump_patterns import (
    PID_PLACEHOLDER,
    DumpPathSpec,
    DumpPatterns,
    build_patterns,
    parse_dump_path,
)
from heapdump_rotator.core.launch_args import (
    HEAP_DUMP_PATH_PREFIX,
    find_dump_path_argument,
    get_launch_arguments,
)
from heapdump_rotator.core.logging_utils import get_module_logger

logger = get_module_logger("HeapDumpRotator")


def _normalize_retention(max_retained_dumps: Optional[int]) -> Optional[int]:
    if max_retained_dumps is None:
        return None
    if isinstance(max_retained_dumps, bool) or not isinstance(max_retained_dumps, int):
        raise TypeError(
            f"max_retained_dumps must be an int or None, got {type(max_retained_dumps).__name__}"
        )
    return max_retained_dumps if max_retained_dumps > 0 else None


def _list_files(directory: Path) -> List[Path]:
    return sorted(entry for entry in directory.iterdir() if not entry.is_dir())


def archive_dumps(directory: Path, patterns: DumpPatterns, timestamp: int) -> List[Tuple[Path, Path]]:
    """Rename every file matching the exact pattern, overwriting collisions.

    Returns:
        List of (source, destination) pairs in the order they were renamed
    """
    archived: List[Tuple[Path, Path]] = []
    for entry in _list_files(directory):
        if not patterns.is_dump(entry.name):
            continue
        target = entry.with_name(patterns.rotated_name(entry.name, timestamp))
        os.replace(entry, target)
        logger.info("Archived previous heap dump: %s -> %s", entry.name, target.name)
        archived.append((entry, target))
    return archived


def _modified_ns(path: Path) -> Optional[int]:
    try:
        return path.stat().st_mtime_ns
    except FileNotFoundError:
        return None


def prune_rotated_dumps(directory: Path, patterns: DumpPatterns, max_retained_dumps: int) -> List[Path]:
    """Delete the oldest rotated dumps so at most ``max_retained_dumps`` remain.

    Age is the file's modification time; equal times fall back to name order.
    Files that disappear while we work are treated as already deleted.

    Returns:
        Paths that were deleted, oldest first
    """
    dated: List[Tuple[int, str, Path]] = []
    for entry in _list_files(directory):
        if not patterns.is_rotated(entry.name):
            continue
        modified = _modified_ns(entry)
        if modified is None:
            continue
        dated.append((modified, entry.name, entry))
    dated.sort()

    logger.debug(
        "Found %d rotated heap dumps, retention limit is %d",
        len(dated),
        max_retained_dumps,
    )

    excess = len(dated) - max_retained_dumps
    deleted: List[Path] = []
    for _, _, entry in dated[:max(excess, 0)]:
        entry.unlink(missing_ok=True)
        logger.info("Deleted old heap dump to enforce retention policy: %s", entry.name)
        deleted.append(entry)
    return deleted


class HeapDumpRotator:
    """Moves the previous heap dump out of the way before a restart.

    Args:
        max_retained_dumps: Keep only this many rotated dumps; None, zero or
            negative keeps all of them
        launch_arguments: Arguments to search for the dump path option;
            defaults to this process's command line
        clock: Source of the rotation timestamp; defaults to UTC wall clock
        prefix: Launch argument prefix carrying the dump path
        placeholder: Token the JVM replaces with its pid
    """

    def __init__(
        self,
        max_retained_dumps: Optional[int] = None,
        launch_arguments: Optional[Sequence[str]] = None,
        clock: Optional[Clock] = None,
        *,
        prefix: str = HEAP_DUMP_PATH_PREFIX,
        placeholder: str = PID_PLACEHOLDER,
    ) -> None:
        if not prefix:
            raise ValueError("prefix must be a non-empty string")
        if not placeholder:
            raise ValueError("placeholder must be a non-empty string")
        self.max_retained_dumps = _normalize_retention(max_retained_dumps)
        if launch_arguments is None:
            launch_arguments = get_launch_arguments()
        self.launch_arguments: Tuple[str, ...] = tuple(str(arg) for arg in launch_arguments)
        self.clock: Clock = clock if clock is not None else SystemClock()
        self.prefix = prefix
        self.placeholder = placeholder

    def __repr__(self) -> str:
        return (
            f"HeapDumpRotator(max_retained_dumps={self.max_retained_dumps!r}, "
            f"prefix={self.prefix!r}, clock={self.clock!r})"
        )

    # ------------------------------------------------------------------
    # Resolution

    def resolve_dump_path(self) -> Optional[DumpPathSpec]:
        """Return the configured dump location, or None when rotation does not apply."""
        raw_path = find_dump_path_argument(self.launch_arguments, self.prefix)
        if raw_path is None:
            logger.debug("No %s launch argument found, skipping heap dump rotation", self.prefix)
            return None

        dump_path = parse_dump_path(raw_path, default_file_name=f"java_pid{self.placeholder}.hprof")
        if not dump_path.directory.is_dir():
            logger.debug("Heap dump directory does not exist: %s, skipping rotation", dump_path.directory)
            return None
        return dump_path

    # ------------------------------------------------------------------
    # Rotation

    def rotate(self) -> None:
        """Archive current dumps, then enforce the retention limit.

        Never raises: failures are logged and the next startup tries again.
        """
        try:
            dump_path = self.resolve_dump_path()
            if dump_path is None:
                return

            patterns = build_patterns(dump_path.raw_file_name, placeholder=self.placeholder)
            timestamp = epoch_seconds(self.clock)
            archive_dumps(dump_path.directory, patterns, timestamp)

            if self.max_retained_dumps is not None:
                prune_rotated_dumps(dump_path.directory, patterns, self.max_retained_dumps)
        except Exception as exc:
            logger.warning("Could not process heap dumps: %s", exc)

    async def rotate_async(self) -> None:
        """Run ``rotate()`` on a worker thread so the event loop keeps going."""
        await asyncio.to_thread(self.rotate)


__all__ = ["HeapDumpRotator", "archive_dumps", "prune_rotated_dumps"]
