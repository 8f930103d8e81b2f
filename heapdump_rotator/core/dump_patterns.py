"""File name patterns for configured and already-rotated heap dumps.

A configured dump path such as ``/var/dumps/heap-%p.hprof`` yields two
patterns, both matched against whole file names:

``exact``
    the dump as the JVM writes it, with every ``%p`` standing for one or
    more digits (``heap-12345.hprof``).
``rotated``
    a dump already renamed by the rotator: the base name, a hyphen, the
    epoch seconds, then the extension (``heap-12345-1700000000.hprof``).

The placeholder may sit in the extension too (``heap.%p``); both parts are
matched the same way. Digit runs never contain a hyphen, so the two patterns
cannot match the same name. Nothing in this module touches the filesystem
except ``parse_dump_path``, which checks whether the configured path is
itself a directory.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Pattern, Tuple

PID_PLACEHOLDER = "%p"
DEFAULT_DUMP_FILE_NAME = f"java_pid{PID_PLACEHOLDER}.hprof"

# ASCII only; str patterns would otherwise accept any Unicode digit.
_DIGITS = "[0-9]+"


@dataclass(frozen=True)
class DumpPathSpec:
    raw_path: str
    directory: Path
    raw_file_name: str
    extension: str
    base_name: str


@dataclass(frozen=True)
class DumpPatterns:
    exact: Pattern[str]
    rotated: Pattern[str]

    def is_dump(self, file_name: str) -> bool:
        return self.exact.fullmatch(file_name) is not None

    def is_rotated(self, file_name: str) -> bool:
        return self.rotated.fullmatch(file_name) is not None

    def rotated_name(self, file_name: str, timestamp: int) -> str:
        """Insert ``-<timestamp>`` in front of the dump's extension.

        Raises:
            ValueError: ``file_name`` is not a dump matched by ``exact``
        """
        match = self.exact.fullmatch(file_name)
        if match is None:
            raise ValueError(f"{file_name!r} does not match the dump pattern")
        return f"{match.group('stem')}-{timestamp}{match.group('ext')}"


def split_extension(file_name: str) -> Tuple[str, str]:
    """Split ``file_name`` at its last dot.

    Returns ``(stem, extension)`` where the extension keeps its leading dot,
    or is empty when the name has no dot at all.
    """
    stem, dot, suffix = file_name.rpartition(".")
    if not dot:
        return file_name, ""
    return stem, f".{suffix}"


def _placeholder_regex(text: str, placeholder: str) -> str:
    return _DIGITS.join(re.escape(part) for part in text.split(placeholder))


def build_patterns(raw_file_name: str, *, placeholder: str = PID_PLACEHOLDER) -> DumpPatterns:
    """Derive the exact and rotated patterns for a configured file name."""
    if not placeholder:
        raise ValueError("placeholder must be a non-empty string")

    base_name, extension = split_extension(raw_file_name)
    stem = _placeholder_regex(base_name, placeholder)
    ext = _placeholder_regex(extension, placeholder)
    exact = f"(?P<stem>{stem})(?P<ext>{ext})"
    rotated = f"{stem}-{_DIGITS}{ext}"
    return DumpPatterns(exact=re.compile(exact), rotated=re.compile(rotated))


def parse_dump_path(
    raw_path: str,
    *,
    default_file_name: str = DEFAULT_DUMP_FILE_NAME,
) -> DumpPathSpec:
    """Split a configured dump path into directory and file name parts.

    A path without a parent resolves against the current working directory.
    If the path is an existing directory the JVM writes
    ``java_pid<pid>.hprof`` inside it, so ``default_file_name`` is used.
    """
    path = Path(raw_path)
    if raw_path and path.is_dir():
        directory = path
        file_name = default_file_name
    else:
        directory = path.parent
        file_name = path.name

    base_name, extension = split_extension(file_name)
    return DumpPathSpec(
        raw_path=raw_path,
        directory=directory,
        raw_file_name=file_name,
        extension=extension,
        base_name=base_name,
    )


__all__ = [
    "PID_PLACEHOLDER",
    "DEFAULT_DUMP_FILE_NAME",
    "DumpPathSpec",
    "DumpPatterns",
    "split_extension",
    "build_patterns",
    "parse_dump_path",
]
