"""Clock sources used to timestamp rotated dumps."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """Clock frozen at a single instant, for tests and replays.

    Accepts an aware ``datetime``, a naive one (interpreted as UTC) or epoch
    seconds.
    """

    __slots__ = ("_instant",)

    def __init__(self, instant: Union[datetime, int, float]) -> None:
        if isinstance(instant, datetime):
            if instant.tzinfo is None:
                instant = instant.replace(tzinfo=timezone.utc)
        else:
            instant = datetime.fromtimestamp(instant, tz=timezone.utc)
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()})"


def epoch_seconds(clock: Clock) -> int:
    """Whole seconds since the Unix epoch, floored like an instant's epoch second."""
    return math.floor(clock.now().timestamp())


__all__ = ["Clock", "SystemClock", "FixedClock", "epoch_seconds"]
