"""Component-tagged loggers under the ``heapdump_rotator`` namespace."""

from __future__ import annotations

import logging
from typing import Optional

MODULE_LOGGER_NAMESPACE = "heapdump_rotator"


class StructuredLogger:
    """Logger wrapper that prefixes every record with ``[Component]``."""

    __slots__ = ("_logger", "_component")

    def __init__(self, logger: logging.Logger, component: str) -> None:
        self._logger = logger
        self._component = component

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def component(self) -> str:
        return self._component

    def _compose(self, message: object, args: tuple) -> str:
        text = str(message)
        if args:
            try:
                text = text % args
            except (TypeError, ValueError):
                safe_args = " ".join(str(arg) for arg in args)
                text = f"{text} | args={safe_args}"
        return f"[{self._component}] {text}"

    def _emit(self, level: int, message: object, *args, **kwargs) -> None:
        if not self._logger.isEnabledFor(level):
            return
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, self._compose(message, args), **kwargs)

    def debug(self, message: object, *args, **kwargs) -> None:
        self._emit(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: object, *args, **kwargs) -> None:
        self._emit(logging.INFO, message, *args, **kwargs)

    def warning(self, message: object, *args, **kwargs) -> None:
        self._emit(logging.WARNING, message, *args, **kwargs)

    def error(self, message: object, *args, **kwargs) -> None:
        self._emit(logging.ERROR, message, *args, **kwargs)


def get_module_logger(name: Optional[str] = None) -> StructuredLogger:
    """Return a structured logger scoped to the heapdump_rotator namespace."""
    component = name or "Core"
    return StructuredLogger(logging.getLogger(f"{MODULE_LOGGER_NAMESPACE}.{component}"), component)


__all__ = ["MODULE_LOGGER_NAMESPACE", "StructuredLogger", "get_module_logger"]
