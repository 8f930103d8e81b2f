import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

import aiofiles

from heapdump_rotator.core.clock import Clock
from heapdump_rotator.core.dump_patterns import PID_PLACEHOLDER
from heapdump_rotator.core.launch_args import HEAP_DUMP_PATH_PREFIX
from heapdump_rotator.core.logging_config import configure_logging
from heapdump_rotator.core.logging_utils import get_module_logger
from heapdump_rotator.core.paths import default_config_path
from heapdump_rotator.core.rotator import HeapDumpRotator


logger = get_module_logger("ConfigManager")


class ConfigManager:
    """Reads ``key = value`` config files, the format the launcher already uses."""

    def __init__(self):
        self.logger = get_module_logger("ConfigManager")

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _parse_config_lines(lines: Iterable[str]) -> Dict[str, str]:
        config: Dict[str, str] = {}

        for raw_line in lines:
            line = raw_line.strip()
            if not line or line.startswith('#'):
                continue
            if '=' not in line:
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"') and len(value) >= 2) or (
                value.startswith("'") and value.endswith("'") and len(value) >= 2
            ):
                value = value[1:-1]
            elif '#' in value:
                value = value.split('#')[0].strip()

            config[key] = value

        return config

    # ------------------------------------------------------------------
    # Reading

    def read_config(self, config_path: Path) -> Dict[str, str]:
        """Read ``config_path``; a missing or unreadable file gives ``{}``."""
        if not config_path.exists():
            return {}

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return self._parse_config_lines(f)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read config %s: %s", config_path, e)
            return {}

    async def read_config_async(self, config_path: Path) -> Dict[str, str]:
        """Async version for use in async contexts."""
        if not await asyncio.to_thread(config_path.exists):
            return {}

        try:
            lines: list[str] = []
            async with aiofiles.open(config_path, 'r', encoding='utf-8') as f:
                async for line in f:
                    lines.append(line)
            return self._parse_config_lines(lines)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read config %s: %s", config_path, e)
            return {}

    # ------------------------------------------------------------------
    # Typed getters

    def get_int(self, config: Dict[str, str], key: str, default: Optional[int] = 0) -> Optional[int]:
        if key not in config or config[key] == "":
            return default

        try:
            return int(config[key])
        except ValueError:
            logger.warning("Invalid int value for %s: %s, using default %s", key, config[key], default)
            return default

    def get_str(self, config: Dict[str, str], key: str, default: str = "") -> str:
        value = config.get(key, "")
        return value if value else default


_config_manager = ConfigManager()


def get_config_manager() -> ConfigManager:
    return _config_manager


@dataclass(frozen=True)
class RotatorSettings:
    """Typed view of the rotator config file."""

    max_retained_dumps: Optional[int] = None
    dump_path_prefix: str = HEAP_DUMP_PATH_PREFIX
    pid_placeholder: str = PID_PLACEHOLDER
    log_level: str = "info"
    log_file: Optional[str] = None

    @classmethod
    def from_config(cls, config: Dict[str, str], manager: Optional[ConfigManager] = None) -> "RotatorSettings":
        cm = manager or get_config_manager()
        return cls(
            max_retained_dumps=cm.get_int(config, "max_retained_dumps", None),
            dump_path_prefix=cm.get_str(config, "dump_path_prefix", HEAP_DUMP_PATH_PREFIX),
            pid_placeholder=cm.get_str(config, "pid_placeholder", PID_PLACEHOLDER),
            log_level=cm.get_str(config, "log_level", "info"),
            log_file=cm.get_str(config, "log_file", "") or None,
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "RotatorSettings":
        cm = get_config_manager()
        return cls.from_config(cm.read_config(config_path or default_config_path()), cm)

    @classmethod
    async def load_async(cls, config_path: Optional[Path] = None) -> "RotatorSettings":
        cm = get_config_manager()
        config = await cm.read_config_async(config_path or default_config_path())
        return cls.from_config(config, cm)

    def apply_logging(self, *, console: bool = True) -> None:
        """Install root handlers at ``log_level``; an unknown level falls back to INFO."""
        try:
            configure_logging(self.log_level, console=console, log_file=self.log_file)
        except ValueError:
            configure_logging(logging.INFO, console=console, log_file=self.log_file)
            logger.warning("Unknown log_level %r, using INFO", self.log_level)

    def create_rotator(
        self,
        launch_arguments: Optional[Sequence[str]] = None,
        clock: Optional[Clock] = None,
    ) -> HeapDumpRotator:
        return HeapDumpRotator(
            max_retained_dumps=self.max_retained_dumps,
            launch_arguments=launch_arguments,
            clock=clock,
            prefix=self.dump_path_prefix,
            placeholder=self.pid_placeholder,
        )


__all__ = ["ConfigManager", "RotatorSettings", "get_config_manager"]
