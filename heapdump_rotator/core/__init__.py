from .clock import Clock, FixedClock, SystemClock, epoch_seconds
from .config_manager import ConfigManager, RotatorSettings, get_config_manager
from .dump_patterns import (
    DumpPathSpec,
    DumpPatterns,
    build_patterns,
    parse_dump_path,
    split_extension,
)
from .launch_args import HEAP_DUMP_PATH_PREFIX, find_dump_path_argument, get_launch_arguments
from .logging_config import configure_logging
from .logging_utils import get_module_logger
from .rotator import HeapDumpRotator, archive_dumps, prune_rotated_dumps

__all__ = [
    'Clock',
    'FixedClock',
    'SystemClock',
    'epoch_seconds',
    'ConfigManager',
    'RotatorSettings',
    'get_config_manager',
    'DumpPathSpec',
    'DumpPatterns',
    'build_patterns',
    'parse_dump_path',
    'split_extension',
    'HEAP_DUMP_PATH_PREFIX',
    'find_dump_path_argument',
    'get_launch_arguments',
    'configure_logging',
    'get_module_logger',
    'HeapDumpRotator',
    'archive_dumps',
    'prune_rotated_dumps',
]
