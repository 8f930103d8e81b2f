"""Tests for the top-level package entry points."""

import heapdump_rotator
from heapdump_rotator import FixedClock, rotate_from_config, rotate_heap_dumps


def test_version_is_string():
    assert isinstance(heapdump_rotator.__version__, str)


def test_rotate_heap_dumps(tmp_path):
    (tmp_path / "heap-12345.hprof").write_text("dump")

    rotate_heap_dumps(
        launch_arguments=[f"-XX:HeapDumpPath={tmp_path / 'heap-%p.hprof'}"],
        clock=FixedClock(1700000000),
    )

    assert (tmp_path / "heap-12345-1700000000.hprof").read_text() == "dump"
    assert not (tmp_path / "heap-12345.hprof").exists()


def test_rotate_from_config(tmp_path, restore_root_logging):
    dumps = tmp_path / "dumps"
    dumps.mkdir()
    for name in ("heap-1000.hprof", "heap-2000.hprof", "heap.hprof"):
        (dumps / name).write_text(name)
    log_file = tmp_path / "rotator.log"
    config = tmp_path / "config.txt"
    config.write_text(
        f"max_retained_dumps = 2\nlog_level = info\nlog_file = {log_file}\n",
        encoding="utf-8",
    )

    settings = rotate_from_config(
        config,
        launch_arguments=[f"-XX:HeapDumpPath={dumps / 'heap.hprof'}"],
        clock=FixedClock(3000),
        console=False,
    )
    for handler in restore_root_logging.handlers:
        handler.flush()

    assert settings.max_retained_dumps == 2
    assert sorted(p.name for p in dumps.iterdir()) == ["heap-2000.hprof", "heap-3000.hprof"]
    log_text = log_file.read_text(encoding="utf-8")
    assert "[HeapDumpRotator] Archived previous heap dump" in log_text
    assert "[HeapDumpRotator] Deleted old heap dump to enforce retention policy" in log_text
