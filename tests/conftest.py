"""Shared pytest configuration and fixtures for the rotator test suite."""

import logging
import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default config path at an empty per-test location."""
    config_path = tmp_path / "isolated-config.txt"
    monkeypatch.setenv("HEAPDUMP_ROTATOR_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def restore_root_logging():
    """Undo handlers and level changes made by ``configure_logging``."""
    from heapdump_rotator.core import logging_config

    root = logging.getLogger()
    level = root.level
    yield root
    while logging_config._installed:
        handler = logging_config._installed.pop()
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
