"""Global pytest configuration and fixtures."""

import json
import logging
import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from mongo_restore._utils import logger
from tests.utils import FakeStorage


@pytest.fixture
def write_backup(tmp_path):
    """Write a backup document set to a JSON file and return its path."""
    def _write(data, name: str = "backup.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def fake_storage():
    """In-memory storage backend."""
    return FakeStorage()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging() so caplog sees package records."""
    yield
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
