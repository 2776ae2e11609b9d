import logging
import os
from datetime import date
from pathlib import Path

import pytest

# Set test environment variables
os.environ["LIFE_WEEKS_ENVIRONMENT"] = "test"
os.environ["LIFE_WEEKS_LOG_LEVEL"] = "WARNING"
os.environ["LIFE_WEEKS_LOG_TO_FILE"] = "false"


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/app.log."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    # Restore any that were removed (and strip any new ones tests may have added)
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture
def state_file(tmp_path) -> Path:
    """Path for a throwaway birth date state file."""
    return tmp_path / "state" / "state.json"


@pytest.fixture
def isolated_settings(state_file, tmp_path, monkeypatch):
    """Point cached settings at temporary files for the duration of a test."""
    from life_weeks.core.config import get_settings

    monkeypatch.setenv("LIFE_WEEKS_STATE_FILE", str(state_file))
    monkeypatch.setenv("LIFE_WEEKS_IMAGE_OUTPUT_DIR", str(tmp_path / "images"))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def birth_date() -> date:
    return date(2000, 1, 1)


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo root logger changes made by setup_logging (CLI callback, logging tests)."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
