"""Pytest configuration for integration tests."""

import pytest

from gym_logbook.config import get_settings


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the process-wide settings at an empty data directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GYM_LOGBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("GYM_LOGBOOK_OWNER_PASSWORD", "letmein")
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
