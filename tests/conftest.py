"""WikiSniffer test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache(monkeypatch):
    """Clear the settings LRU cache and profile selection between tests."""
    from wikisniffer.settings.config import get_settings

    monkeypatch.delenv("WIKISNIFFER_ENV", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings(tmp_path: Path, monkeypatch):
    """Settings resolved with *tmp_path* as the working directory."""
    from wikisniffer.settings.config import Settings

    monkeypatch.chdir(tmp_path)
    return Settings()


# ---------------------------------------------------------------------------
# Mock Playwright page
# ---------------------------------------------------------------------------


@pytest.fixture()
def page() -> MagicMock:
    """A ``MagicMock`` standing in for a Playwright ``Page``."""
    mock = MagicMock(name="page")
    mock.url = "https://en.wikipedia.org/wiki/Boxing"
    return mock


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that require a real browser and network access")
