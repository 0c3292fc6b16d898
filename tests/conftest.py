"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings
from studybuddy.api_client import AdviceResult, AdviceStatus
from studybuddy.delivery.state_store import PreferencesStore


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests across components")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


class FakeAdviceClient:
    """Advice client returning canned results in order."""

    def __init__(self, *results: AdviceResult):
        self.results = list(results) or [AdviceResult(AdviceStatus.SUCCESS, "Keep going")]
        self.calls = 0

    async def get_advice(self) -> AdviceResult:
        self.calls += 1
        return self.results[min(self.calls, len(self.results)) - 1]


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway preferences file."""
    return Settings(prefs_db_path=tmp_path / "prefs.db", log_level="DEBUG")


@pytest.fixture
def prefs(settings):
    store = PreferencesStore(settings.prefs_db_path)
    yield store
    store.close()


@pytest.fixture
def advice_client():
    return FakeAdviceClient()


@pytest.fixture
def make_app(prefs, settings, advice_client):
    """Build a StudyBuddyApp wired to test collaborators."""
    from studybuddy.cli.controller import StudyBuddyApp

    def _make(**overrides):
        kwargs = {"prefs": prefs, "settings": settings, "advice_client": advice_client}
        kwargs.update(overrides)
        return StudyBuddyApp(**kwargs)

    return _make


@pytest.fixture
def logged_in_app(prefs, make_app):
    """App already past the login gate."""
    prefs.set_logged_in(True)
    prefs.set_email("student@example.com")
    return make_app()


@pytest.fixture
def now():
    """Fixed evaluation time for window calculations."""
    return datetime(2026, 3, 10, 12, 0, 0)


@pytest.fixture
def day0(now):
    """Start of the evaluation day."""
    return datetime(now.year, now.month, now.day)
