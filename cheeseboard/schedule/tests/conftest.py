"""
Test configuration and fixtures for the pizza schedule test suite.

Provides:
- Saved schedule page text
- FastAPI TestClient wired to in-memory components
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cheeseboard.schedule import router as schedule_router
from cheeseboard.schedule.app import create_app
from cheeseboard.schedule.preferences import PreferenceStore
from cheeseboard.schedule.providers import InMemoryContentProvider


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Page fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_path() -> Path:
    return FIXTURES_DIR / "sample_schedule.md"


@pytest.fixture
def sample_text(sample_path) -> str:
    return sample_path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def provider(sample_text):
    return InMemoryContentProvider(sample_text, title="Pizza Schedule")


@pytest.fixture
def store():
    return PreferenceStore()


@pytest.fixture
def client(provider, store):
    """TestClient with the router wired to in-memory components."""
    schedule_router.configure(provider, store)
    with TestClient(create_app()) as test_client:
        yield test_client
    schedule_router.reset()
