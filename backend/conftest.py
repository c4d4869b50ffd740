"""
Pytest configuration and shared fixtures for backend tests.

This module provides fixtures for entry stores, application instances and
HTTP test clients. Every test gets its own store, so no state leaks between tests.
"""

import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core import reset_settings
from core.app_factory import create_app
from core.settings import Settings
from domain.services.entry_validation import EntryLimits, EntryValidator
from infrastructure.entry_store import EntryStore

# Import entry fixtures to make them available to all tests
from tests.fixtures.entry_fixtures import (  # noqa: F401
    sample_entry,
    sample_payload,
    seeded_store,
)


@pytest.fixture(autouse=True)
def isolated_settings():
    """Reset the settings singleton around each test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def limits() -> EntryLimits:
    """Default policy limits."""
    return EntryLimits()


@pytest.fixture
def validator(limits: EntryLimits) -> EntryValidator:
    """Validator using the default limits."""
    return EntryValidator(limits)


@pytest.fixture
def entry_store(validator: EntryValidator) -> EntryStore:
    """Fresh, empty in-memory store."""
    return EntryStore(validator)


@pytest.fixture
def test_settings() -> Settings:
    """Settings for the test environment (rate limiting off, no .env lookup)."""
    return Settings(_env_file=None, environment="test")


@pytest.fixture
def test_app(test_settings: Settings, entry_store: EntryStore):
    """Application wired to the per-test store."""
    return create_app(settings=test_settings, entry_store=entry_store)


@pytest.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an HTTP client bound to the test application.

    The store behind the app is the `entry_store` fixture, so tests can
    arrange state directly and assert through the API (or the other way round).
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
