"""
Pytest configuration and shared fixtures for movierater tests.
"""

import os

import pytest

# Settings read the environment at import time
os.environ.setdefault("TMDB_API_KEY", "test_api_key_for_ci_testing_only")
os.environ.setdefault("REDIS_URL", "")

from movierater.browser.state import BrowserStore
from movierater.core.storage import MemoryStorage
from tests.fakes import FakeGateway, ReadySession


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store() -> BrowserStore:
    return BrowserStore()


@pytest.fixture
def ready_session() -> ReadySession:
    return ReadySession("guest-1")
