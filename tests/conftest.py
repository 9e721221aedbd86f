"""
Test configuration and fixtures for Insyte.
This centralizes all test setup, making individual tests clean.
"""

import os
import time

# Required settings must exist before insyte.config is imported
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("REDIS_TOKEN", "test-token")
os.environ["STORE_BACKEND"] = "memory"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from main import app
from insyte.dependencies import get_store
from insyte.store.strategies import InMemoryStore
from insyte.tracker import EventTracker


class FakeClock:
    """Monotonic clock the tests move by hand"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingStore(InMemoryStore):
    """In-memory store that also records every call, in order"""

    def __init__(self, clock=None):
        super().__init__(clock=clock or time.monotonic)
        self.calls = []

    async def hincrby(self, key, field, amount=1):
        self.calls.append(("hincrby", key, field, amount))
        return await super().hincrby(key, field, amount)

    async def hgetall(self, key):
        self.calls.append(("hgetall", key))
        return await super().hgetall(key)

    async def expire(self, key, seconds):
        self.calls.append(("expire", key, seconds))
        return await super().expire(key, seconds)


class FailingStore(InMemoryStore):
    """Store whose every operation raises the same error object"""

    def __init__(self, error: Exception):
        super().__init__()
        self.error = error

    async def hincrby(self, key, field, amount=1):
        raise self.error

    async def hgetall(self, key):
        raise self.error

    async def expire(self, key, seconds):
        raise self.error


# 2024-01-01 noon, away from midnight so "today" is stable
NEW_YEAR = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    """Fresh recording store for each test"""
    return RecordingStore(clock=clock)


@pytest.fixture
def tracker(store):
    """Tracker pinned to 2024-01-01"""
    return EventTracker(store, clock=lambda: NEW_YEAR)


@pytest.fixture(scope="function")
def client(store):
    """
    Create a test client with the store dependency overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
