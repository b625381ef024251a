"""
Test configuration and fixtures for the sequential ID tracker.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from main import app
from seqid_app.config import settings
from seqid_app.core.clock import Clock
from seqid_app.dependencies import get_clock, get_storage
from seqid_app.services.processor_service import ProcessorService
from seqid_app.storage.strategies import InMemoryBlobStorage

ADMIN_PASSWORD = "test-admin-secret"


class FixedClock(Clock):
    """Clock that only moves when told to"""
    
    def __init__(self, current: datetime):
        super().__init__()
        self.current = current
    
    def now(self) -> datetime:
        return self.current
    
    def advance(self, **kwargs) -> datetime:
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture(scope="function")
def clock():
    """2026-03-14 09:30 UTC, moved explicitly by tests"""
    return FixedClock(datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc))


@pytest.fixture(scope="function")
def storage():
    """Fresh in-memory storage for each test"""
    return InMemoryBlobStorage()


@pytest.fixture(scope="function")
def service(storage, clock):
    return ProcessorService(storage=storage, clock=clock)


@pytest.fixture(scope="function")
def admin_password(monkeypatch):
    """Configure the admin secret for the duration of a test"""
    monkeypatch.setattr(settings, "admin_password", SecretStr(ADMIN_PASSWORD))
    return ADMIN_PASSWORD


@pytest.fixture(scope="function")
def client(storage, clock):
    """
    Create a test client with storage and clock overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_clock] = lambda: clock
    
    with TestClient(app) as test_client:
        yield test_client
    
    # Clean up overrides
    app.dependency_overrides.clear()
