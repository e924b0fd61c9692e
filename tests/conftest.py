"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample rings
- In-memory measurement store
- Measurement service with a deterministic clock
- FastAPI test client wired to the in-memory store
"""
import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from land_measure.main import app
from land_measure.api.dependencies import get_measurement_store
from land_measure.api.rate_limit import limiter
from land_measure.infrastructure.measurement_store import InMemoryMeasurementStore
from land_measure.services.application.measurement_service import MeasurementService


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def square_ring() -> list[list[float]]:
    """0.01 degree square at the origin, closed (lon, lat)."""
    return [
        [0.0, 0.0],
        [0.0, 0.01],
        [0.01, 0.01],
        [0.01, 0.0],
        [0.0, 0.0],
    ]


@pytest.fixture
def triangle_ring() -> list[list[float]]:
    """One degree right triangle at the origin, closed (lon, lat)."""
    return [
        [0.0, 0.0],
        [0.0, 1.0],
        [1.0, 0.0],
        [0.0, 0.0],
    ]


@pytest.fixture
def field_ring() -> list[list[float]]:
    """Small field in the Western Cape, closed (lon, lat)."""
    return [
        [18.8255, -32.3285],
        [18.8270, -32.3285],
        [18.8270, -32.3275],
        [18.8255, -32.3275],
        [18.8255, -32.3285],
    ]


# ============================================================
# Store / Service Fixtures
# ============================================================

class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def memory_store() -> InMemoryMeasurementStore:
    return InMemoryMeasurementStore()


@pytest.fixture
def measurement_service(memory_store, clock) -> MeasurementService:
    return MeasurementService(store=memory_store, clock=clock)


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client(memory_store) -> TestClient:
    """Create a synchronous test client backed by an in-memory store."""
    limiter.reset()
    app.dependency_overrides[get_measurement_store] = lambda: memory_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
