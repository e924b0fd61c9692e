"""
Integration tests for API endpoints.

Tests the full HTTP request/response cycle against an in-memory store.
"""
import asyncio
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from land_measure.main import app
from land_measure.api.dependencies import get_measurement_store
from land_measure.domain.errors import PersistenceError
from land_measure.infrastructure.measurement_store import (
    InMemoryMeasurementStore,
    MeasurementStore,
)


# ============================================================
# Health Check Tests
# ============================================================

class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, test_client):
        """Root endpoint should return healthy status."""
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "service" in data
        assert "version" in data

    def test_health_endpoint(self, test_client):
        """Health endpoint should return healthy status."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"


# ============================================================
# Calculate Area Endpoint Tests
# ============================================================

class TestCalculateAreaEndpoint:
    """Tests for POST /api/calculate-area."""

    def test_square(self, test_client, square_ring):
        response = test_client.post("/api/calculate-area", json={"coordinates": square_ring})

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"areaHectares", "perimeterMeters"}
        assert data["areaHectares"] == pytest.approx(123.9, rel=0.02)
        assert data["perimeterMeters"] == pytest.approx(4452.8, abs=2.0)

    @pytest.mark.parametrize("body", [
        {},
        {"coordinates": None},
        {"coordinates": "0,0 0,1 1,1 0,0"},
        {"coordinates": {"lon": 0, "lat": 0}},
        {"coordinates": [[0, 0], [0, 1], [0, 0]]},
        {"coordinates": [[0, 0], [0, 1], ["a", "b"], [0, 0]]},
    ])
    def test_invalid_ring_returns_400(self, test_client, memory_store, body):
        response = test_client.post("/api/calculate-area", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"
        assert len(memory_store) == 0

    def test_huge_integer_coordinate_returns_400(self, test_client, memory_store):
        body = '{"coordinates": [[0, 0], [1' + "0" * 400 + ', 1], [1, 1], [0, 0]]}'

        response = test_client.post(
            "/api/calculate-area",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "index 1" in response.json()["detail"]
        assert len(memory_store) == 0

    def test_non_finite_coordinates_return_500(self, test_client, memory_store):
        body = '{"coordinates": [[0, 0], [NaN, 1], [1, 1], [0, 0]]}'

        response = test_client.post(
            "/api/calculate-area",
            content=body,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "An error occurred during calculation"
        assert len(memory_store) == 0

    def test_store_failure_returns_503(self, test_client, square_ring):
        failing = AsyncMock(spec=MeasurementStore)
        failing.append.side_effect = PersistenceError("write conflict")
        app.dependency_overrides[get_measurement_store] = lambda: failing

        response = test_client.post("/api/calculate-area", json={"coordinates": square_ring})

        assert response.status_code == 503
        assert "write conflict" in response.json()["detail"]


# ============================================================
# History Endpoint Tests
# ============================================================

class TestHistoryEndpoint:
    """Tests for GET /api/history."""

    def test_empty_history(self, test_client):
        response = test_client.get("/api/history")

        assert response.status_code == 200
        assert response.json() == []

    def test_history_after_calculations(self, test_client, square_ring, triangle_ring):
        for ring in [square_ring] * 6 + [triangle_ring] * 6:
            assert test_client.post("/api/calculate-area", json={"coordinates": ring}).status_code == 200

        response = test_client.get("/api/history")

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 10
        assert [item["id"] for item in data] == list(range(12, 2, -1))
        first = data[0]
        assert set(first) == {"id", "coordinates", "areaHectares", "perimeterMeters", "timestamp"}
        assert first["coordinates"] == [triangle_ring]

    def test_read_failure_returns_empty_list(self, test_client):
        failing = AsyncMock(spec=MeasurementStore)
        failing.recent.side_effect = PersistenceError("connection reset")
        app.dependency_overrides[get_measurement_store] = lambda: failing

        response = test_client.get("/api/history")

        assert response.status_code == 503
        data = response.json()
        assert data["measurements"] == []
        assert data["error"] == "Failed to fetch history"


# ============================================================
# Lifespan Tests
# ============================================================

class TestLifespan:
    """Tests for store setup and teardown."""

    def test_store_connected_on_startup(self):
        with TestClient(app) as client:
            store = app.state.measurement_store
            assert isinstance(store, InMemoryMeasurementStore)

            response = client.get("/api/history")
            assert response.status_code == 200

        # Closed on shutdown
        with pytest.raises(PersistenceError):
            asyncio.run(store.recent(10))


# ============================================================
# Response Format Tests
# ============================================================

class TestResponseFormats:
    """Tests for API response formats."""

    def test_openapi_schema_available(self, test_client):
        """OpenAPI schema should be available."""
        response = test_client.get("/openapi.json")

        assert response.status_code == 200
        data = response.json()
        assert "/api/calculate-area" in data["paths"]
        assert "/api/history" in data["paths"]

    def test_rate_limit_documented_in_openapi(self, test_client):
        data = test_client.get("/openapi.json").json()

        assert "429" in data["paths"]["/api/calculate-area"]["post"]["responses"]

    def test_cors_headers_present(self, test_client):
        response = test_client.options(
            "/api/calculate-area",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            }
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers

    def test_cors_headers_on_error_responses(self, test_client):
        """Error bodies must stay readable by cross-origin map clients."""
        response = test_client.post(
            "/api/calculate-area",
            json={"coordinates": [[0, 0]]},
            headers={"Origin": "http://example.com"},
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" in response.headers


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
