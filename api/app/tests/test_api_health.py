"""Tests for health check API endpoints."""
from __future__ import annotations

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient


class TestHealthzEndpoint:
    """Tests for GET /healthz endpoint (liveness check)."""

    def test_healthz_returns_ok(self, client: TestClient):
        """Healthz endpoint should return status ok."""
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestApiHealthEndpoint:
    """Tests for GET /api/health."""

    def test_reports_live_search_disabled_without_key(self, client: TestClient):
        """Without a Google key the service runs on fallbacks only."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["live_search"] is False
        assert "T" in data["timestamp"]


class TestHealthEndpoint:
    """Tests for GET /health endpoint (database check)."""

    def test_health_healthy_returns_200(self, client: TestClient):
        """Health endpoint should return 200 when the database answers."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"]["status"] == "healthy"

    def test_health_db_failure_returns_503(self, client: TestClient):
        """Health endpoint should return 503 when DB check fails."""
        with patch("app.routes.health.async_transaction") as mock_tx:
            mock_tx.return_value.__aenter__.side_effect = Exception("DB connection failed")
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["checks"]["database"]["status"] == "unhealthy"
        assert "DB connection failed" in data["checks"]["database"]["message"]

    def test_health_query_failure_returns_503(self, client: TestClient):
        """A failing SELECT is also unhealthy."""
        with patch("app.routes.health.async_transaction") as mock_tx:
            mock_session = AsyncMock()
            mock_session.execute.side_effect = Exception("no such table")
            mock_tx.return_value.__aenter__.return_value = mock_session
            mock_tx.return_value.__aexit__.return_value = False
            response = client.get("/health")

        assert response.status_code == 503


class TestRequestId:
    """Tests for the request-id middleware."""

    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/healthz", headers={"x-request-id": "abc-123"})
        assert response.headers["x-request-id"] == "abc-123"

    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/healthz")
        assert response.headers.get("x-request-id")
