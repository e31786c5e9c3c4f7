"""Tests for security, CORS and rate limiting middleware."""
from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from starlette.requests import Request

from app.core.config import Settings
from app.middleware.rate_limit import TOO_MANY_REQUESTS, get_limiter, limiter_storage_uri, rate_limit_exceeded


class TestSecurityHeaders:
    """Tests for security headers middleware."""

    def test_basic_headers_present(self, client: TestClient):
        """Every response carries the fixed security headers."""
        response = client.get("/healthz")
        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("X-Frame-Options") == "DENY"
        assert response.headers.get("X-XSS-Protection") == "1; mode=block"
        assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_permissions_policy_allows_geolocation_only(self, client: TestClient):
        permissions = client.get("/healthz").headers["Permissions-Policy"]
        assert "geolocation=(self)" in permissions
        assert "camera=()" in permissions

    def test_csp_allows_google_maps(self, client: TestClient):
        csp = client.get("/healthz").headers["Content-Security-Policy"]
        assert "default-src 'self'" in csp
        assert "frame-ancestors 'none'" in csp
        assert "https://maps.googleapis.com" in csp

    def test_development_csp_allows_inline(self, client: TestClient):
        csp = client.get("/healthz").headers["Content-Security-Policy"]
        assert "'unsafe-inline'" in csp

    def test_headers_on_error_response(self, client: TestClient):
        """Even a 404 carries the security headers."""
        response = client.get("/nonexistent-endpoint")
        assert response.status_code == 404
        assert response.headers.get("X-Content-Type-Options") == "nosniff"

    def test_headers_on_post_request(self, client: TestClient):
        response = client.post("/api/grocery/search", json={"zipcode": "63101", "item": "milk"})
        assert response.headers.get("X-Frame-Options") == "DENY"

    def test_no_hsts_in_development(self, client: TestClient):
        assert "Strict-Transport-Security" not in client.get("/healthz").headers

    def test_hsts_and_strict_csp_in_production(self, client: TestClient):
        with patch("app.middleware.security.get_settings", return_value=Settings(environment="production")):
            response = client.get("/healthz")
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]
        assert "'unsafe-inline'" not in response.headers["Content-Security-Policy"]


class TestCors:
    """Tests for CORS in development."""

    def test_local_dev_origin_is_allowed(self, client: TestClient):
        response = client.get("/healthz", headers={"Origin": "http://localhost:5173"})
        assert response.headers.get("access-control-allow-origin") == "http://localhost:5173"

    def test_unknown_origin_is_not_allowed(self, client: TestClient):
        response = client.get("/healthz", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in response.headers


class TestRateLimiter:
    """Tests for limiter configuration."""

    def test_memory_storage_outside_production(self):
        settings = Settings(rate_limit="5/minute", rate_limit_enabled=True)
        with patch("app.middleware.rate_limit.get_settings", return_value=settings):
            with patch("app.middleware.rate_limit.Limiter") as limiter_cls:
                get_limiter()
        kwargs = limiter_cls.call_args.kwargs
        assert kwargs["storage_uri"] == "memory://"
        assert kwargs["default_limits"] == ["5/minute"]
        assert kwargs["enabled"] is True

    def test_redis_storage_in_production(self):
        settings = Settings(environment="production", redis_url="redis://cache:6379/0")
        with patch("app.middleware.rate_limit.get_settings", return_value=settings):
            with patch("app.middleware.rate_limit.Limiter") as limiter_cls:
                get_limiter()
        kwargs = limiter_cls.call_args.kwargs
        assert kwargs["storage_uri"] == "redis://cache:6379/0"
        assert kwargs["default_limits"] == ["100/15minutes"]

    def test_limit_can_be_disabled(self):
        with patch("app.middleware.rate_limit.get_settings", return_value=Settings(rate_limit_enabled=False)):
            assert get_limiter().enabled is False

    def test_storage_uri(self):
        assert limiter_storage_uri(Settings(environment="development")) == "memory://"
        production = Settings(environment="production", redis_url="redis://cache:6379/1")
        assert limiter_storage_uri(production) == "redis://cache:6379/1"

    def test_exceeded_handler_returns_json_429(self):
        request = Request(
            {
                "type": "http",
                "method": "GET",
                "scheme": "http",
                "server": ("testserver", 80),
                "path": "/api/grocery/search",
                "query_string": b"",
                "headers": [],
                "client": ("203.0.113.7", 50000),
            }
        )
        response = rate_limit_exceeded(request, MagicMock(detail="100 per 15 minute"))
        assert response.status_code == 429
        assert json.loads(response.body) == {"detail": TOO_MANY_REQUESTS}
