"""Security headers for every response."""
from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import get_settings

# The results page loads Google Maps tiles and scripts.
_MAPS_SOURCES = "https://maps.googleapis.com https://maps.gstatic.com"

_DEV_CSP = (
    "default-src 'self'",
    f"script-src 'self' 'unsafe-inline' 'unsafe-eval' {_MAPS_SOURCES}",
    "style-src 'self' 'unsafe-inline'",
    "img-src 'self' data: https:",
    "font-src 'self' data:",
    f"connect-src 'self' {_MAPS_SOURCES} ws://localhost:* http://localhost:*",
    "frame-ancestors 'none'",
)

_PROD_CSP = (
    "default-src 'self'",
    f"script-src 'self' {_MAPS_SOURCES}",
    "style-src 'self'",
    "img-src 'self' data: https:",
    "font-src 'self' data:",
    f"connect-src 'self' {_MAPS_SOURCES}",
    "frame-ancestors 'none'",
    "base-uri 'self'",
    "form-action 'self'",
)

# Geolocation stays available so the client can offer "use my location".
_PERMISSIONS = ("geolocation=(self)", "microphone=()", "camera=()", "payment=()", "usb=()")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds X-Content-Type-Options, X-Frame-Options, X-XSS-Protection,
    Content-Security-Policy, Referrer-Policy and Permissions-Policy headers,
    plus Strict-Transport-Security in production.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        production = get_settings().environment == "production"

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        if production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"

        response.headers["Content-Security-Policy"] = "; ".join(_PROD_CSP if production else _DEV_CSP)
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = ", ".join(_PERMISSIONS)
        return response


__all__ = ["SecurityHeadersMiddleware"]
