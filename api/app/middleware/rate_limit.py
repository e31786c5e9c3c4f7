"""Per-client request limiting for the grocery API.

Every route shares one window (``RATE_LIMIT``, 100 requests per 15 minutes
by default) keyed on the caller's IP address. ``SlowAPIMiddleware`` applies
it without per-route decorators.
"""
from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too many requests, please try again later."


def limiter_storage_uri(settings: Settings) -> str:
    # Counters must be shared between workers once deployed.
    if settings.environment == "production":
        return str(settings.redis_url)
    return "memory://"


def get_limiter() -> Limiter:
    settings = get_settings()
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        storage_uri=limiter_storage_uri(settings),
        enabled=settings.rate_limit_enabled,
    )


def rate_limit_exceeded(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit hit by %s on %s (%s)", get_remote_address(request), request.url.path, exc.detail)
    return JSONResponse(status_code=429, content={"detail": TOO_MANY_REQUESTS})


__all__ = [
    "RateLimitExceeded",
    "SlowAPIMiddleware",
    "TOO_MANY_REQUESTS",
    "get_limiter",
    "limiter_storage_uri",
    "rate_limit_exceeded",
]
