"""Request middleware: response security headers and per-client rate limits."""
from __future__ import annotations

from app.middleware.rate_limit import RateLimitExceeded, SlowAPIMiddleware, get_limiter, rate_limit_exceeded
from app.middleware.security import SecurityHeadersMiddleware

__all__ = ["RateLimitExceeded", "SecurityHeadersMiddleware", "SlowAPIMiddleware", "get_limiter", "rate_limit_exceeded"]
