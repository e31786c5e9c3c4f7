from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.dependencies import close_clients
from app.core.logging import configure_logging
from app.db.session import dispose_engines, init_models
from app.middleware import (
    RateLimitExceeded,
    SecurityHeadersMiddleware,
    SlowAPIMiddleware,
    get_limiter,
    rate_limit_exceeded,
)
from app.routes import grocery, health
from app.services.errors import GeocodeFailure, GroceryFinderError

configure_logging()
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    await init_models()
    logger.info("%s started (environment=%s)", settings.app_name, settings.environment)
    try:
        yield
    finally:
        await close_clients()
        await dispose_engines()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

# Rate limiting
limiter = get_limiter()
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health.router)
app.include_router(grocery.router)

app.add_middleware(SecurityHeadersMiddleware)

# Development: allow the local Vite dev server.
# Production: only the configured domains.
if settings.environment == "development":
    cors_origins = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]
    allow_credentials = True
else:
    cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
    allow_credentials = "*" not in cors_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request.state.request_id = request.headers.get("x-request-id", datetime.now(timezone.utc).isoformat())
    response = await call_next(request)
    response.headers["x-request-id"] = request.state.request_id
    return response


@app.exception_handler(GeocodeFailure)
async def geocode_failure_handler(_: Request, exc: GeocodeFailure) -> JSONResponse:
    logger.info("Rejected search: %s", exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(GroceryFinderError)
async def grocery_finder_error_handler(_: Request, exc: GroceryFinderError) -> JSONResponse:
    logger.error("Search failed: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Failed to search stores"})


@app.exception_handler(ValidationError)
async def validation_exception_handler(_: Request, exc: ValidationError) -> JSONResponse:
    """Handle Pydantic validation errors and return 422 with details."""
    return JSONResponse(
        status_code=422,
        content={"detail": exc.errors()},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


__all__ = ["app"]
