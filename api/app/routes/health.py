from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.core.config import get_settings
from app.db.session import async_transaction

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/healthz")
async def healthcheck() -> dict[str, str]:
    """
    Basic liveness check; returns OK if the application is running.
    """
    return {"status": "ok"}


@router.get("/api/health")
async def api_health() -> dict[str, Any]:
    """Liveness for the web client, with whether live store search is configured."""
    return {
        "status": "ok",
        "timestamp": _now(),
        "live_search": bool(get_settings().google_api_key),
    }


@router.get("/health")
async def health() -> JSONResponse:
    """
    Checks the store catalog database.
    Returns 200 if the check passes, 503 otherwise.
    """
    health_status: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": _now(),
        "checks": {},
    }

    try:
        async with async_transaction() as session:
            result = await session.execute(text("SELECT 1"))
            result.scalar()
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except Exception as e:
        logger.error("Database health check failed: %s", e)
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {e}",
        }
        health_status["status"] = "unhealthy"
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=health_status,
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content=health_status)


__all__ = ["router"]
