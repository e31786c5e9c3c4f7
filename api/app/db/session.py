from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import get_settings
from app.db.base import Base

logger = logging.getLogger(__name__)

_settings = get_settings()

_TRUTHY = {"1", "true", "yes", "on"}

def _is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY

def _adapt_url(raw_url: str) -> tuple[URL, dict[str, Any], dict[str, Any]]:
    """
    Return (async_url, connect_args, engine_kwargs) for the configured database.
    PostgreSQL is switched to asyncpg and pooled; SQLite uses aiosqlite as given.
    """
    url = make_url(raw_url)

    if url.get_backend_name() in {"postgresql", "postgres"}:
        query = dict(url.query)
        sslmode = query.pop("sslmode", None)
        pgbouncer = query.pop("pgbouncer", None)

        connect_args: dict[str, Any] = {}
        # Managed Postgres usually requires SSL. asyncpg needs ssl=True.
        if sslmode and sslmode.lower() in {"require", "verify-ca", "verify-full"}:
            connect_args["ssl"] = True
        # PgBouncer transaction pooling: disable prepared statements.
        if _is_truthy(pgbouncer):
            connect_args["statement_cache_size"] = 0

        engine_kwargs = {
            "pool_pre_ping": True,
            "pool_size": 10,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
        }
        return url.set(drivername="postgresql+asyncpg", query=query), connect_args, engine_kwargs

    if url.get_backend_name() == "sqlite" and url.drivername == "sqlite":
        url = url.set(drivername="sqlite+aiosqlite")
    return url, {}, {}

_async_url, _connect_args, _engine_kwargs = _adapt_url(_settings.database_url)

_async_engine = create_async_engine(
    _async_url,
    connect_args=_connect_args,
    future=True,
    **_engine_kwargs,
)

_async_session_factory = async_sessionmaker(
    bind=_async_engine,
    expire_on_commit=False,
    autoflush=False,
)

# --- Plain "hand-me-a-session" dependency (caller manages commit/rollback) ---

@asynccontextmanager
async def get_async_session() -> AsyncIterator[AsyncSession]:
    async with _async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()

# --- Transactional helper (auto-commit / rollback) ---

@asynccontextmanager
async def async_transaction() -> AsyncIterator[AsyncSession]:
    async with _async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

# --- FastAPI lifespan glue ---

async def init_models() -> None:
    """Create the catalog tables if they do not exist yet."""
    database = _async_url.database
    if _async_url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    async with _async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Catalog tables ready on %s", _async_url.render_as_string(hide_password=True))

async def dispose_engines() -> None:
    """Call on application shutdown to cleanly close pools."""
    await _async_engine.dispose()

__all__ = [
    "get_async_session",
    "async_transaction",
    "init_models",
    "dispose_engines",
    "_async_engine",
]
