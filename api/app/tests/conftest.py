"""Test fixtures and configuration for Grocery Finder API tests."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def pytest_configure(config):
    """Set up environment variables before any test imports happen."""
    os.environ["ENVIRONMENT"] = "development"
    os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
    os.environ["REDIS_URL"] = "redis://localhost:6379/0"
    os.environ["CORS_ORIGINS"] = "http://localhost:5173"
    os.environ["GOOGLE_API_KEY"] = ""
    os.environ["RATE_LIMIT_ENABLED"] = "false"

    try:
        from app.core.config import get_settings
        get_settings.cache_clear()
    except ImportError:
        pass


from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.schemas.grocery import GroceryStore, ResolvedLocation


@pytest.fixture
async def async_engine():
    """Create an async SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def async_session(async_engine) -> AsyncIterator[AsyncSession]:
    """Create an async session for testing."""
    factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
def mock_session():
    """Session stand-in for routes that open their own session."""
    session = AsyncMock()
    session.execute = AsyncMock(return_value=MagicMock(scalar=MagicMock(return_value=1)))
    session.get = AsyncMock(return_value=None)
    return session


@pytest.fixture
def client(mock_session) -> Iterator[TestClient]:
    """Create a test client with mocked database sessions."""
    from app.core.config import get_settings
    get_settings.cache_clear()

    @asynccontextmanager
    async def mock_get_session():
        yield mock_session

    with patch("app.routes.health.async_transaction", mock_get_session):
        with patch("app.routes.grocery.get_async_session", mock_get_session):
            from app.main import app
            with TestClient(app) as test_client:
                yield test_client
            app.dependency_overrides.clear()


@pytest.fixture
def st_louis() -> ResolvedLocation:
    return ResolvedLocation(latitude=38.6270, longitude=-90.1994, zipcode="63101", city="St. Louis", state="MO")


def make_store(
    store_id: str = "store-1",
    name: str = "Test Market",
    *,
    distance: float = 1.0,
    price: int = 6,
    health: int = 6,
    rating: float = 4.0,
    categories: Optional[list[str]] = None,
    **extra: Any,
) -> GroceryStore:
    """Build a GroceryStore with sensible defaults."""
    return GroceryStore(
        id=store_id,
        name=name,
        address="1 Test St",
        latitude=38.6,
        longitude=-90.2,
        distance_miles=distance,
        price_score=price,
        health_score=health,
        rating=rating,
        categories=categories if categories is not None else ["Supermarket"],
        **extra,
    )


def make_place(
    place_id: str,
    name: str,
    types: Optional[list[str]] = None,
    *,
    lat: float = 38.63,
    lng: float = -90.20,
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw nearby-search result in the Google Places shape."""
    place: dict[str, Any] = {
        "place_id": place_id,
        "name": name,
        "types": types if types is not None else ["grocery_or_supermarket", "store"],
        "vicinity": "100 Market St",
        "geometry": {"location": {"lat": lat, "lng": lng}},
    }
    place.update(extra)
    return place


@pytest.fixture
def store_factory():
    return make_store


@pytest.fixture
def place_factory():
    return make_place
