"""Read access to the pre-seeded store catalog.

The catalog is not on the live search path. It backs the store-detail
endpoint and can list seeded stores near a location.
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models import CatalogStore
from app.schemas.grocery import GroceryStore, ResolvedLocation, StoreHours
from app.services.geospatial import Coordinate, distance_miles


def _to_store(row: CatalogStore, distance: float = 0.0) -> GroceryStore:
    return GroceryStore(
        id=row.id,
        name=row.name,
        address=row.address,
        phone=row.phone,
        website=row.website,
        latitude=row.latitude,
        longitude=row.longitude,
        distance_miles=distance,
        price_score=row.price_score,
        health_score=row.health_score,
        rating=row.rating,
        categories=list(row.categories or []),
        hours=StoreHours(**(row.hours or {})),
    )


async def get_catalog_store(session: AsyncSession, store_id: str) -> Optional[GroceryStore]:
    row = await session.get(CatalogStore, store_id)
    if row is None:
        return None
    return _to_store(row)


async def list_catalog_stores(
    session: AsyncSession,
    origin: ResolvedLocation,
    radius_miles: Optional[float] = None,
) -> List[GroceryStore]:
    """Catalog stores ordered by distance from ``origin``, optionally within ``radius_miles``."""
    rows = (await session.execute(select(CatalogStore).order_by(CatalogStore.name))).scalars().all()
    here = Coordinate(origin.latitude, origin.longitude)
    stores = []
    for row in rows:
        miles = distance_miles(here, Coordinate(row.latitude, row.longitude))
        if radius_miles is not None and miles > radius_miles:
            continue
        stores.append(_to_store(row, miles))
    stores.sort(key=lambda store: store.distance_miles)
    return stores


__all__ = ["get_catalog_store", "list_catalog_stores"]
