from __future__ import annotations

import asyncio
import logging
import sys

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import configure_logging
from app.db.models import CatalogStore
from app.db.session import dispose_engines, get_async_session, init_models
from app.schemas.grocery import WEEKDAYS
from app.services.categorizer import categorize_store

logger = logging.getLogger(__name__)


def _hours(default: str, **overrides: str) -> dict[str, str]:
    return {day: overrides.get(day, default) for day in WEEKDAYS}


SAMPLE_STORES: list[dict] = [
    # New York (10001)
    dict(
        id="nyc-whole-foods-1", name="Whole Foods Market",
        address="95 E Houston St, New York, NY 10002", phone="(212) 420-1320",
        website="https://wholefoodsmarket.com", latitude=40.7223, longitude=-73.9928,
        rating=4.5,
        hours=_hours("8:00 AM - 10:00 PM"),
    ),
    dict(
        id="nyc-trader-joes-1", name="Trader Joe's",
        address="142 E 14th St, New York, NY 10003", phone="(212) 529-4612",
        website="https://traderjoes.com", latitude=40.7332, longitude=-73.9898,
        rating=4.3,
        hours=_hours("8:00 AM - 10:00 PM"),
    ),
    # Los Angeles (90210)
    dict(
        id="la-bristol-farms-1", name="Bristol Farms",
        address="9039 Beverly Blvd, West Hollywood, CA 90048", phone="(310) 278-1534",
        website="https://bristolfarms.com", latitude=34.0759, longitude=-118.3776,
        rating=4.4,
        hours=_hours("7:00 AM - 10:00 PM"),
    ),
    dict(
        id="la-ralphs-1", name="Ralphs",
        address="9616 Little Santa Monica Blvd, Beverly Hills, CA 90210", phone="(310) 274-6645",
        website="https://ralphs.com", latitude=34.0703, longitude=-118.4089,
        rating=4.1,
        hours=_hours("6:00 AM - 12:00 AM"),
    ),
    # Chicago (60601)
    dict(
        id="chi-jewel-osco-1", name="Jewel-Osco",
        address="1224 S Wabash Ave, Chicago, IL 60605", phone="(312) 322-3851",
        website="https://jewelosco.com", latitude=41.8654, longitude=-87.6258,
        rating=3.8,
        hours=_hours("6:00 AM - 12:00 AM", sunday="6:00 AM - 11:00 PM"),
    ),
    dict(
        id="chi-aldi-1", name="ALDI",
        address="2570 N Clybourn Ave, Chicago, IL 60614", phone="(855) 955-2534",
        website="https://aldi.us", latitude=41.9290, longitude=-87.6574,
        rating=4.2,
        hours=_hours("9:00 AM - 8:00 PM"),
    ),
    # Houston (77001)
    dict(
        id="hou-heb-1", name="H-E-B",
        address="1701 W Alabama St, Houston, TX 77006", phone="(713) 654-8441",
        website="https://heb.com", latitude=29.7370, longitude=-95.3990,
        rating=4.6,
        hours=_hours("6:00 AM - 12:00 AM", friday="6:00 AM - 1:00 AM", saturday="6:00 AM - 1:00 AM"),
    ),
    dict(
        id="hou-kroger-1", name="Kroger",
        address="2120 W Gray St, Houston, TX 77019", phone="(713) 529-0800",
        website="https://kroger.com", latitude=29.7493, longitude=-95.4042,
        rating=4.0,
        hours=_hours("6:00 AM - 12:00 AM", friday="6:00 AM - 1:00 AM", saturday="6:00 AM - 1:00 AM"),
    ),
]


def catalog_row(store: dict) -> CatalogStore:
    """Build a catalog row whose scores and labels come from the chain table."""
    category = categorize_store(store["name"])
    return CatalogStore(
        **store,
        price_score=category.price_score,
        health_score=category.health_score,
        categories=category.categories,
    )


async def seed(session: AsyncSession, *, reset: bool = False) -> int:
    """Insert the sample catalog. Returns the number of stores inserted."""
    if reset:
        await session.execute(delete(CatalogStore))
    else:
        existing = await session.scalar(select(func.count()).select_from(CatalogStore))
        if existing:
            logger.info("Catalog already has %d stores, skipping seed", existing)
            return 0

    session.add_all(catalog_row(store) for store in SAMPLE_STORES)
    await session.commit()
    logger.info("Seeded %d catalog stores", len(SAMPLE_STORES))
    return len(SAMPLE_STORES)


async def main(reset: bool = False) -> None:
    await init_models()
    try:
        async with get_async_session() as session:
            await seed(session, reset=reset)
    finally:
        await dispose_engines()


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main(reset="--reset" in sys.argv[1:]))
