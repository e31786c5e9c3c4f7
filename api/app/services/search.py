from __future__ import annotations

import logging
import re
from typing import List

from app.schemas.grocery import GroceryStore, ResolvedLocation, SearchResult, StoreHours
from app.services.aggregator import CandidateAggregator
from app.services.geocode import GeocodeResolver
from app.services.geospatial import Coordinate, distance_miles
from app.services.recommendations import select_recommendations

logger = logging.getLogger(__name__)

_POSTAL_CODE_RE = re.compile(r"\b\d{5}\b")

# (id, name, address, lat offset, lon offset, price, health, rating, categories, weekday hours, sunday hours, phone, website)
_SAMPLE_STORES = (
    (
        "mock-1", "Fresh Market", "123 Main St", 0.001, 0.001, 7, 8, 4.5,
        ["Grocery", "Organic", "Fresh Produce"],
        "7:00 AM - 10:00 PM", "8:00 AM - 9:00 PM", "(555) 123-4567", "https://freshmarket.com",
    ),
    (
        "mock-2", "Budget Grocery", "456 Oak Ave", -0.002, 0.002, 9, 6, 4.0,
        ["Grocery", "Discount", "Budget-Friendly"],
        "6:00 AM - 11:00 PM", "7:00 AM - 10:00 PM", "(555) 987-6543", "https://budgetgrocery.com",
    ),
    (
        "mock-3", "Premium Foods", "789 Pine Rd", 0.003, -0.001, 5, 9, 4.8,
        ["Grocery", "Premium", "Organic", "Natural Foods"],
        "8:00 AM - 9:00 PM", "9:00 AM - 8:00 PM", "(555) 456-7890", "https://premiumfoods.com",
    ),
)


def extract_postal_code(location: str) -> str:
    """Use the first 5-digit token of a free-text location, else the whole string."""
    match = _POSTAL_CODE_RE.search(location)
    return match.group(0) if match else location.strip()


def build_fallback_stores(origin: ResolvedLocation) -> List[GroceryStore]:
    """Sample stores placed around ``origin`` for when no real stores were found."""
    here = Coordinate(origin.latitude, origin.longitude)
    stores: List[GroceryStore] = []
    for (
        store_id, name, address, dlat, dlon, price, health, rating,
        categories, weekday_hours, sunday_hours, phone, website,
    ) in _SAMPLE_STORES:
        lat, lon = origin.latitude + dlat, origin.longitude + dlon
        hours = StoreHours.every_day(weekday_hours).model_copy(update={"sunday": sunday_hours})
        stores.append(
            GroceryStore(
                id=store_id,
                name=name,
                address=address,
                phone=phone,
                website=website,
                latitude=lat,
                longitude=lon,
                distance_miles=distance_miles(here, Coordinate(lat, lon)),
                price_score=price,
                health_score=health,
                rating=rating,
                categories=list(categories),
                hours=hours,
            )
        )
    return stores


class StoreSearchService:
    def __init__(
        self,
        resolver: GeocodeResolver,
        aggregator: CandidateAggregator,
        *,
        radius_miles: float,
    ) -> None:
        self.resolver = resolver
        self.aggregator = aggregator
        self.radius_miles = radius_miles

    async def search_stores(self, postal_code: str, item: str) -> SearchResult:
        """Resolve, aggregate and recommend.

        Raises ``GeocodeFailure`` when the postal code cannot be resolved.
        """
        location = await self.resolver.resolve(postal_code)
        logger.info("User location: %s, %s", location.latitude, location.longitude)

        stores = await self.aggregator.aggregate(location, self.radius_miles)
        used_fallback = not stores
        if used_fallback:
            logger.warning("No stores found near %s, using sample stores", postal_code)
            stores = build_fallback_stores(location)

        for i, store in enumerate(stores, 1):
            logger.debug("  %d. %s: %s miles away", i, store.name, store.distance_miles)

        picks = select_recommendations(stores)
        return SearchResult(
            shortest=picks.shortest,
            healthiest=picks.healthiest,
            budget_friendly=picks.budget_friendly,
            searched_item=item,
            user_location=location,
            used_fallback=used_fallback,
        )


__all__ = ["StoreSearchService", "build_fallback_stores", "extract_postal_code"]
