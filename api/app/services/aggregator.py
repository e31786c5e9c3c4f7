"""Nearby grocery candidate aggregation.

The places capability tags real-world retailers inconsistently, so one query
per place type is issued and the results merged. Candidates are deduplicated
by place id across all queries, passed through an exclusion filter and then
an inclusion filter, and converted to ``GroceryStore``.
"""
from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Protocol, Sequence

from app.core.config import DEFAULT_PLACE_TYPES
from app.schemas.grocery import WEEKDAYS, GroceryStore, ResolvedLocation, StoreHours
from app.services.categorizer import StoreCategorizer
from app.services.errors import ExternalQueryError
from app.services.geospatial import Coordinate, distance_miles, miles_to_meters
from app.services.store_profiles import CHAIN_PROFILES, ChainProfile, chain_keywords

logger = logging.getLogger(__name__)

DEFAULT_RATING = 3.5
MAX_RADIUS_METERS = 50_000

_EXCLUDED_NAME_RE = re.compile(
    r"casino|hotel|restaurant|\bbar\b|gas station|bookstore|\bmall\b|fashion|jewelry|\bbank\b"
)
_EXCLUDED_TYPES = frozenset(
    {
        "casino",
        "lodging",
        "restaurant",
        "bar",
        "gas_station",
        "book_store",
        "shopping_mall",
        "jewelry_store",
        "bank",
    }
)
_GROCERY_TYPES = frozenset({"grocery_or_supermarket", "supermarket"})
_GROCERY_WORDS = ("grocery", "supermarket", "supercenter")

RawCandidate = Dict[str, Any]


class PlacesSearch(Protocol):
    async def nearby_search(
        self, latitude: float, longitude: float, radius_meters: float, place_type: str
    ) -> List[RawCandidate]:
        ...


def is_excluded(name: str, types: Sequence[str]) -> bool:
    """True for establishments that are clearly not grocers."""
    name_lower = name.lower()
    if _EXCLUDED_NAME_RE.search(name_lower):
        return True
    if "pharmacy" in name_lower and "grocery" not in name_lower:
        return True
    return any(t in _EXCLUDED_TYPES for t in types)


def _food_with_market_name(name_lower: str, types: Sequence[str]) -> bool:
    if "food" not in types:
        return False
    return (
        "market" in name_lower
        or "grocery" in name_lower
        or "supermarket" in name_lower
        or ("fresh" in name_lower and ("market" in name_lower or "thyme" in name_lower))
    )


class CandidateAggregator:
    def __init__(
        self,
        places: Optional[PlacesSearch],
        *,
        place_types: Sequence[str] = DEFAULT_PLACE_TYPES,
        categorizer: Optional[StoreCategorizer] = None,
        profiles: tuple[ChainProfile, ...] = CHAIN_PROFILES,
        query_timeout: float = 10.0,
    ) -> None:
        self._places = places
        self._place_types = tuple(place_types)
        self._categorizer = categorizer or StoreCategorizer()
        self._chain_keywords = _GROCERY_WORDS + chain_keywords(profiles)
        self._query_timeout = query_timeout

    def is_grocery(self, name: str, types: Sequence[str]) -> bool:
        name_lower = name.lower()
        if any(t in _GROCERY_TYPES for t in types):
            return True
        if _food_with_market_name(name_lower, types):
            return True
        return any(keyword in name_lower for keyword in self._chain_keywords)

    def accepts(self, place: RawCandidate) -> bool:
        name = place.get("name") or ""
        types = place.get("types") or []
        if is_excluded(name, types):
            logger.debug("Excluded non-grocery place: %s (%s)", name, ", ".join(types))
            return False
        return self.is_grocery(name, types)

    async def _query(self, origin: ResolvedLocation, radius_meters: float, place_type: str) -> List[RawCandidate]:
        try:
            return await asyncio.wait_for(
                self._places.nearby_search(origin.latitude, origin.longitude, radius_meters, place_type),
                timeout=self._query_timeout,
            )
        except Exception as exc:
            raise ExternalQueryError(place_type, exc) from exc

    async def fetch_candidates(self, origin: ResolvedLocation, radius_miles: float) -> List[RawCandidate]:
        """Fan out one query per place type and merge the accepted candidates."""
        if self._places is None:
            logger.warning("No places client configured; skipping nearby search")
            return []

        radius_meters = min(miles_to_meters(radius_miles), MAX_RADIUS_METERS)
        results = await asyncio.gather(
            *(self._query(origin, radius_meters, place_type) for place_type in self._place_types),
            return_exceptions=True,
        )

        seen: set[str] = set()
        accepted: List[RawCandidate] = []
        for place_type, result in zip(self._place_types, results):
            if isinstance(result, BaseException):
                logger.warning("%s", result)
                continue
            before = len(accepted)
            for place in result:
                place_id = place.get("place_id")
                if not place_id or place_id in seen:
                    continue
                if not self.accepts(place):
                    continue
                seen.add(place_id)
                accepted.append(place)
            logger.info("Found %d unique %s places", len(accepted) - before, place_type)

        logger.info("Combined search found %d grocery candidates", len(accepted))
        return accepted

    def to_store(self, place: RawCandidate, origin: ResolvedLocation) -> GroceryStore:
        location = place["geometry"]["location"]
        lat, lng = float(location["lat"]), float(location["lng"])
        name = place.get("name") or "Unknown Store"
        category = self._categorizer.categorize(name, place.get("types") or [])
        rating = place.get("rating") or DEFAULT_RATING
        return GroceryStore(
            id=place["place_id"],
            name=name,
            address=place.get("formatted_address") or place.get("vicinity") or "",
            phone=place.get("formatted_phone_number"),
            website=place.get("website"),
            latitude=lat,
            longitude=lng,
            distance_miles=distance_miles(
                Coordinate(origin.latitude, origin.longitude), Coordinate(lat, lng)
            ),
            price_score=category.price_score,
            health_score=category.health_score,
            rating=min(5.0, max(1.0, float(rating))),
            categories=category.categories,
            hours=convert_opening_hours(place.get("opening_hours")),
        )

    async def aggregate(self, origin: ResolvedLocation, radius_miles: float) -> List[GroceryStore]:
        candidates = await self.fetch_candidates(origin, radius_miles)
        stores: List[GroceryStore] = []
        for place in candidates:
            try:
                stores.append(self.to_store(place, origin))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed place %s: %s", place.get("place_id"), exc)
        return stores


def convert_opening_hours(opening_hours: Optional[Dict[str, Any]]) -> StoreHours:
    """Transcribe per-weekday descriptions such as ``"Monday: 7:00 AM - 10:00 PM"``."""
    if not opening_hours:
        return StoreHours()
    descriptions = opening_hours.get("weekday_text") or opening_hours.get("weekdayDescriptions") or []
    hours: Dict[str, str] = {}
    for description in descriptions:
        for day in WEEKDAYS:
            prefix = day.capitalize()
            if description.startswith(prefix):
                hours[day] = description[len(prefix):].lstrip(":").strip()
                break
    return StoreHours(**hours)


__all__ = ["CandidateAggregator", "PlacesSearch", "convert_opening_hours", "is_excluded"]
