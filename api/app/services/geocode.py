"""Postal code resolution: in-memory cache, then Google, then a static table."""
from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from app.clients.google import GoogleAPIError, address_component
from app.schemas.grocery import ResolvedLocation
from app.services.errors import GeocodeFailure

logger = logging.getLogger(__name__)


class Geocoder(Protocol):
    async def geocode(self, query: str, country: str = "US") -> Optional[Dict[str, Any]]:
        ...


def _loc(lat: float, lon: float, zipcode: str, city: str, state: str) -> ResolvedLocation:
    return ResolvedLocation(latitude=lat, longitude=lon, zipcode=zipcode, city=city, state=state)


# Offline fallback for well-known postal codes.
FALLBACK_LOCATIONS: Mapping[str, ResolvedLocation] = {
    "10001": _loc(40.7505, -73.9934, "10001", "New York", "NY"),
    "90210": _loc(34.0901, -118.4065, "90210", "Beverly Hills", "CA"),
    "60601": _loc(41.8781, -87.6298, "60601", "Chicago", "IL"),
    "33101": _loc(25.7617, -80.1918, "33101", "Miami", "FL"),
    "77001": _loc(29.7604, -95.3698, "77001", "Houston", "TX"),
    "85001": _loc(33.4484, -112.0740, "85001", "Phoenix", "AZ"),
    "19101": _loc(39.9526, -75.1652, "19101", "Philadelphia", "PA"),
    "92101": _loc(32.7157, -117.1611, "92101", "San Diego", "CA"),
    "78701": _loc(30.2672, -97.7431, "78701", "Austin", "TX"),
    "98101": _loc(47.6062, -122.3321, "98101", "Seattle", "WA"),
    "02101": _loc(42.3601, -71.0589, "02101", "Boston", "MA"),
    "30301": _loc(33.7490, -84.3880, "30301", "Atlanta", "GA"),
    "80201": _loc(39.7392, -104.9903, "80201", "Denver", "CO"),
    "97201": _loc(45.5152, -122.6784, "97201", "Portland", "OR"),
    "89101": _loc(36.1699, -115.1398, "89101", "Las Vegas", "NV"),
    "84101": _loc(40.7608, -111.8910, "84101", "Salt Lake City", "UT"),
    "37201": _loc(36.1627, -86.7816, "37201", "Nashville", "TN"),
    "32801": _loc(28.5383, -81.3792, "32801", "Orlando", "FL"),
    "28201": _loc(35.2271, -80.8431, "28201", "Charlotte", "NC"),
    "63101": _loc(38.6270, -90.1994, "63101", "St. Louis", "MO"),
    "63368": _loc(38.8108, -90.7143, "63368", "St. Peters", "MO"),
}


class GeocodeResolver:
    """Resolves postal codes to locations.

    Successful resolutions (external or static) are cached for the lifetime
    of the resolver in a bounded LRU map, so a postal code is sent to the
    external geocoder at most once while it stays cached.
    """

    def __init__(
        self,
        geocoder: Optional[Geocoder] = None,
        *,
        country: str = "US",
        cache_size: int = 1024,
        fallback: Mapping[str, ResolvedLocation] = FALLBACK_LOCATIONS,
    ) -> None:
        self._geocoder = geocoder
        self._country = country
        self._cache_size = cache_size
        self._fallback = fallback
        self._cache: "OrderedDict[str, ResolvedLocation]" = OrderedDict()

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def cached(self, postal_code: str) -> Optional[ResolvedLocation]:
        location = self._cache.get(postal_code)
        if location is not None:
            self._cache.move_to_end(postal_code)
        return location

    def _remember(self, postal_code: str, location: ResolvedLocation) -> None:
        self._cache[postal_code] = location
        self._cache.move_to_end(postal_code)
        while len(self._cache) > self._cache_size:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug("Evicted geocode cache entry %s", evicted)

    async def _geocode_external(self, postal_code: str) -> Optional[ResolvedLocation]:
        if self._geocoder is None:
            return None
        try:
            result = await self._geocoder.geocode(postal_code, self._country)
        except (GoogleAPIError, httpx.HTTPError) as exc:
            logger.warning("External geocoding failed for %s: %s", postal_code, exc)
            return None
        if not result:
            return None
        components = result.get("address_components", [])
        return ResolvedLocation(
            latitude=result["lat"],
            longitude=result["lng"],
            zipcode=postal_code,
            city=address_component(components, "locality"),
            state=address_component(components, "administrative_area_level_1", short=True),
        )

    async def resolve(self, postal_code: str) -> ResolvedLocation:
        cached = self.cached(postal_code)
        if cached is not None:
            logger.debug("Geocode cache hit for %s", postal_code)
            return cached

        location = await self._geocode_external(postal_code)
        if location is not None:
            logger.info("Geocoded %s via external geocoder", postal_code)
        else:
            location = self._fallback.get(postal_code)
            if location is None:
                raise GeocodeFailure(postal_code)
            logger.info("Geocoded %s via static fallback table", postal_code)

        self._remember(postal_code, location)
        return location


__all__ = ["FALLBACK_LOCATIONS", "GeocodeResolver", "Geocoder"]
