"""Async client for the Google Geocoding and Places web services."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from httpx import AsyncClient

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"

_OK_STATUSES = {"OK", "ZERO_RESULTS"}


class GoogleAPIError(RuntimeError):
    """Raised when a Google web service returns a non-successful response."""

    def __init__(self, endpoint: str, status: str, message: Optional[str] = None) -> None:
        super().__init__(f"{endpoint} failed: status={status}" + (f", error_message={message}" if message else ""))
        self.endpoint = endpoint
        self.status = status


class GoogleMapsClient:
    def __init__(
        self,
        api_key: str,
        *,
        client: Optional[AsyncClient] = None,
        geocode_timeout: float = 5.0,
        places_timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.client = client or AsyncClient(timeout=places_timeout)
        self.geocode_timeout = geocode_timeout
        self.places_timeout = places_timeout

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get_json(self, endpoint: str, url: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
        response = await self.client.get(url, params={**params, "key": self.api_key}, timeout=timeout)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("%s returned a non-JSON body: %s", endpoint, exc)
            raise GoogleAPIError(endpoint, "INVALID_RESPONSE") from exc
        if not isinstance(payload, dict):
            raise GoogleAPIError(endpoint, "INVALID_RESPONSE")
        status = payload.get("status")
        if status not in _OK_STATUSES:
            logger.error("%s failed: status=%s, error_message=%s", endpoint, status, payload.get("error_message"))
            raise GoogleAPIError(endpoint, str(status), payload.get("error_message"))
        return payload

    async def geocode(self, query: str, country: str = "US") -> Optional[Dict[str, Any]]:
        """Geocode ``query`` within ``country``.

        Returns ``{"lat", "lng", "address_components"}`` for the first match,
        or ``None`` when nothing matched.
        """
        payload = await self._get_json(
            "geocode",
            GEOCODE_URL,
            {"address": query, "components": f"country:{country}"},
            self.geocode_timeout,
        )
        results = payload.get("results") or []
        if not results:
            return None
        first = results[0]
        location = first.get("geometry", {}).get("location", {})
        if "lat" not in location or "lng" not in location:
            return None
        return {
            "lat": float(location["lat"]),
            "lng": float(location["lng"]),
            "address_components": first.get("address_components", []),
        }

    async def nearby_search(
        self,
        latitude: float,
        longitude: float,
        radius_meters: float,
        place_type: str,
    ) -> List[Dict[str, Any]]:
        payload = await self._get_json(
            "nearby_search",
            f"{PLACES_BASE_URL}/nearbysearch/json",
            {
                "location": f"{latitude},{longitude}",
                "radius": int(radius_meters),
                "type": place_type,
                "language": "en",
            },
            self.places_timeout,
        )
        return payload.get("results") or []

    async def autocomplete(self, query: str, *, types: str, country: str = "us") -> List[Dict[str, Any]]:
        payload = await self._get_json(
            "autocomplete",
            f"{PLACES_BASE_URL}/autocomplete/json",
            {"input": query, "types": types, "components": f"country:{country}"},
            self.geocode_timeout,
        )
        return payload.get("predictions") or []

    async def place_details(self, place_id: str, fields: str) -> Optional[Dict[str, Any]]:
        payload = await self._get_json(
            "place_details",
            f"{PLACES_BASE_URL}/details/json",
            {"place_id": place_id, "fields": fields},
            self.geocode_timeout,
        )
        return payload.get("result") or None


def address_component(components: List[Dict[str, Any]], component_type: str, *, short: bool = False) -> Optional[str]:
    """Return the long (or short) name of the first component tagged ``component_type``."""
    key = "short_name" if short else "long_name"
    for component in components:
        if component_type in component.get("types", []):
            return component.get(key)
    return None


__all__ = ["GoogleAPIError", "GoogleMapsClient", "address_component"]
