"""Street-address autocomplete and lookup through Google Places."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from app.clients.google import GoogleAPIError, address_component
from app.schemas.grocery import AddressDetails, AddressSuggestion

logger = logging.getLogger(__name__)

MAX_ADDRESS_PREDICTIONS = 8
DETAIL_FIELDS = "address_components,formatted_address,geometry"


class AddressLookup(Protocol):
    async def autocomplete(self, query: str, *, types: str, country: str = "us") -> List[Dict[str, Any]]:
        ...

    async def place_details(self, place_id: str, fields: str) -> Optional[Dict[str, Any]]:
        ...


def suggestion_from_prediction(prediction: Dict[str, Any]) -> AddressSuggestion:
    formatting = prediction.get("structured_formatting") or {}
    description = prediction.get("description") or ""
    return AddressSuggestion(
        place_id=prediction.get("place_id") or "",
        description=description,
        main_text=formatting.get("main_text") or description,
        secondary_text=formatting.get("secondary_text") or "",
        types=list(prediction.get("types") or []),
    )


def details_from_place(place: Dict[str, Any]) -> AddressDetails:
    """Flatten a Place Details result into a street address plus locality.

    The street line is "<number> <route>"; places without one (a park, a
    whole zip code) use the formatted address instead.
    """
    components = place.get("address_components") or []
    street = " ".join(
        part
        for part in (address_component(components, "street_number"), address_component(components, "route"))
        if part
    )
    location = (place.get("geometry") or {}).get("location") or {}
    return AddressDetails(
        address=street or place.get("formatted_address") or "",
        city=address_component(components, "locality") or "",
        state=address_component(components, "administrative_area_level_1", short=True) or "",
        zipcode=address_component(components, "postal_code") or "",
        country=address_component(components, "country", short=True) or "",
        latitude=float(location.get("lat") or 0.0),
        longitude=float(location.get("lng") or 0.0),
    )


async def search_addresses(query: str, client: Optional[AddressLookup] = None) -> List[AddressSuggestion]:
    """US street-address suggestions for a partial query. Empty when Google is unavailable."""
    if client is None:
        logger.warning("Address autocomplete requested without a Google client")
        return []
    try:
        predictions = await client.autocomplete(query, types="address", country="us")
    except (GoogleAPIError, httpx.HTTPError) as exc:
        logger.error("Address autocomplete failed for %r: %s", query, exc)
        return []
    suggestions = [suggestion_from_prediction(p) for p in predictions[:MAX_ADDRESS_PREDICTIONS]]
    logger.info("Found %d address suggestions for %r", len(suggestions), query)
    return suggestions


async def get_address_details(place_id: str, client: Optional[AddressLookup] = None) -> Optional[AddressDetails]:
    if client is None:
        logger.warning("Address details requested without a Google client")
        return None
    try:
        place = await client.place_details(place_id, DETAIL_FIELDS)
    except (GoogleAPIError, httpx.HTTPError) as exc:
        logger.error("Place details failed for %s: %s", place_id, exc)
        return None
    if not place:
        return None
    return details_from_place(place)


__all__ = [
    "DETAIL_FIELDS",
    "details_from_place",
    "get_address_details",
    "search_addresses",
    "suggestion_from_prediction",
]
