from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Protocol

import httpx

from app.clients.google import GoogleAPIError, address_component
from app.schemas.grocery import ZipcodeSuggestion

logger = logging.getLogger(__name__)

MAX_GOOGLE_PREDICTIONS = 8
MAX_FALLBACK_SUGGESTIONS = 6

_ZIPCODE_RE = re.compile(r"\b\d{5}(-\d{4})?\b")

POPULAR_ZIPCODES: tuple[ZipcodeSuggestion, ...] = (
    ZipcodeSuggestion(zipcode="10001", city="New York", state="NY", area="Manhattan"),
    ZipcodeSuggestion(zipcode="90210", city="Beverly Hills", state="CA"),
    ZipcodeSuggestion(zipcode="60601", city="Chicago", state="IL", area="Loop"),
    ZipcodeSuggestion(zipcode="33101", city="Miami", state="FL", area="Downtown"),
    ZipcodeSuggestion(zipcode="77001", city="Houston", state="TX", area="Downtown"),
    ZipcodeSuggestion(zipcode="85001", city="Phoenix", state="AZ", area="Downtown"),
    ZipcodeSuggestion(zipcode="19101", city="Philadelphia", state="PA", area="Center City"),
    ZipcodeSuggestion(zipcode="02101", city="Boston", state="MA", area="Downtown"),
    ZipcodeSuggestion(zipcode="98101", city="Seattle", state="WA", area="Downtown"),
    ZipcodeSuggestion(zipcode="30301", city="Atlanta", state="GA", area="Downtown"),
    ZipcodeSuggestion(zipcode="63101", city="St. Louis", state="MO", area="Downtown"),
    ZipcodeSuggestion(zipcode="63376", city="St. Charles", state="MO"),
)


class PlacesAutocomplete(Protocol):
    async def autocomplete(self, query: str, *, types: str, country: str = "us") -> List[Dict[str, Any]]:
        ...

    async def place_details(self, place_id: str, fields: str) -> Optional[Dict[str, Any]]:
        ...


def zipcode_from_prediction(prediction: Dict[str, Any]) -> Optional[str]:
    match = _ZIPCODE_RE.search(prediction.get("description") or "")
    return match.group(0) if match else None


async def _suggestion_for(client: PlacesAutocomplete, prediction: Dict[str, Any]) -> Optional[ZipcodeSuggestion]:
    zipcode = zipcode_from_prediction(prediction)
    place_id = prediction.get("place_id")
    if not zipcode or not place_id:
        return None
    try:
        details = await client.place_details(place_id, "address_components")
    except (GoogleAPIError, httpx.HTTPError) as exc:
        logger.warning("Place details failed for %s: %s", place_id, exc)
        return None
    if not details:
        return None
    components = details.get("address_components", [])
    return ZipcodeSuggestion(
        zipcode=zipcode,
        city=address_component(components, "locality") or "",
        state=address_component(components, "administrative_area_level_1", short=True) or "",
        area=address_component(components, "sublocality") or address_component(components, "neighborhood"),
    )


async def _google_suggestions(client: PlacesAutocomplete, query: str) -> List[ZipcodeSuggestion]:
    try:
        predictions = await client.autocomplete(query, types="postal_code", country="us")
    except (GoogleAPIError, httpx.HTTPError) as exc:
        logger.warning("Zipcode autocomplete failed for %r: %s", query, exc)
        return []
    suggestions = await asyncio.gather(
        *(_suggestion_for(client, prediction) for prediction in predictions[:MAX_GOOGLE_PREDICTIONS])
    )
    return [suggestion for suggestion in suggestions if suggestion is not None]


def fallback_suggestions(query: str) -> List[ZipcodeSuggestion]:
    normalized = query.lower().strip()
    matches = [
        entry
        for entry in POPULAR_ZIPCODES
        if entry.zipcode.startswith(query)
        or normalized in entry.city.lower()
        or entry.state.lower() == normalized
        or (entry.area is not None and normalized in entry.area.lower())
    ]
    return matches[:MAX_FALLBACK_SUGGESTIONS]


async def suggest_zipcodes(query: str, client: Optional[PlacesAutocomplete] = None) -> List[ZipcodeSuggestion]:
    """Postal-code suggestions for a partial query, from Google when possible."""
    if not query:
        return []
    if client is not None:
        suggestions = await _google_suggestions(client, query)
        if suggestions:
            logger.info("Found %d zipcodes from Google for %r", len(suggestions), query)
            return suggestions
    logger.info("Using popular zipcode list for %r", query)
    return fallback_suggestions(query)


__all__ = ["POPULAR_ZIPCODES", "fallback_suggestions", "suggest_zipcodes", "zipcode_from_prediction"]
