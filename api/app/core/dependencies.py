"""Process-wide engine components, built once and injected with ``Depends``.

Tests replace these through ``app.dependency_overrides``.
"""
from __future__ import annotations

import functools
import logging
from typing import Optional

from app.clients.google import GoogleMapsClient
from app.core.config import get_settings
from app.services.aggregator import CandidateAggregator
from app.services.availability import ItemAvailabilityEstimator
from app.services.geocode import GeocodeResolver
from app.services.search import StoreSearchService

logger = logging.getLogger(__name__)


@functools.lru_cache()
def get_google_client() -> Optional[GoogleMapsClient]:
    settings = get_settings()
    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY is not set; geocoding uses the static table and nearby search is disabled")
        return None
    return GoogleMapsClient(
        settings.google_api_key,
        geocode_timeout=settings.geocode_timeout_seconds,
        places_timeout=settings.places_timeout_seconds,
    )


@functools.lru_cache()
def get_geocode_resolver() -> GeocodeResolver:
    settings = get_settings()
    return GeocodeResolver(
        get_google_client(),
        country=settings.country_restriction,
        cache_size=settings.geocode_cache_size,
    )


@functools.lru_cache()
def get_aggregator() -> CandidateAggregator:
    settings = get_settings()
    return CandidateAggregator(
        get_google_client(),
        place_types=settings.place_types,
        query_timeout=settings.places_timeout_seconds,
    )


def get_search_service() -> StoreSearchService:
    return StoreSearchService(
        get_geocode_resolver(),
        get_aggregator(),
        radius_miles=get_settings().default_radius_miles,
    )


@functools.lru_cache()
def get_availability_estimator() -> ItemAvailabilityEstimator:
    return ItemAvailabilityEstimator()


async def close_clients() -> None:
    """Close the shared Google client, if one was created, and forget cached components."""
    if get_google_client.cache_info().currsize:
        client = get_google_client()
        if client is not None:
            await client.aclose()
    for provider in (get_google_client, get_geocode_resolver, get_aggregator, get_availability_estimator):
        provider.cache_clear()


__all__ = [
    "close_clients",
    "get_aggregator",
    "get_availability_estimator",
    "get_geocode_resolver",
    "get_google_client",
    "get_search_service",
]
