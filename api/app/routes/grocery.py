from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.clients.google import GoogleMapsClient
from app.core.config import MAX_RADIUS_MILES
from app.core.dependencies import (
    get_availability_estimator,
    get_geocode_resolver,
    get_google_client,
    get_search_service,
)
from app.db.session import get_async_session
from app.schemas.grocery import (
    AddressDetails,
    AddressSuggestionResponse,
    AvailabilityResponse,
    CatalogListing,
    GroceryStore,
    SearchRequest,
    SearchResult,
    ZipcodeSuggestionResponse,
)
from app.services.addresses import get_address_details, search_addresses
from app.services.availability import ItemAvailabilityEstimator, categorize_item, item_suggestions
from app.services.catalog import get_catalog_store, list_catalog_stores
from app.services.geocode import GeocodeResolver
from app.services.search import StoreSearchService, extract_postal_code
from app.services.zipcodes import suggest_zipcodes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/grocery", tags=["grocery"])


@router.get("/search")
async def search_by_location(
    location: str = Query(..., min_length=3, max_length=200),
    item: str = Query(..., min_length=1, max_length=100),
    service: StoreSearchService = Depends(get_search_service),
) -> SearchResult:
    """Search with a free-text location; the first 5-digit token is used as the postal code."""
    postal_code = extract_postal_code(location)
    logger.info("Searching for %r near %r (postal code %s)", item, location, postal_code)
    return await service.search_stores(postal_code, item)


@router.post("/search")
async def search_by_zipcode(
    payload: SearchRequest,
    service: StoreSearchService = Depends(get_search_service),
) -> SearchResult:
    logger.info("Searching for %r in %s", payload.item, payload.zipcode)
    return await service.search_stores(payload.zipcode.strip(), payload.item)


@router.get("/zipcodes")
async def zipcode_suggestions(
    q: str = Query(..., min_length=1, max_length=50),
    client: Optional[GoogleMapsClient] = Depends(get_google_client),
) -> ZipcodeSuggestionResponse:
    items = await suggest_zipcodes(q, client)
    return ZipcodeSuggestionResponse(items=items)


@router.get("/addresses")
async def address_suggestions(
    q: str = Query(..., min_length=2, max_length=100),
    client: Optional[GoogleMapsClient] = Depends(get_google_client),
) -> AddressSuggestionResponse:
    items = await search_addresses(q, client)
    return AddressSuggestionResponse(items=items)


@router.get("/address-details")
async def address_details(
    place_id: str = Query(..., min_length=1, max_length=300),
    client: Optional[GoogleMapsClient] = Depends(get_google_client),
) -> AddressDetails:
    details = await get_address_details(place_id, client)
    if details is None:
        raise HTTPException(status_code=404, detail="Address details not found")
    return details


@router.get("/availability")
async def item_availability(
    store: str = Query(..., min_length=1, max_length=200),
    item: str = Query(..., min_length=1, max_length=100),
    estimator: ItemAvailabilityEstimator = Depends(get_availability_estimator),
) -> AvailabilityResponse:
    """Heuristic guess from the chain's reputation. Not live inventory."""
    return AvailabilityResponse(
        store=store,
        item=item,
        estimate=estimator.estimate(store, item),
        item_category=categorize_item(item),
        suggestions=item_suggestions(item),
    )


@router.get("/store/{store_id}")
async def store_details(store_id: str) -> GroceryStore:
    async with get_async_session() as session:
        store = await get_catalog_store(session, store_id)
    if store is None:
        raise HTTPException(status_code=404, detail="Store not found")
    return store


@router.get("/catalog")
async def catalog_near(
    zipcode: str = Query(..., min_length=3, max_length=10),
    radius_miles: Optional[float] = Query(None, gt=0, le=MAX_RADIUS_MILES),
    resolver: GeocodeResolver = Depends(get_geocode_resolver),
) -> CatalogListing:
    """Seeded catalog stores nearest first. Unknown postal codes are a 400."""
    location = await resolver.resolve(zipcode.strip())
    async with get_async_session() as session:
        stores = await list_catalog_stores(session, location, radius_miles)
    return CatalogListing(location=location, stores=stores)


__all__ = ["router"]
