from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

HOURS_NOT_AVAILABLE = "Hours not available"

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class ResolvedLocation(BaseModel):
    latitude: float
    longitude: float
    zipcode: str
    city: Optional[str] = None
    state: Optional[str] = None

    model_config = {"frozen": True}


class StoreHours(BaseModel):
    monday: str = HOURS_NOT_AVAILABLE
    tuesday: str = HOURS_NOT_AVAILABLE
    wednesday: str = HOURS_NOT_AVAILABLE
    thursday: str = HOURS_NOT_AVAILABLE
    friday: str = HOURS_NOT_AVAILABLE
    saturday: str = HOURS_NOT_AVAILABLE
    sunday: str = HOURS_NOT_AVAILABLE

    @classmethod
    def every_day(cls, value: str) -> "StoreHours":
        return cls(**{day: value for day in WEEKDAYS})


class GroceryStore(BaseModel):
    """A nearby store normalized from whichever source produced it.

    ``distance_miles`` is relative to the location of the search that built
    the store. ``price_score`` reflects a chain's reputation for
    affordability, not actual prices.
    """

    id: str
    name: str
    address: str
    phone: Optional[str] = None
    website: Optional[str] = None
    latitude: float
    longitude: float
    distance_miles: float = Field(ge=0)
    price_score: int = Field(ge=1, le=10, description="Affordability reputation, 10 = typically budget-friendly. Not a price.")
    health_score: int = Field(ge=1, le=10, description="10 = healthiest")
    rating: float = Field(ge=1, le=5)
    categories: list[str] = Field(default_factory=list)
    hours: StoreHours = Field(default_factory=StoreHours)


class SearchRequest(BaseModel):
    zipcode: str = Field(min_length=3, max_length=10)
    item: str = Field(min_length=1, max_length=100)


class SearchResult(BaseModel):
    """Three recommendations for one search.

    The slots may hold the same store when it wins several criteria;
    deduplicate by ``id`` before listing them together.
    """

    shortest: GroceryStore
    healthiest: GroceryStore
    budget_friendly: GroceryStore
    searched_item: str
    user_location: ResolvedLocation
    used_fallback: bool = Field(
        False, description="True when no real-time stores were found and sample stores were used"
    )


class AvailabilityEstimate(BaseModel):
    likelihood: float = Field(ge=0, le=0.95)
    reasons: list[str]
    confidence: Literal["high", "medium", "low"]


class AvailabilityResponse(BaseModel):
    store: str
    item: str
    estimate: AvailabilityEstimate
    item_category: str
    suggestions: list[str]


class ZipcodeSuggestion(BaseModel):
    zipcode: str
    city: str
    state: str
    area: Optional[str] = None


class ZipcodeSuggestionResponse(BaseModel):
    items: list[ZipcodeSuggestion]


class AddressSuggestion(BaseModel):
    place_id: str
    description: str
    main_text: str
    secondary_text: str = ""
    types: list[str] = Field(default_factory=list)


class AddressSuggestionResponse(BaseModel):
    items: list[AddressSuggestion]


class AddressDetails(BaseModel):
    """A resolved street address. Missing components are empty strings."""

    address: str
    city: str = ""
    state: str = ""
    zipcode: str = ""
    country: str = ""
    latitude: float
    longitude: float


class CatalogListing(BaseModel):
    location: ResolvedLocation
    stores: list[GroceryStore]


__all__ = [
    "AddressDetails",
    "AddressSuggestion",
    "AddressSuggestionResponse",
    "AvailabilityEstimate",
    "AvailabilityResponse",
    "CatalogListing",
    "GroceryStore",
    "HOURS_NOT_AVAILABLE",
    "ResolvedLocation",
    "SearchRequest",
    "SearchResult",
    "StoreHours",
    "WEEKDAYS",
    "ZipcodeSuggestion",
    "ZipcodeSuggestionResponse",
]
