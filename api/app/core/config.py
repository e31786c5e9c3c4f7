from __future__ import annotations

import functools
from typing import Annotated, Any, Iterable, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

# Google Places "nearby search" caps the radius at 50km.
MAX_RADIUS_MILES = 31.0

DEFAULT_PLACE_TYPES = [
    "grocery_or_supermarket",
    "supermarket",
    "food",
    "store",
    "department_store",
    "establishment",
    "point_of_interest",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_name: str = "Grocery Finder API"
    environment: str = "development"

    database_url: str = "sqlite+aiosqlite:///./data/stores.db"
    redis_url: str = "redis://redis:6379/0"

    # CORS configuration
    cors_origins: str = "*"

    google_api_key: Optional[str] = None
    country_restriction: str = "US"

    default_radius_miles: float = 15.5
    place_types: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_PLACE_TYPES))
    places_timeout_seconds: float = 10.0
    geocode_timeout_seconds: float = 5.0
    geocode_cache_size: int = 1024

    rate_limit: str = "100/15minutes"
    rate_limit_enabled: bool = True

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @field_validator("google_api_key", mode="before")
    @classmethod
    def _blank_key_is_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("default_radius_miles")
    @classmethod
    def validate_radius(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("default_radius_miles must be positive")
        if v > MAX_RADIUS_MILES:
            raise ValueError(f"default_radius_miles cannot exceed {MAX_RADIUS_MILES} miles")
        return v

    @field_validator("geocode_cache_size")
    @classmethod
    def validate_cache_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("geocode_cache_size must be at least 1")
        return v

    @field_validator("place_types", mode="before")
    @classmethod
    def _parse_place_types(cls, value: Any) -> List[str]:
        if not value:
            return list(DEFAULT_PLACE_TYPES)
        if isinstance(value, (list, tuple)):
            return [str(item).strip() for item in value if str(item).strip()]
        if isinstance(value, str):
            items: Iterable[str] = value.split(",")
            return [item.strip() for item in items if item.strip()]
        raise ValueError("Unsupported place_types format")


@functools.lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings", "DEFAULT_PLACE_TYPES", "MAX_RADIUS_MILES"]
