"""Error kinds raised by the store search engine."""
from __future__ import annotations

from typing import Optional


class GroceryFinderError(Exception):
    """Base class for search engine errors."""


class GeocodeFailure(GroceryFinderError):
    """No coordinate source could resolve the postal code."""

    def __init__(self, postal_code: str) -> None:
        super().__init__(f"Location not recognized: {postal_code}")
        self.postal_code = postal_code


class EmptyCandidateSet(GroceryFinderError):
    """Recommendation selection was asked to choose from zero stores."""

    def __init__(self, message: str = "Cannot select recommendations from an empty store list") -> None:
        super().__init__(message)


class ExternalQueryError(GroceryFinderError):
    """One category query against the places capability failed or timed out."""

    def __init__(self, place_type: str, cause: Optional[BaseException] = None) -> None:
        detail = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(f"Nearby search for type={place_type!r} failed ({detail})")
        self.place_type = place_type
        self.cause = cause


__all__ = ["GroceryFinderError", "GeocodeFailure", "EmptyCandidateSet", "ExternalQueryError"]
