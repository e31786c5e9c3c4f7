"""Heuristic estimate of whether a store carries an item.

These are guesses from a chain's reputation, not inventory data.
"""
from __future__ import annotations

from typing import Callable, Optional

from app.schemas.grocery import AvailabilityEstimate
from app.services.store_profiles import CHAIN_PROFILES, ChainProfile, find_chain_profile

MAX_LIKELIHOOD = 0.95
UNKNOWN_STORE_LIKELIHOOD = 0.6
COMMON_ITEM_BOOST = 0.2
SPECIALTY_BOOST = 0.15
MAX_STRENGTH_REASONS = 2

# specialty tag -> (predicate on the lower-cased item, reason)
_SPECIALTY_MATCHERS: dict[str, tuple[Callable[[str], bool], str]] = {
    "organic": (lambda item: "organic" in item, "Specializes in organic products"),
    "budget": (lambda item: "basic" in item or "cheap" in item, "Budget-friendly store"),
    "premium": (lambda item: "premium" in item or "gourmet" in item, "Specializes in premium products"),
    "bulk": (lambda item: "bulk" in item, "Bulk quantities available"),
}


def confidence_for(likelihood: float) -> str:
    if likelihood >= 0.8:
        return "high"
    if likelihood < 0.6:
        return "low"
    return "medium"


class ItemAvailabilityEstimator:
    def __init__(self, profiles: tuple[ChainProfile, ...] = CHAIN_PROFILES) -> None:
        self._profiles = profiles

    def estimate(self, store_name: str, searched_item: str) -> AvailabilityEstimate:
        chain = find_chain_profile(store_name, self._profiles, require_availability=True)
        if chain is None or chain.availability is None:
            return AvailabilityEstimate(
                likelihood=UNKNOWN_STORE_LIKELIHOOD,
                reasons=["General grocery store"],
                confidence="low",
            )

        profile = chain.availability
        item = searched_item.lower().strip()
        reasons: list[str] = []
        likelihood = profile.base_likelihood

        if item and any(item in common.lower() or common.lower() in item for common in profile.common_items):
            likelihood += COMMON_ITEM_BOOST
            reasons.append("Commonly stocked item")

        specialty_reason = self._specialty_reason(profile.specialty, item)
        if specialty_reason is not None:
            likelihood += SPECIALTY_BOOST
            reasons.append(specialty_reason)

        reasons.extend(profile.strengths[:MAX_STRENGTH_REASONS])

        # Never report certainty without real inventory data.
        likelihood = max(0.0, min(likelihood, MAX_LIKELIHOOD))
        return AvailabilityEstimate(
            likelihood=likelihood,
            reasons=reasons,
            confidence=confidence_for(likelihood),
        )

    @staticmethod
    def _specialty_reason(specialties: tuple[str, ...], item: str) -> Optional[str]:
        for specialty in specialties:
            matcher = _SPECIALTY_MATCHERS.get(specialty)
            if matcher is not None and matcher[0](item):
                return matcher[1]
        return None


_ITEM_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("dairy", ("milk", "cream", "yogurt", "cheese")),
    ("organic", ("organic", "natural")),
    ("meat", ("meat", "beef", "chicken", "pork")),
    ("produce", ("fruit", "vegetable", "produce")),
    ("frozen", ("frozen",)),
    ("bakery", ("bread", "bakery", "pastry")),
)

_ITEM_SUGGESTIONS: dict[str, list[str]] = {
    "organic": ["Try Whole Foods for best organic selection", "Check natural food stores"],
    "dairy": ["Most grocery stores carry dairy products", "Check expiration dates"],
    "meat": ["Call ahead for specific cuts", "Fresh meat counters have more options"],
}
_DEFAULT_SUGGESTIONS = ["Call ahead to confirm availability", "Check store website or app"]


def categorize_item(item: str) -> str:
    normalized = item.lower()
    for category, keywords in _ITEM_CATEGORY_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return category
    return "general"


def item_suggestions(item: str) -> list[str]:
    return list(_ITEM_SUGGESTIONS.get(categorize_item(item), _DEFAULT_SUGGESTIONS))


_default_estimator = ItemAvailabilityEstimator()


def estimate_item_availability(store_name: str, searched_item: str) -> AvailabilityEstimate:
    return _default_estimator.estimate(store_name, searched_item)


__all__ = [
    "ItemAvailabilityEstimator",
    "MAX_LIKELIHOOD",
    "categorize_item",
    "confidence_for",
    "estimate_item_availability",
    "item_suggestions",
]
