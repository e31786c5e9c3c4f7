"""Rule-based store categorizer.

Maps a store's display name and place type tags to a bucket from the chain
reference table, which supplies the synthetic price/health scores and the
descriptive category labels.

Rules are evaluated in ``BUCKET_PRIORITY`` order; first match wins. Order
matters because keywords overlap, e.g. "Fresh Market" must land in the
organic bucket before the convenience rule sees the word "market".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

from app.services.store_profiles import (
    BUCKET_KEYWORDS,
    BUCKET_PRIORITY,
    CHAIN_PROFILES,
    DEFAULT,
    ChainProfile,
    StoreBucket,
)

# (lower-cased name, type tags) -> bool
Matcher = Callable[[str, Sequence[str]], bool]
_Rule = tuple[Matcher, StoreBucket]


@dataclass(frozen=True)
class StoreCategory:
    price_score: int
    health_score: int
    categories: list[str] = field(default_factory=list)


def keyword_matcher(keywords: Sequence[str]) -> Matcher:
    frozen = tuple(k.lower() for k in keywords)

    def _match(name: str, types: Sequence[str]) -> bool:
        return any(keyword in name for keyword in frozen)

    return _match


def _convenience_matcher(name: str, types: Sequence[str]) -> bool:
    return (
        "convenience_store" in types
        or any(keyword in name for keyword in BUCKET_KEYWORDS.get("convenience", ()))
        or ("market" in name and "super" not in name)
    )


def build_rules(profiles: tuple[ChainProfile, ...] = CHAIN_PROFILES) -> list[_Rule]:
    """Build the ordered (matcher, bucket) list from the chain table."""
    rules: list[_Rule] = []
    for bucket in BUCKET_PRIORITY:
        if bucket.name == "convenience":
            rules.append((_convenience_matcher, bucket))
            continue
        keywords = list(BUCKET_KEYWORDS.get(bucket.name, ()))
        keywords.extend(key for profile in profiles if profile.bucket is bucket for key in profile.keys)
        if keywords:
            rules.append((keyword_matcher(keywords), bucket))
    return rules


class StoreCategorizer:
    def __init__(self, rules: list[_Rule] | None = None, default: StoreBucket = DEFAULT) -> None:
        self._rules = rules if rules is not None else build_rules()
        self._default = default

    def bucket_for(self, name: str, types: Sequence[str] = ()) -> StoreBucket:
        name_lower = (name or "").lower()
        for matcher, bucket in self._rules:
            if matcher(name_lower, types):
                return bucket
        return self._default

    def categorize(self, name: str, types: Sequence[str] = ()) -> StoreCategory:
        bucket = self.bucket_for(name, types)
        return StoreCategory(
            price_score=bucket.price_score,
            health_score=bucket.health_score,
            categories=list(bucket.categories),
        )


_default_categorizer = StoreCategorizer()


def categorize_store(name: str, types: Sequence[str] = ()) -> StoreCategory:
    return _default_categorizer.categorize(name, types)


__all__ = ["StoreCategorizer", "StoreCategory", "build_rules", "categorize_store", "keyword_matcher"]
