"""Pick the closest, healthiest and most budget-friendly store.

Each pick is a left fold over the input: a candidate replaces the current
best only when it scores strictly better, so on exact ties the earliest
store in the list wins. Output is therefore deterministic for a given input
order.

Weights (keep these exact, they encode the product's trade-offs):

    health = 0.6*health_score + 0.25*rating + 0.1*health_bonus - 0.05*distance
    budget = 0.7*price_score + 0.15*rating - 0.1*distance + 0.05*price_bonus

``price_score`` is the chain's affordability reputation, not a price.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from app.schemas.grocery import GroceryStore
from app.services.errors import EmptyCandidateSet

BONUS_CAP = 3.0

_HEALTH_BONUSES = (("organic", 2.0), ("natural", 1.5), ("fresh", 1.0), ("premium", 0.5))
_PRICE_BONUSES = (("discount", 2.0), ("budget", 1.5), ("bulk", 1.0), ("warehouse", 1.0))


@dataclass(frozen=True)
class Recommendations:
    shortest: GroceryStore
    healthiest: GroceryStore
    budget_friendly: GroceryStore


def _category_bonus(store: GroceryStore, table: Sequence[tuple[str, float]]) -> float:
    labels = [category.lower() for category in store.categories]
    bonus = sum(points for keyword, points in table if any(keyword in label for label in labels))
    return min(bonus, BONUS_CAP)


def health_bonus(store: GroceryStore) -> float:
    return _category_bonus(store, _HEALTH_BONUSES)


def price_bonus(store: GroceryStore) -> float:
    return _category_bonus(store, _PRICE_BONUSES)


def health_score(store: GroceryStore) -> float:
    return (
        store.health_score * 0.6
        + store.rating * 0.25
        + health_bonus(store) * 0.1
        - store.distance_miles * 0.05
    )


def budget_score(store: GroceryStore) -> float:
    return (
        store.price_score * 0.7
        + store.rating * 0.15
        - store.distance_miles * 0.1
        + price_bonus(store) * 0.05
    )


def _fold_best(stores: Sequence[GroceryStore], key: Callable[[GroceryStore], float]) -> GroceryStore:
    best = stores[0]
    best_score = key(best)
    for store in stores[1:]:
        score = key(store)
        if score > best_score:
            best, best_score = store, score
    return best


def find_shortest(stores: Sequence[GroceryStore]) -> GroceryStore:
    if not stores:
        raise EmptyCandidateSet()
    return _fold_best(stores, lambda s: -s.distance_miles)


def find_healthiest(stores: Sequence[GroceryStore]) -> GroceryStore:
    if not stores:
        raise EmptyCandidateSet()
    return _fold_best(stores, health_score)


def find_budget_friendly(stores: Sequence[GroceryStore]) -> GroceryStore:
    if not stores:
        raise EmptyCandidateSet()
    return _fold_best(stores, budget_score)


def select_recommendations(stores: Sequence[GroceryStore]) -> Recommendations:
    if not stores:
        raise EmptyCandidateSet()
    return Recommendations(
        shortest=find_shortest(stores),
        healthiest=find_healthiest(stores),
        budget_friendly=find_budget_friendly(stores),
    )


__all__ = [
    "BONUS_CAP",
    "Recommendations",
    "budget_score",
    "find_budget_friendly",
    "find_healthiest",
    "find_shortest",
    "health_bonus",
    "health_score",
    "price_bonus",
    "select_recommendations",
]
