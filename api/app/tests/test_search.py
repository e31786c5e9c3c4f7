"""Tests for the store search pipeline."""
from __future__ import annotations

import pytest

from app.services.aggregator import CandidateAggregator
from app.services.errors import GeocodeFailure
from app.services.geocode import GeocodeResolver
from app.services.search import StoreSearchService, build_fallback_stores, extract_postal_code


class FakePlaces:
    def __init__(self, results):
        self.results = results

    async def nearby_search(self, latitude, longitude, radius_meters, place_type):
        return self.results


def make_service(places=None) -> StoreSearchService:
    return StoreSearchService(
        GeocodeResolver(None),
        CandidateAggregator(places, place_types=["supermarket"]),
        radius_miles=15.5,
    )


class TestExtractPostalCode:
    """Tests for free-text location parsing."""

    @pytest.mark.parametrize(
        "location, expected",
        [
            ("63101", "63101"),
            ("St. Louis, MO 63101", "63101"),
            ("123 Main St, Springfield 62701 USA", "62701"),
            ("Chicago", "Chicago"),
            ("  Chicago  ", "Chicago"),
            ("1234 Elm", "1234 Elm"),
        ],
    )
    def test_extract(self, location, expected):
        assert extract_postal_code(location) == expected


class TestFallbackStores:
    """Tests for the sample stores used when nothing real is found."""

    def test_three_stores_near_origin(self, st_louis):
        stores = build_fallback_stores(st_louis)
        assert [store.name for store in stores] == ["Fresh Market", "Budget Grocery", "Premium Foods"]
        assert all(store.distance_miles < 1 for store in stores)
        assert all(store.distance_miles == round(store.distance_miles, 1) for store in stores)

    def test_positions_follow_origin(self, st_louis):
        fresh = build_fallback_stores(st_louis)[0]
        assert fresh.latitude == pytest.approx(st_louis.latitude + 0.001)
        assert fresh.longitude == pytest.approx(st_louis.longitude + 0.001)

    def test_scores_and_hours(self, st_louis):
        budget = build_fallback_stores(st_louis)[1]
        assert (budget.price_score, budget.health_score, budget.rating) == (9, 6, 4.0)
        assert budget.hours.monday == "6:00 AM - 11:00 PM"
        assert budget.hours.sunday == "7:00 AM - 10:00 PM"


class TestSearchStores:
    """Tests for StoreSearchService.search_stores."""

    async def test_falls_back_when_no_stores(self):
        result = await make_service().search_stores("63101", "milk")
        assert result.used_fallback is True
        assert result.searched_item == "milk"
        assert result.user_location.city == "St. Louis"
        assert result.shortest.name == "Fresh Market"
        assert result.healthiest.name == "Premium Foods"
        assert result.budget_friendly.name == "Budget Grocery"

    async def test_uses_real_stores(self, place_factory):
        places = FakePlaces(
            [
                place_factory("aldi", "ALDI", lat=38.64, lng=-90.20, rating=4.2),
                place_factory("wf", "Whole Foods Market", lat=38.66, lng=-90.25, rating=4.6),
            ]
        )
        result = await make_service(places).search_stores("63101", "eggs")
        assert result.used_fallback is False
        assert result.shortest.id == "aldi"
        assert result.budget_friendly.id == "aldi"
        assert result.healthiest.id == "wf"

    async def test_unknown_postal_code_raises(self):
        with pytest.raises(GeocodeFailure):
            await make_service().search_stores("00000", "milk")
