"""Tests for grocery schemas."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.schemas.grocery import (
    HOURS_NOT_AVAILABLE,
    AvailabilityEstimate,
    GroceryStore,
    ResolvedLocation,
    SearchRequest,
    StoreHours,
)


class TestGroceryStore:
    """Tests for GroceryStore bounds."""

    BASE = dict(id="s", name="S", address="a", latitude=0.0, longitude=0.0, distance_miles=1.0,
                price_score=5, health_score=5, rating=4.0)

    def test_defaults(self):
        store = GroceryStore(**self.BASE)
        assert store.categories == []
        assert store.hours.wednesday == HOURS_NOT_AVAILABLE

    @pytest.mark.parametrize(
        "field, value",
        [("price_score", 0), ("price_score", 11), ("health_score", 0), ("rating", 5.5), ("distance_miles", -1)],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            GroceryStore(**{**self.BASE, field: value})


class TestOtherModels:
    def test_every_day_hours(self):
        hours = StoreHours.every_day("Open 24 hours")
        assert hours.monday == hours.sunday == "Open 24 hours"

    def test_resolved_location_is_frozen(self):
        location = ResolvedLocation(latitude=1.0, longitude=2.0, zipcode="63101")
        with pytest.raises(ValidationError):
            location.latitude = 3.0

    def test_search_request_bounds(self):
        with pytest.raises(ValidationError):
            SearchRequest(zipcode="12", item="milk")
        with pytest.raises(ValidationError):
            SearchRequest(zipcode="63101", item="")

    def test_likelihood_cannot_exceed_cap(self):
        with pytest.raises(ValidationError):
            AvailabilityEstimate(likelihood=0.96, reasons=[], confidence="high")

    def test_confidence_values(self):
        with pytest.raises(ValidationError):
            AvailabilityEstimate(likelihood=0.5, reasons=[], confidence="certain")
