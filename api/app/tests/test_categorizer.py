"""Tests for the store categorizer and the chain reference table."""
from __future__ import annotations

import pytest

from app.services.categorizer import StoreCategorizer, build_rules, categorize_store, keyword_matcher
from app.services.store_profiles import (
    BUCKET_PRIORITY,
    BUDGET,
    CHAIN_PROFILES,
    DEFAULT,
    find_chain_profile,
)


class TestBuckets:
    """Known chains land in the expected bucket."""

    @pytest.mark.parametrize(
        "name, health, price",
        [
            ("Whole Foods Market", 9, 4),
            ("Sprouts Farmers Market", 9, 4),
            ("Wegmans", 8, 5),
            ("Walmart Supercenter", 6, 9),
            ("Target", 7, 7),
            ("Costco Wholesale", 7, 8),
            ("Kroger", 7, 6),
            ("Schnucks", 7, 6),
            ("Dierbergs Markets", 8, 6),
            ("Trader Joe's", 8, 6),
            ("ShopRite", 6, 6),
        ],
    )
    def test_chain_scores(self, name, health, price):
        """Each chain gets its bucket's synthetic scores."""
        category = categorize_store(name, ["grocery_or_supermarket"])
        assert category.health_score == health
        assert category.price_score == price

    def test_aldi_is_budget(self):
        """ALDI is a discount store."""
        category = categorize_store("ALDI", ["supermarket"])
        assert category.health_score == 6
        assert category.price_score == 9
        assert "Discount" in category.categories
        assert "Budget-Friendly" in category.categories

    def test_unknown_store_uses_default(self):
        """Unrecognised names fall through to the default bucket."""
        category = categorize_store("Main Street Supermarket", ["supermarket"])
        assert (category.health_score, category.price_score) == (6, 6)
        assert category.categories == ["Supermarket", "Grocery Store"]

    def test_organic_keyword_without_chain(self):
        """An independent natural foods store is treated as organic."""
        category = categorize_store("Green Leaf Natural Foods", ["food"])
        assert category.health_score == 9
        assert "Organic" in category.categories


class TestPriority:
    """First matching rule wins."""

    def test_fresh_market_is_organic_not_convenience(self):
        """'market' would match the convenience rule, but organic is checked first."""
        category = categorize_store("The Fresh Market", ["grocery_or_supermarket"])
        assert category.health_score == 9

    def test_regional_market_is_not_convenience(self):
        """A regional chain called '... Markets' keeps its chain bucket."""
        category = categorize_store("Dierbergs Markets", [])
        assert "Regional Chain" in category.categories

    def test_organic_beats_mainstream(self):
        """A name matching two buckets takes the higher-priority one."""
        category = categorize_store("Natural Foods at Kroger", [])
        assert category.health_score == 9

    def test_corner_store_is_convenience(self):
        """Corner stores are convenience stores."""
        category = categorize_store("Joe's Corner Store", ["store"])
        assert (category.health_score, category.price_score) == (5, 4)

    def test_convenience_type_tag(self):
        """The convenience_store tag alone is enough."""
        category = categorize_store("Quik Stop", ["convenience_store", "store"])
        assert "Convenience" in category.categories

    def test_market_without_super_is_convenience(self):
        """A generic 'market' that is not a supermarket is a convenience store."""
        category = categorize_store("Elm Street Market", ["store"])
        assert category.health_score == 5

    def test_rules_follow_bucket_priority(self):
        """Rules are built in bucket priority order."""
        buckets = [bucket for _, bucket in build_rules()]
        assert buckets == list(BUCKET_PRIORITY)


class TestCustomRules:
    """Rule tables can be injected."""

    def test_injected_rules_replace_defaults(self):
        """Only the injected rules are consulted."""
        categorizer = StoreCategorizer(rules=[(keyword_matcher(["acme"]), BUDGET)])
        assert categorizer.bucket_for("ACME Markets") is BUDGET
        assert categorizer.bucket_for("Whole Foods Market") is DEFAULT

    def test_categories_are_copied(self):
        """Mutating a result does not affect later results."""
        first = categorize_store("ALDI")
        first.categories.append("Changed")
        assert "Changed" not in categorize_store("ALDI").categories


class TestChainTable:
    """Tests for the shared chain reference table."""

    def test_lookup_is_case_insensitive(self):
        """Chain keys match regardless of case."""
        profile = find_chain_profile("WHOLE FOODS MARKET #123")
        assert profile is not None
        assert profile.name == "Whole Foods Market"

    def test_require_availability_skips_bare_entries(self):
        """Entries without availability data are skipped when it is required."""
        assert find_chain_profile("Kroger") is not None
        assert find_chain_profile("Kroger", require_availability=True) is None

    def test_availability_chains_share_categorizer_bucket(self):
        """A chain's availability data and its scores come from the same entry."""
        for profile in CHAIN_PROFILES:
            if profile.availability is None:
                continue
            category = categorize_store(profile.name)
            assert category.health_score == profile.bucket.health_score, profile.name
            assert category.price_score == profile.bucket.price_score, profile.name
