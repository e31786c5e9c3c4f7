"""Reference table of grocery chains.

One ordered table drives store categorization, the grocery inclusion filter
and item-availability estimates. Chains are matched by lower-cased substring
of the store name, so declaration order matters: entries are grouped by
bucket in categorization priority order, and the first matching entry wins
everywhere the table is consulted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

TABLE_VERSION = "2"


@dataclass(frozen=True)
class StoreBucket:
    name: str
    health_score: int
    price_score: int
    categories: tuple[str, ...]


ORGANIC = StoreBucket("organic", 9, 4, ("Organic", "Natural Foods", "Fresh Produce"))
PREMIUM = StoreBucket("premium", 8, 5, ("Premium", "Fresh Produce"))
BUDGET = StoreBucket("budget", 6, 9, ("Discount", "Budget-Friendly", "Bulk Shopping"))
DEPARTMENT = StoreBucket("department", 7, 7, ("Department Store", "One-Stop Shopping", "Groceries & More"))
WAREHOUSE = StoreBucket("warehouse", 7, 8, ("Warehouse", "Bulk Shopping", "Membership"))
MAINSTREAM = StoreBucket("mainstream", 7, 6, ("Supermarket", "Full Service"))
REGIONAL_PREMIUM = StoreBucket("regional_premium", 8, 6, ("Regional Chain", "Fresh Produce", "Local Favorites"))
CONVENIENCE = StoreBucket("convenience", 5, 4, ("Convenience", "Quick Shopping"))
DEFAULT = StoreBucket("default", 6, 6, ("Supermarket", "Grocery Store"))

# Categorization priority, highest first. DEFAULT is the fallthrough.
BUCKET_PRIORITY: tuple[StoreBucket, ...] = (
    ORGANIC,
    PREMIUM,
    BUDGET,
    DEPARTMENT,
    WAREHOUSE,
    MAINSTREAM,
    REGIONAL_PREMIUM,
    CONVENIENCE,
)

# Name keywords that place a store in a bucket without naming a chain.
BUCKET_KEYWORDS: dict[str, tuple[str, ...]] = {
    "organic": ("organic", "natural"),
    "convenience": ("corner",),
}


@dataclass(frozen=True)
class AvailabilityProfile:
    specialty: tuple[str, ...]
    common_items: tuple[str, ...]
    base_likelihood: float
    strengths: tuple[str, ...]


@dataclass(frozen=True)
class ChainProfile:
    name: str
    keys: tuple[str, ...]
    bucket: StoreBucket
    availability: Optional[AvailabilityProfile] = None

    def matches(self, store_name: str) -> bool:
        lowered = store_name.lower()
        return any(key in lowered for key in self.keys)


CHAIN_PROFILES: tuple[ChainProfile, ...] = (
    # Organic / health-focused
    ChainProfile(
        "Whole Foods Market",
        ("whole foods",),
        ORGANIC,
        AvailabilityProfile(
            specialty=("organic", "premium", "natural", "health", "specialty"),
            common_items=(
                "organic milk", "almond milk", "oat milk", "organic eggs", "grass-fed beef",
                "organic chicken", "quinoa", "kale", "avocado", "organic bread", "kombucha",
                "coconut oil",
            ),
            base_likelihood=0.9,
            strengths=("Organic products", "High quality", "Specialty diets", "Fresh produce"),
        ),
    ),
    ChainProfile("The Fresh Market", ("fresh market",), ORGANIC),
    ChainProfile(
        "Fresh Thyme",
        ("fresh thyme",),
        ORGANIC,
        AvailabilityProfile(
            specialty=("organic", "natural", "health", "fresh", "specialty"),
            common_items=(
                "organic produce", "natural products", "supplements", "fresh meat",
                "organic dairy", "gluten-free", "vegan options",
            ),
            base_likelihood=0.9,
            strengths=("Organic focus", "Natural products", "Health-conscious options"),
        ),
    ),
    ChainProfile(
        "Sprouts",
        ("sprouts",),
        ORGANIC,
        AvailabilityProfile(
            specialty=("organic", "natural", "health", "vitamins", "specialty diets"),
            common_items=(
                "organic produce", "natural supplements", "bulk foods", "gluten-free",
                "plant-based options",
            ),
            base_likelihood=0.9,
            strengths=("Natural foods", "Organic produce", "Health supplements"),
        ),
    ),
    ChainProfile("Earth Fare", ("earth fare",), ORGANIC),
    ChainProfile("Mother's Market", ("mother's market",), ORGANIC),
    ChainProfile("Natural Grocers", ("natural grocers", "vitamin cottage"), ORGANIC),
    # Premium regional
    ChainProfile("Harris Teeter", ("harris teeter",), PREMIUM),
    ChainProfile("Publix", ("publix",), PREMIUM),
    ChainProfile("Wegmans", ("wegmans",), PREMIUM),
    # Budget / discount
    ChainProfile(
        "Walmart",
        ("walmart",),
        BUDGET,
        AvailabilityProfile(
            specialty=("everything", "bulk", "budget", "convenience"),
            common_items=(
                "milk", "bread", "eggs", "diapers", "cleaning supplies", "pharmacy",
                "electronics", "clothing",
            ),
            base_likelihood=0.8,
            strengths=("Wide selection", "Low prices", "One-stop shopping"),
        ),
    ),
    ChainProfile(
        "ALDI",
        ("aldi",),
        BUDGET,
        AvailabilityProfile(
            specialty=("budget", "basic", "essentials"),
            common_items=(
                "milk", "bread", "eggs", "cheese", "butter", "yogurt", "chicken", "ground beef",
                "pasta", "rice", "cereal", "bananas", "apples", "potatoes", "onions",
            ),
            base_likelihood=0.7,
            strengths=("Low prices", "Basic groceries", "European brands"),
        ),
    ),
    ChainProfile("Food 4 Less", ("food 4 less",), BUDGET),
    ChainProfile("WinCo Foods", ("winco",), BUDGET),
    ChainProfile("Price Chopper", ("price chopper",), BUDGET),
    ChainProfile("Save-A-Lot", ("save-a-lot",), BUDGET),
    ChainProfile("Market Basket", ("market basket",), BUDGET),
    # Department stores with groceries
    ChainProfile(
        "Target",
        ("target",),
        DEPARTMENT,
        AvailabilityProfile(
            specialty=("trendy", "home goods", "convenience", "brands", "one-stop"),
            common_items=(
                "milk", "snacks", "frozen foods", "home goods", "beauty products", "clothing",
                "basic groceries", "household items", "personal care",
            ),
            base_likelihood=0.7,
            strengths=(
                "Trendy products", "Good prices", "Home & lifestyle", "Convenient shopping",
                "Wide selection",
            ),
        ),
    ),
    ChainProfile("Meijer", ("meijer",), DEPARTMENT),
    ChainProfile("Fred Meyer", ("fred meyer",), DEPARTMENT),
    ChainProfile("Kmart", ("k-mart", "kmart"), DEPARTMENT),
    # Warehouse clubs
    ChainProfile(
        "Costco",
        ("costco",),
        WAREHOUSE,
        AvailabilityProfile(
            specialty=("bulk", "wholesale", "value", "large quantities"),
            common_items=("bulk milk", "bulk bread", "large eggs", "meat in bulk", "household supplies"),
            base_likelihood=0.7,
            strengths=("Bulk quantities", "Great value", "Business supplies"),
        ),
    ),
    ChainProfile("Sam's Club", ("sam's club",), WAREHOUSE),
    ChainProfile("BJ's Wholesale Club", ("bj's",), WAREHOUSE),
    # Mainstream supermarkets
    ChainProfile("Kroger", ("kroger",), MAINSTREAM),
    ChainProfile("Safeway", ("safeway",), MAINSTREAM),
    ChainProfile("Giant", ("giant",), MAINSTREAM),
    ChainProfile("Stop & Shop", ("stop & shop",), MAINSTREAM),
    ChainProfile("King Soopers", ("king soopers",), MAINSTREAM),
    ChainProfile("Ralphs", ("ralph",), MAINSTREAM),
    ChainProfile("Albertsons", ("albertsons",), MAINSTREAM),
    ChainProfile("Vons", ("vons",), MAINSTREAM),
    ChainProfile("Jewel-Osco", ("jewel",), MAINSTREAM),
    ChainProfile("Acme Markets", ("acme",), MAINSTREAM),
    ChainProfile("Shaw's", ("shaw's",), MAINSTREAM),
    ChainProfile("Star Market", ("star market",), MAINSTREAM),
    ChainProfile("Smith's", ("smith's",), MAINSTREAM),
    ChainProfile("City Market", ("city market",), MAINSTREAM),
    ChainProfile("Food Lion", ("food lion",), MAINSTREAM),
    ChainProfile("Winn-Dixie", ("winn-dixie",), MAINSTREAM),
    ChainProfile("Hy-Vee", ("hy-vee",), MAINSTREAM),
    ChainProfile("Schnucks", ("schnucks",), MAINSTREAM),
    ChainProfile("Festival Foods", ("festival foods",), MAINSTREAM),
    # Regional premium chains
    ChainProfile("H-E-B", ("h-e-b", "heb"), REGIONAL_PREMIUM),
    ChainProfile(
        "Dierbergs Markets",
        ("dierbergs",),
        REGIONAL_PREMIUM,
        AvailabilityProfile(
            specialty=("fresh", "local", "full-service", "quality"),
            common_items=("fresh produce", "meat", "seafood", "bakery", "deli", "local products"),
            base_likelihood=0.8,
            strengths=("Fresh products", "Local sourcing", "Full-service deli"),
        ),
    ),
    ChainProfile(
        "Straub's Market",
        ("straub",),
        REGIONAL_PREMIUM,
        AvailabilityProfile(
            specialty=("premium", "gourmet", "fresh", "local"),
            common_items=(
                "premium meats", "fine cheese", "wine", "gourmet items", "fresh seafood",
                "artisan bread",
            ),
            base_likelihood=0.8,
            strengths=("Premium quality", "Gourmet selection", "Local specialties"),
        ),
    ),
    ChainProfile(
        "Trader Joe's",
        ("trader joe",),
        REGIONAL_PREMIUM,
        AvailabilityProfile(
            specialty=("unique", "gourmet", "affordable premium", "private label"),
            common_items=(
                "specialty cheese", "wine", "frozen meals", "nuts", "chocolate", "seasonal items",
                "international foods", "organic options",
            ),
            base_likelihood=0.8,
            strengths=("Unique products", "Good prices", "Private label quality"),
        ),
    ),
    # Recognised as grocers, no specific scoring
    ChainProfile("ShopRite", ("shoprite",), DEFAULT),
    ChainProfile("Piggly Wiggly", ("piggly wiggly",), DEFAULT),
    ChainProfile("Ingles", ("ingles",), DEFAULT),
    ChainProfile("BI-LO", ("bi-lo",), DEFAULT),
    ChainProfile("Save Mart", ("save mart",), DEFAULT),
    ChainProfile("Lucky", ("lucky",), DEFAULT),
    ChainProfile("FoodMaxx", ("foodmaxx",), DEFAULT),
    ChainProfile("Nob Hill Foods", ("nob hill",), DEFAULT),
)


def find_chain_profile(
    store_name: str,
    profiles: tuple[ChainProfile, ...] = CHAIN_PROFILES,
    *,
    require_availability: bool = False,
) -> Optional[ChainProfile]:
    """Return the first profile whose key appears in ``store_name``."""
    for profile in profiles:
        if require_availability and profile.availability is None:
            continue
        if profile.matches(store_name):
            return profile
    return None


def chain_keywords(profiles: tuple[ChainProfile, ...] = CHAIN_PROFILES) -> tuple[str, ...]:
    return tuple(key for profile in profiles for key in profile.keys)


__all__ = [
    "AvailabilityProfile",
    "BUCKET_KEYWORDS",
    "BUCKET_PRIORITY",
    "CHAIN_PROFILES",
    "ChainProfile",
    "DEFAULT",
    "StoreBucket",
    "TABLE_VERSION",
    "chain_keywords",
    "find_chain_profile",
]
