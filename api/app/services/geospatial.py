from __future__ import annotations

import math
from dataclasses import dataclass

EARTH_RADIUS_MILES = 3959.0
METERS_PER_MILE = 1609.344


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in miles."""
    lat1_rad, lon1_rad = math.radians(lat1), math.radians(lon1)
    lat2_rad, lon2_rad = math.radians(lat2), math.radians(lon2)

    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2
    # Clamp due to floating-point drift so we never take sqrt of a negative.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def distance(a: Coordinate, b: Coordinate) -> float:
    return haversine_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def distance_miles(a: Coordinate, b: Coordinate) -> float:
    """Distance rounded to one decimal place, as shown to users."""
    return round(distance(a, b), 1)


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


__all__ = [
    "Coordinate",
    "EARTH_RADIUS_MILES",
    "distance",
    "distance_miles",
    "haversine_distance",
    "miles_to_meters",
]
