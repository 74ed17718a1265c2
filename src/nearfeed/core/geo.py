from __future__ import annotations
from dataclasses import dataclass
from math import asin, cos, isnan, radians, sin, sqrt

"""
Geospatial helpers.

The nearby feed only needs great-circle distances over a small catalog, so we keep
a tiny geometry layer here instead of pulling in a GIS dependency.
"""

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees (not range-checked)."""

    lat: float
    lon: float


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in kilometers between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    if isnan(h):
        return h
    # Clamp: rounding near antipodes and out-of-range latitudes can push h outside [0, 1].
    return 2 * EARTH_RADIUS_KM * asin(sqrt(min(1.0, max(0.0, h))))


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Distance in km used by the ranking pipeline."""
    return haversine_km(a, b)
