# src/nearfeed/nearby/normalize.py
"""
Item normalizer.

Turns the two unrelated catalog shapes (properties, vehicles) into one sequence of
ranked entries that share a `kind` tag and a `distance_km` computed from the origin.

Contract notes:
- Properties come first, then vehicles. Ranking sorts stably, so this is the tie order.
- A missing latitude/longitude reads as 0 and the entry is flagged `coordinate_missing`.
"""

from __future__ import annotations

from typing import Iterable

from nearfeed.core.geo import GeoPoint, distance
from nearfeed.domain.models import Property, RankedItem, RankedProperty, RankedVehicle, Vehicle


def normalize_property(prop: Property, reference: GeoPoint) -> RankedProperty:
    return RankedProperty(
        **prop.model_dump(),
        distance_km=distance(reference, prop.coordinate),
        coordinate_missing=not prop.has_coordinate,
    )


def normalize_vehicle(vehicle: Vehicle, reference: GeoPoint) -> RankedVehicle:
    return RankedVehicle(
        **vehicle.model_dump(),
        distance_km=distance(reference, vehicle.coordinate),
        coordinate_missing=not vehicle.has_coordinate,
    )


def normalize(
    properties: Iterable[Property], vehicles: Iterable[Vehicle], reference: GeoPoint
) -> list[RankedItem]:
    """Tag and measure every listing against `reference` (properties first)."""
    items: list[RankedItem] = [normalize_property(p, reference) for p in properties]
    items.extend(normalize_vehicle(v, reference) for v in vehicles)
    return items
