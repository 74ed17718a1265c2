"""
Merge & sort.

Orders the normalized listings by ascending distance. `sorted` is stable, so equal
distances keep their input order; no dedup and no top-k cut are applied.
"""

from __future__ import annotations

from typing import Iterable

from nearfeed.domain.models import RankedItem


def rank(items: Iterable[RankedItem]) -> list[RankedItem]:
    """Return `items` sorted ascending by `distance_km` (stable)."""
    return sorted(items, key=lambda it: it.distance_km)
