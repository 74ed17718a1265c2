from __future__ import annotations

# Feed projection: the last stage of the nearby pipeline.
#
# Data flow: catalogs + origin -> normalize -> rank -> filter -> feed.
# Every input change recomputes the whole feed; nothing is cached between passes.

import logging
import time
from datetime import datetime, timezone
from typing import Iterable

from nearfeed.catalog.loader import Catalog
from nearfeed.config.settings import Settings, get_settings
from nearfeed.core.geo import GeoPoint
from nearfeed.domain.models import (
    Category,
    FeedResult,
    FilterState,
    OriginInfo,
    Property,
    RankedItem,
    Vehicle,
    parse_category,
)
from nearfeed.location.provider import LocationFix, LocationProvider, acquire_origin, default_origin
from nearfeed.maps.targets import select_map_target
from nearfeed.nearby.filters import apply
from nearfeed.nearby.normalize import normalize
from nearfeed.nearby.ranking import rank

logger = logging.getLogger(__name__)


def build_feed(
    properties: Iterable[Property],
    vehicles: Iterable[Vehicle],
    origin: GeoPoint,
    state: FilterState | None = None,
    *,
    exclude_missing_coordinates: bool = False,
) -> list[RankedItem]:
    """Run the full pipeline once: normalize, rank, then filter."""
    ranked = rank(normalize(properties, vehicles, origin))
    if exclude_missing_coordinates:
        ranked = [it for it in ranked if not it.coordinate_missing]
    return apply(ranked, state or FilterState())


class NearbyFeed:
    """Session view of the feed for a presentation layer.

    Holds the current inputs and the feed derived from them. Each setter replaces one
    input wholesale and recomputes synchronously. While the origin is unknown (location
    still pending) the feed is empty.
    """

    def __init__(
        self,
        catalog: Catalog,
        *,
        origin: GeoPoint | None = None,
        state: FilterState | None = None,
        exclude_missing_coordinates: bool = False,
    ):
        self._catalog = catalog
        self._origin = origin
        self._state = state or FilterState()
        self._exclude_missing = exclude_missing_coordinates
        self._items: list[RankedItem] = []
        self._recompute()

    @property
    def origin(self) -> GeoPoint | None:
        return self._origin

    @property
    def state(self) -> FilterState:
        return self._state

    @property
    def items(self) -> list[RankedItem]:
        return list(self._items)

    def set_origin(self, origin: GeoPoint | None) -> list[RankedItem]:
        self._origin = origin
        return self._recompute()

    def set_catalog(self, catalog: Catalog) -> list[RankedItem]:
        self._catalog = catalog
        return self._recompute()

    def set_filter(self, state: FilterState) -> list[RankedItem]:
        self._state = state
        return self._recompute()

    def set_category(self, category: Category | str) -> list[RankedItem]:
        return self.set_filter(self._state.model_copy(update={"category": parse_category(category)}))

    def set_search_text(self, search_text: str) -> list[RankedItem]:
        return self.set_filter(self._state.model_copy(update={"search_text": search_text or ""}))

    def _recompute(self) -> list[RankedItem]:
        if self._origin is None:
            self._items = []
        else:
            self._items = build_feed(
                self._catalog.properties,
                self._catalog.vehicles,
                self._origin,
                self._state,
                exclude_missing_coordinates=self._exclude_missing,
            )
        return self.items


def search_nearby(
    state: FilterState,
    *,
    catalog: Catalog,
    settings: Settings | None = None,
    origin: GeoPoint | None = None,
    location_provider: LocationProvider | None = None,
    platform: str | None = None,
) -> FeedResult:
    """Resolve an origin, compute the feed, and wrap it for API/CLI output.

    Origin precedence: explicit `origin` -> `location_provider` -> configured default.
    """
    t0 = time.monotonic()
    settings = settings or get_settings()

    if origin is not None:
        origin_info = OriginInfo(lat=origin.lat, lon=origin.lon, source="request")
    else:
        fix = (
            acquire_origin(location_provider, default_origin(settings))
            if location_provider is not None
            else LocationFix(coordinate=default_origin(settings), source="default", reason="no_provider")
        )
        origin = fix.coordinate
        origin_info = OriginInfo(lat=origin.lat, lon=origin.lon, source=fix.source, reason=fix.reason)

    items = build_feed(
        catalog.properties,
        catalog.vehicles,
        origin,
        state,
        exclude_missing_coordinates=settings.feed.exclude_missing_coordinates,
    )

    meta: dict = {
        "catalog_size": len(catalog.properties) + len(catalog.vehicles),
        "missing_coordinates": sum(1 for it in items if it.coordinate_missing),
    }
    if platform is not None:
        meta["map"] = select_map_target(platform, settings).project(items, origin)
    meta["compute_ms"] = int((time.monotonic() - t0) * 1000)

    logger.debug(
        "Feed computed: origin=%s category=%s search=%r items=%d",
        origin,
        state.category.value,
        state.search_text,
        len(items),
    )
    return FeedResult(
        generated_at=datetime.now(timezone.utc),
        origin=origin_info,
        filter=state,
        total_items=len(items),
        items=items,
        meta=meta,
    )
