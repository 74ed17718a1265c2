"""
API routes.

Endpoints:
- GET `/api/feed`: distance-ranked, filtered nearby feed (main entrypoint).
- GET `/api/listings/{key}`: one listing by detail key (`property-1`, `vehicle-3`).
- GET `/api/properties`, `/api/vehicles`: tab listings (properties filterable by type).
- GET `/api/quality`: offline catalog quality report.
- GET `/api/i18n/{locale}`: label table + text direction.
- GET `/api/settings`: public settings for clients.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from nearfeed.catalog.loader import Catalog, filter_properties_by_type, find_listing, load_catalog
from nearfeed.config.settings import get_settings
from nearfeed.core.geo import GeoPoint
from nearfeed.domain.models import FeedResult, FilterState, Property, Vehicle
from nearfeed.i18n.translator import Translator
from nearfeed.location.provider import LocationProvider, build_location_provider
from nearfeed.nearby.feed import search_nearby
from nearfeed.quality.report import build_quality_report

router = APIRouter()


@lru_cache
def _catalog() -> Catalog:
    return load_catalog(get_settings())


@lru_cache
def _location_provider() -> LocationProvider:
    return build_location_provider(get_settings())


@router.get("/api/feed", response_model=FeedResult)
def get_feed(
    lat: float | None = Query(default=None, ge=-90, le=90),
    lon: float | None = Query(default=None, ge=-180, le=180),
    category: str = "all",
    q: str = "",
    platform: str | None = None,
) -> FeedResult:
    """Rank every listing by distance from the given (or resolved) origin and filter it."""
    if (lat is None) != (lon is None):
        raise HTTPException(status_code=400, detail="lat and lon must be given together")
    origin = GeoPoint(lat=lat, lon=lon) if lat is not None and lon is not None else None
    state = FilterState(category=category, search_text=q)
    return search_nearby(
        state,
        catalog=_catalog(),
        settings=get_settings(),
        origin=origin,
        location_provider=_location_provider(),
        platform=platform,
    )


@router.get("/api/listings/{key}")
def get_listing(key: str) -> dict:
    """Resolve a detail key to its listing."""
    try:
        item = find_listing(_catalog(), key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if item is None:
        raise HTTPException(status_code=404, detail=f"Listing '{key}' not found")
    kind = "property" if isinstance(item, Property) else "vehicle"
    return {"kind": kind, "key": f"{kind}-{item.id}", "listing": item.model_dump(mode="json", by_alias=True)}


@router.get("/api/properties", response_model=list[Property])
def get_properties(type: str | None = None) -> list[Property]:
    return filter_properties_by_type(_catalog().properties, type)


@router.get("/api/vehicles", response_model=list[Vehicle])
def get_vehicles(available_only: bool = False) -> list[Vehicle]:
    vehicles = _catalog().vehicles
    return [v for v in vehicles if v.available] if available_only else list(vehicles)


@router.get("/api/quality")
def get_quality() -> dict:
    return build_quality_report(get_settings())


@router.get("/api/i18n/{locale}")
def get_labels(locale: str) -> dict[str, Any]:
    tr = Translator(locale)
    return {"locale": tr.locale, "direction": tr.direction, "labels": tr.labels()}


@router.get("/api/settings")
def get_public_settings() -> dict:
    """Return settings safe to expose to clients."""
    settings = get_settings()
    return {
        "app": {"name": settings.app.name, "locale": settings.app.locale},
        "location": {
            "default": settings.location.default.model_dump(),
            "provider": settings.location.provider,
        },
        "feed": settings.feed.model_dump(),
        "maps": settings.maps.model_dump(),
    }
