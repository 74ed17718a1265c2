"""
Location acquisition.

The ranking pipeline needs one origin coordinate. Where it comes from is a
collaborator concern:
- `StaticLocationProvider`: a fixed coordinate (or a denied permission), used by tests/CLI.
- `HttpLocationProvider`: IP geolocation over HTTP (server-side stand-in for a device GPS).

`acquire_origin` is the only entrypoint callers need. Permission denial and provider
failures are recovered locally with a documented default coordinate; they never raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal, Protocol

import httpx

from nearfeed.config.settings import Settings
from nearfeed.core.geo import GeoPoint
from nearfeed.core.http import get_json

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    def request_permission(self) -> bool: ...

    def get_current_coordinate(self) -> GeoPoint | None: ...


@dataclass(frozen=True)
class LocationFix:
    """The origin a feed is ranked against, plus where it came from."""

    coordinate: GeoPoint
    source: Literal["device", "default"]
    reason: str | None = None


class StaticLocationProvider:
    def __init__(self, coordinate: GeoPoint | None = None, *, granted: bool = True):
        self._coordinate = coordinate
        self._granted = granted

    def request_permission(self) -> bool:
        return self._granted

    def get_current_coordinate(self) -> GeoPoint | None:
        return self._coordinate


def _coordinate_from_payload(payload: Any) -> GeoPoint | None:
    if not isinstance(payload, dict):
        return None
    lat = payload.get("latitude", payload.get("lat"))
    lon = payload.get("longitude", payload.get("lon"))
    try:
        return GeoPoint(lat=float(lat), lon=float(lon))
    except (TypeError, ValueError):
        return None


class HttpLocationProvider:
    """IP geolocation via a JSON endpoint returning `latitude`/`longitude` (or `lat`/`lon`)."""

    def __init__(self, url: str, *, timeout_seconds: float = 5):
        self._url = url
        self._timeout_seconds = timeout_seconds

    def request_permission(self) -> bool:
        # No user prompt on the server side.
        return True

    def get_current_coordinate(self) -> GeoPoint | None:
        try:
            payload = get_json(self._url, timeout_seconds=self._timeout_seconds)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("IP geolocation lookup failed: %s", e)
            return None
        return _coordinate_from_payload(payload)


def build_location_provider(settings: Settings) -> LocationProvider:
    """Pick the provider named in settings (`static` never resolves a device fix)."""
    cfg = settings.location
    if cfg.provider == "http":
        return HttpLocationProvider(cfg.http_url, timeout_seconds=cfg.http_timeout_seconds)
    return StaticLocationProvider(None)


def default_origin(settings: Settings) -> GeoPoint:
    d = settings.location.default
    return GeoPoint(lat=d.lat, lon=d.lon)


def acquire_origin(provider: LocationProvider, default: GeoPoint) -> LocationFix:
    """Ask `provider` for the user's coordinate, falling back to `default`."""
    if not provider.request_permission():
        logger.info("Location permission denied; using default origin %s", default)
        return LocationFix(coordinate=default, source="default", reason="permission_denied")

    coordinate = provider.get_current_coordinate()
    if coordinate is None:
        logger.info("Location unavailable; using default origin %s", default)
        return LocationFix(coordinate=default, source="default", reason="unavailable")

    return LocationFix(coordinate=coordinate, source="device")
