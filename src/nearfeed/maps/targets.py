"""
Map target projections.

The same ranked feed is drawn by one of three map targets, picked once per platform:
- native map (iOS/Android): one marker per entry + an initial region around the origin;
- web tile map (Leaflet-style): one marker per entry with an HTML popup;
- static image fallback: the nearest few entries as pixel pins over a background image.

Each target only reads public fields of ranked entries; the ranking pipeline never
knows which target was selected.
"""

from __future__ import annotations

from html import escape
from typing import Any, Protocol, Sequence

from nearfeed.config.settings import MapsSettings, Settings
from nearfeed.core.geo import GeoPoint
from nearfeed.domain.models import RankedItem

# Pin marker is 24px wide; offset so its center sits on the coordinate.
_PIN_HALF_WIDTH_PX = 12


class MapTarget(Protocol):
    name: str

    def project(self, feed: Sequence[RankedItem], origin: GeoPoint) -> dict[str, Any]: ...


def format_distance(distance_km: float, *, digits: int = 2) -> str:
    return f"{distance_km:.{digits}f} km"


class NativeMapTarget:
    name = "native"

    def __init__(self, maps: MapsSettings):
        self._delta = maps.native_region_delta

    def project(self, feed: Sequence[RankedItem], origin: GeoPoint) -> dict[str, Any]:
        markers = [
            {
                "key": it.detail_key,
                "coordinate": {"latitude": it.coordinate.lat, "longitude": it.coordinate.lon},
                "title": it.display_name,
                "description": format_distance(it.distance_km),
            }
            for it in feed
        ]
        return {
            "target": self.name,
            "initial_region": {
                "latitude": origin.lat,
                "longitude": origin.lon,
                "latitude_delta": self._delta,
                "longitude_delta": self._delta,
            },
            "markers": markers,
        }


class WebTileMapTarget:
    name = "web"

    def __init__(self, maps: MapsSettings):
        self._tile_url = maps.tile_url_template
        self._max_zoom = maps.tile_max_zoom

    def project(self, feed: Sequence[RankedItem], origin: GeoPoint) -> dict[str, Any]:
        markers = []
        for it in feed:
            popup = (
                f"<strong>{escape(it.display_name)}</strong>"
                f"<div>{escape(it.secondary_descriptor)}</div>"
                f"<div>{format_distance(it.distance_km)}</div>"
            )
            markers.append(
                {
                    "key": it.detail_key,
                    "lat_lng": [it.coordinate.lat, it.coordinate.lon],
                    "popup_html": popup,
                }
            )
        return {
            "target": self.name,
            "center": [origin.lat, origin.lon],
            "tile_url": self._tile_url,
            "max_zoom": self._max_zoom,
            "markers": markers,
        }


class StaticImageTarget:
    name = "image"

    def __init__(self, maps: MapsSettings):
        self._limit = maps.image_pin_limit
        self._scale = maps.image_scale
        self._width = maps.image_width
        self._top_offset = maps.image_top_offset

    def project(self, feed: Sequence[RankedItem], origin: GeoPoint) -> dict[str, Any]:
        pins = []
        for it in feed[: self._limit]:
            dx = (it.coordinate.lon - origin.lon) * self._scale
            dy = (it.coordinate.lat - origin.lat) * -self._scale
            pins.append(
                {
                    "key": it.detail_key,
                    "left": self._width / 2 + dx - _PIN_HALF_WIDTH_PX,
                    "top": self._top_offset + dy,
                }
            )
        return {"target": self.name, "pins": pins}


def select_map_target(platform: str | None, settings: Settings) -> MapTarget:
    """Choose the map target for a platform name (`ios`, `android`, `web`, anything else)."""
    p = (platform or "").strip().lower()
    if p in {"ios", "android"}:
        return NativeMapTarget(settings.maps)
    if p == "web":
        return WebTileMapTarget(settings.maps)
    return StaticImageTarget(settings.maps)
