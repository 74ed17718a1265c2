# src/nearfeed/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/nearfeed/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `NEARFEED_CONFIG_PATH`
- environment variables (e.g., `NEARFEED_LOG_LEVEL`, `NEARFEED_DEFAULT_LAT`)

Design rule:
- Tuning knobs (default origin, map pin scale, catalog paths) live in YAML, not in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal
from nearfeed.core.env import load_dotenv_if_present

import yaml
from pydantic import BaseModel, Field


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `nearfeed.config`."""
    text = resources.files("nearfeed.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "NearFeed"
    log_level: str = "INFO"
    locale: str = "fr"


class CatalogSettings(BaseModel):
    properties_path: str = "data/catalogs/properties.json"
    vehicles_path: str = "data/catalogs/vehicles.json"


class CoordinateSettings(BaseModel):
    lat: float = 37.7749
    lon: float = -122.4194


class LocationSettings(BaseModel):
    # Used whenever permission is denied or the provider fails.
    default: CoordinateSettings = Field(default_factory=CoordinateSettings)
    provider: Literal["static", "http"] = "static"
    http_url: str = "https://ipapi.co/json/"
    http_timeout_seconds: float = 5


class FeedSettings(BaseModel):
    exclude_missing_coordinates: bool = False


class MapsSettings(BaseModel):
    native_region_delta: float = 0.1
    tile_url_template: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    tile_max_zoom: int = 19
    image_pin_limit: int = Field(10, ge=0)
    image_scale: float = 8000
    image_width: int = 390
    image_top_offset: int = 120


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    location: LocationSettings = Field(default_factory=LocationSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    maps: MapsSettings = Field(default_factory=MapsSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: the whitelist is kept small on purpose; everything else comes from YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("NEARFEED_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    locale = os.getenv("NEARFEED_LOCALE")
    if locale:
        data.setdefault("app", {})["locale"] = locale

    lat = os.getenv("NEARFEED_DEFAULT_LAT")
    lon = os.getenv("NEARFEED_DEFAULT_LON")
    if lat and lon:
        data.setdefault("location", {})["default"] = {"lat": float(lat), "lon": float(lon)}

    provider = os.getenv("NEARFEED_LOCATION_PROVIDER")
    if provider:
        data.setdefault("location", {})["provider"] = provider

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("NEARFEED_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
