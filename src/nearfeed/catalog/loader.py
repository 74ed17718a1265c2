"""
Listing catalog loader.

The catalog is two local JSON files (default: `data/catalogs/properties.json` and
`data/catalogs/vehicles.json`). We validate them into typed Pydantic models so the
ranking pipeline can assume a consistent shape.

This module also resolves the detail keys the presentation layer builds from a
ranked item (`"{kind}-{id}"`) back to catalog entries.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import TypeAdapter

from nearfeed.config.settings import Settings
from nearfeed.core.env import resolve_project_path
from nearfeed.domain.models import ListingKind, Property, Vehicle

logger = logging.getLogger(__name__)

_PROPERTIES_ADAPTER = TypeAdapter(list[Property])
_VEHICLES_ADAPTER = TypeAdapter(list[Vehicle])

# Older app builds linked vehicles as `car-<id>`.
_KIND_ALIASES: dict[str, ListingKind] = {"property": "property", "vehicle": "vehicle", "car": "vehicle"}


@dataclass(frozen=True)
class Catalog:
    """Both immutable listing collections for a session."""

    properties: tuple[Property, ...] = field(default_factory=tuple)
    vehicles: tuple[Vehicle, ...] = field(default_factory=tuple)


def _read_json(path: str | Path) -> object:
    resolved = resolve_project_path(path)
    return json.loads(resolved.read_text(encoding="utf-8"))


def load_properties(path: str | Path) -> list[Property]:
    """Load and validate a property catalog JSON file."""
    return _PROPERTIES_ADAPTER.validate_python(_read_json(path))


def load_vehicles(path: str | Path) -> list[Vehicle]:
    """Load and validate a vehicle catalog JSON file."""
    return _VEHICLES_ADAPTER.validate_python(_read_json(path))


def load_catalog(settings: Settings) -> Catalog:
    """Load both catalogs named in settings."""
    properties = load_properties(settings.catalog.properties_path)
    vehicles = load_vehicles(settings.catalog.vehicles_path)
    logger.info("Loaded catalog: %d properties, %d vehicles", len(properties), len(vehicles))
    return Catalog(properties=tuple(properties), vehicles=tuple(vehicles))


def parse_detail_key(key: str) -> tuple[ListingKind, str]:
    """Split a detail key into `(kind, id)`.

    Only the first `-` separates kind from id, so ids may themselves contain dashes.

    Raises:
        ValueError: If the key has no id part or an unknown kind.
    """
    kind_raw, sep, raw_id = key.strip().partition("-")
    if not sep or not raw_id:
        raise ValueError(f"Invalid detail key '{key}', expected KIND-ID")
    kind = _KIND_ALIASES.get(kind_raw.lower())
    if kind is None:
        raise ValueError(f"Unknown listing kind '{kind_raw}' in detail key '{key}'")
    return kind, raw_id


def find_listing(catalog: Catalog, key: str) -> Property | Vehicle | None:
    """Resolve a detail key to its catalog entry (None when the id is unknown)."""
    kind, raw_id = parse_detail_key(key)
    pool: tuple[Property, ...] | tuple[Vehicle, ...] = (
        catalog.properties if kind == "property" else catalog.vehicles
    )
    for item in pool:
        if item.id == raw_id:
            return item
    return None


def filter_properties_by_type(properties: list[Property] | tuple[Property, ...], property_type: str | None) -> list[Property]:
    """Property tab filter: `All` (or nothing) keeps everything, otherwise exact type match."""
    if not property_type or property_type == "All":
        return list(properties)
    return [p for p in properties if p.type == property_type]
