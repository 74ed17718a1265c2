"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- catalog entities (`Property`, `Vehicle`)
- ranked feed entries (`RankedProperty` / `RankedVehicle`, discriminated on `kind`)
- presentation inputs (`FilterState`) and the feed envelope (`FeedResult`)

Ranked entries are frozen: a distance is derived once from the current origin and
never edited in place; a new origin means a new feed.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, computed_field, field_validator

from nearfeed.core.geo import GeoPoint


ListingKind = Literal["property", "vehicle"]


class Category(str, Enum):
    """Coarse feed selector."""

    ALL = "all"
    PROPERTIES = "properties"
    VEHICLES = "vehicles"


def parse_category(value: Any) -> Category:
    """Parse a category name case-insensitively; unknown values fail open to `ALL`."""
    if isinstance(value, Category):
        return value
    try:
        return Category(str(value).strip().lower())
    except ValueError:
        return Category.ALL


def _coordinate_or_zero(lat: float | None, lon: float | None) -> GeoPoint:
    return GeoPoint(
        lat=lat if lat is not None else 0.0,
        lon=lon if lon is not None else 0.0,
    )


class Property(BaseModel):
    """A rental property from the catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    location: str
    price: float
    bedrooms: int = 0
    bathrooms: int = 0
    area: float = 0
    rating: float = Field(0, ge=0, le=5)
    image: str = ""
    type: str | None = None
    latitude: FiniteFloat | None = None
    longitude: FiniteFloat | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v: Any) -> str:
        return str(v)

    @property
    def coordinate(self) -> GeoPoint:
        """Stored coordinate; missing fields read as 0."""
        return _coordinate_or_zero(self.latitude, self.longitude)

    @property
    def has_coordinate(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class Vehicle(BaseModel):
    """A rental car from the catalog (JSON keys follow the app's camelCase)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    brand: str
    year: int
    price_per_day: float = Field(..., alias="pricePerDay")
    seats: int = 4
    fuel_type: str = Field("", alias="fuelType")
    rating: float = Field(0, ge=0, le=5)
    image: str = ""
    available: bool = True
    latitude: FiniteFloat | None = None
    longitude: FiniteFloat | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v: Any) -> str:
        return str(v)

    @property
    def coordinate(self) -> GeoPoint:
        """Stored coordinate; missing fields read as 0."""
        return _coordinate_or_zero(self.latitude, self.longitude)

    @property
    def has_coordinate(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class RankedProperty(Property):
    """A property annotated with its distance from the user."""

    kind: Literal["property"] = "property"
    distance_km: float = Field(..., ge=0)
    coordinate_missing: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_name(self) -> str:
        return self.title

    @computed_field  # type: ignore[prop-decorator]
    @property
    def secondary_descriptor(self) -> str:
        return self.location

    @computed_field  # type: ignore[prop-decorator]
    @property
    def detail_key(self) -> str:
        return f"{self.kind}-{self.id}"


class RankedVehicle(Vehicle):
    """A vehicle annotated with its distance from the user."""

    kind: Literal["vehicle"] = "vehicle"
    distance_km: float = Field(..., ge=0)
    coordinate_missing: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def display_name(self) -> str:
        return self.name

    @computed_field  # type: ignore[prop-decorator]
    @property
    def secondary_descriptor(self) -> str:
        return self.brand

    @computed_field  # type: ignore[prop-decorator]
    @property
    def detail_key(self) -> str:
        return f"{self.kind}-{self.id}"


RankedItem = Annotated[Union[RankedProperty, RankedVehicle], Field(discriminator="kind")]


class FilterState(BaseModel):
    """What the presentation layer sends back: category + free-text search."""

    category: Category = Category.ALL
    search_text: str = ""

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v: Any) -> Category:
        return parse_category(v)

    @field_validator("search_text", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class OriginInfo(BaseModel):
    """The coordinate used as ranking reference and where it came from."""

    lat: float
    lon: float
    source: Literal["device", "request", "default"]
    reason: str | None = None


class FeedResult(BaseModel):
    """Envelope returned by the API/CLI for one feed computation."""

    generated_at: datetime
    origin: OriginInfo
    filter: FilterState
    total_items: int
    items: list[RankedItem]
    meta: dict[str, Any] = Field(default_factory=dict)
