from __future__ import annotations

import pytest

from nearfeed.domain.models import Property, Vehicle


def make_property(id: str, *, title: str = "Flat", location: str = "Somewhere", lat=None, lon=None, **kw) -> Property:
    return Property(
        id=id,
        title=title,
        location=location,
        price=kw.pop("price", 1000),
        latitude=lat,
        longitude=lon,
        **kw,
    )


def make_vehicle(id: str, *, name: str = "Car", brand: str = "Brand", lat=None, lon=None, **kw) -> Vehicle:
    return Vehicle(
        id=id,
        name=name,
        brand=brand,
        year=kw.pop("year", 2022),
        price_per_day=kw.pop("price_per_day", 50),
        latitude=lat,
        longitude=lon,
        **kw,
    )


@pytest.fixture
def sample_catalog():
    # Three properties and two vehicles, all at distinct distances from (0, 0).
    properties = [
        make_property("p1", title="Seaside Villa", location="Nice", lat=0.0, lon=1.0),
        make_property("p2", title="City Loft", location="Lyon", lat=0.0, lon=3.0),
        make_property("p3", title="Garden House", location="Bordeaux", lat=0.0, lon=6.0),
    ]
    vehicles = [
        make_vehicle("v1", name="Clio", brand="Renault", lat=0.0, lon=2.0),
        make_vehicle("v2", name="Model Y", brand="Tesla", lat=0.0, lon=5.0),
    ]
    return properties, vehicles
