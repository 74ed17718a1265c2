import json

import pytest
from pydantic import ValidationError

from conftest import make_property, make_vehicle

from nearfeed.catalog.loader import (
    Catalog,
    filter_properties_by_type,
    find_listing,
    load_catalog,
    load_properties,
    load_vehicles,
    parse_detail_key,
)
from nearfeed.config.settings import get_settings


def test_load_vehicles_accepts_app_camel_case(tmp_path):
    path = tmp_path / "vehicles.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": 7,
                    "name": "Clio",
                    "brand": "Renault",
                    "year": 2020,
                    "pricePerDay": 40,
                    "seats": 5,
                    "fuelType": "Diesel",
                    "rating": 4.1,
                    "image": "x.jpg",
                    "available": False,
                }
            ]
        ),
        encoding="utf-8",
    )
    (v,) = load_vehicles(path)
    assert v.id == "7"
    assert v.price_per_day == 40
    assert v.fuel_type == "Diesel"
    assert v.available is False
    assert v.has_coordinate is False


def test_load_properties_rejects_bad_rows(tmp_path):
    path = tmp_path / "properties.json"
    path.write_text(json.dumps([{"id": "1", "title": "No location or price"}]), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_properties(path)


def test_load_properties_rejects_non_finite_coordinates(tmp_path):
    path = tmp_path / "properties.json"
    # json.dumps/json.loads round-trip NaN and Infinity as bare tokens.
    row = {"id": 1, "title": "Loft", "location": "Lyon", "price": 900, "latitude": float("nan"), "longitude": 0}
    path.write_text(json.dumps([row]), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_properties(path)


def test_vehicle_rejects_infinite_coordinates():
    with pytest.raises(ValidationError):
        make_vehicle("1", lat=float("inf"), lon=0.0)


def test_default_catalog_loads():
    catalog = load_catalog(get_settings())
    assert len(catalog.properties) == 5
    assert len(catalog.vehicles) == 3
    assert {p.type for p in catalog.properties} == {"Apartment", "Villa", "Home", "Office"}


def test_parse_detail_key():
    assert parse_detail_key("property-1") == ("property", "1")
    assert parse_detail_key("vehicle-abc-42") == ("vehicle", "abc-42")
    assert parse_detail_key("car-3") == ("vehicle", "3")
    with pytest.raises(ValueError):
        parse_detail_key("boat-1")
    with pytest.raises(ValueError):
        parse_detail_key("property")
    with pytest.raises(ValueError):
        parse_detail_key("property-")


def test_find_listing():
    catalog = Catalog(
        properties=(make_property("1", title="Loft"), make_property("x-2", title="Dashed")),
        vehicles=(make_vehicle("1", name="Clio"),),
    )
    assert find_listing(catalog, "property-1").title == "Loft"
    assert find_listing(catalog, "property-x-2").title == "Dashed"
    assert find_listing(catalog, "vehicle-1").name == "Clio"
    assert find_listing(catalog, "vehicle-2") is None


def test_filter_properties_by_type():
    props = [make_property("1", type="Villa"), make_property("2", type="Home"), make_property("3")]
    assert filter_properties_by_type(props, "All") == props
    assert filter_properties_by_type(props, None) == props
    assert [p.id for p in filter_properties_by_type(props, "Villa")] == ["1"]
    assert filter_properties_by_type(props, "Office") == []
