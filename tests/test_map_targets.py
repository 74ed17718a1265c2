import pytest

from conftest import make_property, make_vehicle

from nearfeed.config.settings import Settings
from nearfeed.core.geo import GeoPoint
from nearfeed.maps.targets import (
    NativeMapTarget,
    StaticImageTarget,
    WebTileMapTarget,
    format_distance,
    select_map_target,
)
from nearfeed.nearby.feed import build_feed

ORIGIN = GeoPoint(lat=0.0, lon=0.0)


@pytest.mark.parametrize(
    "platform, expected",
    [
        ("ios", NativeMapTarget),
        ("Android", NativeMapTarget),
        ("web", WebTileMapTarget),
        ("windows", StaticImageTarget),
        (None, StaticImageTarget),
    ],
)
def test_select_map_target(platform, expected):
    assert isinstance(select_map_target(platform, Settings()), expected)


def test_format_distance():
    assert format_distance(1.23456) == "1.23 km"
    assert format_distance(1.25, digits=1) == "1.2 km"


def test_native_markers_cover_whole_feed():
    feed = build_feed([make_property("1", title="Loft", lat=0.0, lon=1.0)], [make_vehicle("2", name="Clio")], ORIGIN)
    out = NativeMapTarget(Settings().maps).project(feed, GeoPoint(lat=10.0, lon=20.0))

    assert out["initial_region"] == {
        "latitude": 10.0,
        "longitude": 20.0,
        "latitude_delta": 0.1,
        "longitude_delta": 0.1,
    }
    assert [m["key"] for m in out["markers"]] == ["vehicle-2", "property-1"]
    loft = out["markers"][1]
    assert loft["title"] == "Loft"
    assert loft["description"] == "111.19 km"
    # Missing coordinates are pinned at (0, 0).
    assert out["markers"][0]["coordinate"] == {"latitude": 0.0, "longitude": 0.0}


def test_web_popups_are_escaped():
    feed = build_feed([make_property("1", title="<b>Loft</b>", location="A & B", lat=0.0, lon=0.0)], [], ORIGIN)
    out = WebTileMapTarget(Settings().maps).project(feed, ORIGIN)

    assert out["tile_url"].startswith("https://")
    (marker,) = out["markers"]
    assert marker["popup_html"] == "<strong>&lt;b&gt;Loft&lt;/b&gt;</strong><div>A &amp; B</div><div>0.00 km</div>"
    assert marker["lat_lng"] == [0.0, 0.0]


def test_image_pins_limit_and_offsets():
    properties = [make_property(str(i), lat=0.001, lon=0.002) for i in range(15)]
    feed = build_feed(properties, [], ORIGIN)
    out = StaticImageTarget(Settings().maps).project(feed, ORIGIN)

    assert len(out["pins"]) == 10
    pin = out["pins"][0]
    assert pin["left"] == pytest.approx(390 / 2 + 16 - 12)
    assert pin["top"] == pytest.approx(120 - 8)
