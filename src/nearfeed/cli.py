"""
NearFeed CLI entrypoint.

This CLI is intended for quick local demos and debugging without a mobile client.
It delegates all feed logic to `nearfeed.nearby.feed.search_nearby`.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from nearfeed.catalog.loader import find_listing, load_catalog
from nearfeed.config.settings import get_settings
from nearfeed.core.geo import GeoPoint
from nearfeed.core.logging import configure_logging
from nearfeed.domain.models import Category, FilterState
from nearfeed.i18n.translator import Translator
from nearfeed.location.provider import build_location_provider
from nearfeed.maps.targets import format_distance
from nearfeed.nearby.feed import search_nearby
from nearfeed.quality.report import build_quality_report


def _cmd_feed(args: argparse.Namespace) -> int:
    """Handle the `feed` subcommand."""
    settings = get_settings()
    if (args.lat is None) != (args.lon is None):
        raise SystemExit("--lat and --lon must be given together")

    origin = GeoPoint(lat=float(args.lat), lon=float(args.lon)) if args.lat is not None else None
    state = FilterState(category=args.category, search_text=args.search or "")
    result = search_nearby(
        state,
        catalog=load_catalog(settings),
        settings=settings,
        origin=origin,
        location_provider=build_location_provider(settings),
        platform=args.platform,
    )

    if args.json:
        print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return 0

    tr = Translator(args.locale or settings.app.locale)
    o = result.origin
    print(f"{tr.t('nearby')} ({o.lat:.4f}, {o.lon:.4f}; {o.source})")
    if not result.items:
        print(f"  {tr.t('noNearbyResults')}")
        return 0
    for i, item in enumerate(result.items, start=1):
        flag = "  [no coordinates]" if item.coordinate_missing else ""
        print(
            f"{i:>2}. {item.display_name} - {item.secondary_descriptor}"
            f"  {format_distance(item.distance_km, digits=1)}  ({item.detail_key}){flag}"
        )
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        item = find_listing(load_catalog(settings), args.key)
    except ValueError as e:
        raise SystemExit(str(e)) from e
    if item is None:
        print(f"Listing '{args.key}' not found")
        return 1
    print(json.dumps(item.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    return 0


def _cmd_quality_report(_: argparse.Namespace) -> int:
    settings = get_settings()
    report = build_quality_report(settings)
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the NearFeed CLI."""
    parser = argparse.ArgumentParser(prog="nearfeed")
    sub = parser.add_subparsers(dest="command", required=True)

    feed = sub.add_parser("feed", help="Rank properties and cars by distance from an origin.")
    feed.add_argument("--lat", type=float, default=None, help="Origin latitude (omit to use the location provider)")
    feed.add_argument("--lon", type=float, default=None, help="Origin longitude")
    feed.add_argument(
        "--category",
        type=str,
        default=Category.ALL.value,
        help="all | properties | vehicles (unknown values mean all)",
    )
    feed.add_argument("--search", type=str, default="", help="Case-insensitive text in name/title or location/brand")
    feed.add_argument("--platform", type=str, default=None, help="ios | android | web | other; adds map markers")
    feed.add_argument("--locale", type=str, default=None, help="Label language (en, fr, ar)")
    feed.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    feed.set_defaults(func=_cmd_feed)

    show = sub.add_parser("show", help="Print one listing by detail key (e.g. property-1, vehicle-2).")
    show.add_argument("key")
    show.set_defaults(func=_cmd_show)

    q = sub.add_parser("quality-report", help="Offline catalog quality report.")
    q.set_defaults(func=_cmd_quality_report)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m nearfeed.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
