"""Command line entry point: print venues ranked by distance."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, Optional

from .config import FEED_CONFIG, GEO_CONFIG
from .core import FeedError, Puja
from .pipelines import explicit_coordinate
from .services import (
    CoordinateNormalizer,
    GeoProviderChain,
    ProximityRanker,
    PujaFeed,
    build_providers,
    location_records,
    parse_pujas,
    read_local_feed,
)
from .utils import format_distance

LOGGER = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List puja venues nearest to a location.")
    parser.add_argument("--ip", help="Client IP address to geolocate")
    parser.add_argument("--lat", type=float, help="Explicit latitude; overrides --ip when given with --lng")
    parser.add_argument("--lng", type=float, help="Explicit longitude; overrides --ip when given with --lat")
    parser.add_argument(
        "--csv",
        type=Path,
        help="Read pujas from a local CSV file instead of the published spreadsheet",
    )
    parser.add_argument("--limit", type=int, default=10, help="Number of venues to print (default: 10)")
    parser.add_argument(
        "--timeout",
        type=float,
        default=GEO_CONFIG.provider_timeout,
        help=f"Timeout (seconds) for each geolocation provider (default: {GEO_CONFIG.provider_timeout:g})",
    )
    parser.add_argument("--verbose", action="store_true", help="Log each processing step")
    return parser


def _load_pujas(csv_path: Optional[Path]) -> list[Puja]:
    if csv_path is not None:
        return read_local_feed(csv_path)
    feed = PujaFeed(FEED_CONFIG.csv_url, timeout=FEED_CONFIG.timeout)
    return parse_pujas(feed.fetch_text())


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        pujas = _load_pujas(args.csv)
    except FeedError as error:
        LOGGER.error("%s", error)
        return 1

    locations = CoordinateNormalizer().normalize(location_records(pujas))

    user_location = explicit_coordinate(args.lat, args.lng)
    if user_location is None:
        providers = build_providers(
            GEO_CONFIG.providers,
            timeout=args.timeout,
            ipapi_access_key=GEO_CONFIG.ipapi_access_key,
        )
        user_location = GeoProviderChain(providers, fallback=GEO_CONFIG.fallback).resolve(args.ip)

    ranking = ProximityRanker().rank(user_location, locations)
    print(f"Your location: {user_location.latitude:.4f}, {user_location.longitude:.4f}")
    if not ranking.ranked_locations:
        print("No puja venues found.")
        return 0

    for position, location in enumerate(ranking.ranked_locations[: args.limit], start=1):
        print(f"{position:>3}. {location.name} ({format_distance(location.distance_km)})")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
