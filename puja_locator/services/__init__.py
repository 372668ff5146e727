"""Service layer exports."""

from .cache import ResponseCache
from .feed import PujaFeed, location_records, parse_pujas, read_local_feed
from .geolocation import GeoProviderChain
from .http_client import HTTPClient
from .normalizer import CoordinateNormalizer, correct_swapped_lat_lng, parse_lat_lng
from .providers import (
    GeoProvider,
    IpApiComProvider,
    IpApiProvider,
    IpWhoIsProvider,
    build_providers,
)
from .ranking import ProximityRanker

__all__ = [
    "ResponseCache",
    "PujaFeed",
    "location_records",
    "parse_pujas",
    "read_local_feed",
    "GeoProviderChain",
    "HTTPClient",
    "CoordinateNormalizer",
    "correct_swapped_lat_lng",
    "parse_lat_lng",
    "GeoProvider",
    "IpApiComProvider",
    "IpApiProvider",
    "IpWhoIsProvider",
    "build_providers",
    "ProximityRanker",
]
