"""Request pipeline: load feed, normalize, geolocate, rank."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from redis import Redis

from ..config import FEED_CONFIG, GEO_CONFIG, QUEUE_CONFIG
from ..core import Coordinate, LocatorResult, RankedResult
from ..services import (
    CoordinateNormalizer,
    GeoProviderChain,
    ProximityRanker,
    PujaFeed,
    ResponseCache,
    build_providers,
    location_records,
)
from ..services.geolocation import SOURCE_FALLBACK
from ..utils import parse_float

logger = logging.getLogger(__name__)

SOURCE_QUERY = "query"


def explicit_coordinate(latitude: object, longitude: object) -> Optional[Coordinate]:
    """Return caller-supplied coordinates when both parse and are in range."""

    lat = parse_float(latitude)
    lng = parse_float(longitude)
    if lat is None or lng is None:
        return None
    coordinate = Coordinate(latitude=lat, longitude=lng)
    return coordinate if coordinate.is_valid() else None


@dataclass(slots=True)
class LocatorPipeline:
    """Orchestrates one listing request."""

    feed: PujaFeed
    normalizer: CoordinateNormalizer
    geolocator: GeoProviderChain
    ranker: ProximityRanker

    def run(
        self,
        *,
        client_ip: Optional[str],
        latitude: object = None,
        longitude: object = None,
        location: Optional[str] = None,
    ) -> LocatorResult:
        pujas = self.feed.load()
        if not pujas:
            logger.info("No pujas available; returning an empty listing")
            return LocatorResult(
                pujas=[],
                ranking=RankedResult(),
                user_location=None,
                location_source=SOURCE_FALLBACK,
            )

        locations = self.normalizer.normalize(location_records(pujas))

        user_location = explicit_coordinate(latitude, longitude)
        if user_location is not None:
            source = SOURCE_QUERY
        else:
            user_location, source = self.geolocator.resolve_with_source(client_ip)

        ranking = self.ranker.rank(user_location, locations)
        logger.info(
            "Ranked %d locations from %d pujas; nearest is %r (%s location)",
            len(ranking.ranked_locations),
            len(pujas),
            ranking.nearest_name,
            source,
        )

        if location:
            pujas = [puja for puja in pujas if puja.location_identifier == location]

        return LocatorResult(
            pujas=pujas,
            ranking=ranking,
            user_location=user_location,
            location_source=source,
        )

    @classmethod
    def default(cls, redis_connection: Optional[Redis] = None) -> "LocatorPipeline":
        connection = redis_connection or Redis.from_url(QUEUE_CONFIG.redis_url)
        cache = ResponseCache(connection, prefix=QUEUE_CONFIG.cache_prefix)
        providers = build_providers(
            GEO_CONFIG.providers,
            timeout=GEO_CONFIG.provider_timeout,
            ipapi_access_key=GEO_CONFIG.ipapi_access_key,
        )
        return cls(
            feed=PujaFeed(
                FEED_CONFIG.csv_url,
                timeout=FEED_CONFIG.timeout,
                cache=cache,
                cache_ttl=FEED_CONFIG.cache_ttl,
            ),
            normalizer=CoordinateNormalizer(),
            geolocator=GeoProviderChain(
                providers,
                fallback=GEO_CONFIG.fallback,
                cache=cache,
                cache_ttl=GEO_CONFIG.cache_ttl,
            ),
            ranker=ProximityRanker(),
        )
