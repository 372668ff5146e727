"""Resolve a client IP to a coordinate through an ordered provider chain."""

from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

from ..core import Coordinate
from ..utils import is_routable_ip
from .cache import ResponseCache
from .providers import GeoProvider

logger = logging.getLogger(__name__)

SOURCE_IP = "ip"
SOURCE_FALLBACK = "fallback"


class GeoProviderChain:
    """Try each provider in turn; fall back to a static coordinate.

    Providers are queried one after another, never concurrently, so a single
    request costs at most one call per provider. The chain keeps no state
    between calls apart from the optional cache.
    """

    def __init__(
        self,
        providers: Sequence[GeoProvider],
        *,
        fallback: Coordinate,
        cache: Optional[ResponseCache] = None,
        cache_ttl: int = 3600,
    ):
        self.providers = list(providers)
        self.fallback = fallback
        self.cache = cache
        self.cache_ttl = cache_ttl

    def resolve(self, ip: Optional[str]) -> Coordinate:
        """Return the best-effort coordinate for ``ip``; never raises."""

        coordinate, _source = self.resolve_with_source(ip)
        return coordinate

    def resolve_with_source(self, ip: Optional[str]) -> tuple[Coordinate, str]:
        if not is_routable_ip(ip):
            logger.info("Address %r is not publicly routable; using fallback location", ip)
            return self.fallback, SOURCE_FALLBACK

        cached = self._cached(ip)
        if cached is not None:
            return cached, SOURCE_IP

        if not self.providers:
            logger.warning("No geolocation providers configured; using fallback location")
            return self.fallback, SOURCE_FALLBACK

        for provider in self.providers:
            coordinate = provider.locate(ip)
            if coordinate is not None:
                logger.info("Located client via %s", provider.name)
                self._store(ip, coordinate)
                return coordinate, SOURCE_IP

        logger.warning("All %d geolocation providers failed; using fallback location", len(self.providers))
        return self.fallback, SOURCE_FALLBACK

    def _cached(self, ip: str) -> Optional[Coordinate]:
        if self.cache is None:
            return None
        raw = self.cache.get(f"geo:{ip}")
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            return Coordinate(latitude=float(data["latitude"]), longitude=float(data["longitude"]))
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Ignoring malformed cached location for %s: %s", ip, exc)
            return None

    def _store(self, ip: str, coordinate: Coordinate) -> None:
        if self.cache is None:
            return
        self.cache.set(f"geo:{ip}", json.dumps(coordinate.as_dict()), self.cache_ttl)
