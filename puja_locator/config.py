"""Runtime configuration for the Puja Locator project."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .core import Coordinate


DEFAULT_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/"
    "1xU4M79f59nXjrIRl50-Ars22fI9K2OZf4RfEFjgS590/export?format=csv"
)

# Geographic centroid of India, the primary deployment country.
INDIA_CENTROID = Coordinate(latitude=20.5937, longitude=78.9629)


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    return float(value) if value not in (None, "") else default


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    return int(value) if value not in (None, "") else default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.environ.get(name)
    if not value:
        return default
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class FeedConfig:
    """Where the puja spreadsheet lives and how long it is cached."""

    csv_url: str = DEFAULT_CSV_URL
    timeout: int = 10  # seconds
    cache_ttl: int = 60 * 10  # seconds


@dataclass(frozen=True)
class GeoConfig:
    """IP geolocation providers, timeouts and the static fallback."""

    providers: tuple[str, ...] = ("ipwhois", "ipapi_com", "ip_api")
    provider_timeout: float = 5.0  # seconds, per provider call
    ipapi_access_key: str | None = None
    fallback: Coordinate = INDIA_CENTROID
    cache_ttl: int = 60 * 60  # seconds


@dataclass(frozen=True)
class QueueConfig:
    """Configuration for the Redis cache and the RQ task queue."""

    redis_url: str = "redis://localhost:6379/0"
    queue_name: str = "puja-locator"
    default_timeout: int = 60 * 5  # seconds
    cache_prefix: str = "puja-locator"


FEED_CONFIG = FeedConfig(
    csv_url=os.environ.get("PUJA_LOCATOR_CSV_URL", FeedConfig.csv_url),
    timeout=_env_int("PUJA_LOCATOR_FEED_TIMEOUT", FeedConfig.timeout),
    cache_ttl=_env_int("PUJA_LOCATOR_FEED_CACHE_TTL", FeedConfig.cache_ttl),
)
GEO_CONFIG = GeoConfig(
    providers=_env_list("PUJA_LOCATOR_GEO_PROVIDERS", GeoConfig.providers),
    provider_timeout=_env_float("PUJA_LOCATOR_GEO_TIMEOUT", GeoConfig.provider_timeout),
    ipapi_access_key=os.environ.get("PUJA_LOCATOR_IPAPI_KEY") or None,
    fallback=Coordinate(
        latitude=_env_float("PUJA_LOCATOR_FALLBACK_LAT", INDIA_CENTROID.latitude),
        longitude=_env_float("PUJA_LOCATOR_FALLBACK_LNG", INDIA_CENTROID.longitude),
    ),
    cache_ttl=_env_int("PUJA_LOCATOR_GEO_CACHE_TTL", GeoConfig.cache_ttl),
)
QUEUE_CONFIG = QueueConfig(
    redis_url=os.environ.get("PUJA_LOCATOR_REDIS_URL", QueueConfig.redis_url),
    queue_name=os.environ.get("PUJA_LOCATOR_QUEUE", QueueConfig.queue_name),
    default_timeout=_env_int("PUJA_LOCATOR_QUEUE_TIMEOUT", QueueConfig.default_timeout),
    cache_prefix=os.environ.get("PUJA_LOCATOR_CACHE_PREFIX", QueueConfig.cache_prefix),
)
