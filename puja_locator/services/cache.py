"""Redis-backed cache for upstream responses."""

from __future__ import annotations

import logging
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class ResponseCache:
    """Store short-lived strings under a common key prefix.

    Redis being unavailable never breaks a request: read failures are
    reported as misses and write failures are dropped.
    """

    def __init__(self, connection: Redis, *, prefix: str = "puja-locator"):
        self.connection = connection
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.connection.get(self._key(key))
        except RedisError as exc:
            logger.warning("Cache read for %s failed: %s", key, exc)
            return None
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, ttl: int) -> None:
        try:
            self.connection.setex(self._key(key), ttl, value)
        except RedisError as exc:
            logger.warning("Cache write for %s failed: %s", key, exc)
