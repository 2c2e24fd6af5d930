from __future__ import annotations

import logging
import math
from typing import Optional

from django.conf import settings
import redis

from .interfaces import CacheProvider

logger = logging.getLogger(__name__)


class RedisCacheProvider(CacheProvider):
    """Redis-backed cache for shared deployments.

    Values are strings (the cached repository stores JSON). Failures are
    logged and reported as misses so the store is queried instead.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float = 300.0,
        host: Optional[str] = None,
        port: Optional[int] = None,
        client: Optional[redis.Redis] = None,
    ):
        self._ttl = ttl_seconds
        if client is None:
            host = host or settings.REDIS_HOST
            port = int(port or settings.REDIS_PORT)
            # decode_responses=True to work with str values
            client = redis.Redis(host=host, port=port, decode_responses=True)
        self._client = client

    def get(self, key: str) -> Optional[str]:
        try:
            return self._client.get(key)
        except redis.RedisError as exc:
            logger.warning("Redis get failed for %s: %s", key, exc)
            return None

    def set(self, key: str, value: str, ttl_seconds: Optional[float] = None) -> None:
        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        try:
            self._client.setex(key, max(1, math.ceil(ttl)), value)
        except redis.RedisError as exc:
            logger.warning("Redis set failed for %s: %s", key, exc)

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
