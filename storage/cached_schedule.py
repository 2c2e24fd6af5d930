from __future__ import annotations

import json
import logging
from typing import List, Optional

from .interfaces import CacheProvider, RouteListing, ScheduleRepository

logger = logging.getLogger(__name__)


class CachedScheduleRepository(ScheduleRepository):
    """Cache wrapper for any ScheduleRepository.

    Only the route listing is cached. Departure times feed the arrival
    window, which depends on the current time, so they always go to the
    underlying repository.
    """

    def __init__(self, repo: ScheduleRepository, cache: CacheProvider, *, ttl_seconds: Optional[float] = None):
        self._repo = repo
        self._cache = cache
        self._ttl = ttl_seconds

    @staticmethod
    def _key(*, stop_id: str) -> str:
        return f"schedule:route_listing:stop={stop_id}:v1"

    def get_route_listing(self, *, stop_id: str) -> List[RouteListing]:
        key = self._key(stop_id=stop_id)
        cached = self._cache.get(key)
        if cached is not None:
            try:
                result = json.loads(cached)
                logger.debug("Route listing cache hit for stop %s", stop_id)
                return result
            except (TypeError, ValueError):
                logger.warning("Discarding unreadable cache entry %s", key)

        logger.debug("Route listing cache miss for stop %s", stop_id)
        result = self._repo.get_route_listing(stop_id=stop_id)
        self._cache.set(key, json.dumps(result), self._ttl)
        return result

    def get_departure_times(
        self,
        *,
        stop_id: str,
        route_short_name: str,
        headsign: Optional[str] = None,
        limit: int = 500,
    ) -> List[str]:
        return self._repo.get_departure_times(
            stop_id=stop_id,
            route_short_name=route_short_name,
            headsign=headsign,
            limit=limit,
        )
