from __future__ import annotations

import functools

from django.conf import settings

from .cached_schedule import CachedScheduleRepository
from .interfaces import CacheProvider, ScheduleRepository
from .memory_cache import TTLCache
from .orm_schedule import OrmScheduleRepository
from .redis_cache import RedisCacheProvider


def cache_ttl_seconds() -> float:
    return getattr(settings, "ROUTE_LISTING_CACHE_TTL_MS", 300000) / 1000.0


@functools.lru_cache(maxsize=None)
def get_cache_provider() -> CacheProvider:
    """Return the cache shared by all requests of this process.

    - In-memory TTL cache by default.
    - Redis when CACHE_BACKEND is "redis".

    Call ``get_cache_provider.cache_clear()`` to drop it (tests do).
    """
    ttl = cache_ttl_seconds()
    if getattr(settings, "CACHE_BACKEND", "memory") == "redis":
        return RedisCacheProvider(ttl_seconds=ttl)
    return TTLCache(ttl, max_entries=getattr(settings, "CACHE_MAX_ENTRIES", None))


def get_schedule_repository(*, use_cache: bool = True) -> ScheduleRepository:
    """Factory to obtain a ScheduleRepository according to settings."""
    base_repo: ScheduleRepository = OrmScheduleRepository()
    if use_cache:
        return CachedScheduleRepository(base_repo, get_cache_provider(), ttl_seconds=cache_ttl_seconds())
    return base_repo
