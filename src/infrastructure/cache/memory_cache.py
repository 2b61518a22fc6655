"""In-memory cache manager with per-key expiry and region invalidation."""

import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog

from domain.caching import CacheKey, CacheRegion

logger = structlog.get_logger()

T = TypeVar("T")


class InMemoryCacheManager:
    """Process-local ICacheManager.

    Entries expire after the key's own TTL or ``default_ttl_seconds``. A TTL
    of 0 disables caching. Concurrent misses on one key may both compute;
    the last writer wins.
    """

    def __init__(
        self,
        default_ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    async def get(self, key: CacheKey, acquire: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value, computing and storing it on a miss."""
        entry = self._entries.get(key.key)
        now = self._clock()
        if entry is not None:
            expires_at, value = entry
            if expires_at > now:
                return value  # type: ignore[no-any-return]
            del self._entries[key.key]

        logger.debug("cache_miss", key=key.key)
        value = await acquire()

        ttl = key.ttl_seconds if key.ttl_seconds is not None else self._default_ttl
        if ttl > 0:
            self._entries[key.key] = (self._clock() + ttl, value)
        return value

    async def remove(self, key: CacheKey) -> None:
        """Remove a single key."""
        self._entries.pop(key.key, None)

    async def invalidate(self, region: CacheRegion) -> int:
        """Remove every key of a region and return how many were removed."""
        keys = [k for k in self._entries if k.startswith(region.prefix)]
        for k in keys:
            del self._entries[k]
        logger.info("cache_region_invalidated", region=region.prefix, keys_removed=len(keys))
        return len(keys)

