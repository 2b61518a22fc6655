"""Cache capability: regions, keys and the cache manager protocol."""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


def _format_param(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, Iterable) and not isinstance(value, str):
        return ",".join(str(v) for v in value)
    return str(value)


@dataclass(frozen=True, slots=True)
class CacheKey:
    """A prepared cache key."""

    key: str
    ttl_seconds: float | None = None


@dataclass(frozen=True, slots=True)
class CacheRegion:
    """A namespace of cache keys that is invalidated as a whole."""

    prefix: str

    def key(self, name: str, *params: Any, ttl_seconds: float | None = None) -> CacheKey:
        """Prepare a key in this region.

        Iterable parameters are joined with commas, booleans are lower-cased:
        ``TAG_REGION.key("count", 1, [3, 4], False)`` gives
        ``catalog.tag.count.1-3,4-false``.
        """
        parts = "-".join(_format_param(p) for p in params)
        suffix = f"{name}.{parts}" if parts else name
        return CacheKey(key=f"{self.prefix}{suffix}", ttl_seconds=ttl_seconds)


TAG_REGION = CacheRegion("catalog.tag.")


class ICacheManager(Protocol):
    """Keyed memoization with region invalidation."""

    async def get(self, key: CacheKey, acquire: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value, computing and storing it on a miss."""
        ...

    async def remove(self, key: CacheKey) -> None:
        """Remove a single key."""
        ...

    async def invalidate(self, region: CacheRegion) -> int:
        """Remove every key of a region and return how many were removed."""
        ...
