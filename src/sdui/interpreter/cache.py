"""View Cache - lightweight wrapper around the generic LRU cache."""

from typing import NamedTuple

from sdui.core import LRUCache
from sdui.monitoring import metrics_collector
from .output import ResolvedNode


class CacheKey(NamedTuple):
    """Component identity plus fingerprint of the data used to resolve it."""

    component_id: str
    fingerprint: str


class ViewCache:
    """
    Memoizes resolved subtrees per render session.

    A changed fingerprint yields a different key, so stale output is never
    returned. Entries hold `None` for subtrees that resolved to nothing
    (omitted conditionals), which is why lookups report presence separately.
    """

    def __init__(self, max_size: int = 512, ttl_seconds: int | None = None) -> None:
        """
        Initialize view cache.

        Args:
            max_size: Maximum cached subtrees
            ttl_seconds: Optional time-to-live in seconds
        """
        self._cache: LRUCache[tuple[ResolvedNode | None]] = LRUCache(
            max_size=max_size,
            ttl_seconds=ttl_seconds,
        )

    def get(self, key: CacheKey) -> tuple[ResolvedNode | None] | None:
        """Cached output wrapped in a 1-tuple, or None on a miss."""
        entry = self._cache.get(key)
        metrics_collector.record_view_cache(hit=entry is not None)
        return entry

    def put(self, key: CacheKey, output: ResolvedNode | None) -> None:
        self._cache.set(key, (output,))

    def invalidate(self, component_id: str) -> int:
        """Drop every entry for one component, whatever its fingerprint."""
        return self._cache.delete_where(lambda k: k.component_id == component_id)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    @property
    def stats(self):
        """Get cache statistics."""
        return self._cache.stats


__all__ = ["CacheKey", "ViewCache"]
