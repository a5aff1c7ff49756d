"""Generic LRU cache with TTL, statistics and a single lock.

Used by the view cache on the interpretation path. All operations take the
same mutex so one cache can be shared by render threads.
"""

import threading
import time
from typing import Generic, TypeVar, Any
from collections import OrderedDict
from collections.abc import Hashable
from dataclasses import dataclass

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Export as dictionary."""
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class LRUCache(Generic[T]):
    """
    LRU cache with TTL support and statistics tracking.

    Features:
    - Type-safe generic implementation
    - Any hashable key (tuples included)
    - Optional TTL expiration
    - Least-recently-used eviction on size limit
    - Hit/miss statistics

    Examples:
        >>> cache = LRUCache[str](max_size=100)
        >>> cache.set(("header", "a4f6"), "value")
        >>> cache.get(("header", "a4f6"))
        'value'
    """

    def __init__(self, max_size: int = 100, ttl_seconds: int | None = None):
        """
        Initialize LRU cache.

        Args:
            max_size: Maximum number of entries
            ttl_seconds: Time-to-live in seconds (None = no expiration)
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds

        self._cache: OrderedDict[Hashable, tuple[T, float]] = OrderedDict()
        self._stats = Stats(max_size=max_size)
        self._lock = threading.Lock()

    def _is_expired(self, timestamp: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return time.monotonic() - timestamp >= self.ttl_seconds

    def get(self, key: Hashable) -> T | None:
        """
        Get cached value if available and not expired.

        Returns:
            Cached value or None if not found/expired
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._stats.misses += 1
                return None

            value, timestamp = entry
            if self._is_expired(timestamp):
                del self._cache[key]
                self._stats.size = len(self._cache)
                self._stats.misses += 1
                return None

            # Most recently used moves to the end
            self._cache.move_to_end(key)
            self._stats.hits += 1
            return value

    def set(self, key: Hashable, value: T) -> None:
        """Cache value, evicting the least recently used entry when full."""
        with self._lock:
            if key in self._cache:
                del self._cache[key]

            self._cache[key] = (value, time.monotonic())

            while len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
                self._stats.evictions += 1

            self._stats.size = len(self._cache)

    def delete(self, key: Hashable) -> bool:
        """
        Delete entry from cache.

        Returns:
            True if deleted, False if not found
        """
        with self._lock:
            if key in self._cache:
                del self._cache[key]
                self._stats.size = len(self._cache)
                return True
            return False

    def delete_where(self, predicate) -> int:
        """Delete every entry whose key satisfies predicate; returns count."""
        with self._lock:
            doomed = [k for k in self._cache if predicate(k)]
            for k in doomed:
                del self._cache[k]
            self._stats.size = len(self._cache)
            return len(doomed)

    def clear(self) -> None:
        """Clear entire cache."""
        with self._lock:
            self._cache.clear()
            self._stats.size = 0

    @property
    def stats(self) -> Stats:
        """Get cache statistics."""
        return self._stats

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: Hashable) -> bool:
        """Check if key exists (doesn't update LRU order)."""
        with self._lock:
            return key in self._cache


__all__ = ["LRUCache", "Stats"]
