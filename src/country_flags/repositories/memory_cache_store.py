"""In-memory implementation of CacheStore.

Process-local cache backed by ``cachetools.TLRUCache`` so each entry
carries its own expiry. Suitable for development, tests and
single-process deployments. Every access holds a lock, since the store
is shared across threadpool workers.
"""

import copy
import threading
import time
from collections.abc import Callable
from typing import Any

import structlog
from cachetools import TLRUCache

logger = structlog.get_logger(logger_name=__name__)


def _time_to_use(_key: str, item: tuple[Any, int], now: float) -> float:
    return now + item[1] * 60


class MemoryCacheStore:
    """In-memory TTL cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Values are deep-copied in and out so callers can never mutate a
    cached entry in place, matching the serialising backends.
    """

    def __init__(
        self,
        max_size: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the memory store.

        Args:
            max_size: Maximum number of entries before LRU eviction.
            timer: Clock used for expiry, in seconds.
        """
        self._cache: TLRUCache[str, tuple[Any, int]] = TLRUCache(
            maxsize=max_size,
            ttu=_time_to_use,
            timer=timer,
        )
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or None if missing/expired."""
        with self._lock:
            item = self._cache.get(key)
        if item is None:
            logger.debug("cache_miss", key=key, driver="memory")
            return None
        logger.debug("cache_hit", key=key, driver="memory")
        return copy.deepcopy(item[0])

    def put(self, key: str, value: Any, minutes: int = 60) -> None:
        """Store *value* under *key* for *minutes*."""
        entry = (copy.deepcopy(value), minutes)
        with self._lock:
            self._cache[key] = entry
        logger.debug("cache_put", key=key, minutes=minutes, driver="memory")

    def forget(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> int:
        """Drop every entry and return how many live entries were removed."""
        with self._lock:
            self._cache.expire()
            count = len(self._cache)
            self._cache.clear()
        return count

    def exists(self, key: str) -> bool:
        """Return True if *key* is present and not expired."""
        with self._lock:
            return key in self._cache

    def health_check(self) -> bool:
        """The memory store is always available."""
        return True

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats
        """
        with self._lock:
            self._cache.expire()
            total = len(self._cache)
        return {
            "driver": "memory",
            "total_entries": total,
            "max_size": self._cache.maxsize,
        }
