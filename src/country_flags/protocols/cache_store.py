"""Cache storage protocol.

Defines the interface for any key-value backend that can hold a cached
dataset with a per-entry expiration.

Implementations in this package:
- In-memory (process-local, cachetools)
- File (one JSON file per key)
- Redis (SETEX with a key prefix)
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for key-value cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from country_flags.protocols import CacheStore

        store: CacheStore = MemoryCacheStore()
        store: CacheStore = RedisCacheStore.create()
        ```
    """

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if absent or expired
        """
        ...

    def put(self, key: str, value: Any, minutes: int = 60) -> None:
        """Store a value, overwriting any existing entry for the key.

        Args:
            key: The cache key
            value: A JSON-serialisable value
            minutes: Minutes until the entry expires
        """
        ...

    def forget(self, key: str) -> None:
        """Remove an entry. Does nothing if the key is absent.

        Args:
            key: The cache key
        """
        ...

    def clear(self) -> int:
        """Remove every entry owned by this store.

        Returns:
            Number of entries removed
        """
        ...

    def exists(self, key: str) -> bool:
        """Check whether a valid, unexpired entry exists.

        Args:
            key: The cache key

        Returns:
            True if present and unexpired, False otherwise
        """
        ...

    def health_check(self) -> bool:
        """Check if the backend is usable.

        Returns:
            True if healthy, False otherwise
        """
        ...

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
