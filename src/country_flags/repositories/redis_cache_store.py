"""Redis implementation of CacheStore.

Entries are JSON-encoded and written with SETEX under a key prefix
(``cache:`` by default), so Redis owns expiry. Any Redis error is logged
and the operation is served by a file store instead, keeping the cache
usable while Redis is down.
"""

import json
from typing import Any

import redis
import structlog

from country_flags.config import get_redis_client, settings

from .file_cache_store import FileCacheStore

logger = structlog.get_logger(logger_name=__name__)


class RedisCacheStore:
    """Redis-backed cache with a file-store fallback.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        fallback: FileCacheStore | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Prefix for every physical key. Defaults to settings.
            fallback: Store used when Redis raises. Defaults to a FileCacheStore.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = settings.redis_key_prefix if key_prefix is None else key_prefix
        self._fallback = fallback or FileCacheStore()

    @classmethod
    def create(
        cls,
        key_prefix: str | None = None,
        fallback: FileCacheStore | None = None,
    ) -> "RedisCacheStore":
        """Factory method to create RedisCacheStore with defaults.

        Args:
            key_prefix: Key prefix. If None, uses settings.
            fallback: Fallback store. If None, uses a default FileCacheStore.

        Returns:
            Configured RedisCacheStore
        """
        return cls(key_prefix=key_prefix, fallback=fallback)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> Any | None:
        """Retrieve a value by key.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if absent or expired
        """
        try:
            raw = self._client.get(self._key(key))
        except redis.RedisError as e:
            logger.error("cache_store_fallback", operation="get", key=key, error=str(e))
            return self._fallback.get(key)

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning("cache_value_undecodable", key=key, error=str(e))
            return None

    def put(self, key: str, value: Any, minutes: int = 60) -> None:
        """Store a value with SETEX.

        Args:
            key: The cache key
            value: A JSON-serialisable value
            minutes: Minutes until the entry expires
        """
        try:
            self._client.setex(self._key(key), minutes * 60, json.dumps(value))
        except redis.RedisError as e:
            logger.error("cache_store_fallback", operation="put", key=key, error=str(e))
            self._fallback.put(key, value, minutes)

    def forget(self, key: str) -> None:
        """Delete a single key."""
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as e:
            logger.error("cache_store_fallback", operation="forget", key=key, error=str(e))
            self._fallback.forget(key)

    def clear(self) -> int:
        """Delete every key under this store's prefix.

        Returns:
            Number of keys deleted
        """
        try:
            keys = list(self._client.scan_iter(match=f"{self._prefix}*"))
            if not keys:
                return 0
            result: int = self._client.delete(*keys)  # type: ignore[assignment]
            return result
        except redis.RedisError as e:
            logger.error("cache_store_fallback", operation="clear", error=str(e))
            return self._fallback.clear()

    def exists(self, key: str) -> bool:
        """Check whether the key exists in Redis."""
        try:
            result: int = self._client.exists(self._key(key))  # type: ignore[assignment]
            return result > 0
        except redis.RedisError as e:
            logger.error("cache_store_fallback", operation="exists", key=key, error=str(e))
            return self._fallback.exists(key)

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def get_stats(self) -> dict:
        """Get store statistics.

        Returns:
            Dictionary with stats
        """
        try:
            total = sum(1 for _ in self._client.scan_iter(match=f"{self._prefix}*"))
        except redis.RedisError:
            total = 0
        return {
            "driver": "redis",
            "key_prefix": self._prefix,
            "total_entries": total,
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
