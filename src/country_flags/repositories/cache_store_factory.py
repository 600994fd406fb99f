"""Cache driver selection."""

import redis
import structlog

from country_flags.config import CACHE_DRIVERS, Settings, get_redis_client, settings
from country_flags.protocols import CacheStore

from .file_cache_store import FileCacheStore
from .memory_cache_store import MemoryCacheStore
from .redis_cache_store import RedisCacheStore

logger = structlog.get_logger(logger_name=__name__)


def create_cache_store(
    driver: str | None = None,
    config: Settings | None = None,
    redis_client: redis.Redis | None = None,
) -> CacheStore:
    """Build the cache store for the configured driver.

    Unknown drivers resolve to the file store. When Redis is requested but
    does not answer PING, the file store is used instead.

    Args:
        driver: "memory", "file" or "redis". Defaults to settings.cache_driver.
        config: Settings to read paths and prefixes from. Defaults to settings.
        redis_client: Pre-built Redis client (mainly for tests).

    Returns:
        A CacheStore implementation
    """
    config = config or settings
    driver = (driver or config.cache_driver).lower()

    if driver not in CACHE_DRIVERS:
        logger.warning("cache_driver_unknown", driver=driver, using="file")
        driver = "file"

    if driver == "memory":
        return MemoryCacheStore()

    file_store = FileCacheStore(cache_dir=config.cache_dir)
    if driver == "file":
        return file_store

    try:
        client = redis_client or get_redis_client()
        client.ping()
    except redis.RedisError as e:
        logger.warning("redis_unavailable", error=str(e), using="file")
        return file_store

    return RedisCacheStore(
        redis_client=client,
        key_prefix=config.redis_key_prefix,
        fallback=file_store,
    )
