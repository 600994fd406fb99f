"""Repository layer for data access.

This layer hides external dependencies (Redis, the filesystem, flagcdn)
behind protocol-based interfaces, so the service never knows which
backend it is talking to.

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from country_flags.protocols import CacheStore, CountryCodeFetcher

from .cache_store_factory import create_cache_store
from .file_cache_store import FileCacheStore
from .flagcdn_fetcher import FlagCdnFetcher
from .memory_cache_store import MemoryCacheStore
from .redis_cache_store import RedisCacheStore

__all__ = [
    "CacheStore",
    "CountryCodeFetcher",
    "FileCacheStore",
    "FlagCdnFetcher",
    "MemoryCacheStore",
    "RedisCacheStore",
    "create_cache_store",
]
