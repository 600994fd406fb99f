"""Country Flags - flagcdn country codes behind a read-through cache.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, CountryCodeFetcher)
    - repositories: Cache backends and the flagcdn fetcher
    - services: Business logic (read-through cache)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from country_flags.repositories import FlagCdnFetcher, create_cache_store
    from country_flags.services import CountryCodeService

    service = CountryCodeService.create(
        cache_store=create_cache_store(),
        fetcher=FlagCdnFetcher.create(),
    )
    ```

For HTTP API:
    ```python
    from country_flags.api.app import app
    ```
"""

from country_flags.config import get_redis_client, settings
from country_flags.dto import ValidateFlagCodeRequest
from country_flags.entities import FetchFailure, FetchResult, FlagUrlSpec
from country_flags.handlers import CountryCodeHandler
from country_flags.protocols import CacheStore, CountryCodeFetcher
from country_flags.repositories import (
    FileCacheStore,
    FlagCdnFetcher,
    MemoryCacheStore,
    RedisCacheStore,
    create_cache_store,
)
from country_flags.services import COUNTRY_CODES_CACHE_KEY, CountryCodeService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "CountryCodeFetcher",
    # Services (business logic)
    "COUNTRY_CODES_CACHE_KEY",
    "CountryCodeService",
    # Handlers (HTTP)
    "CountryCodeHandler",
    # Repositories (data access)
    "FileCacheStore",
    "FlagCdnFetcher",
    "MemoryCacheStore",
    "RedisCacheStore",
    "create_cache_store",
    # Entities (domain models)
    "FetchFailure",
    "FetchResult",
    "FlagUrlSpec",
    # DTOs (API contracts)
    "ValidateFlagCodeRequest",
]
