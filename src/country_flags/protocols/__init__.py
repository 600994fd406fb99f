"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping backends (memory, file, Redis) without touching the service
- Unit testing with fake implementations

Usage:
    ```python
    from country_flags.protocols import CacheStore, CountryCodeFetcher

    store: CacheStore = FileCacheStore(".cache/other")
    fetcher: CountryCodeFetcher = FlagCdnFetcher.create()
    ```
"""

from .cache_store import CacheStore
from .country_fetcher import CountryCodeFetcher

__all__ = [
    "CacheStore",
    "CountryCodeFetcher",
]
