"""Country-code service for core business logic.

This service orchestrates the read-through cache by coordinating the
cache store (data access) and the upstream fetcher (authoritative source).
"""

from collections.abc import Mapping

import structlog

from country_flags.config import settings
from country_flags.entities import FlagUrlSpec
from country_flags.protocols import CacheStore, CountryCodeFetcher

logger = structlog.get_logger(logger_name=__name__)

COUNTRY_CODES_CACHE_KEY = "flagcdn:country_codes"


class CountryCodeService:
    """Read-through cache over the flagcdn country-code list.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: memory, file, Redis, ...
    - CountryCodeFetcher: flagcdn or any other source

    Only a successful, non-empty map is ever written to the cache. A failed
    or empty fetch is returned as an empty map and left uncached, so the
    next call goes upstream again instead of serving an empty list for the
    whole TTL.

    Example:
        ```python
        from country_flags.repositories import FlagCdnFetcher, create_cache_store
        from country_flags.services import CountryCodeService

        service = CountryCodeService.create(
            cache_store=create_cache_store(),
            fetcher=FlagCdnFetcher.create(),
        )
        service.is_valid_country_code("UA")  # True
        service.get_flag_url("ua", 32, 24)   # https://flagcdn.com/32x24/ua.png
        ```
    """

    def __init__(
        self,
        cache_store: CacheStore,
        fetcher: CountryCodeFetcher,
        ttl_minutes: int | None = None,
        flag_base_url: str | None = None,
        cache_key: str = COUNTRY_CODES_CACHE_KEY,
    ) -> None:
        """Initialize the service.

        Args:
            cache_store: Cache backend (required).
            fetcher: Upstream country-code source (required).
            ttl_minutes: Lifetime of the cached map. Defaults to settings.
            flag_base_url: CDN root for flag images. Defaults to settings.
            cache_key: Key the map is cached under.
        """
        self._cache = cache_store
        self._fetcher = fetcher
        self._ttl_minutes = (
            settings.country_codes_ttl_minutes if ttl_minutes is None else ttl_minutes
        )
        self._flag_base_url = flag_base_url or settings.flagcdn_base_url
        self._cache_key = cache_key

    @classmethod
    def create(
        cls,
        cache_store: CacheStore,
        fetcher: CountryCodeFetcher,
        ttl_minutes: int | None = None,
        flag_base_url: str | None = None,
    ) -> "CountryCodeService":
        """Factory method to create CountryCodeService with defaults.

        Args:
            cache_store: Cache backend (required).
            fetcher: Upstream source (required).
            ttl_minutes: Cache lifetime. If None, uses settings.
            flag_base_url: Flag CDN root. If None, uses settings.

        Returns:
            Configured CountryCodeService
        """
        return cls(
            cache_store=cache_store,
            fetcher=fetcher,
            ttl_minutes=ttl_minutes,
            flag_base_url=flag_base_url,
        )

    def get_country_codes(self) -> dict[str, str]:
        """Get the country-code map, reading through the cache.

        Business logic:
        1. Look up the fixed cache key
        2. On a hit, return it without touching the upstream
        3. On a miss, fetch; cache a non-empty successful result
        4. Otherwise return an empty map and cache nothing

        Returns:
            Lowercase country code -> country name, possibly empty
        """
        cached = self._cache.get(self._cache_key)
        if isinstance(cached, Mapping):
            logger.debug("country_codes_cache_hit", key=self._cache_key)
            return dict(cached)
        if cached is not None:
            logger.warning(
                "country_codes_cache_invalid",
                key=self._cache_key,
                type=type(cached).__name__,
            )

        result = self._fetcher.fetch()
        if not result.ok:
            return {}

        if not isinstance(result.codes, Mapping) or not result.codes:
            logger.warning("country_codes_empty", key=self._cache_key)
            return {}

        codes = dict(result.codes)
        self._cache.put(self._cache_key, codes, self._ttl_minutes)
        logger.info(
            "country_codes_cached",
            key=self._cache_key,
            count=len(codes),
            ttl_minutes=self._ttl_minutes,
        )
        return codes

    def is_valid_country_code(self, code: str) -> bool:
        """Check whether a code exists in the country-code map.

        Args:
            code: Country code, any case

        Returns:
            True if known, False otherwise (including when the map is unavailable)
        """
        return code.lower() in self.get_country_codes()

    def get_country_name(self, code: str) -> str | None:
        """Look up the country name for a code.

        Args:
            code: Country code, any case

        Returns:
            The country name, or None if the code is unknown
        """
        return self.get_country_codes().get(code.lower())

    def get_flag_url(self, code: str, width: int = 16, height: int = 12) -> str:
        """Build the flag image URL for a code. Never validates the code."""
        return FlagUrlSpec(
            country_code=code,
            width=width,
            height=height,
            base_url=self._flag_base_url,
        ).url

    def forget_country_codes(self) -> None:
        """Drop the cached map so the next read goes upstream."""
        self._cache.forget(self._cache_key)
        logger.info("country_codes_forgotten", key=self._cache_key)

    def refresh_country_codes(self) -> dict[str, str]:
        """Forget the cached map and read it through again.

        Returns:
            The freshly fetched map, or an empty map if the upstream failed
        """
        self.forget_country_codes()
        return self.get_country_codes()

    def get_stats(self) -> dict:
        """Get service statistics.

        Returns:
            Dictionary with cache and service statistics
        """
        stats = self._cache.get_stats()
        stats["cache_key"] = self._cache_key
        stats["ttl_minutes"] = self._ttl_minutes
        stats["country_codes_cached"] = self._cache.exists(self._cache_key)
        return stats

    def is_healthy(self) -> bool:
        """Check if the cache backend is healthy."""
        return self._cache.health_check()

    @property
    def ttl_minutes(self) -> int:
        """Get the cache lifetime in minutes."""
        return self._ttl_minutes

    @property
    def cache_store(self) -> CacheStore:
        """Get the underlying cache store (for testing)."""
        return self._cache

    @property
    def fetcher(self) -> CountryCodeFetcher:
        """Get the underlying fetcher (for testing)."""
        return self._fetcher
