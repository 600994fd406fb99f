"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from country_flags.services import CountryCodeService

    service = CountryCodeService.create(cache_store=store, fetcher=fetcher)
    ```
"""

from .country_code_service import COUNTRY_CODES_CACHE_KEY, CountryCodeService

__all__ = [
    "COUNTRY_CODES_CACHE_KEY",
    "CountryCodeService",
]
