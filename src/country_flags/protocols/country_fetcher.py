"""Country-code fetcher protocol.

Defines the interface for anything that can pull the authoritative
country-code list from an upstream source.
"""

from typing import Protocol, runtime_checkable

from country_flags.entities import FetchResult


@runtime_checkable
class CountryCodeFetcher(Protocol):
    """Protocol for upstream country-code sources.

    Implementations must never raise from `fetch`; failures are reported
    through the returned FetchResult.
    """

    def fetch(self) -> FetchResult:
        """Perform a single fetch of the country-code map.

        Returns:
            FetchResult holding either the map or a tagged failure
        """
        ...

    def fetch_country_codes(self) -> dict[str, str]:
        """Fetch the country-code map.

        Returns:
            The map on success, an empty dict on any failure
        """
        ...

    def close(self) -> None:
        """Release any held network resources."""
        ...
