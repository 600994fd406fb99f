"""flagcdn.com country-code fetcher.

Downloads the country-code list published by flagcdn:

    GET https://flagcdn.com/en/codes.json
    -> {"ad": "Andorra", "ae": "United Arab Emirates", ...}

One request per call, no retries. Every failure is logged once and
reported through the returned FetchResult instead of being raised.
"""

from typing import Any

import httpx
import structlog

from country_flags.config import settings
from country_flags.entities import FetchFailure, FetchResult

logger = structlog.get_logger(logger_name=__name__)


class FlagCdnFetcher:
    """flagcdn implementation of the CountryCodeFetcher protocol.

    This class satisfies the protocol through structural typing - no
    explicit inheritance needed.

    Example:
        ```python
        fetcher = FlagCdnFetcher.create()
        result = fetcher.fetch()
        if result.ok:
            print(result.codes["ua"])  # Ukraine
        ```
    """

    def __init__(
        self,
        codes_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            codes_url: Upstream JSON URL. Defaults to settings.flagcdn_codes_url.
            timeout: Request timeout in seconds. Defaults to settings.flagcdn_timeout.
            client: Pre-built httpx client (mainly for tests).
        """
        self._codes_url = codes_url or settings.flagcdn_codes_url
        self._timeout = timeout or settings.flagcdn_timeout
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-load the HTTP client.

        Returns:
            The httpx.Client instance
        """
        if self._client is None:
            self._client = httpx.Client(timeout=self._timeout, verify=True)
        return self._client

    @classmethod
    def create(
        cls,
        codes_url: str | None = None,
        timeout: float | None = None,
    ) -> "FlagCdnFetcher":
        """Factory method to create FlagCdnFetcher with defaults.

        Args:
            codes_url: Upstream URL. If None, uses settings.
            timeout: Timeout in seconds. If None, uses settings.

        Returns:
            Configured FlagCdnFetcher
        """
        return cls(codes_url=codes_url, timeout=timeout)

    @property
    def codes_url(self) -> str:
        """Get the upstream URL."""
        return self._codes_url

    def fetch(self) -> FetchResult:
        """Fetch the country-code map from flagcdn.

        Returns:
            FetchResult with the lowercased map, or a tagged failure
        """
        try:
            response = self.client.get(self._codes_url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            return self._failed(FetchFailure.TRANSPORT, f"{type(e).__name__}: {e}")
        except Exception as e:
            return self._failed(FetchFailure.UNEXPECTED, f"{type(e).__name__}: {e}")

        try:
            data: Any = response.json()
        except ValueError as e:
            return self._failed(FetchFailure.MALFORMED, f"invalid JSON body: {e}")
        except Exception as e:
            return self._failed(FetchFailure.UNEXPECTED, f"{type(e).__name__}: {e}")

        if not isinstance(data, dict):
            return self._failed(
                FetchFailure.MALFORMED,
                f"expected a JSON object, got {type(data).__name__}",
            )

        try:
            codes = {str(code).lower(): str(name) for code, name in data.items()}
        except Exception as e:
            return self._failed(FetchFailure.UNEXPECTED, f"{type(e).__name__}: {e}")

        logger.info("country_codes_fetched", url=self._codes_url, count=len(codes))
        return FetchResult.success(codes)

    def fetch_country_codes(self) -> dict[str, str]:
        """Fetch the country-code map, or an empty dict on failure."""
        return self.fetch().codes

    def _failed(self, failure: FetchFailure, detail: str) -> FetchResult:
        log = logger.warning if failure is not FetchFailure.UNEXPECTED else logger.error
        log(
            "country_codes_fetch_failed",
            url=self._codes_url,
            reason=failure.value,
            detail=detail,
        )
        return FetchResult.failed(failure, detail)

    def close(self) -> None:
        """Close the HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            self._client.close()
            self._client = None
