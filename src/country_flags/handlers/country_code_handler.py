"""HTTP handlers for country-code operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from fastapi import HTTPException, status

from country_flags.dto import (
    CacheStatsResponse,
    CountryCodesData,
    CountryCodesResponse,
    CountryData,
    CountryResponse,
    FlagCodeValidationData,
    FlagCodeValidationResponse,
    FlagUrlData,
    FlagUrlResponse,
    HealthCheckResponse,
    RefreshData,
    RefreshResponse,
    ValidateFlagCodeRequest,
)
from country_flags.services import CountryCodeService


class CountryCodeHandler:
    """HTTP handlers for country-code operations.

    This handler delegates business logic to CountryCodeService
    and handles HTTP-specific concerns like:
    - Converting service results to DTOs
    - Setting appropriate status codes
    - Error handling and responses

    An empty country-code list is a valid answer, not an error: the
    upstream may simply be down.
    """

    def __init__(self, country_service: CountryCodeService) -> None:
        """Initialize the handler.

        Args:
            country_service: The country-code service (required).
        """
        self._service = country_service

    def list_country_codes(self) -> CountryCodesResponse:
        """Handle GET /api/system/country-codes requests.

        Returns:
            CountryCodesResponse with the full map

        Raises:
            HTTPException: If an error occurs while reading the list
        """
        try:
            codes = self._service.get_country_codes()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get country codes: {e}",
            ) from e

        return CountryCodesResponse(
            success=True,
            message="Country codes fetched successfully",
            data=CountryCodesData(country_codes=codes),
        )

    def get_country(self, code: str) -> CountryResponse:
        """Handle GET /api/system/country-codes/{code} requests.

        Args:
            code: Country code, any case

        Returns:
            CountryResponse with name and flag URL

        Raises:
            HTTPException: 404 if the code is unknown, 500 on unexpected errors
        """
        try:
            name = self._service.get_country_name(code)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to look up country: {e}",
            ) from e

        if name is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown country code: {code}",
            )

        return CountryResponse(
            success=True,
            message="Country found",
            data=CountryData(
                code=code.lower(),
                name=name,
                flag_url=self._service.get_flag_url(code),
            ),
        )

    def validate_flag_code(self, request: ValidateFlagCodeRequest) -> FlagCodeValidationResponse:
        """Handle POST /api/system/country-codes/validate requests.

        Args:
            request: The validation request DTO

        Returns:
            FlagCodeValidationResponse with the verdict

        Raises:
            HTTPException: If an error occurs during validation
        """
        try:
            valid = self._service.is_valid_country_code(request.flag_code)
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to validate flag code: {e}",
            ) from e

        return FlagCodeValidationResponse(
            success=True,
            message="Valid flag code" if valid else "Invalid flag code",
            data=FlagCodeValidationData(flag_code=request.flag_code.lower(), valid=valid),
        )

    def refresh_country_codes(self) -> RefreshResponse:
        """Handle POST /api/system/country-codes/refresh requests.

        Returns:
            RefreshResponse with the number of cached codes

        Raises:
            HTTPException: If an error occurs during the refresh
        """
        try:
            codes = self._service.refresh_country_codes()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to refresh country codes: {e}",
            ) from e

        return RefreshResponse(
            success=bool(codes),
            message="Country codes refreshed" if codes else "Upstream returned no country codes",
            data=RefreshData(count=len(codes)),
        )

    def get_flag_url(self, code: str, width: int, height: int) -> FlagUrlResponse:
        """Handle GET /api/system/flags/{code} requests.

        Args:
            code: Country code, any case
            width: Image width in pixels
            height: Image height in pixels

        Returns:
            FlagUrlResponse with the image URL
        """
        return FlagUrlResponse(
            success=True,
            message="Flag URL built",
            data=FlagUrlData(
                code=code.lower(),
                width=width,
                height=height,
                url=self._service.get_flag_url(code, width, height),
            ),
        )

    def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests.

        Returns:
            CacheStatsResponse with cache statistics

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = self._service.get_stats()

            return CacheStatsResponse(
                driver=stats.get("driver", "unknown"),
                total_entries=stats.get("total_entries", 0),
                cache_key=stats.get("cache_key", ""),
                ttl_minutes=stats.get("ttl_minutes", 0),
                country_codes_cached=stats.get("country_codes_cached", False),
            )

        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

    def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with health status
        """
        is_healthy = self._service.is_healthy()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
        )
