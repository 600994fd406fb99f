"""Response DTOs for API endpoints.

Every payload route wraps its data in the panel's envelope:
``{"success": bool, "message": str, "data": {...}}``.
"""

from pydantic import BaseModel, Field


class CountryCodesData(BaseModel):
    """Payload of the country-code list."""

    country_codes: dict[str, str] = Field(
        default_factory=dict,
        description="Lowercase country code -> country name (empty if the upstream is unavailable)",
    )


class CountryCodesResponse(BaseModel):
    """Response DTO for the country-code list."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")
    data: CountryCodesData


class CountryData(BaseModel):
    """Payload for a single country."""

    code: str = Field(..., description="Lowercase country code")
    name: str = Field(..., description="Country name")
    flag_url: str = Field(..., description="Default-size flag image URL")


class CountryResponse(BaseModel):
    """Response DTO for a single country lookup."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")
    data: CountryData


class FlagCodeValidationData(BaseModel):
    """Payload of a flag-code validation."""

    flag_code: str = Field(..., description="The normalised (lowercase) code")
    valid: bool = Field(..., description="Whether the code is a known country code")


class FlagCodeValidationResponse(BaseModel):
    """Response DTO for flag-code validation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")
    data: FlagCodeValidationData


class RefreshData(BaseModel):
    """Payload of a cache refresh."""

    count: int = Field(..., description="Number of country codes now cached", ge=0)


class RefreshResponse(BaseModel):
    """Response DTO for refreshing the cached list."""

    success: bool = Field(..., description="Whether the upstream returned a usable list")
    message: str = Field(..., description="Human-readable status message")
    data: RefreshData


class FlagUrlData(BaseModel):
    """Payload of a flag URL."""

    code: str = Field(..., description="Lowercase country code")
    width: int = Field(..., description="Image width in pixels", gt=0)
    height: int = Field(..., description="Image height in pixels", gt=0)
    url: str = Field(..., description="Flag image URL")


class FlagUrlResponse(BaseModel):
    """Response DTO for a flag URL."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable status message")
    data: FlagUrlData


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    driver: str = Field(..., description="Active cache driver: memory, file or redis")
    total_entries: int = Field(..., description="Entries held by the cache backend", ge=0)
    cache_key: str = Field(..., description="Key the country-code list is cached under")
    ttl_minutes: int = Field(..., description="Lifetime of the cached list in minutes", ge=0)
    country_codes_cached: bool = Field(..., description="Whether the list is currently cached")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is usable")
