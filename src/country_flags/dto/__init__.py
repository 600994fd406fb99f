"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ValidateFlagCodeRequest
from .responses import (
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
)

__all__ = [
    "ValidateFlagCodeRequest",
    "CacheStatsResponse",
    "CountryCodesData",
    "CountryCodesResponse",
    "CountryData",
    "CountryResponse",
    "FlagCodeValidationData",
    "FlagCodeValidationResponse",
    "FlagUrlData",
    "FlagUrlResponse",
    "HealthCheckResponse",
    "RefreshData",
    "RefreshResponse",
]
