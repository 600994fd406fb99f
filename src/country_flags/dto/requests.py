"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ValidateFlagCodeRequest(BaseModel):
    """Request DTO for validating a location's flag code.

    The handler will convert this to internal calls to the service layer.
    """

    flag_code: str = Field(
        ...,
        description="ISO 3166-1 alpha-2 country code, any case",
        min_length=1,
        max_length=16,
    )
