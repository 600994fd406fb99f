"""Fetch result domain entity."""

from dataclasses import dataclass, field
from enum import Enum


class FetchFailure(str, Enum):
    """Why an upstream fetch produced no data."""

    TRANSPORT = "transport"
    MALFORMED = "malformed"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single upstream country-code fetch.

    Attributes:
        codes: Lowercase country code -> country name. Empty on failure.
        failure: The failure category, or None on success
        detail: Human-readable failure description
    """

    codes: dict[str, str] = field(default_factory=dict)
    failure: FetchFailure | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the fetch succeeded."""
        return self.failure is None

    @classmethod
    def success(cls, codes: dict[str, str]) -> "FetchResult":
        """Build a successful result."""
        return cls(codes=codes)

    @classmethod
    def failed(cls, failure: FetchFailure, detail: str) -> "FetchResult":
        """Build a failed result with an empty map."""
        return cls(codes={}, failure=failure, detail=detail)
