"""Domain entities for internal representation.

These are plain frozen dataclasses used by services and repositories.
They are NOT the API contract - use the DTOs from the dto package for that.
"""

from .fetch_result import FetchFailure, FetchResult
from .flag_url import DEFAULT_FLAG_BASE_URL, FlagUrlSpec

__all__ = ["DEFAULT_FLAG_BASE_URL", "FetchFailure", "FetchResult", "FlagUrlSpec"]
