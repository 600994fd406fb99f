"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .country_code_handler import CountryCodeHandler

__all__ = [
    "CountryCodeHandler",
]
