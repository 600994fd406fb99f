"""Flag image URL entity."""

from dataclasses import dataclass

DEFAULT_FLAG_BASE_URL = "https://flagcdn.com"


@dataclass(frozen=True)
class FlagUrlSpec:
    """Derived description of a flag image on the CDN.

    Never stored; rebuilt on every call.

    Attributes:
        country_code: Country code, lowercased on construction
        width: Image width in pixels
        height: Image height in pixels
        base_url: CDN root without a trailing slash
    """

    country_code: str
    width: int = 16
    height: int = 12
    base_url: str = DEFAULT_FLAG_BASE_URL

    def __post_init__(self) -> None:
        object.__setattr__(self, "country_code", self.country_code.lower())
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def url(self) -> str:
        """Full URL of the flag image."""
        return f"{self.base_url}/{self.width}x{self.height}/{self.country_code}.png"
