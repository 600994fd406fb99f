import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()

CACHE_DRIVERS = ("memory", "file", "redis")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_driver: str = os.getenv("CACHE_DRIVER", "file").lower()
    cache_dir: str = os.getenv("CACHE_DIR", ".cache/other")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_key_prefix: str = os.getenv("REDIS_KEY_PREFIX", "cache:")

    # flagcdn upstream
    flagcdn_base_url: str = os.getenv("FLAGCDN_BASE_URL", "https://flagcdn.com")
    flagcdn_codes_url: str = os.getenv("FLAGCDN_CODES_URL", "https://flagcdn.com/en/codes.json")
    flagcdn_timeout: float = float(os.getenv("FLAGCDN_TIMEOUT", "10"))
    country_codes_ttl_minutes: int = int(os.getenv("COUNTRY_CODES_TTL_MINUTES", "1440"))  # 24 hours

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_env: str = os.getenv("APP_ENV", "development")

    @property
    def json_logs(self) -> bool:
        """Whether logs should be rendered as JSON lines.

        Returns:
            True in production, False otherwise
        """
        return self.app_env == "production"

    def __post_init__(self) -> None:
        """Validate settings after initialization.

        An unknown cache_driver is left as-is; create_cache_store resolves it
        to the file store.
        """
        if self.flagcdn_timeout <= 0:
            raise ValueError("FLAGCDN_TIMEOUT must be greater than 0")

        if self.country_codes_ttl_minutes <= 0:
            raise ValueError("COUNTRY_CODES_TTL_MINUTES must be greater than 0")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
