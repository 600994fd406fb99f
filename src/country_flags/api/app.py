from typing import Annotated, Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from country_flags.api.dependencies import HandlerDep, lifespan
from country_flags.config import settings
from country_flags.dto import (
    CacheStatsResponse,
    CountryCodesResponse,
    CountryResponse,
    FlagCodeValidationResponse,
    FlagUrlResponse,
    HealthCheckResponse,
    RefreshResponse,
    ValidateFlagCodeRequest,
)
from country_flags.protocols import CacheStore, CountryCodeFetcher

API_NAME = "Country Flags API"
API_VERSION = "0.1.0"


def create_app(
    cache_store: CacheStore | None = None,
    fetcher: CountryCodeFetcher | None = None,
    configure_logs: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        cache_store: Cache backend to use instead of the configured driver.
        fetcher: Upstream source to use instead of flagcdn.
        configure_logs: Whether startup should (re)configure structlog.

    Returns:
        The FastAPI application
    """
    app = FastAPI(
        title=API_NAME,
        description="Country codes and flag images backed by flagcdn and a read-through cache",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.cache_store = cache_store
    app.state.fetcher = fetcher
    app.state.configure_logging = configure_logs

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "endpoints": {
                "country_codes": "/api/system/country-codes",
                "flags": "/api/system/flags/{code}",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return handler.health_check()

    @app.get("/stats", response_model=CacheStatsResponse)
    def stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache statistics."""
        return handler.get_stats()

    @app.get("/api/system/country-codes", response_model=CountryCodesResponse)
    def list_country_codes(handler: HandlerDep) -> CountryCodesResponse:
        """List every known country code with its name."""
        return handler.list_country_codes()

    @app.post("/api/system/country-codes/validate", response_model=FlagCodeValidationResponse)
    def validate_flag_code(
        request: ValidateFlagCodeRequest,
        handler: HandlerDep,
    ) -> FlagCodeValidationResponse:
        """Check whether a flag code is a known country code."""
        return handler.validate_flag_code(request)

    @app.post("/api/system/country-codes/refresh", response_model=RefreshResponse)
    def refresh_country_codes(handler: HandlerDep) -> RefreshResponse:
        """Drop the cached list and fetch it again."""
        return handler.refresh_country_codes()

    @app.get("/api/system/country-codes/{code}", response_model=CountryResponse)
    def get_country(code: str, handler: HandlerDep) -> CountryResponse:
        """Look up a single country by code."""
        return handler.get_country(code)

    @app.get("/api/system/flags/{code}", response_model=FlagUrlResponse)
    def get_flag_url(
        code: str,
        handler: HandlerDep,
        width: Annotated[int, Query(gt=0)] = 16,
        height: Annotated[int, Query(gt=0)] = 12,
    ) -> FlagUrlResponse:
        """Build the flag image URL for a code."""
        return handler.get_flag_url(code, width, height)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "country_flags.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
