"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request

from country_flags.config import settings
from country_flags.handlers import CountryCodeHandler
from country_flags.logging import configure_logging
from country_flags.repositories import FlagCdnFetcher, create_cache_store
from country_flags.services import CountryCodeService

logger = structlog.get_logger(logger_name=__name__)


def get_country_service(request: Request) -> CountryCodeService:
    """Dependency injection for CountryCodeService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CountryCodeService instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    service = getattr(request.app.state, "country_service", None)
    if service is None:
        raise RuntimeError("CountryCodeService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> CountryCodeHandler:
    """Dependency injection for CountryCodeHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CountryCodeHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "country_handler", None)
    if handler is None:
        raise RuntimeError("CountryCodeHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Cache store and fetcher (data access) - taken from app.state when
       pre-set by create_app, otherwise built from settings
    2. Service (business logic) - stored in app.state.country_service
    3. Handler (HTTP endpoints) - stored in app.state.country_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the fetcher and removes all services from app.state on shutdown
    """
    if getattr(app.state, "configure_logging", True):
        configure_logging(settings.log_level, json_output=settings.json_logs)

    cache_store = getattr(app.state, "cache_store", None) or create_cache_store()
    fetcher = getattr(app.state, "fetcher", None) or FlagCdnFetcher.create()

    country_service = CountryCodeService.create(cache_store=cache_store, fetcher=fetcher)
    country_handler = CountryCodeHandler(country_service=country_service)

    # Store in app.state (FastAPI pattern)
    app.state.cache_store = cache_store
    app.state.fetcher = fetcher
    app.state.country_service = country_service
    app.state.country_handler = country_handler

    logger.info(
        "country_service_started",
        driver=cache_store.get_stats().get("driver"),
        ttl_minutes=country_service.ttl_minutes,
        healthy=country_service.is_healthy(),
    )

    try:
        yield
    finally:
        fetcher.close()

        # Cleanup - remove from app.state
        del app.state.country_handler
        del app.state.country_service
        del app.state.fetcher
        del app.state.cache_store
        logger.info("country_service_stopped")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CountryCodeHandler, Depends(get_handler)]
ServiceDep = Annotated[CountryCodeService, Depends(get_country_service)]
