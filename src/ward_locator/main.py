"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ward_locator.core.config import get_settings
from ward_locator.core.logging import setup_logging
from ward_locator.services.ward_lookup_service import WardLookupService


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Load the ward dataset once on startup.

    A DatasetLoadError propagates and stops the server from starting.
    """
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    app.state.ward_lookup_service = WardLookupService.from_settings(settings)
    logger.info(f"Ward locator started ({settings.environment})")

    yield

    app.state.ward_lookup_service = None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Ward Locator",
        description="Resolves geotagged civic issue reports to municipal wards",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Register exception handlers
    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc)},
        )

    # Register middleware and routers
    from ward_locator.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
