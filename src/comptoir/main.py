"""
Main FastAPI application entry point.

Uses Application Factory Pattern.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError

from comptoir import __version__
from comptoir.config.settings import Settings, get_settings
from comptoir.di.container import (
    DIContainer,
    initialize_container,
    set_container,
    shutdown_container,
)
from comptoir.domain.exceptions import ComptoirException
from comptoir.infrastructure.monitoring import setup_logging
from comptoir.presentation.api.middleware import (
    MetricsMiddleware,
    RequestIDMiddleware,
    comptoir_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from comptoir.presentation.api.routes import health, purchase

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory - creates and configures FastAPI app.

    Args:
        settings: Optional Settings instance (for testing)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    # JSON logs only in production
    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENV == "production")

    logger.info(f"Creating {settings.APP_NAME} application (ENV={settings.ENV})")

    set_container(DIContainer(settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(f"Starting {settings.APP_NAME} application...")
        container = await initialize_container()
        logger.info(
            "Treasury ready",
            extra={
                "admin_wallet": container.chain_client.admin_address,
                "network": settings.NETWORK,
                "chain_id": settings.CHAIN_ID,
            },
        )

        yield

        logger.info(f"Shutting down {settings.APP_NAME} application...")
        await shutdown_container()
        logger.info(f"{settings.APP_NAME} application shutdown complete")

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Stablecoin-for-token purchase service",
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware chain (last added runs first)
    if settings.METRICS_ENABLED:
        app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(ComptoirException, comptoir_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register routes
    app.include_router(health.router, prefix="/api")
    app.include_router(purchase.router, prefix="/api")

    @app.get("/", tags=["Info"], include_in_schema=False)
    async def root():
        """Redirect to the info page if configured, else describe the service."""
        if settings.INFO_PAGE_URL:
            return RedirectResponse(url=settings.INFO_PAGE_URL)
        return {
            "service": settings.APP_NAME,
            "status": "running",
            "version": __version__,
            "network": settings.NETWORK,
        }

    if settings.METRICS_ENABLED:

        @app.get("/metrics", tags=["Monitoring"])
        async def metrics():
            """Prometheus metrics endpoint."""
            return Response(
                content=generate_latest(),
                media_type=CONTENT_TYPE_LATEST,
            )

    return app


def get_app() -> FastAPI:
    """
    Get or create application instance.

    For uvicorn: uvicorn comptoir.main:get_app --factory
    """
    return create_app()


def main():
    """Validate configuration and run the application with uvicorn."""
    import uvicorn

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        logger.error(f"Invalid configuration: {fields or 'see settings'}")
        sys.exit(1)

    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.ENV == "production")
    logger.info(
        f"Starting {settings.APP_NAME} on {settings.API_HOST}:{settings.API_PORT}",
        extra={"admin_wallet": settings.admin_address},
    )

    uvicorn.run(
        "comptoir.main:get_app",
        factory=True,
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()
