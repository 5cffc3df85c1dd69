"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import ExternalServiceError
from .routes import health
from modules.profiles.routes import router as profiles_router
from modules.accounts.routes import router as accounts_router
from modules.navigation.routes import router as navigation_router
from modules.realtime.routes import router as realtime_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    logger.info(f"Shutting down {settings.app_name}")


async def external_service_error_handler(request: Request, exc: ExternalServiceError) -> JSONResponse:
    """Map upstream failures that escaped a route to 503."""
    logger.error(f"{exc.service} failure on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=503, content=exc.to_dict())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Session-gated routing, account partitioning and change signals",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(ExternalServiceError, external_service_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(profiles_router, prefix="/api/profile", tags=["profile"])
    app.include_router(accounts_router, prefix="/api/accounts", tags=["accounts"])
    app.include_router(navigation_router, prefix="/api/navigation", tags=["navigation"])
    app.include_router(realtime_router, prefix="/api/changes", tags=["changes"])

    return app


# Application instance for uvicorn
app = create_app()
