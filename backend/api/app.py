"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    WillerspaceError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)
from modules.auth.routes import router as auth_router
from modules.profiles.routes import router as profiles_router, handles_router
from modules.content.routes import router as content_router, profile_content_router
from modules.subscribers.routes import router as subscribers_router
from .models.errors import ErrorResponse
from .routes import health, explore

logger = logging.getLogger(__name__)

# Most specific first; anything else is a 500
ERROR_STATUS_CODES: list[tuple[type[WillerspaceError], int]] = [
    (NotFoundError, 404),
    (ValidationError, 422),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (ConflictError, 409),
    (ExternalServiceError, 502),
]


def status_code_for(exc: WillerspaceError) -> int:
    """HTTP status code for an application exception."""
    for exc_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 500


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


async def willerspace_error_handler(request: Request, exc: WillerspaceError) -> JSONResponse:
    """Render application exceptions as ErrorResponse bodies."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.code)

    body = ErrorResponse(
        error=HTTPStatus(status_code).phrase,
        detail=exc.message,
        code=exc.code,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Personal space for sharing written, audio and video content",
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

    app.add_exception_handler(WillerspaceError, willerspace_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(handles_router, prefix="/api/handles", tags=["profiles"])
    app.include_router(profiles_router, prefix="/api/profiles", tags=["profiles"])
    app.include_router(profile_content_router, prefix="/api/profiles", tags=["content"])
    app.include_router(content_router, prefix="/api/content", tags=["content"])
    app.include_router(explore.router, prefix="/api/explore", tags=["explore"])
    app.include_router(subscribers_router, prefix="/api/subscribers", tags=["subscribers"])

    return app


# Application instance for uvicorn
app = create_app()
