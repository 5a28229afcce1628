"""
FastAPI application factory.

Run with ``uvicorn --factory artmarket.main:create_app``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from artmarket.auth.tokens import TokenService
from artmarket.config import Settings, get_settings
from artmarket.database.engine import build_engine
from artmarket.database.session import build_session_factory
from artmarket.errors import AppError
from artmarket.routers import artist, health, user
from artmarket.services.geocoding import GeoapifyGeocoder
from artmarket.services.image_host import CloudinaryImageHost

logger = logging.getLogger(__name__)

# Vite dev server and common local ports
DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def configure_logging(level: str) -> None:
    """Log to stdout; a no-op if the root logger is already configured."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def cors_origins(settings: Settings) -> list[str]:
    origins = list(DEFAULT_ORIGINS)
    # Add production frontend URL if configured (handle www and non-www)
    if settings.frontend_url:
        origins.append(settings.frontend_url)
        if "://www." in settings.frontend_url:
            origins.append(settings.frontend_url.replace("://www.", "://"))
        elif "://" in settings.frontend_url:
            origins.append(settings.frontend_url.replace("://", "://www."))
    return origins


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled database connections on shutdown."""
    logger.info("Art marketplace API started")
    yield
    app.state.engine.dispose()
    logger.info("Database engine disposed")


def _error_response(
    request: Request,
    status_code: int,
    detail: str,
    error_type: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    error_id = str(uuid4())
    logger.warning(
        f"HTTP {status_code} [{error_id}]: {detail} - {request.method} {request.url.path}"
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "error_type": error_type, "error_id": error_id},
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError):
    """Render domain errors (validation, auth, not found, upstream)."""
    return _error_response(
        request, exc.status_code, exc.detail, exc.error_type, exc.headers
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent format."""
    if exc.status_code == 404:
        error_type = "not_found"
    elif exc.status_code in (400, 405):
        error_type = "validation"
    elif exc.status_code in (401, 403):
        error_type = "auth"
    else:
        error_type = "server_error"

    return _error_response(
        request,
        exc.status_code,
        str(exc.detail),
        error_type,
        getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body/path validation errors with field details."""
    error_id = str(uuid4())

    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({"field": field, "message": error["msg"]})

    logger.warning(
        f"Validation error [{error_id}]: {errors} - {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": "Validation error",
            "error_type": "validation",
            "error_id": error_id,
            "errors": errors,
        },
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unhandled exceptions."""
    error_id = str(uuid4())

    logger.error(
        f"Unhandled exception [{error_id}]: {type(exc).__name__}: {exc} - "
        f"{request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error_type": "server_error",
            "error_id": error_id,
        },
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the API.

    Everything process-wide (database engine, token secret, relay
    credentials) comes from ``settings`` and lives on ``app.state``, so
    tests can build isolated apps side by side.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Art Marketplace API",
        description="Listings, artists and saved art for the marketplace frontend",
        version="0.1.0",
        redirect_slashes=False,
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)
    app.state.image_host = CloudinaryImageHost.from_settings(settings)
    app.state.geocoder = GeoapifyGeocoder.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(artist.router)
    app.include_router(user.router)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    return app

