"""FastAPI application factory and configuration.

Builds the collections API with CORS, request logging, error handlers and
database lifecycle handling.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quillbase.core.config import get_settings
from quillbase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from quillbase.infrastructure.persistence.database import close_database, init_database

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize the database on startup and dispose of it on shutdown."""
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting QuillBase",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database()
    except Exception as e:
        logger.error("Failed to initialize the collection store", error=str(e))
        raise

    yield

    logger.info("Shutting down QuillBase")
    await close_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Collection schema builder API",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    @app.get("/health", tags=["health"])
    async def health_check():
        """Return 200 while the service is running."""
        return {
            "status": "healthy",
            "service": get_settings().app_name,
            "version": get_settings().app_version,
        }


def register_routes(app: FastAPI) -> None:
    from quillbase.infrastructure.api.routes import collections_router

    settings = get_settings()

    app.include_router(
        collections_router, prefix=f"{settings.api_prefix}/collections", tags=["collections"]
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the HTTP error and catch-all exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request, exc):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": _reason(exc.status_code), "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": str(exc) if get_settings().debug else "An unexpected error occurred",
            },
        )


def _reason(status_code: int) -> str:
    return {
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        409: "Conflict",
    }.get(status_code, "Error")


def register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def logging_middleware(request, call_next):
        """Log every request and propagate the correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info("Request started", method=request.method, path=str(request.url.path))

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


app = create_app()
