"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: log configuration, warm up the Redis connection
   - shutdown: close the Redis connection

3. Middleware Stack
   - Rate limiting (slowapi)
   - CORS: Allow the web client's origin

4. Exception Handlers
   - Map typed application errors to status codes
     (400 validation, 404 not found, 500 storage, 502 upstream)
   - Every error body has the shape {"error": "..."}
   - Log errors for debugging
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.exceptions import AppError
from app.routers import (
    comments_router,
    feed_router,
    movies_router,
    reviews_router,
)
from app.services.cache import close_redis_connection, get_cache_stats, get_redis_client
from app.services.rate_limiter import limiter, rate_limit_exceeded_handler

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}, debug: {settings.debug}")

    if settings.cache_enabled:
        if get_redis_client():
            logger.info("Redis caching enabled")
        else:
            logger.warning("Redis unavailable - movie metadata caching disabled")

    if not settings.tmdb_configured:
        logger.warning("TMDB_API_TOKEN not set - movie endpoints will return 502")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    close_redis_connection()


# =============================================================================
# Error Responses
# =============================================================================
def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    """Build the standard {"error": message} response."""
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def describe_validation_errors(errors: list[dict]) -> str:
    """
    Summarize Pydantic errors as one readable line.

    Example: "body.rating: Input should be less than or equal to 10"
    """
    parts = []
    for err in errors:
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Movie Reviews API

Backend for a movie-review site.

### Features
- **Reviews**: Rate and review movies (0-10), list by user or movie
- **Comments**: Discuss reviews
- **Movies**: Trending, popular, search and details from the movie metadata API
- **Feed**: Latest reviews with movie titles and posters

### Errors
Every error response has the shape `{"error": "..."}`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    # The Next.js client runs on a different origin than the API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """
        Map typed application errors to their status codes.

        Server-side failures are logged with the underlying cause.
        """
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url.path}: "
                f"{exc.message} (cause: {exc.__cause__!r})"
            )
        else:
            logger.info(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed or out-of-range input is a 400, not FastAPI's default 422."""
        errors = jsonable_encoder(exc.errors())
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            describe_validation_errors(errors),
            details=errors,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Render routing errors (unknown path, wrong method) in the same shape."""
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle database errors that escaped the stores.

        Logs the actual error while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "A database error occurred. Please try again later.",
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if settings.debug:
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "An internal error occurred.",
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    # prefix="/api" gives the URLs the web client already calls:
    # /api/reviews, /api/comments, ...
    api_prefix = "/api"

    app.include_router(reviews_router, prefix=api_prefix)
    app.include_router(comments_router, prefix=api_prefix)
    app.include_router(movies_router, prefix=api_prefix)
    app.include_router(feed_router, prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """
        Health check endpoint for load balancers and monitoring.

        Returns API status including cache connectivity and rate limiting.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "cache": get_cache_stats(),
            "rate_limiting": {
                "enabled": settings.rate_limit_enabled,
                "default_limit": settings.rate_limit_default,
                "write_limit": settings.rate_limit_write,
            },
            "movie_metadata": {
                "configured": settings.tmdb_configured,
            },
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn app.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m app.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
