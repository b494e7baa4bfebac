"""
FastAPI Application Entry Point

This module creates and configures the Bookshelf application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Easier to test (can create multiple instances)

2. Lifespan Events
   - startup: check the database connection, create missing tables
   - shutdown: dispose of pooled connections

3. Middleware Stack
   - Rate limiting (slowapi)
   - Request logging: one line per request with status and duration

4. Exception Handlers
   - 404s render the not-found page
   - Everything else renders the generic error page
   - Errors are logged, details are only shown in debug mode
"""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from bookshelf.config import get_settings
from bookshelf.database import check_database_connection, create_tables, engine
from bookshelf.routers import books_router, index_router
from bookshelf.services.rate_limiter import limiter, rate_limit_exceeded_handler
from bookshelf.templating import STATIC_DIR, templates

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

PAGE_NOT_FOUND = "We can't seem to find the page you're looking for."
DEFAULT_ERROR_MESSAGE = (
    "Take it easy, I don't think it's about you. "
    "Press the button on the bottom and enjoy"
)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield runs on startup, code after yield on shutdown.
    A failed connection check is logged but does not stop the server; the
    first request that needs the database will render the error page.
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Debug mode: {settings.debug}")

    if check_database_connection() and settings.auto_create_tables:
        create_tables()
        logger.info("Database tables are in sync")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    engine.dispose()


# =============================================================================
# Error Pages
# =============================================================================
def render_not_found(request: Request, message: str) -> Response:
    return templates.TemplateResponse(
        request,
        "page-not-found.html",
        {"title": "Page Not Found", "message": message},
        status_code=status.HTTP_404_NOT_FOUND,
    )


def render_error(request: Request, status_code: int, message: str) -> Response:
    """Render error.html headed with the status phrase, e.g. "Method Not Allowed"."""
    try:
        title = HTTPStatus(status_code).phrase
    except ValueError:
        title = "Error"
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": title, "status_code": status_code, "message": message},
        status_code=status_code,
    )


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
        description="Server-rendered catalog for managing books.",
        version="0.1.0",
        lifespan=lifespan,
        # HTML application: no interactive API docs
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    # Attach the limiter to the app state so it can be accessed by decorators
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # Request Logging
    # -------------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next) -> Response:
        """Log method, path, status and duration of every request."""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} "
            f"{response.status_code} {elapsed_ms:.1f} ms"
        )
        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> Response:
        """
        Render HTTP errors as pages.

        Unknown routes raise a plain 404 ("Not Found"); handlers raise 404s
        with their own message, e.g. for a missing book.
        """
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = exc.detail if exc.detail and exc.detail != "Not Found" else PAGE_NOT_FOUND
            logger.info(f"404 {request.url.path}: {message}")
            return render_not_found(request, message)

        logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")
        return render_error(request, exc.status_code, str(exc.detail or DEFAULT_ERROR_MESSAGE))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> Response:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error while hiding details from users.
        """
        logger.error(f"Database error: {exc}")
        message = str(exc) if settings.debug else "A database error occurred. Please try again later."
        return render_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> Response:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show the exception text.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)
        message = str(exc) if settings.debug and str(exc) else DEFAULT_ERROR_MESSAGE
        return render_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    # -------------------------------------------------------------------------
    # Static Files and Routers
    # -------------------------------------------------------------------------
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(index_router)
    app.include_router(books_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
    )
    def health_check() -> dict:
        """
        Health check endpoint for load balancers and monitoring.

        Reports whether the database answers a trivial query.
        """
        database_ok = check_database_connection()
        return {
            "status": "healthy" if database_ok else "degraded",
            "app": settings.app_name,
            "environment": settings.environment,
            "database": {"connected": database_ok},
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookshelf.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookshelf.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
