"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a configured app
   - Each app owns its own catalog, so tests get a fresh one per instance

2. Lifespan Events
   - startup: create and seed the catalog, log the banner
   - shutdown: drop the catalog (nothing is persisted)

3. Middleware
   - Request logging: timestamp, method and path of every request

4. Exception Handlers
   - Unmatched routes and methods -> 404 with the list of routes
   - Malformed request bodies -> 400 in the validation error format
   - Anything unexpected -> 500, details only in development mode
"""

import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from book_catalog.config import Settings, get_settings
from book_catalog.routers import books_router
from book_catalog.services.catalog import BookCatalog

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


class RequestLogFormatter(logging.Formatter):
    """
    Access-log lines: ``<ISO-8601 UTC timestamp> - <METHOD> <path>``.

    e.g. ``2024-01-15T10:30:00.000Z - GET /books``
    """

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(message)s")

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created, UTC)
        return created.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def request_log_handler(stream=None) -> logging.Handler:
    """Build the handler that writes access-log lines (stdout by default)."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(RequestLogFormatter())
    return handler


# Request lines carry their own timestamp, so they skip the root format
request_logger = logging.getLogger("book_catalog.requests")
request_logger.setLevel(logging.INFO)
request_logger.propagate = False
if not request_logger.handlers:
    request_logger.addHandler(request_log_handler())

ENDPOINTS = {
    "GET /books": "Get all books",
    "GET /books/:id": "Get a specific book by ID",
    "POST /books": "Create a new book",
    "PUT /books/:id": "Update a book by ID",
    "DELETE /books/:id": "Delete a book by ID",
}

AVAILABLE_ROUTES = {
    "GET /": "API information",
    "GET /books": "Get all books",
    "GET /books/:id": "Get a specific book",
    "POST /books": "Create a new book",
    "PUT /books/:id": "Update a book",
    "DELETE /books/:id": "Delete a book",
}


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown

    The catalog is created here rather than at import time so that its
    lifetime matches the server's.
    """
    app_settings: Settings = app.state.settings

    # ----- STARTUP -----
    app.state.catalog = BookCatalog()
    logger.info(f"{app_settings.app_name} server is running on {app_settings.base_url}")
    logger.info(f"Catalog ready with {len(app.state.catalog)} books")
    logger.info(f"Visit {app_settings.base_url} to see available endpoints")

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {app_settings.app_name}...")
    app.state.catalog = None


# =============================================================================
# Application Factory
# =============================================================================
def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use instead of the cached ones (tests
            pass their own to flip the environment)

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or get_settings()

    app = FastAPI(
        title=app_settings.app_name,
        description="""
## Books REST API

Create, read, update and delete books held in memory.

Data lives only as long as the server process; three sample books are
loaded on startup.
        """,
        version=app_settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # -------------------------------------------------------------------------
    # Request Logging Middleware
    # -------------------------------------------------------------------------
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """
        Handle HTTP errors raised by routing.

        A path that matches nothing and a path that exists but not for
        this method are both reported as an unknown route.
        """
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={
                    "success": False,
                    "message": "Route not found",
                    "availableRoutes": AVAILABLE_ROUTES,
                },
            )

        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report bodies FastAPI could not decode in the usual 400 format."""
        errors = [
            f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": "Validation failed",
                "errors": errors,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In development mode, include the exception message.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error": str(exc) if app_settings.is_development else "Internal server error",
            },
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(books_router)

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="API information and the list of endpoints.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "success": True,
            "message": app_settings.app_name,
            "version": app_settings.api_version,
            "endpoints": ENDPOINTS,
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn book_catalog.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# This allows running the app directly with: python -m book_catalog.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "book_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
