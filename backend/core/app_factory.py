"""
Application factory for creating FastAPI app instances.

This module provides functions for creating and configuring the FastAPI application
with all necessary middleware, routers, exception handlers and the entry store.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from domain.exceptions import JournalError
from domain.services.entry_validation import EntryLimits, EntryValidator
from domain.value_objects.enums import ErrorKind
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from infrastructure.entry_store import EntryStore

from core import get_logger, get_settings
from core.settings import API_PREFIX, Settings

logger = get_logger("AppFactory")

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_403_FORBIDDEN,
}


async def journal_error_handler(request: Request, exc: JournalError) -> JSONResponse:
    """Translate a typed domain failure into an HTTP error response."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    logger.debug(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.kind.title, "kind": exc.kind.value, "detail": exc.message},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400 instead of 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation Error", "detail": jsonable_encoder(exc.errors())},
    )


def make_unhandled_error_handler(settings: Settings):
    """Build the catch-all handler; error details are only exposed in development."""

    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        message = str(exc) if settings.is_development else "An error occurred processing your request"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal Server Error", "detail": message},
        )

    return unhandled_error_handler


def mount_frontend(app: FastAPI, static_path: Path) -> None:
    """Serve a built single-page client, falling back to index.html for client-side routes."""
    from fastapi.responses import FileResponse, HTMLResponse

    index_html = static_path / "index.html"
    logger.info(f"📁 Serving frontend from: {static_path}")

    @app.get("/", include_in_schema=False)
    async def serve_root():
        """Serve index.html for root path."""
        if index_html.exists():
            return FileResponse(index_html)
        return HTMLResponse("<h1>Frontend not found</h1>", status_code=404)

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(full_path: str):
        """Serve frontend SPA - returns index.html for all non-API routes."""
        if full_path.startswith(API_PREFIX.lstrip("/")):
            return JSONResponse({"detail": "Not Found"}, status_code=404)
        file_path = (static_path / full_path).resolve()
        if full_path and file_path.is_file() and static_path.resolve() in file_path.parents:
            return FileResponse(file_path)
        if index_html.exists():
            return FileResponse(index_html)
        return HTMLResponse("<h1>Frontend not found</h1>", status_code=404)


def create_app(settings: Optional[Settings] = None, entry_store: Optional[EntryStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the process-wide singleton)
        entry_store: Pre-built store, mainly for tests (defaults to an empty store
            built from the configured limits)

    Returns:
        Configured FastAPI application instance
    """
    from fastapi.middleware.cors import CORSMiddleware
    from infrastructure.rate_limit import build_limiter
    from infrastructure.request_logging import RequestLoggingMiddleware
    from infrastructure.security import SecurityMiddleware
    from routers import entries, health
    from slowapi import _rate_limit_exceeded_handler
    from slowapi.errors import RateLimitExceeded

    settings = settings or get_settings()

    if entry_store is None:
        limits = EntryLimits.from_settings(settings)
        entry_store = EntryStore(EntryValidator(limits))

    # Create lifespan context manager
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for application startup and shutdown."""
        logger.info(f"🚀 Application startup ({settings.environment} mode)")
        logger.info(f"   Entry limit: {app.state.entry_store.max_entries}")

        yield

        logger.info("🛑 Application shutdown...")
        app.state.entry_store.clear()
        logger.info("✅ Application shutdown complete")

    app = FastAPI(title="DevLog API", lifespan=lifespan)

    # Store in app state for dependency injection
    app.state.entry_store = entry_store
    app.state.settings = settings

    # Rate limiting, one limiter per app (disabled in the test environment)
    limiter = build_limiter(settings)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(JournalError, journal_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, make_unhandled_error_handler(settings))

    # CORS middleware
    allowed_origins = settings.get_cors_origins()
    logger.info("🔒 CORS Configuration:")
    logger.info(f"   Allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )
    app.add_middleware(SecurityMiddleware, max_request_bytes=settings.max_request_bytes)
    app.add_middleware(RequestLoggingMiddleware)

    # Register routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(entries.create_router(limiter, settings), prefix=f"{API_PREFIX}/entries", tags=["Entries"])

    # The SPA catch-all must be registered after every API route
    if settings.static_dir and settings.static_dir.is_dir():
        mount_frontend(app, settings.static_dir)

    return app
