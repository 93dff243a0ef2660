"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.routers import bookmarks, health
from core.config import get_settings
from core.logging_config import configure_logging
from db.session import create_tables
from schemas.errors import ErrorResponse
from services.exceptions import BookmarkNotFoundError, BookmarkValidationError, StorageError


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    configure_logging(app_settings.log_level)

    # Startup: Create the bookmarks table if it doesn't exist yet
    if app_settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ready")

    yield


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="Rated bookmarks with validated input and markup-escaped output.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(BookmarkValidationError)
async def validation_exception_handler(
    _request: Request, exc: BookmarkValidationError,
) -> JSONResponse:
    """Report the first failing validation rule as a 400."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse.from_message(exc.message).model_dump(),
    )


@app.exception_handler(BookmarkNotFoundError)
async def not_found_exception_handler(
    _request: Request, exc: BookmarkNotFoundError,
) -> JSONResponse:
    """Report a missing bookmark as a 404 with a plain JSON string body."""
    return JSONResponse(status_code=404, content=exc.message)


@app.exception_handler(StorageError)
async def storage_exception_handler(
    _request: Request, exc: StorageError,
) -> JSONResponse:
    """Report database failures as a 500 without leaking driver details."""
    logger.error("Request failed: %s", exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse.from_message("Internal server error").model_dump(),
    )


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bookmarks.router)
