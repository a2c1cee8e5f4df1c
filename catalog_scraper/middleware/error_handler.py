"""Global error hierarchy and FastAPI exception handlers.

All scraper-specific errors extend ScraperError. Errors raised for a single
GEO (proxy authentication, navigation) are absorbed by the orchestrator;
only input validation errors reach the HTTP layer, where the handlers below
render them in the JSON envelope: { success, data, error, meta }.
"""

from __future__ import annotations

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class ScraperError(Exception):
    """Base error for all scraper-specific errors."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class InvalidTargetUrlError(ScraperError):
    """Target URL is not an absolute http(s) URL."""

    status_code = 422
    message = "Target URL must be an absolute http(s) URL"


class TooManyGeosError(ScraperError):
    """A single request asked for more GEOs than the service allows."""

    status_code = 422
    message = "Too many GEOs requested"


class ProxyAuthenticationError(ScraperError):
    """The proxy rejected the supplied credentials."""

    status_code = 502
    message = "Proxy authentication failed"


class NavigationError(ScraperError):
    """The page could not be loaded (network failure, DNS, TLS, ...)."""

    status_code = 502
    message = "Navigation failed"


class NavigationTimeoutError(NavigationError):
    """The page did not reach network-idle within the navigation timeout."""

    status_code = 504
    message = "Navigation timed out"


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def _envelope(
    status_code: int,
    error: str,
    meta: dict | None = None,
) -> JSONResponse:
    """Build a JSON envelope error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "data": None,
            "error": error,
            "meta": meta,
        },
    )


async def _scraper_error_handler(_request: Request, exc: ScraperError) -> JSONResponse:
    meta = exc.details if exc.details else None
    return _envelope(exc.status_code, exc.message, meta=meta)


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI / Pydantic RequestValidationError (422)."""
    field_errors = [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return _envelope(
        status_code=422,
        error="Validation error",
        meta={"fields": field_errors},
    )


async def _unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions: log traceback, return generic 500."""
    logger.error(
        "Unhandled exception: %s\n%s",
        exc,
        traceback.format_exc(),
    )
    return _envelope(status_code=500, error="Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    """Wire up all exception handlers on the FastAPI application."""
    app.add_exception_handler(ScraperError, _scraper_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)  # type: ignore[arg-type]
