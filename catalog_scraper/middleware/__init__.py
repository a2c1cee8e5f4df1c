"""Middleware: error hierarchy and FastAPI exception handlers."""

from catalog_scraper.middleware.error_handler import (
    InvalidTargetUrlError,
    NavigationError,
    NavigationTimeoutError,
    ProxyAuthenticationError,
    ScraperError,
    TooManyGeosError,
    register_error_handlers,
)

__all__ = [
    "InvalidTargetUrlError",
    "NavigationError",
    "NavigationTimeoutError",
    "ProxyAuthenticationError",
    "ScraperError",
    "TooManyGeosError",
    "register_error_handlers",
]
