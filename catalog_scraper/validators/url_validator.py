"""URL validation for scrape targets."""

from __future__ import annotations

from urllib.parse import urlparse

from catalog_scraper.middleware.error_handler import InvalidTargetUrlError

_ALLOWED_SCHEMES = {"http", "https"}


def is_absolute_url(url: str) -> bool:
    """Return True if *url* is an absolute http(s) URL with a host."""
    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme.lower() in _ALLOWED_SCHEMES and bool(parsed.hostname)


def validate_target_url(url: str) -> str:
    """Return the stripped *url*, raising InvalidTargetUrlError if it is not absolute."""
    if not is_absolute_url(url):
        raise InvalidTargetUrlError(
            f"Target URL must be an absolute http(s) URL: {url!r}",
            url=url,
        )
    return url.strip()
