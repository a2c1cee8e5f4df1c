"""Browser sessions, fingerprint profiles, and page navigation."""

from catalog_scraper.browser.fingerprint import (
    CURATED_USER_AGENTS,
    GEO_ACCEPT_LANGUAGES,
    WEBGL_PROFILES,
    FingerprintProfile,
    FingerprintRandomizer,
)
from catalog_scraper.browser.navigator import LoadedPage, PageNavigator, build_url_with_geo
from catalog_scraper.browser.session import (
    CHROMIUM_ARGS,
    BrowserSession,
    BrowserSessionFactory,
    build_launch_options,
)

__all__ = [
    "CHROMIUM_ARGS",
    "CURATED_USER_AGENTS",
    "GEO_ACCEPT_LANGUAGES",
    "WEBGL_PROFILES",
    "BrowserSession",
    "BrowserSessionFactory",
    "FingerprintProfile",
    "FingerprintRandomizer",
    "LoadedPage",
    "PageNavigator",
    "build_launch_options",
    "build_url_with_geo",
]
