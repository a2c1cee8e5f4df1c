"""Configuration: service and proxy-provider settings."""

from catalog_scraper.config.proxy_settings import (
    BrightDataSettings,
    OxylabsSettings,
    ProxyProviderSettings,
    SmartproxySettings,
)
from catalog_scraper.config.settings import ScraperSettings

__all__ = [
    "BrightDataSettings",
    "OxylabsSettings",
    "ProxyProviderSettings",
    "ScraperSettings",
    "SmartproxySettings",
]
