"""Proxy package: provider integrations, static GEO pools, and resolution."""

from catalog_scraper.proxy.pool import load_geo_proxy_pool, parse_proxy_string
from catalog_scraper.proxy.providers import (
    BrightDataProvider,
    OxylabsProvider,
    ProxyProvider,
    SmartproxyProvider,
    build_provider,
    to_country_code,
)
from catalog_scraper.proxy.resolver import ProxyResolver
from catalog_scraper.proxy.types import ProxyEndpoint, ProxyScheme

__all__ = [
    "BrightDataProvider",
    "OxylabsProvider",
    "ProxyEndpoint",
    "ProxyProvider",
    "ProxyResolver",
    "ProxyScheme",
    "SmartproxyProvider",
    "build_provider",
    "load_geo_proxy_pool",
    "parse_proxy_string",
    "to_country_code",
]
