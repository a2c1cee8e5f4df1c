"""Public models for the scraper service."""

from catalog_scraper.models.catalog import (
    CatalogEntry,
    GeoCount,
    GeoRunResult,
    ScrapeSummary,
)
from catalog_scraper.models.normalizer import EntryNormalizer, ExtractionContext
from catalog_scraper.models.requests import CatalogScrapeRequest, parse_geo_value
from catalog_scraper.models.responses import ApiResponse, CatalogScrapeData

__all__ = [
    "ApiResponse",
    "CatalogEntry",
    "CatalogScrapeData",
    "CatalogScrapeRequest",
    "EntryNormalizer",
    "ExtractionContext",
    "GeoCount",
    "GeoRunResult",
    "ScrapeSummary",
    "parse_geo_value",
]
