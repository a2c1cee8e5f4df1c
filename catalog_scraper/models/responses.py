"""API response models.

All API responses are wrapped in the envelope
{ success: bool, data: T | None, error: str | None, meta: dict | None }.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

from catalog_scraper.models.catalog import GeoRunResult, ScrapeSummary

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope for all API responses."""

    success: bool
    data: T | None = None
    error: str | None = None
    meta: dict | None = None


class CatalogScrapeData(BaseModel):
    """Payload of a catalog scrape: per-GEO results plus their counts."""

    casino_id: int
    url: str
    results: list[GeoRunResult]
    summary: ScrapeSummary
