"""Scrape orchestration services."""

from catalog_scraper.services.orchestrator import CancellationToken, GeoOrchestrator

__all__ = ["CancellationToken", "GeoOrchestrator"]
