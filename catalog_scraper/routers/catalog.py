"""Catalog scrape endpoint.

- POST /api/v1/casinos/{casino_id}/catalog/scrape: scrape one casino
  homepage once per requested GEO and return the extracted games

The call blocks until every GEO has been processed. Nothing is persisted
here: the caller upserts the returned entries by ``(casino_id, geo, name)``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter

from catalog_scraper.middleware.error_handler import TooManyGeosError
from catalog_scraper.models.catalog import ScrapeSummary
from catalog_scraper.models.requests import CatalogScrapeRequest
from catalog_scraper.models.responses import ApiResponse, CatalogScrapeData
from catalog_scraper.validators.url_validator import validate_target_url

if TYPE_CHECKING:
    from catalog_scraper.config.settings import ScraperSettings
    from catalog_scraper.services.orchestrator import GeoOrchestrator

logger = logging.getLogger(__name__)


def create_catalog_router(
    *,
    orchestrator: "GeoOrchestrator | Any",
    settings: "ScraperSettings",
) -> APIRouter:
    """Factory that creates the catalog router with injected dependencies.

    Parameters
    ----------
    orchestrator:
        GeoOrchestrator that runs the per-GEO scrape cycle.
    settings:
        Service settings; ``max_geos_per_request`` bounds a single call.
    """
    catalog_router = APIRouter(prefix="/api/v1/casinos", tags=["catalog"])

    @catalog_router.post("/{casino_id}/catalog/scrape")
    async def scrape_catalog(casino_id: int, body: CatalogScrapeRequest) -> dict:
        """Scrape the casino homepage for every GEO in the request body."""
        url = validate_target_url(body.url)

        if len(body.geos) > settings.max_geos_per_request:
            raise TooManyGeosError(
                f"At most {settings.max_geos_per_request} GEOs per request",
                requested=len(body.geos),
                limit=settings.max_geos_per_request,
            )

        logger.info(
            "Catalog scrape requested for casino %d: %s",
            casino_id,
            ", ".join(body.geos),
            extra={"casino_id": casino_id, "target_url": url},
        )

        results = await orchestrator.run(url, casino_id, body.geos)

        return ApiResponse(
            success=True,
            data=CatalogScrapeData(
                casino_id=casino_id,
                url=url,
                results=results,
                summary=ScrapeSummary.from_results(results),
            ),
        ).model_dump()

    return catalog_router
