"""Health endpoint.

- GET /health: service status, proxy configuration and extraction tiers
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import APIRouter

from catalog_scraper.models.responses import ApiResponse

if TYPE_CHECKING:
    from catalog_scraper.extractors.pipeline import ExtractionPipeline
    from catalog_scraper.proxy.resolver import ProxyResolver


def create_health_router(
    *,
    proxy_resolver: "ProxyResolver | Any" = None,
    pipeline: "ExtractionPipeline | Any" = None,
) -> APIRouter:
    """Factory that creates the health router with injected dependencies."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Service health check with proxy and extraction configuration."""
        proxy_stats = proxy_resolver.get_stats() if proxy_resolver else {}
        tiers = pipeline.list_tiers() if pipeline else []

        return ApiResponse(
            success=True,
            data={
                "status": "healthy",
                "proxy": proxy_stats,
                "extraction_tiers": tiers,
            },
        ).model_dump()

    return health_router
