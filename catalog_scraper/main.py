"""FastAPI application entry point with lifespan management.

Startup: configure logging, resolve the proxy provider and static GEO pools,
build the browser session factory, navigator and extraction pipeline, and
mount the routers.
Shutdown: nothing long-lived to drain; every GEO's browser is closed by the
orchestrator as soon as that GEO finishes.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from catalog_scraper.browser.fingerprint import FingerprintRandomizer
from catalog_scraper.browser.navigator import PageNavigator
from catalog_scraper.browser.session import BrowserSessionFactory
from catalog_scraper.config.settings import ScraperSettings
from catalog_scraper.extractors.pipeline import ExtractionPipeline
from catalog_scraper.logging_config import configure_logging
from catalog_scraper.middleware.error_handler import register_error_handlers
from catalog_scraper.proxy.pool import load_geo_proxy_pool
from catalog_scraper.proxy.providers import build_provider
from catalog_scraper.proxy.resolver import ProxyResolver
from catalog_scraper.routers.catalog import create_catalog_router
from catalog_scraper.routers.health import create_health_router
from catalog_scraper.services.orchestrator import GeoOrchestrator

logger = logging.getLogger(__name__)


def build_orchestrator(
    settings: ScraperSettings,
    *,
    proxy_resolver: ProxyResolver | None = None,
    pipeline: ExtractionPipeline | None = None,
) -> GeoOrchestrator:
    """Wire a :class:`GeoOrchestrator` from service settings."""
    navigator = PageNavigator(
        navigation_timeout_ms=settings.navigation_timeout_ms,
        selector_timeout_ms=settings.selector_timeout_ms,
        render_settle_ms=settings.render_settle_ms,
        auth_settle_ms=settings.auth_settle_ms,
        configure_settle_ms=settings.configure_settle_ms,
    )
    session_factory = BrowserSessionFactory(
        fingerprints=FingerprintRandomizer(),
        headless=settings.headless,
    )
    return GeoOrchestrator(
        proxy_resolver=proxy_resolver or ProxyResolver(),
        session_factory=session_factory,
        navigator=navigator,
        pipeline=pipeline or ExtractionPipeline(),
        geo_delay_seconds=settings.geo_delay_seconds,
    )


def create_app(settings: ScraperSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Loads ``ScraperSettings`` eagerly so that malformed ``SCRAPER_*``
    variables fail at import time rather than on the first request.
    """
    settings = settings or ScraperSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: startup and shutdown logic."""
        configure_logging(settings.log_level, json_output=settings.log_json)
        logger.info("Starting catalog scraper service on port %d", settings.port)

        proxy_resolver = ProxyResolver(
            provider=build_provider(),
            pool=load_geo_proxy_pool(),
        )
        pipeline = ExtractionPipeline()
        orchestrator = build_orchestrator(
            settings, proxy_resolver=proxy_resolver, pipeline=pipeline
        )

        # Mount routers
        app.include_router(
            create_health_router(proxy_resolver=proxy_resolver, pipeline=pipeline)
        )
        app.include_router(
            create_catalog_router(orchestrator=orchestrator, settings=settings)
        )

        app.state.orchestrator = orchestrator
        app.state.settings = settings

        logger.info("Catalog scraper service started successfully")

        yield

        logger.info("Catalog scraper service shut down")

    app = FastAPI(
        title="Casino Catalog Scraper",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    return app


app = create_app()


def run() -> None:
    """Serve :data:`app` with uvicorn on the configured port."""
    settings = ScraperSettings()
    uvicorn.run(
        "catalog_scraper.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
