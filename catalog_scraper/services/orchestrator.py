"""GEO orchestrator: drives one scrape cycle per requested GEO.

For each GEO, strictly one after another:
resolve proxy → open browser session → navigate → extract → close session.

A failure at any stage is logged and recorded as an empty result for that
GEO; it never stops the remaining GEOs. A fixed pacing delay separates
consecutive GEOs, including after a failed one. GEOs are never processed
concurrently: every GEO gets its own browser process and fingerprint, and
only the read-only proxy configuration and the target URL are shared.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from catalog_scraper.models.catalog import CatalogEntry, GeoRunResult
from catalog_scraper.validators.url_validator import validate_target_url

if TYPE_CHECKING:
    from catalog_scraper.browser.navigator import PageNavigator
    from catalog_scraper.browser.session import BrowserSessionFactory
    from catalog_scraper.extractors.pipeline import ExtractionPipeline
    from catalog_scraper.proxy.resolver import ProxyResolver

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation, checked between GEOs."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class GeoOrchestrator:
    """Runs the per-GEO scrape cycle sequentially over a list of GEOs.

    Dependencies are injected via the constructor so the orchestrator is
    testable without real browsers or network calls.
    """

    def __init__(
        self,
        *,
        proxy_resolver: "ProxyResolver",
        session_factory: "BrowserSessionFactory",
        navigator: "PageNavigator",
        pipeline: "ExtractionPipeline",
        geo_delay_seconds: float = 3.0,
    ) -> None:
        self._proxy_resolver = proxy_resolver
        self._session_factory = session_factory
        self._navigator = navigator
        self._pipeline = pipeline
        self._geo_delay_seconds = geo_delay_seconds

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(
        self,
        url: str,
        casino_id: int,
        geos: list[str],
        *,
        cancel_token: CancellationToken | None = None,
    ) -> list[GeoRunResult]:
        """Scrape *url* once per GEO; results follow the order of *geos*.

        Raises
        ------
        InvalidTargetUrlError
            If *url* is not an absolute http(s) URL. Raised before any GEO
            is processed.
        """
        url = validate_target_url(url)
        results: list[GeoRunResult] = []

        for index, raw_geo in enumerate(geos):
            geo = raw_geo.strip().upper()

            if cancel_token is not None and cancel_token.cancelled:
                logger.info("Run cancelled, skipping GEO %s", geo)
                results.append(GeoRunResult(geo=geo, entries=[]))
                continue

            if index > 0 and self._geo_delay_seconds > 0:
                await asyncio.sleep(self._geo_delay_seconds)

            entries = await self._run_geo(url, casino_id, geo)
            results.append(GeoRunResult(geo=geo, entries=entries))

        logger.info(
            "Scrape finished for casino %d: %d GEOs, %d entries",
            casino_id,
            len(results),
            sum(len(r.entries) for r in results),
        )
        return results

    # ------------------------------------------------------------------
    # Internal pipeline
    # ------------------------------------------------------------------

    async def _run_geo(self, url: str, casino_id: int, geo: str) -> list[CatalogEntry]:
        started = time.monotonic()
        proxy = None

        try:
            proxy = self._proxy_resolver.resolve(geo)
            async with await self._session_factory.open(proxy, geo=geo) as session:
                page = await self._navigator.load(session, url, geo)
                entries = self._pipeline.extract(page.html, geo, casino_id, page.url)
        except Exception as exc:
            logger.error(
                "Failed to scrape GEO %s for casino %d: %s",
                geo,
                casino_id,
                exc,
                exc_info=True,
                extra={
                    "geo": geo,
                    "casino_id": casino_id,
                    "target_url": url,
                    "proxy_used": proxy.server_address if proxy else None,
                    "error_reason": str(exc),
                },
            )
            return []

        duration_ms = (time.monotonic() - started) * 1000
        logger.info(
            "Parsed %d entries for GEO %s (duration_ms=%.0f)",
            len(entries),
            geo,
            duration_ms,
            extra={
                "geo": geo,
                "casino_id": casino_id,
                "target_url": url,
                "proxy_used": proxy.server_address if proxy else None,
                "entries_extracted": len(entries),
                "duration_ms": round(duration_ms),
            },
        )
        return entries
