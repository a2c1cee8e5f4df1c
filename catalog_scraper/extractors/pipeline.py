"""Tiered extraction pipeline.

Runs an ordered list of extractors (DOM selectors → JSON-LD → inline
script) over a page and returns the normalized entries of the first tier
that yields at least one. Later tiers are not applied once one succeeds.
A tier that raises is logged and treated as "no match".
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from catalog_scraper.extractors.base import BaseExtractor
from catalog_scraper.extractors.dom import StructuredSelectorExtractor
from catalog_scraper.extractors.inline_script import InlineScriptExtractor
from catalog_scraper.extractors.json_ld import JsonLdExtractor
from catalog_scraper.models.catalog import CatalogEntry
from catalog_scraper.models.normalizer import EntryNormalizer, ExtractionContext

logger = logging.getLogger(__name__)


def default_extractors() -> list[BaseExtractor]:
    return [
        StructuredSelectorExtractor(),
        JsonLdExtractor(),
        InlineScriptExtractor(),
    ]


class ExtractionPipeline:
    """Ordered fallback chain of extraction tiers."""

    def __init__(
        self,
        extractors: list[BaseExtractor] | None = None,
        *,
        normalizer: EntryNormalizer | None = None,
    ) -> None:
        self._extractors = extractors if extractors is not None else default_extractors()
        self._normalizer = normalizer or EntryNormalizer()

        names = [e.name for e in self._extractors]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate extractor names in pipeline: {names}")

    def list_tiers(self) -> list[str]:
        """Return tier names in the order they are attempted."""
        return [e.name for e in self._extractors]

    def extract(
        self,
        html: str,
        geo: str,
        casino_id: int,
        base_url: str,
    ) -> list[CatalogEntry]:
        soup = BeautifulSoup(html or "", "html.parser")

        base_tag = soup.find("base", href=True)
        context = ExtractionContext(
            casino_id=casino_id,
            geo=geo.upper(),
            page_url=base_url,
            base_href=base_tag["href"] if base_tag else None,
        )

        for extractor in self._extractors:
            try:
                raw_games = extractor.extract(soup)
            except Exception:
                logger.warning(
                    "Extraction tier %r failed (geo=%s)",
                    extractor.name,
                    context.geo,
                    exc_info=True,
                    extra={"geo": context.geo, "tier": extractor.name},
                )
                continue

            entries = [
                entry
                for entry in (self._normalizer.normalize(raw, context) for raw in raw_games)
                if entry is not None
            ]
            if entries:
                logger.info(
                    "Tier %r produced %d entries (geo=%s)",
                    extractor.name,
                    len(entries),
                    context.geo,
                    extra={
                        "geo": context.geo,
                        "tier": extractor.name,
                        "entries_extracted": len(entries),
                    },
                )
                return entries

            logger.debug("Tier %r found no games (geo=%s)", extractor.name, context.geo)

        logger.info("No games found on %s (geo=%s)", base_url, context.geo)
        return []
