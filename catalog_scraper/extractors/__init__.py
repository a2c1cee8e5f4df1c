"""Catalog extraction tiers and the pipeline that chains them."""

from catalog_scraper.extractors.base import BaseExtractor
from catalog_scraper.extractors.dom import GAME_CARD_SELECTORS, StructuredSelectorExtractor
from catalog_scraper.extractors.inline_script import InlineScriptExtractor
from catalog_scraper.extractors.json_ld import JsonLdExtractor
from catalog_scraper.extractors.pipeline import ExtractionPipeline, default_extractors

__all__ = [
    "GAME_CARD_SELECTORS",
    "BaseExtractor",
    "ExtractionPipeline",
    "InlineScriptExtractor",
    "JsonLdExtractor",
    "StructuredSelectorExtractor",
    "default_extractors",
]
