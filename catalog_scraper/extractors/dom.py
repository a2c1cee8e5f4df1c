"""Structured-selector tier: game cards found by CSS class / data attributes.

Candidate container selectors are tried in priority order. The first
selector whose elements yield at least one named game wins; elements
without a usable name are dropped. Each field has its own fallback chain,
first non-empty value wins.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from catalog_scraper.extractors.base import BaseExtractor

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Selectors
# ---------------------------------------------------------------------------

GAME_CARD_SELECTORS: list[str] = [
    ".game-item",
    ".games-list-card",
    ".slot-item",
    ".game-card",
    ".slot-card",
    "[data-game]",
    "[data-slot]",
    ".casino-game",
    ".game",
    ".game-tile",
]

_NAME_ATTRS = ("data-game-name", "data-slot-name", "data-title", "title")
_NAME_SELECTOR = ".game-name, .slot-name, .title, h3, h4"

_PROVIDER_ATTRS = ("data-provider", "data-vendor")
_PROVIDER_SELECTOR = ".provider, .vendor, .game-provider"

_IMAGE_ATTRS = ("src", "data-src", "data-lazy-src")

_DESCRIPTION_SELECTOR = ".description, .game-description, .slot-description"

_FEATURE_SELECTOR = '.tag, .badge, .feature, [class*="tag"], [class*="badge"]'

_FEATURED_CLASSES = ("featured", "highlighted")
_FEATURED_SELECTOR = ".featured, .highlighted"
_NEW_SELECTOR = ".new, .new-badge"
_POPULAR_SELECTOR = ".popular, .top"

_NEW_RE = re.compile(r"новый|new", re.IGNORECASE)
_POPULAR_RE = re.compile(r"популярный|popular|топ|top", re.IGNORECASE)

_MIN_NAME_LENGTH = 2


class StructuredSelectorExtractor(BaseExtractor):
    """Extracts games from game-card containers."""

    name = "dom"

    def __init__(self, selectors: list[str] | None = None) -> None:
        self._selectors = selectors or GAME_CARD_SELECTORS

    def extract(self, soup: "BeautifulSoup") -> list[dict]:
        for selector in self._selectors:
            elements = soup.select(selector)
            if not elements:
                continue

            logger.debug("Found %d candidates using selector %r", len(elements), selector)
            games = [g for g in (self._extract_card(el) for el in elements) if g]
            if games:
                logger.info("Extracted %d games using selector %r", len(games), selector)
                return games

        return []

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _extract_card(self, el: "Tag") -> dict | None:
        name = self._name(el)
        if not name or len(name) < _MIN_NAME_LENGTH:
            return None

        features = self._features(el)
        classes = set(el.get("class") or [])

        is_featured = bool(classes.intersection(_FEATURED_CLASSES)) or (
            el.select_one(_FEATURED_SELECTOR) is not None
        )
        is_new = (
            "new" in classes
            or el.select_one(_NEW_SELECTOR) is not None
            or any(_NEW_RE.search(f) for f in features)
        )
        is_popular = (
            "popular" in classes
            or el.select_one(_POPULAR_SELECTOR) is not None
            or any(_POPULAR_RE.search(f) for f in features)
        )

        return {
            "name": name,
            "provider": self._provider(el),
            "image_url": self._image(el),
            "description": self.first_text(el, _DESCRIPTION_SELECTOR),
            "features": features or None,
            "is_featured": is_featured,
            "is_new": is_new,
            "is_popular": is_popular,
        }

    def _name(self, el: "Tag") -> str | None:
        for attr in _NAME_ATTRS:
            value = self.attr(el, attr)
            if value:
                return value

        heading = self.first_text(el, _NAME_SELECTOR)
        if heading:
            return heading

        first_line = el.get_text().strip().split("\n")[0].strip()
        return first_line or None

    def _provider(self, el: "Tag") -> str | None:
        for attr in _PROVIDER_ATTRS:
            value = self.attr(el, attr)
            if value:
                return value
        return self.first_text(el, _PROVIDER_SELECTOR)

    def _image(self, el: "Tag") -> str | None:
        value = self.attr(el, "data-image")
        if value:
            return value

        img = el.find("img")
        if img is None:
            return None
        for attr in _IMAGE_ATTRS:
            value = self.attr(img, attr)
            if value:
                return value
        return None

    def _features(self, el: "Tag") -> list[str]:
        features: list[str] = []
        for tag_el in el.select(_FEATURE_SELECTOR):
            text = tag_el.get_text().strip()
            if text:
                features.append(text)
        return features
