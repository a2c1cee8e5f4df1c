"""JSON-LD tier: games declared as Schema.org structured data.

Scans every ``<script type="application/ld+json">`` block. Objects whose
``@type`` is (or contains) ``Game``/``VideoGame``, or that carry a ``game``
key, are candidates. Top-level arrays and ``@graph`` members are searched
too. Malformed blocks are skipped without stopping the scan.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from catalog_scraper.extractors.base import BaseExtractor

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_GAME_TYPES = frozenset({"Game", "VideoGame"})


def _iter_objects(data: object) -> Iterator[dict]:
    if isinstance(data, list):
        for item in data:
            yield from _iter_objects(item)
    elif isinstance(data, dict):
        yield data
        graph = data.get("@graph")
        if isinstance(graph, list):
            yield from _iter_objects(graph)


def _is_game(obj: dict) -> bool:
    types = obj.get("@type")
    if isinstance(types, str):
        types = [types]
    if isinstance(types, list) and _GAME_TYPES.intersection(t for t in types if isinstance(t, str)):
        return True
    return bool(obj.get("game"))


def _named(value: object) -> object:
    """Schema.org often nests ``{"@type": "Organization", "name": ...}``."""
    if isinstance(value, dict):
        return value.get("name")
    return value


def _image(value: object) -> object:
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        return value.get("url") or value.get("contentUrl")
    return value


class JsonLdExtractor(BaseExtractor):
    """Extracts games from JSON-LD blocks."""

    name = "json_ld"

    def extract(self, soup: "BeautifulSoup") -> list[dict]:
        games: list[dict] = []

        for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
            raw = script.string or script.get_text()
            if not raw or not raw.strip():
                continue
            try:
                data = json.loads(raw)
            except (json.JSONDecodeError, ValueError):
                logger.debug("Skipping malformed JSON-LD block")
                continue

            for obj in _iter_objects(data):
                if _is_game(obj):
                    game = self._extract_game(obj)
                    if game:
                        games.append(game)

        return games

    def _extract_game(self, obj: dict) -> dict | None:
        nested = obj.get("game") if isinstance(obj.get("game"), dict) else {}

        name = obj.get("name") or obj.get("title") or nested.get("name")
        if not name:
            return None

        return {
            "name": name,
            "provider": _named(
                obj.get("provider") or obj.get("vendor") or nested.get("provider")
            ),
            "image_url": _image(
                obj.get("image") or obj.get("thumbnail") or nested.get("image")
            ),
            "description": obj.get("description") or nested.get("description"),
        }
