"""Inline-script tier: game arrays embedded in page JavaScript.

Looks for a game-oriented key (``games``, ``slots``, ``gameList``,
``gameData``, optionally quoted, possibly as the tail of a longer key such
as ``popular_games``) assigned an array literal, e.g.
``window.state = {"games": [...]}`` or ``var slots = [...]``, and decodes
the literal as JSON. Literals that are not valid JSON are skipped.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from catalog_scraper.extractors.base import BaseExtractor

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

GAME_LIST_RE = re.compile(
    r"""["']?(?:games|slots|gameList|gameData)["']?\s*[:=]\s*(?=\[)"""
)

_decoder = json.JSONDecoder()


def _first(obj: dict, *keys: str) -> object:
    for key in keys:
        value = obj.get(key)
        if value not in (None, ""):
            return value
    return None


def find_game_arrays(script: str) -> list[list]:
    """Return every JSON array literal assigned to a game-list key in *script*."""
    arrays: list[list] = []
    for match in GAME_LIST_RE.finditer(script):
        try:
            value, _end = _decoder.raw_decode(script, match.end())
        except (json.JSONDecodeError, ValueError):
            logger.debug("Skipping non-JSON game array at offset %d", match.end())
            continue
        if isinstance(value, list):
            arrays.append(value)
    return arrays


class InlineScriptExtractor(BaseExtractor):
    """Extracts games from JSON arrays inside ``<script>`` bodies."""

    name = "inline_script"

    def extract(self, soup: "BeautifulSoup") -> list[dict]:
        games: list[dict] = []

        for script in soup.find_all("script"):
            body = script.string or script.get_text()
            if not body:
                continue
            for array in find_game_arrays(body):
                for item in array:
                    if isinstance(item, dict):
                        game = self._extract_game(item)
                        if game:
                            games.append(game)

        return games

    def _extract_game(self, obj: dict) -> dict | None:
        name = _first(obj, "name", "title", "gameName")
        if not name:
            return None

        return {
            "name": name,
            "provider": _first(obj, "provider", "vendor", "developer"),
            "image_url": _first(obj, "image", "thumbnail", "img"),
            "description": _first(obj, "description"),
            "rtp": _first(obj, "rtp"),
            "volatility": _first(obj, "volatility", "volatil"),
            "is_new": bool(_first(obj, "isNew", "new")),
            "is_popular": bool(_first(obj, "isPopular", "popular")),
            "is_featured": bool(_first(obj, "isFeatured", "featured")),
        }
