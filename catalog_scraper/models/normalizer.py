"""Catalog entry normalization.

Turns the raw field dicts produced by the extraction tiers into validated
:class:`CatalogEntry` models. Applied identically to every tier:

- HTML tag stripping and whitespace collapsing on text fields
- GEO forced to uppercase
- Length caps enforced by truncation, never rejection
- Image URLs resolved against the document's ``<base href>`` (or the page
  URL) and dropped to ``None`` when they cannot be made absolute

Only keys present in the raw dict are passed to the model, so
``CatalogEntry.patch_fields()`` reflects what the tier really supplied.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from urllib.parse import urljoin, urlparse

from pydantic import ValidationError

from catalog_scraper.models.catalog import (
    DESCRIPTION_MAX_LENGTH,
    IMAGE_URL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PROVIDER_MAX_LENGTH,
    CatalogEntry,
)

logger = logging.getLogger(__name__)

# Regex for stripping HTML tags
_HTML_TAG_RE = re.compile(r"<[^>]+>")

_ALLOWED_IMAGE_SCHEMES = frozenset({"http", "https"})

_FLAG_FIELDS = ("is_featured", "is_new", "is_popular")


def strip_html(text: str) -> str:
    """Strip HTML tags from a string."""
    return _HTML_TAG_RE.sub("", text)


def normalize_whitespace(text: str) -> str:
    """Collapse multiple whitespace characters into a single space and trim."""
    return re.sub(r"\s+", " ", text).strip()


def clean_text(text: str) -> str:
    """Strip HTML tags, normalize whitespace, and trim a text value."""
    return normalize_whitespace(strip_html(text))


def truncate(text: str | None, limit: int) -> str | None:
    if text is None:
        return None
    return text[:limit]


def resolve_image_url(raw: str | None, base_url: str) -> str | None:
    """Resolve *raw* against *base_url*; ``None`` if no absolute http(s) URL results."""
    if raw is None:
        return None
    raw = raw.strip()
    if not raw:
        return None

    try:
        resolved = urljoin(base_url, raw)
        parsed = urlparse(resolved)
    except ValueError:
        return None

    if parsed.scheme.lower() not in _ALLOWED_IMAGE_SCHEMES or not parsed.netloc:
        return None
    return resolved


@dataclass(frozen=True)
class ExtractionContext:
    """Per-page values every extracted entry shares."""

    casino_id: int
    geo: str
    page_url: str
    base_href: str | None = None

    @property
    def image_base(self) -> str:
        if self.base_href:
            try:
                return urljoin(self.page_url, self.base_href.strip())
            except ValueError:
                return self.page_url
        return self.page_url


def _as_text(value: object) -> str | None:
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = clean_text(str(value))
    return text or None


def _as_float(value: object) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(str(value).strip().rstrip("%"))
    except ValueError:
        return None


class EntryNormalizer:
    """Builds validated catalog entries from raw extraction dicts."""

    def normalize(self, raw: dict, context: ExtractionContext) -> CatalogEntry | None:
        """Return a :class:`CatalogEntry`, or ``None`` when *raw* has no usable name."""
        name = _as_text(raw.get("name"))
        if not name:
            return None

        data: dict = {
            "casino_id": context.casino_id,
            "geo": context.geo.upper(),
            "name": truncate(name, NAME_MAX_LENGTH),
        }

        if "provider" in raw:
            data["provider"] = truncate(_as_text(raw["provider"]), PROVIDER_MAX_LENGTH)
        if "image_url" in raw:
            image = _as_text(raw["image_url"])
            data["image_url"] = truncate(
                resolve_image_url(image, context.image_base), IMAGE_URL_MAX_LENGTH
            )
        if "description" in raw:
            data["description"] = truncate(
                _as_text(raw["description"]), DESCRIPTION_MAX_LENGTH
            )
        if "features" in raw:
            features = [t for t in (_as_text(f) for f in raw["features"] or []) if t]
            data["features"] = features or None
        for flag in _FLAG_FIELDS:
            if flag in raw:
                data[flag] = bool(raw[flag])
        if "rtp" in raw:
            data["rtp"] = _as_float(raw["rtp"])
        if "volatility" in raw:
            data["volatility"] = _as_text(raw["volatility"])

        try:
            return CatalogEntry(**data)
        except ValidationError:
            logger.debug("Dropping entry %r that failed validation", name, exc_info=True)
            return None
