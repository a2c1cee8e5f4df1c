"""Pydantic request models for the catalog scrape endpoint."""

from __future__ import annotations

import json
import re

from pydantic import BaseModel, Field, field_validator

_GEO_SPLIT_RE = re.compile(r"[,;]")


def parse_geo_value(value: object) -> list[str]:
    """Normalize a GEO list given as a list, a JSON array string, or ``"RU, DE"``."""
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith(("[", "{")):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                parsed = None
            if parsed is not None:
                return parse_geo_value(parsed if isinstance(parsed, list) else [parsed])
        return [part.strip().upper() for part in _GEO_SPLIT_RE.split(text) if part.strip()]

    if isinstance(value, (list, tuple)):
        return [str(g).strip().upper() for g in value if g is not None and str(g).strip()]

    return [str(value).strip().upper()]


class CatalogScrapeRequest(BaseModel):
    """Request body for ``POST /api/v1/casinos/{casino_id}/catalog/scrape``."""

    url: str = Field(..., min_length=1)
    geos: list[str] = Field(..., min_length=1)

    @field_validator("geos", mode="before")
    @classmethod
    def _normalize_geos(cls, value: object) -> list[str]:
        return parse_geo_value(value)
