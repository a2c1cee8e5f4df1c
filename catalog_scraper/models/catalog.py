"""Catalog output models.

A :class:`CatalogEntry` is built transiently per page by the extraction
pipeline and handed to the caller, which upserts it keyed by
``(casino_id, geo, name)``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

NAME_MAX_LENGTH = 255
PROVIDER_MAX_LENGTH = 255
IMAGE_URL_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000


class CatalogEntry(BaseModel):
    """A single game extracted from a casino homepage."""

    casino_id: int
    geo: str
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    provider: str | None = Field(default=None, max_length=PROVIDER_MAX_LENGTH)
    image_url: str | None = Field(default=None, max_length=IMAGE_URL_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    features: list[str] | None = None
    is_featured: bool = False
    is_new: bool = False
    is_popular: bool = False
    rtp: float | None = None
    volatility: str | None = None

    @field_validator("geo")
    @classmethod
    def _upper_geo(cls, value: str) -> str:
        return value.strip().upper()

    def patch_fields(self) -> dict:
        """Fields the extraction tier actually supplied, for update-in-place.

        Identity fields are excluded; the caller matches on them.
        """
        return self.model_dump(
            exclude_unset=True,
            exclude={"casino_id", "geo", "name"},
        )


class GeoRunResult(BaseModel):
    """Extraction outcome for one GEO; ``entries`` is empty on failure."""

    geo: str
    entries: list[CatalogEntry] = Field(default_factory=list)


class GeoCount(BaseModel):
    geo: str
    count: int


class ScrapeSummary(BaseModel):
    """Entry counts per GEO, in request order."""

    total: int
    summary: list[GeoCount]

    @classmethod
    def from_results(cls, results: list[GeoRunResult]) -> "ScrapeSummary":
        counts = [GeoCount(geo=r.geo, count=len(r.entries)) for r in results]
        return cls(total=sum(c.count for c in counts), summary=counts)
