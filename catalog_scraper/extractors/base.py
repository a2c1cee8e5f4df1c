"""Abstract base class for catalog extraction tiers.

Each tier turns a parsed document into raw field dicts (one per game). An
empty list means "no match" and lets the pipeline fall through to the next
tier. Raw dicts use the :class:`CatalogEntry` field names; a key is present
only when the tier actually supplies that field.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bs4 import BeautifulSoup, Tag


class BaseExtractor(ABC):
    """Abstract base extractor that all tiers extend.

    Subclasses MUST set ``name`` as a class attribute and implement
    ``extract``.
    """

    name: str

    @abstractmethod
    def extract(self, soup: "BeautifulSoup") -> list[dict]:
        """Return raw game dicts found in *soup*, or ``[]`` when nothing matches."""
        ...

    @staticmethod
    def first_text(element: "Tag", selector: str) -> str | None:
        """Stripped text of the first descendant matching *selector*."""
        found = element.select_one(selector)
        if found is None:
            return None
        text = found.get_text().strip()
        return text or None

    @staticmethod
    def attr(element: "Tag", name: str) -> str | None:
        value = element.get(name)
        if isinstance(value, list):
            value = " ".join(value)
        if value is None:
            return None
        value = value.strip()
        return value or None
