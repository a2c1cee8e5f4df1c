"""Unit tests for Pydantic request/response and catalog models."""

import pytest
from pydantic import ValidationError

from catalog_scraper.models.catalog import (
    CatalogEntry,
    GeoCount,
    GeoRunResult,
    ScrapeSummary,
)
from catalog_scraper.models.requests import CatalogScrapeRequest, parse_geo_value
from catalog_scraper.models.responses import ApiResponse, CatalogScrapeData


# ---------------------------------------------------------------------------
# ApiResponse envelope
# ---------------------------------------------------------------------------


class TestApiResponse:
    def test_success_response_with_data(self):
        resp = ApiResponse(success=True, data={"key": "value"})
        assert resp.success is True
        assert resp.data == {"key": "value"}
        assert resp.error is None
        assert resp.meta is None

    def test_error_response(self):
        resp = ApiResponse(success=False, error="Something went wrong")
        assert resp.success is False
        assert resp.data is None
        assert resp.error == "Something went wrong"

    def test_nested_model_is_dumped(self):
        data = CatalogScrapeData(
            casino_id=1,
            url="https://casino.example/",
            results=[GeoRunResult(geo="RU")],
            summary=ScrapeSummary.from_results([GeoRunResult(geo="RU")]),
        )
        dumped = ApiResponse(success=True, data=data).model_dump()
        assert dumped["data"]["results"] == [{"geo": "RU", "entries": []}]
        assert dumped["data"]["summary"] == {"total": 0, "summary": [{"geo": "RU", "count": 0}]}


# ---------------------------------------------------------------------------
# CatalogEntry
# ---------------------------------------------------------------------------


class TestCatalogEntry:
    def test_defaults(self):
        entry = CatalogEntry(casino_id=1, geo="ru", name="Book of Ra")
        assert entry.geo == "RU"
        assert entry.provider is None
        assert entry.features is None
        assert (entry.is_featured, entry.is_new, entry.is_popular) == (False, False, False)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            CatalogEntry(casino_id=1, geo="RU", name="")

    def test_overlong_name_rejected(self):
        with pytest.raises(ValidationError):
            CatalogEntry(casino_id=1, geo="RU", name="x" * 256)

    def test_patch_fields_excludes_identity(self):
        entry = CatalogEntry(casino_id=1, geo="RU", name="G", provider="NetEnt", rtp=96.1)
        assert entry.patch_fields() == {"provider": "NetEnt", "rtp": 96.1}


class TestScrapeSummary:
    def test_counts_follow_result_order(self):
        results = [
            GeoRunResult(geo="DE", entries=[CatalogEntry(casino_id=1, geo="DE", name="A")]),
            GeoRunResult(geo="RU"),
            GeoRunResult(geo="BR", entries=[
                CatalogEntry(casino_id=1, geo="BR", name="B"),
                CatalogEntry(casino_id=1, geo="BR", name="C"),
            ]),
        ]
        summary = ScrapeSummary.from_results(results)
        assert summary.total == 3
        assert summary.summary == [
            GeoCount(geo="DE", count=1),
            GeoCount(geo="RU", count=0),
            GeoCount(geo="BR", count=2),
        ]


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------


class TestParseGeoValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (["ru", " de "], ["RU", "DE"]),
            ('["ru", "br"]', ["RU", "BR"]),
            ("ru, de; pl", ["RU", "DE", "PL"]),
            ("", []),
            (None, []),
            ("ru,,", ["RU"]),
        ],
    )
    def test_shapes(self, value, expected):
        assert parse_geo_value(value) == expected


class TestCatalogScrapeRequest:
    def test_valid(self):
        req = CatalogScrapeRequest(url="https://casino.example/", geos="ru,de")
        assert req.geos == ["RU", "DE"]

    def test_empty_geos_rejected(self):
        with pytest.raises(ValidationError):
            CatalogScrapeRequest(url="https://casino.example/", geos=[])

    def test_missing_url_rejected(self):
        with pytest.raises(ValidationError):
            CatalogScrapeRequest(geos=["RU"])
