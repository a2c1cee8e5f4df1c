"""Unit tests for target URL validation."""

import pytest

from catalog_scraper.middleware.error_handler import InvalidTargetUrlError
from catalog_scraper.validators.url_validator import is_absolute_url, validate_target_url


class TestIsAbsoluteUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://casino.example/",
            "http://casino.example",
            "HTTPS://casino.example/lobby?x=1",
            "  https://casino.example/  ",
        ],
    )
    def test_accepted(self, url):
        assert is_absolute_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "/lobby",
            "casino.example",
            "ftp://casino.example/",
            "javascript:alert(1)",
            "https://",
            "http://[::1",
        ],
    )
    def test_rejected(self, url):
        assert not is_absolute_url(url)

    def test_non_string(self):
        assert not is_absolute_url(None)  # type: ignore[arg-type]


class TestValidateTargetUrl:
    def test_returns_stripped(self):
        assert validate_target_url(" https://casino.example/ ") == "https://casino.example/"

    def test_raises_with_url_detail(self):
        with pytest.raises(InvalidTargetUrlError) as exc_info:
            validate_target_url("/relative")
        assert exc_info.value.details == {"url": "/relative"}
