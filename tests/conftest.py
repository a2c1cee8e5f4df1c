"""Shared test fixtures and fake Playwright objects for the scraper test suite.

The fakes mirror the slice of ``playwright.async_api`` the scraper touches:
``async_playwright().start()`` → ``chromium.launch()`` → ``new_context()``
→ ``new_page()`` → ``goto()`` / ``wait_for_selector()`` / ``content()``.
Every call is appended to ``FakePlaywright.events`` so tests can assert on
ordering.
"""

from __future__ import annotations

import os
import random
from collections.abc import Callable

import pytest

from catalog_scraper.browser.fingerprint import FingerprintRandomizer
from catalog_scraper.browser.navigator import PageNavigator
from catalog_scraper.browser.session import BrowserSessionFactory
from catalog_scraper.config.settings import ScraperSettings
from catalog_scraper.extractors.pipeline import ExtractionPipeline
from catalog_scraper.proxy.resolver import ProxyResolver
from catalog_scraper.services.orchestrator import GeoOrchestrator


# ---------------------------------------------------------------------------
# Isolate tests from the developer's proxy / service environment
# ---------------------------------------------------------------------------

_ENV_PREFIXES = ("PROXY_", "BRIGHTDATA_", "OXYLABS_", "SMARTPROXY_", "SCRAPER_")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove proxy and service variables so settings fall back to defaults."""
    for key in list(os.environ):
        if key.upper().startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Fake Playwright driver
# ---------------------------------------------------------------------------

ErrorFactory = BaseException | Callable[[str], BaseException | None] | None


def _error_for(source: ErrorFactory, url: str) -> BaseException | None:
    if source is None or isinstance(source, BaseException):
        return source
    return source(url)


class FakePage:
    def __init__(self, driver: "FakePlaywright") -> None:
        self._driver = driver
        self.url = "about:blank"
        self.init_scripts: list[str] = []
        self.extra_headers: dict[str, str] = {}
        self.goto_kwargs: dict = {}

    async def add_init_script(self, script: str) -> None:
        self._driver.events.append("add_init_script")
        self.init_scripts.append(script)

    async def set_extra_http_headers(self, headers: dict[str, str]) -> None:
        self._driver.events.append("set_extra_http_headers")
        self.extra_headers = dict(headers)

    async def goto(self, url: str, **kwargs: object) -> None:
        self._driver.events.append(f"goto:{url}")
        self._driver.visited.append(url)
        self.goto_kwargs = dict(kwargs)
        error = _error_for(self._driver.goto_error, url)
        if error is not None:
            raise error
        self.url = url

    async def wait_for_selector(self, selector: str, **kwargs: object) -> None:
        self._driver.events.append("wait_for_selector")
        if self._driver.selector_error is not None:
            raise self._driver.selector_error

    async def content(self) -> str:
        self._driver.events.append("content")
        return self._driver.html_for(self.url)


class FakeContext:
    def __init__(self, driver: "FakePlaywright") -> None:
        self._driver = driver

    async def new_page(self) -> FakePage:
        self._driver.events.append("new_page")
        page = FakePage(self._driver)
        self._driver.pages.append(page)
        return page


class FakeBrowser:
    def __init__(self, driver: "FakePlaywright") -> None:
        self._driver = driver
        self.closed = False

    async def new_context(self, **kwargs: object) -> FakeContext:
        self._driver.events.append("new_context")
        if self._driver.context_error is not None:
            raise self._driver.context_error
        self._driver.context_kwargs.append(kwargs)
        return FakeContext(self._driver)

    async def close(self) -> None:
        self._driver.events.append("browser.close")
        self.closed = True


class FakeChromium:
    def __init__(self, driver: "FakePlaywright") -> None:
        self._driver = driver

    async def launch(self, **options: object) -> FakeBrowser:
        self._driver.events.append("launch")
        self._driver.launches.append(options)
        if self._driver.launch_error is not None:
            raise self._driver.launch_error
        browser = FakeBrowser(self._driver)
        self._driver.browsers.append(browser)
        return browser


class FakePlaywright:
    """Stands in for both ``async_playwright`` and the started driver.

    Calling the instance mimics ``async_playwright()``; ``start()`` returns
    the instance itself.
    """

    def __init__(
        self,
        *,
        html: str = "<html><body></body></html>",
        html_by_geo: dict[str, str] | None = None,
        goto_error: ErrorFactory = None,
        selector_error: BaseException | None = None,
        launch_error: BaseException | None = None,
        context_error: BaseException | None = None,
    ) -> None:
        self._html = html
        self._html_by_geo = html_by_geo or {}
        self.goto_error = goto_error
        self.selector_error = selector_error
        self.launch_error = launch_error
        self.context_error = context_error

        self.chromium = FakeChromium(self)
        self.events: list[str] = []
        self.visited: list[str] = []
        self.launches: list[dict] = []
        self.context_kwargs: list[dict] = []
        self.browsers: list[FakeBrowser] = []
        self.pages: list[FakePage] = []
        self.started = 0
        self.stopped = 0

    def __call__(self) -> "FakePlaywright":
        return self

    async def start(self) -> "FakePlaywright":
        self.started += 1
        return self

    async def stop(self) -> None:
        self.events.append("playwright.stop")
        self.stopped += 1

    def html_for(self, url: str) -> str:
        for geo, html in self._html_by_geo.items():
            if f"geo={geo}" in url:
                return html
        return self._html


@pytest.fixture
def make_playwright() -> type[FakePlaywright]:
    """Factory for configured fake drivers: ``make_playwright(html=...)``."""
    return FakePlaywright


@pytest.fixture
def fake_playwright() -> FakePlaywright:
    return FakePlaywright()


@pytest.fixture
def fake_page(fake_playwright: FakePlaywright) -> FakePage:
    return FakePage(fake_playwright)


# ---------------------------------------------------------------------------
# Settings and component fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ScraperSettings:
    """Test settings with every wait disabled."""
    return ScraperSettings(
        render_settle_ms=0,
        auth_settle_ms=0,
        configure_settle_ms=0,
        selector_timeout_ms=0,
        geo_delay_seconds=0,
    )


@pytest.fixture
def fingerprints() -> FingerprintRandomizer:
    return FingerprintRandomizer(rng=random.Random(42))


@pytest.fixture
def navigator() -> PageNavigator:
    return PageNavigator(
        render_settle_ms=0,
        auth_settle_ms=0,
        configure_settle_ms=0,
        selector_timeout_ms=0,
    )


@pytest.fixture
def make_orchestrator(
    fingerprints: FingerprintRandomizer,
    navigator: PageNavigator,
) -> Callable[..., GeoOrchestrator]:
    """Build an orchestrator over a fake driver with real navigation and extraction."""

    def _make(
        driver: FakePlaywright,
        *,
        proxy_resolver: ProxyResolver | None = None,
        geo_delay_seconds: float = 0,
    ) -> GeoOrchestrator:
        return GeoOrchestrator(
            proxy_resolver=proxy_resolver or ProxyResolver(rng=random.Random(0)),
            session_factory=BrowserSessionFactory(
                fingerprints=fingerprints,
                playwright_factory=driver,
            ),
            navigator=navigator,
            pipeline=ExtractionPipeline(),
            geo_delay_seconds=geo_delay_seconds,
        )

    return _make
