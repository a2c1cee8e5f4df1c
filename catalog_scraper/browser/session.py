"""Isolated Playwright browser sessions, one per GEO.

A :class:`BrowserSessionFactory` launches a dedicated headless Chromium
process for each GEO, routed through that GEO's proxy. The session owns the
process: :meth:`BrowserSession.close` always stops both the browser and the
Playwright driver, and is safe to call more than once.

Proxy credentials are never put on the ``--proxy-server`` flag; Chromium
does not negotiate them from there. They are attached to the page's
browser context instead, before anything navigates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from catalog_scraper.browser.fingerprint import FingerprintProfile, FingerprintRandomizer

if TYPE_CHECKING:
    from playwright.async_api import Page

    from catalog_scraper.proxy.types import ProxyEndpoint

logger = logging.getLogger(__name__)

# Chromium flags for containerized headless operation without automation markers
CHROMIUM_ARGS: list[str] = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-blink-features=AutomationControlled",
    "--window-size=1920,1080",
    "--start-maximized",
    "--disable-infobars",
]

IGNORED_DEFAULT_ARGS: list[str] = ["--enable-automation"]


def build_launch_options(
    proxy: "ProxyEndpoint | None",
    *,
    headless: bool = True,
) -> dict[str, Any]:
    """Return ``chromium.launch`` keyword arguments for *proxy*."""
    args = list(CHROMIUM_ARGS)
    if proxy is not None:
        args.append(f"--proxy-server={proxy.server_address}")
    return {
        "headless": headless,
        "args": args,
        "ignore_default_args": list(IGNORED_DEFAULT_ARGS),
    }


class BrowserSession:
    """A launched browser bound to one proxy and one fingerprint profile."""

    def __init__(
        self,
        *,
        playwright: Any,
        browser: Any,
        proxy: "ProxyEndpoint | None",
        profile: FingerprintProfile,
        fingerprints: FingerprintRandomizer,
    ) -> None:
        self._playwright = playwright
        self._browser = browser
        self._proxy = proxy
        self._profile = profile
        self._fingerprints = fingerprints
        self._closed = False

    @property
    def proxy(self) -> "ProxyEndpoint | None":
        return self._proxy

    @property
    def profile(self) -> FingerprintProfile:
        return self._profile

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def new_page(self) -> "Page":
        """Create a page in a fresh context.

        The context carries the profile's user agent, viewport and locale
        and, when the proxy has credentials, the proxy credentials, so they
        are in place before the first request leaves the page.
        """
        context_kwargs: dict[str, Any] = {
            "user_agent": self._profile.user_agent,
            "viewport": {
                "width": self._profile.viewport_width,
                "height": self._profile.viewport_height,
            },
            "locale": self._profile.locale,
        }
        if self._proxy is not None and self._proxy.has_credentials:
            context_kwargs["http_credentials"] = {
                "username": self._proxy.username,
                "password": self._proxy.password,
            }

        context = await self._browser.new_context(**context_kwargs)
        return await context.new_page()

    async def apply_fingerprint(self, page: "Page") -> None:
        await self._fingerprints.apply(page, self._profile)

    async def close(self) -> None:
        """Release the browser process and the Playwright driver."""
        if self._closed:
            return
        self._closed = True

        try:
            await self._browser.close()
        except Exception:
            logger.debug("Error closing browser (may already be closed)", exc_info=True)

        try:
            await self._playwright.stop()
        except Exception:
            logger.debug("Error stopping Playwright driver", exc_info=True)

    async def __aenter__(self) -> "BrowserSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class BrowserSessionFactory:
    """Launches :class:`BrowserSession` objects.

    Parameters
    ----------
    fingerprints:
        Stealth configuration used to derive each session's profile.
    headless:
        Run Chromium headless.
    playwright_factory:
        Callable returning an object with an async ``start()`` method,
        defaulting to ``playwright.async_api.async_playwright``. Tests
        substitute a fake driver here.
    """

    def __init__(
        self,
        *,
        fingerprints: FingerprintRandomizer | None = None,
        headless: bool = True,
        playwright_factory: Callable[[], Any] | None = None,
    ) -> None:
        self._fingerprints = fingerprints or FingerprintRandomizer()
        self._headless = headless
        self._playwright_factory = playwright_factory

    async def open(
        self,
        proxy: "ProxyEndpoint | None",
        *,
        geo: str | None = None,
    ) -> BrowserSession:
        """Launch a browser for *proxy* and return the owning session."""
        factory = self._playwright_factory
        if factory is None:
            from playwright.async_api import async_playwright

            factory = async_playwright

        playwright = await factory().start()
        options = build_launch_options(proxy, headless=self._headless)

        try:
            browser = await playwright.chromium.launch(**options)
        except Exception:
            await playwright.stop()
            raise

        if proxy is not None:
            logger.info(
                "Launched browser via proxy %s (geo=%s)", proxy.server_address, geo
            )
        else:
            logger.info("Launched browser with direct connection (geo=%s)", geo)

        return BrowserSession(
            playwright=playwright,
            browser=browser,
            proxy=proxy,
            profile=self._fingerprints.generate(geo),
            fingerprints=self._fingerprints,
        )
