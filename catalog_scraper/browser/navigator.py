"""Page navigation for a single GEO.

Order of operations on the page is fixed:

1. open the page with proxy credentials attached (before any navigation),
2. apply the fingerprint profile,
3. navigate to the GEO-tagged URL and wait for network idle,
4. wait (best effort) for a game-card selector,
5. let client-side rendering settle, then snapshot the HTML.

The short pauses after steps 1 and 2 separate configuration from the first
network request; they are fixed waits, not retries.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import TYPE_CHECKING, NamedTuple
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from catalog_scraper.middleware.error_handler import (
    NavigationError,
    NavigationTimeoutError,
    ProxyAuthenticationError,
)

if TYPE_CHECKING:
    from playwright.async_api import Page

    from catalog_scraper.browser.session import BrowserSession

logger = logging.getLogger(__name__)

# Game-card containers we wait for after load
GAME_CARD_WAIT_SELECTOR = ".game-item, .slot-item, .game-card, [data-game]"

# Chromium net errors and status lines raised when the proxy rejects credentials.
# A bare "407" also occurs in URLs, so only the status-line forms count.
_PROXY_AUTH_RE = re.compile(
    r"ERR_INVALID_AUTH_CREDENTIALS"
    r"|ERR_PROXY_AUTH"
    r"|\bHTTP(?:/\d(?:\.\d)?)? 407\b"
    r"|\b407 Proxy Authentication Required\b",
    re.IGNORECASE,
)


class LoadedPage(NamedTuple):
    """Rendered HTML and the URL it was finally served from."""

    html: str
    url: str


def build_url_with_geo(url: str, geo: str) -> str:
    """Set ``geo=<CODE>`` on *url*'s query string.

    URLs that do not parse as absolute URLs are returned unchanged.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    if not parsed.scheme or not parsed.netloc:
        return url

    params = [(k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True) if k != "geo"]
    params.append(("geo", geo.upper()))
    return urlunparse(parsed._replace(query=urlencode(params)))


class PageNavigator:
    """Loads a casino homepage inside a :class:`BrowserSession`."""

    def __init__(
        self,
        *,
        navigation_timeout_ms: int = 30_000,
        selector_timeout_ms: int = 10_000,
        render_settle_ms: int = 2_000,
        auth_settle_ms: int = 500,
        configure_settle_ms: int = 100,
        wait_selector: str = GAME_CARD_WAIT_SELECTOR,
    ) -> None:
        self._navigation_timeout_ms = navigation_timeout_ms
        self._selector_timeout_ms = selector_timeout_ms
        self._render_settle_ms = render_settle_ms
        self._auth_settle_ms = auth_settle_ms
        self._configure_settle_ms = configure_settle_ms
        self._wait_selector = wait_selector

    async def load(self, session: "BrowserSession", url: str, geo: str) -> LoadedPage:
        geo = geo.upper()
        target_url = build_url_with_geo(url, geo)

        page = await self._open_authenticated_page(session)

        await session.apply_fingerprint(page)
        await asyncio.sleep(self._configure_settle_ms / 1000.0)

        logger.info("Navigating to %s (geo=%s)", target_url, geo)
        await self._goto(page, target_url)

        await self.wait_for_content(page, self._wait_selector, self._selector_timeout_ms)

        # Client-side frameworks often render after the network goes idle
        await asyncio.sleep(self._render_settle_ms / 1000.0)

        html = await page.content()
        return LoadedPage(html=html, url=page.url or target_url)

    async def wait_for_content(self, page: "Page", selector: str, timeout: int) -> bool:
        """Wait for *selector*; returns ``False`` instead of raising on timeout."""
        try:
            await page.wait_for_selector(selector, timeout=timeout)
            return True
        except Exception:
            logger.info(
                "Game selector %r not found within %dms, continuing",
                selector,
                timeout,
            )
            return False

    async def _open_authenticated_page(self, session: "BrowserSession") -> "Page":
        proxy = session.proxy
        authenticating = proxy is not None and proxy.has_credentials

        try:
            page = await session.new_page()
        except Exception as exc:
            if authenticating:
                raise ProxyAuthenticationError(
                    f"Proxy authentication failed: {exc}",
                    proxy=proxy.server_address,
                ) from exc
            raise

        if authenticating:
            logger.info(
                "Proxy authentication set for %s (user=%s)",
                proxy.server_address,
                proxy.masked_username,
            )
            await asyncio.sleep(self._auth_settle_ms / 1000.0)

        return page

    async def _goto(self, page: "Page", target_url: str) -> None:
        try:
            await page.goto(
                target_url,
                wait_until="networkidle",
                timeout=self._navigation_timeout_ms,
            )
        except PlaywrightTimeoutError as exc:
            raise NavigationTimeoutError(
                f"Navigation to {target_url} timed out after {self._navigation_timeout_ms}ms"
            ) from exc
        except PlaywrightError as exc:
            text = str(exc)
            if _PROXY_AUTH_RE.search(text):
                raise ProxyAuthenticationError(
                    f"Proxy authentication failed: {text}"
                ) from exc
            raise NavigationError(f"Navigation to {target_url} failed: {text}") from exc
