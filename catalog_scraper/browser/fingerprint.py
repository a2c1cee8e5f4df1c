"""Fingerprint profiles for anti-detection.

Generates per-page browser fingerprint profiles (rotating user agent,
GEO-consistent Accept-Language and navigator.languages, a consistent WebGL
vendor/renderer pair) and applies them to Playwright pages before any
navigation happens.
"""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.async_api import Page


# ---------------------------------------------------------------------------
# Curated user agent list: real desktop Chrome UA strings
# ---------------------------------------------------------------------------

CURATED_USER_AGENTS: list[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
]


# ---------------------------------------------------------------------------
# GEO → Accept-Language
# ---------------------------------------------------------------------------

GEO_ACCEPT_LANGUAGES: dict[str, str] = {
    "RU": "ru-RU,ru;q=0.9",
    "DE": "de-DE,de;q=0.9",
    "BR": "pt-BR,pt;q=0.9",
    "EN": "en-US,en;q=0.9",
    "FR": "fr-FR,fr;q=0.9",
    "ES": "es-ES,es;q=0.9",
    "IT": "it-IT,it;q=0.9",
    "PL": "pl-PL,pl;q=0.9",
}

DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9"


# ---------------------------------------------------------------------------
# WebGL UNMASKED_VENDOR / UNMASKED_RENDERER pairs
# ---------------------------------------------------------------------------

WEBGL_PROFILES: list[tuple[str, str]] = [
    ("Intel Inc.", "Intel Iris OpenGL Engine"),
    ("Google Inc. (Intel)", "ANGLE (Intel, Intel(R) UHD Graphics 630 Direct3D11 vs_5_0 ps_5_0, D3D11)"),
    ("Google Inc. (NVIDIA)", "ANGLE (NVIDIA, NVIDIA GeForce GTX 1660 Direct3D11 vs_5_0 ps_5_0, D3D11)"),
]

VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080

BASE_HEADERS: dict[str, str] = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate, br",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
}


# ---------------------------------------------------------------------------
# JavaScript overrides to mask automation detection
# ---------------------------------------------------------------------------

_STEALTH_JS_TEMPLATE = """
(() => {
    const profile = __PROFILE__;

    Object.defineProperty(navigator, 'webdriver', {
        get: () => false,
        configurable: true,
    });

    Object.defineProperty(navigator, 'plugins', {
        get: () => [1, 2, 3, 4, 5],
        configurable: true,
    });

    Object.defineProperty(navigator, 'languages', {
        get: () => profile.languages,
        configurable: true,
    });

    const originalQuery = window.navigator.permissions.query;
    window.navigator.permissions.query = (parameters) => (
        parameters.name === 'notifications'
            ? Promise.resolve({ state: Notification.permission })
            : originalQuery(parameters)
    );

    if (!window.chrome) {
        window.chrome = {};
    }
    if (!window.chrome.runtime) {
        window.chrome.runtime = {};
    }

    const patchWebGL = (proto) => {
        if (!proto) {
            return;
        }
        const getParameter = proto.getParameter;
        proto.getParameter = function (parameter) {
            if (parameter === 37445) {
                return profile.webglVendor;
            }
            if (parameter === 37446) {
                return profile.webglRenderer;
            }
            return getParameter.call(this, parameter);
        };
    };
    patchWebGL(window.WebGLRenderingContext && WebGLRenderingContext.prototype);
    patchWebGL(window.WebGL2RenderingContext && WebGL2RenderingContext.prototype);
})();
"""


def languages_from_accept_language(accept_language: str) -> list[str]:
    """Turn ``"de-DE,de;q=0.9"`` into ``["de-DE", "de"]``."""
    languages = [
        part.split(";")[0].strip()
        for part in accept_language.split(",")
    ]
    return [lang for lang in languages if lang] or ["en-US", "en"]


@dataclass
class FingerprintProfile:
    """Browser-environment overrides for a single page load."""

    user_agent: str
    accept_language: str
    webgl_vendor: str
    webgl_renderer: str
    viewport_width: int = VIEWPORT_WIDTH
    viewport_height: int = VIEWPORT_HEIGHT
    languages: list[str] = field(default_factory=list)

    @property
    def locale(self) -> str:
        return self.languages[0] if self.languages else "en-US"

    @property
    def headers(self) -> dict[str, str]:
        return {**BASE_HEADERS, "Accept-Language": self.accept_language}

    def init_script(self) -> str:
        """JavaScript installed at document creation, before site code runs."""
        payload = json.dumps(
            {
                "languages": self.languages,
                "webglVendor": self.webgl_vendor,
                "webglRenderer": self.webgl_renderer,
            }
        )
        return _STEALTH_JS_TEMPLATE.replace("__PROFILE__", payload)


class FingerprintRandomizer:
    """Generates and applies fingerprint profiles.

    Each call to ``generate()`` produces a fresh profile: a random user agent
    and WebGL pair, with Accept-Language and navigator.languages chosen from
    the GEO.
    """

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def generate(self, geo: str | None = None) -> FingerprintProfile:
        accept_language = GEO_ACCEPT_LANGUAGES.get(
            (geo or "").upper(), DEFAULT_ACCEPT_LANGUAGE
        )
        vendor, renderer = self._rng.choice(WEBGL_PROFILES)

        return FingerprintProfile(
            user_agent=self._rng.choice(CURATED_USER_AGENTS),
            accept_language=accept_language,
            webgl_vendor=vendor,
            webgl_renderer=renderer,
            languages=languages_from_accept_language(accept_language),
        )

    async def apply(self, page: "Page", profile: FingerprintProfile) -> None:
        """Apply *profile* to a Playwright *page*.

        Installs the stealth init script (runs in every new document before
        the page's own scripts) and sets the GEO-specific request headers.
        User agent, viewport and locale are fixed on the browser context when
        the page is created.
        """
        await page.add_init_script(profile.init_script())
        await page.set_extra_http_headers(profile.headers)
