"""GEO → proxy resolution.

Resolution order, first success wins:

1. the configured provider integration (if any),
2. the static per-GEO pool, choosing uniformly at random,
3. no proxy (direct connection).

Selection carries no state between calls; randomness comes from an
injectable ``random.Random`` so tests can seed it.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping

from catalog_scraper.proxy.providers import ProxyProvider
from catalog_scraper.proxy.types import ProxyEndpoint

logger = logging.getLogger(__name__)


class ProxyResolver:
    """Resolves zero or one proxy endpoint for a GEO."""

    def __init__(
        self,
        *,
        provider: ProxyProvider | None = None,
        pool: Mapping[str, list[ProxyEndpoint]] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._provider = provider
        self._pool: dict[str, tuple[ProxyEndpoint, ...]] = {
            geo.upper(): tuple(proxies) for geo, proxies in (pool or {}).items()
        }
        self._rng = rng or random.Random()

    def resolve(self, geo: str) -> ProxyEndpoint | None:
        geo = geo.strip().upper()

        if self._provider is not None:
            endpoint = self._provider.build(geo)
            if endpoint is not None:
                return endpoint

        candidates = [p for p in self._pool.get(geo, ()) if p.host and p.port]
        if not candidates:
            logger.info("No proxy configured for GEO %s, using direct connection", geo)
            return None

        return self._rng.choice(candidates)

    def get_stats(self) -> dict:
        """Return resolver configuration for the health endpoint."""
        return {
            "provider": self._provider.name if self._provider else None,
            "provider_configured": bool(
                self._provider and self._provider.is_configured
            ),
            "pool": {geo: len(proxies) for geo, proxies in sorted(self._pool.items())},
        }
