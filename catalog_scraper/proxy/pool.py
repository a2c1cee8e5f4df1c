"""Static per-GEO proxy pool loaded from ``PROXY_<GEO>`` environment variables.

Each variable holds one or more comma-separated entries in the form
``[scheme://]host:port[:username:password]``. Entries missing a host or a
numeric port are skipped.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from catalog_scraper.proxy.types import ProxyEndpoint, ProxyScheme

logger = logging.getLogger(__name__)

_ENV_PREFIX = "PROXY_"

# Keys under the PROXY_ prefix that are not GEO pools
_RESERVED_KEYS = frozenset({"PROXY_PROVIDER"})


def parse_proxy_entry(raw: str) -> ProxyEndpoint | None:
    """Parse a single ``[scheme://]host:port[:user:pass]`` entry."""
    entry = raw.strip()
    if not entry:
        return None

    scheme = ProxyScheme.HTTP
    if "://" in entry:
        scheme_str, entry = entry.split("://", 1)
        try:
            scheme = ProxyScheme(scheme_str.lower())
        except ValueError:
            return None

    parts = entry.split(":")
    host = parts[0].strip() if parts else ""
    port_str = parts[1].strip() if len(parts) > 1 else ""
    if not host or not port_str.isdigit():
        return None

    username = parts[2] if len(parts) > 2 and parts[2] else None
    # Passwords may legitimately contain ':'
    password = ":".join(parts[3:]) if len(parts) > 3 else None

    return ProxyEndpoint(
        host=host,
        port=int(port_str),
        username=username,
        password=password or None,
        scheme=scheme,
    )


def parse_proxy_string(value: str) -> list[ProxyEndpoint]:
    """Parse a comma-separated list of proxy entries, dropping malformed ones."""
    proxies: list[ProxyEndpoint] = []
    for part in value.split(","):
        endpoint = parse_proxy_entry(part)
        if endpoint is not None:
            proxies.append(endpoint)
    return proxies


def load_geo_proxy_pool(
    environ: Mapping[str, str] | None = None,
) -> dict[str, list[ProxyEndpoint]]:
    """Build the GEO → proxies mapping from ``PROXY_<GEO>`` variables.

    Parameters
    ----------
    environ:
        Mapping to read from. Defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    pool: dict[str, list[ProxyEndpoint]] = {}

    for key, value in env.items():
        upper_key = key.upper()
        if not upper_key.startswith(_ENV_PREFIX) or upper_key in _RESERVED_KEYS:
            continue
        geo = upper_key[len(_ENV_PREFIX):]
        if not geo:
            continue
        proxies = parse_proxy_string(value)
        if proxies:
            pool[geo] = proxies

    logger.info(
        "Static proxy pool loaded: %d GEOs, %d endpoints",
        len(pool),
        sum(len(p) for p in pool.values()),
    )
    return pool
