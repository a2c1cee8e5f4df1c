"""Proxy data models for the proxy resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ProxyScheme(str, Enum):
    """Supported proxy protocols."""

    HTTP = "http"
    HTTPS = "https"
    SOCKS4 = "socks4"
    SOCKS5 = "socks5"


_SOCKS_SCHEMES = frozenset({ProxyScheme.SOCKS4, ProxyScheme.SOCKS5})


@dataclass(frozen=True)
class ProxyEndpoint:
    """A single outbound egress point, resolved fresh per GEO per run."""

    host: str
    port: int
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    scheme: ProxyScheme = ProxyScheme.HTTP

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    @property
    def server_address(self) -> str:
        """Value for Chromium's ``--proxy-server`` flag.

        Only ``host:port`` is passed for HTTP(S) proxies; SOCKS proxies need
        the scheme. Credentials are never part of this value.
        """
        if self.scheme in _SOCKS_SCHEMES:
            return f"{self.scheme.value}://{self.host}:{self.port}"
        return f"{self.host}:{self.port}"

    @property
    def masked_username(self) -> str | None:
        """Username truncated for log output."""
        if not self.username:
            return None
        if len(self.username) <= 50:
            return self.username
        return self.username[:50] + "..."
