"""Commercial proxy-provider integrations.

Each provider synthesizes a country-targeted username from the configured
base username and the GEO's ISO country code, and routes through the
provider's fixed gateway. The provider is chosen once at startup from
``PROXY_PROVIDER`` and injected into the resolver.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from catalog_scraper.config.proxy_settings import (
    BrightDataSettings,
    OxylabsSettings,
    ProxyProviderSettings,
    SmartproxySettings,
)
from catalog_scraper.proxy.types import ProxyEndpoint, ProxyScheme

logger = logging.getLogger(__name__)

# Internal GEO codes → ISO 3166-1 alpha-2 codes understood by providers
COUNTRY_CODE_MAP: dict[str, str] = {
    "RU": "RU",
    "DE": "DE",
    "BR": "BR",
    "EN": "GB",
    "US": "US",
    "FR": "FR",
    "ES": "ES",
    "IT": "IT",
    "PL": "PL",
    "NL": "NL",
    "CA": "CA",
    "AU": "AU",
}


def to_country_code(geo: str) -> str:
    """Translate a GEO code to its ISO country code (unknown codes pass through)."""
    geo = geo.strip().upper()
    return COUNTRY_CODE_MAP.get(geo, geo)


class ProxyProvider(ABC):
    """Base class for provider integrations.

    ``build`` returns ``None`` when the provider is not usable (missing
    credentials) so the resolver can fall back to the static pool.
    """

    name: str

    def __init__(
        self,
        user: str | None,
        password: str | None,
        *,
        host: str,
        port: int,
    ) -> None:
        self._user = user
        self._password = password
        self._host = host
        self._port = port

    @property
    def is_configured(self) -> bool:
        return bool(self._user and self._password)

    @abstractmethod
    def username_for(self, country_code: str) -> str:
        """Return the provider username targeting *country_code* (lowercase ISO)."""

    def build(self, geo: str) -> ProxyEndpoint | None:
        if not self.is_configured:
            return None

        username = self.username_for(to_country_code(geo).lower())
        endpoint = ProxyEndpoint(
            host=self._host,
            port=self._port,
            username=username,
            password=self._password,
            scheme=ProxyScheme.HTTP,
        )
        logger.info(
            "%s proxy for GEO %s: %s:%d (user=%s)",
            self.name,
            geo,
            endpoint.host,
            endpoint.port,
            endpoint.masked_username,
        )
        return endpoint


class BrightDataProvider(ProxyProvider):
    """Bright Data (ex-Luminati): ``brd-customer-<id>-zone-<zone>-country-<cc>``."""

    name = "brightdata"

    def __init__(
        self,
        user: str | None,
        password: str | None,
        *,
        zone: str = "datacenter",
        host: str = "brd.superproxy.io",
        port: int = 33335,
    ) -> None:
        super().__init__(user, password, host=host, port=port)
        self._zone = zone or "datacenter"

    def username_for(self, country_code: str) -> str:
        user = self._user or ""
        if "brd-customer" in user:
            if "-zone-" in user:
                return f"{user}-country-{country_code}"
            customer_id = user.replace("brd-customer-", "")
            return f"brd-customer-{customer_id}-zone-{self._zone}-country-{country_code}"
        # Legacy Luminati accounts
        return f"{user}-country-{country_code}"


class OxylabsProvider(ProxyProvider):
    """Oxylabs residential: ``customer-<user>-country-<cc>``."""

    name = "oxylabs"

    def __init__(
        self,
        user: str | None,
        password: str | None,
        *,
        host: str = "pr.oxylabs.io",
        port: int = 7777,
    ) -> None:
        super().__init__(user, password, host=host, port=port)

    def username_for(self, country_code: str) -> str:
        return f"customer-{self._user}-country-{country_code}"


class SmartproxyProvider(ProxyProvider):
    """Smartproxy: ``<user>-country-<cc>``."""

    name = "smartproxy"

    def __init__(
        self,
        user: str | None,
        password: str | None,
        *,
        host: str = "gate.smartproxy.com",
        port: int = 10000,
    ) -> None:
        super().__init__(user, password, host=host, port=port)

    def username_for(self, country_code: str) -> str:
        return f"{self._user}-country-{country_code}"


def build_provider(name: str | None = None) -> ProxyProvider | None:
    """Construct the provider selected by *name* (or ``PROXY_PROVIDER``).

    Provider credentials are read from the environment through the
    provider's settings class. Returns ``None`` when no provider is
    selected or the name is unknown.
    """
    if name is None:
        name = ProxyProviderSettings().provider
    if not name:
        return None

    name = name.strip().lower()

    if name == "brightdata":
        bd = BrightDataSettings()
        return BrightDataProvider(
            bd.user, bd.password, zone=bd.zone, host=bd.host, port=bd.port
        )
    if name == "oxylabs":
        ox = OxylabsSettings()
        return OxylabsProvider(ox.user, ox.password, host=ox.host, port=ox.port)
    if name == "smartproxy":
        sp = SmartproxySettings()
        return SmartproxyProvider(sp.user, sp.password, host=sp.host, port=sp.port)

    logger.warning("Unknown proxy provider %r, provider integration disabled", name)
    return None
