"""Pydantic Settings for proxy-provider integrations.

Provider variables are unprefixed, e.g. ``PROXY_PROVIDER=brightdata``,
``BRIGHTDATA_USER``, ``BRIGHTDATA_PASS``. Static per-GEO pools
(``PROXY_<GEO>``) are read separately by :mod:`catalog_scraper.proxy.pool`.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProxyProviderSettings(BaseSettings):
    """Selects the commercial provider integration, if any."""

    provider: str | None = Field(default=None, validation_alias="PROXY_PROVIDER")

    model_config = SettingsConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("provider")
    @classmethod
    def _normalize(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().lower()
        return value or None


class BrightDataSettings(BaseSettings):
    user: str | None = None
    password: str | None = Field(default=None, validation_alias="BRIGHTDATA_PASS")
    host: str = "brd.superproxy.io"
    port: int = 33335
    zone: str = "datacenter"

    model_config = SettingsConfigDict(
        env_prefix="BRIGHTDATA_", populate_by_name=True, extra="ignore"
    )


class OxylabsSettings(BaseSettings):
    user: str | None = None
    password: str | None = Field(default=None, validation_alias="OXYLABS_PASS")
    host: str = "pr.oxylabs.io"
    port: int = 7777

    model_config = SettingsConfigDict(
        env_prefix="OXYLABS_", populate_by_name=True, extra="ignore"
    )


class SmartproxySettings(BaseSettings):
    user: str | None = None
    password: str | None = Field(default=None, validation_alias="SMARTPROXY_PASS")
    host: str = "gate.smartproxy.com"
    port: int = 10000

    model_config = SettingsConfigDict(
        env_prefix="SMARTPROXY_", populate_by_name=True, extra="ignore"
    )
