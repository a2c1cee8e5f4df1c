"""Pydantic Settings for the scraper service.

All environment variables use the SCRAPER_ prefix.
Example: SCRAPER_PORT=8001, SCRAPER_GEO_DELAY_SECONDS=5
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ScraperSettings(BaseSettings):
    """Scraper service configuration validated from environment variables."""

    # Service
    port: int = 8001
    log_level: str = "INFO"
    log_json: bool = True

    # Browser
    headless: bool = True

    # Navigation timing
    navigation_timeout_ms: int = Field(default=30000, ge=1000)
    selector_timeout_ms: int = Field(default=10000, ge=0)
    render_settle_ms: int = Field(default=2000, ge=0)
    auth_settle_ms: int = Field(default=500, ge=0)
    configure_settle_ms: int = Field(default=100, ge=0)

    # Orchestration
    geo_delay_seconds: float = Field(default=3.0, ge=0)
    max_geos_per_request: int = Field(default=50, ge=1)

    model_config = {"env_prefix": "SCRAPER_"}
