"""Validators for scrape request inputs."""

from catalog_scraper.validators.url_validator import is_absolute_url, validate_target_url

__all__ = ["is_absolute_url", "validate_target_url"]
