"""Proxy-routed, multi-GEO casino game catalog scraper."""
