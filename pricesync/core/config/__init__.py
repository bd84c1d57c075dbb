"""Configuration module."""

from pricesync.core.config.settings import DEFAULT_RATE_LIMIT, DEFAULT_TIMEOUT, SyncSettings, load_settings

__all__ = ["DEFAULT_RATE_LIMIT", "DEFAULT_TIMEOUT", "SyncSettings", "load_settings"]
