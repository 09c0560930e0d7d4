"""Configuration module."""

from .settings import (
    AppSettings,
    get_settings,
    clear_settings_cache,
)

__all__ = [
    "AppSettings",
    "get_settings",
    "clear_settings_cache",
]
