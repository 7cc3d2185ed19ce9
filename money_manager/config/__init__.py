"""Configuration package."""

from money_manager.config.settings import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
