"""Configuration package."""

from community_maintenance.config.settings import (
    BUNDLED_DATA_DIR,
    AppSettings,
    ReferenceSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "BUNDLED_DATA_DIR",
    "AppSettings",
    "ReferenceSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
