"""Configuration management for mailtmpl."""

from .settings import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    DEFAULT_SETTINGS,
    Settings,
    discover_settings_path,
    get_settings,
    load_settings,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_SETTINGS",
    "Settings",
    "discover_settings_path",
    "get_settings",
    "load_settings",
]
