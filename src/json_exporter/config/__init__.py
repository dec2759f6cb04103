"""Exporter configuration: environment-backed settings and their validation."""

from json_exporter.config.settings import (
    Settings,
    get_settings,
    parse_listen_address,
    validate_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "parse_listen_address",
    "validate_settings",
]
