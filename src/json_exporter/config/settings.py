"""
Application settings using Pydantic.

Provides environment-based configuration loading with JSON_EXPORTER_ prefix.
Command line flags are layered on top by ``json_exporter.cli``.
"""

from __future__ import annotations

from functools import lru_cache

import httpx
from pydantic_settings import BaseSettings

from json_exporter.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Application settings."""

    # JSON endpoint
    uri: str = "http://localhost:9200"
    query_paths: list[str] = ["/_cluster/health"]
    namespace: str = "elasticsearch"

    # HTTP client settings
    timeout: float = 5.0
    ca_file: str | None = None
    client_cert: str | None = None
    client_key: str | None = None
    insecure_skip_verify: bool = False

    # Flattening
    max_depth: int = 64
    prune_stale: bool = False

    # Listener
    listen_address: str = ":9108"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "JSON_EXPORTER_"


def validate_settings(settings: Settings) -> Settings:
    """
    Check settings that pydantic cannot express as plain types.

    Raises:
        ConfigurationError: On the first invalid value
    """
    try:
        url = httpx.URL(settings.uri)
    except httpx.InvalidURL as exc:
        raise ConfigurationError("Invalid endpoint URI", {"uri": settings.uri}) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError("Endpoint URI must be an http(s) URL", {"uri": settings.uri})

    if not settings.query_paths:
        raise ConfigurationError("At least one query path is required")
    for path in settings.query_paths:
        if not path.startswith("/"):
            raise ConfigurationError("Query path must start with '/'", {"path": path})
    if len(set(settings.query_paths)) != len(settings.query_paths):
        raise ConfigurationError("Query paths must be unique", {"paths": settings.query_paths})

    if not settings.namespace:
        raise ConfigurationError("Metric namespace must not be empty")
    if settings.timeout <= 0:
        raise ConfigurationError("Timeout must be positive", {"timeout": settings.timeout})
    if settings.max_depth < 1:
        raise ConfigurationError("max_depth must be at least 1", {"max_depth": settings.max_depth})
    if bool(settings.client_cert) != bool(settings.client_key):
        raise ConfigurationError("client_cert and client_key must be set together")

    parse_listen_address(settings.listen_address)
    return settings


def parse_listen_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (host optional, as in ``:9108``) into its parts."""
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ConfigurationError("Listen address must be [host]:port", {"address": address})
    return host.strip("[]") or "0.0.0.0", int(port)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
