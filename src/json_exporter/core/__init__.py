"""Core modules for the JSON exporter - centralized definitions and utilities."""

from json_exporter.core.errors import (
    ConfigurationError,
    EndpointError,
    ExitCode,
    ExporterError,
    FlattenDepthError,
    ParseError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ConfigurationError",
    "EndpointError",
    "ExitCode",
    "ExporterError",
    "FlattenDepthError",
    "ParseError",
    "format_error_message",
    "main_with_error_handling",
]
