"""Republish scalar values from a JSON HTTP endpoint as Prometheus gauges."""

__version__ = "0.1.0"
