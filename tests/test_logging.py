"""Tests for logging configuration."""

import logging

import pytest
import structlog
import structlog.testing

from json_exporter.logging import bind_context, configure_logging


@pytest.fixture(autouse=True)
def restore_structlog():
    """Put back the quiet test configuration from conftest."""
    saved = structlog.get_config()
    saved["processors"] = list(saved["processors"])
    yield
    structlog.configure(**saved)


def test_configure_logging_accepts_level_name(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging("debug")
    assert structlog.is_configured()
    assert calls[0]["level"] == logging.DEBUG


def test_configure_logging_unknown_level_falls_back(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging("nonsense")
    assert calls[0]["level"] == logging.INFO


def test_bind_context_carries_fields():
    with structlog.testing.capture_logs() as logs:
        bind_context(subsystem="cluster_health").warning("scrape_transport_error")
    assert logs == [
        {"subsystem": "cluster_health", "event": "scrape_transport_error", "log_level": "warning"}
    ]
