"""Root test configuration."""

import logging

import pytest
import structlog

from json_exporter.clients.base import BaseHTTPClient

BASE_URL = "http://es.example.com:9200"


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def client():
    with BaseHTTPClient(BASE_URL, timeout=1.0) as http_client:
        yield http_client
