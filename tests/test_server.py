"""Tests for the metrics listener."""

import threading
from unittest.mock import MagicMock, patch

import pytest
from prometheus_client import CollectorRegistry

from json_exporter.core.errors import ConfigurationError
from json_exporter.server import serve


def test_serve_starts_and_stops_listener():
    registry = CollectorRegistry()
    server, thread = MagicMock(), MagicMock()
    stop = threading.Event()
    stop.set()

    with patch("json_exporter.server.start_http_server", return_value=(server, thread)) as start:
        serve(registry, "127.0.0.1:9108", stop)

    start.assert_called_once_with(9108, addr="127.0.0.1", registry=registry)
    server.shutdown.assert_called_once()
    server.server_close.assert_called_once()
    thread.join.assert_called_once()


def test_serve_rejects_bad_address():
    with patch("json_exporter.server.start_http_server") as start:
        with pytest.raises(ConfigurationError):
            serve(CollectorRegistry(), "no-port")
    start.assert_not_called()
