"""Serve the Prometheus text exposition for a collector registry."""

from __future__ import annotations

import threading

import structlog
from prometheus_client import CollectorRegistry, start_http_server

from json_exporter.config.settings import parse_listen_address

logger = structlog.get_logger()


def serve(
    registry: CollectorRegistry,
    listen_address: str,
    stop_event: threading.Event | None = None,
) -> None:
    """
    Expose ``registry`` on ``listen_address`` and block until ``stop_event`` is set.

    Every HTTP request to the listener triggers one ``collect()`` on each
    registered collector.
    """
    host, port = parse_listen_address(listen_address)
    server, thread = start_http_server(port, addr=host, registry=registry)
    logger.info("listener_started", address=host, port=port)

    stop_event = stop_event or threading.Event()
    try:
        stop_event.wait()
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
        logger.info("listener_stopped", address=host, port=port)
