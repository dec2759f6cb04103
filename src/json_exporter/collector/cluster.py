from __future__ import annotations

import json

import structlog

from json_exporter.clients.base import BaseHTTPClient
from json_exporter.core.errors import EndpointError, ParseError

logger = structlog.get_logger()


def fetch_cluster_name(client: BaseHTTPClient, path: str = "/") -> str:
    """
    Read ``cluster_name`` from the endpoint root.

    Raises:
        EndpointError: If the request fails or returns a non-2xx status
        ParseError: If the body is not a JSON object
    """
    body = client.get(path)
    try:
        document = json.loads(body)
    except ValueError as exc:
        raise ParseError("Failed to parse cluster name response", {"error": str(exc)}) from exc
    if not isinstance(document, dict):
        raise ParseError("Cluster name response is not a JSON object")

    name = document.get("cluster_name")
    return name if isinstance(name, str) else ""


def discover_cluster_name(client: BaseHTTPClient) -> str:
    """Like ``fetch_cluster_name`` but logs failures and returns ""."""
    try:
        return fetch_cluster_name(client)
    except (EndpointError, ParseError) as exc:
        logger.warning(
            "cluster_name_unavailable",
            reason=exc.message,
            **exc.details,
        )
        return ""
