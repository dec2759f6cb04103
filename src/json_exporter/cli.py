"""
Command line entry point for the JSON exporter.

Usage:
    json-exporter --es.uri http://localhost:9200 --query-path /_cluster/health

Every flag falls back to the matching JSON_EXPORTER_* environment variable.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

import pydantic
import structlog
from prometheus_client import CollectorRegistry

from json_exporter import __version__
from json_exporter.clients.base import BaseHTTPClient, build_ssl_context
from json_exporter.collector.generic_query import GenericQueryCollector
from json_exporter.config.settings import Settings, validate_settings
from json_exporter.core.errors import ConfigurationError, main_with_error_handling
from json_exporter.logging import configure_logging
from json_exporter.server import serve

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-exporter",
        description="Expose values from a JSON HTTP endpoint as Prometheus metrics",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--web.listen-address", dest="listen_address", help="Address to listen on for metrics")
    parser.add_argument("--es.uri", dest="uri", help="HTTP origin of the JSON endpoint")
    parser.add_argument(
        "--query-path",
        dest="query_paths",
        action="append",
        help="Request path to poll; repeat for several paths",
    )
    parser.add_argument("--namespace", dest="namespace", help="Metric name prefix")
    parser.add_argument("--es.timeout", dest="timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--es.ca", dest="ca_file", help="PEM CA bundle used to verify the endpoint")
    parser.add_argument("--es.client-cert", dest="client_cert", help="PEM client certificate")
    parser.add_argument("--es.client-private-key", dest="client_key", help="PEM client private key")
    parser.add_argument(
        "--es.ssl-skip-verify",
        dest="insecure_skip_verify",
        action="store_true",
        default=None,
        help="Skip TLS certificate verification",
    )
    parser.add_argument("--max-depth", dest="max_depth", type=int, help="Maximum JSON nesting to flatten")
    parser.add_argument(
        "--prune-stale",
        dest="prune_stale",
        action="store_true",
        default=None,
        help="Drop gauges missing from the latest successful scrape",
    )
    parser.add_argument("--log.level", dest="log_level", help="Log level (DEBUG, INFO, WARNING, ...)")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Environment settings overridden by any flag given on the command line."""
    try:
        settings = Settings()
    except pydantic.ValidationError as exc:
        raise ConfigurationError("Invalid environment configuration", {"error": str(exc)}) from exc

    overrides: dict[str, Any] = {k: v for k, v in vars(args).items() if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)
    return validate_settings(settings)


def build_client(settings: Settings) -> BaseHTTPClient:
    verify = build_ssl_context(
        ca_file=settings.ca_file,
        client_cert=settings.client_cert,
        client_key=settings.client_key,
        insecure_skip_verify=settings.insecure_skip_verify,
    )
    return BaseHTTPClient(settings.uri, timeout=settings.timeout, verify=verify)


def build_registry(settings: Settings, client: BaseHTTPClient) -> CollectorRegistry:
    """Register one collector per query path in a fresh registry."""
    registry = CollectorRegistry()
    for path in settings.query_paths:
        collector = GenericQueryCollector(
            client,
            path,
            namespace=settings.namespace,
            max_depth=settings.max_depth,
            prune_stale=settings.prune_stale,
        )
        registry.register(collector)
        logger.info(
            "collector_registered",
            path=path,
            subsystem=collector.subsystem,
            cluster=collector.cluster_name,
        )
    return registry


@main_with_error_handling()
def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args)
    configure_logging(settings.log_level)

    with build_client(settings) as client:
        registry = build_registry(settings, client)
        serve(registry, settings.listen_address)
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
