"""
Prometheus collector that republishes a JSON endpoint as gauges.

Each ``collect()`` call performs exactly one fetch of the configured path,
flattens the document into the collector's ``MetricRegistry`` and yields the
fixed health metrics plus every gauge in the registry. The registry lock is
held from fetch to snapshot, so concurrent collects run one after another and
each sees a complete metric set.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Iterator

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from json_exporter.clients.base import BaseHTTPClient
from json_exporter.collector.cluster import discover_cluster_name
from json_exporter.collector.flatten import DEFAULT_MAX_DEPTH, Sample, flatten
from json_exporter.collector.naming import build_fq_name, derive_subsystem
from json_exporter.collector.registry import MetricRegistry
from json_exporter.core.errors import EndpointError, ParseError
from json_exporter.logging import bind_context

FIXED_METRICS = ("up", "total_scrapes", "json_parse_failures")
# sample names prometheus_client derives from the fixed counters
RESERVED_NAMES = frozenset(
    FIXED_METRICS
    + tuple(f"{name}_{suffix}" for name in FIXED_METRICS[1:] for suffix in ("total", "created"))
)


class ScrapeOutcome(str, Enum):
    """Terminal state of one scrape cycle."""

    SUCCESS = "success"
    TRANSPORT_FAILURE = "transport_failure"
    PARSE_FAILURE = "parse_failure"


class GenericQueryCollector:
    """Custom collector for one JSON endpoint path."""

    def __init__(
        self,
        client: BaseHTTPClient,
        path: str,
        *,
        namespace: str,
        cluster_name: str | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        prune_stale: bool = False,
    ) -> None:
        self._client = client
        self.path = path
        self.namespace = namespace
        self.subsystem = derive_subsystem(path)
        self.max_depth = max_depth
        self.prune_stale = prune_stale
        self.url = client.url_for(path)
        self._log = bind_context(subsystem=self.subsystem, url=self.url)

        if cluster_name is None:
            cluster_name = discover_cluster_name(client)
        self.cluster_name = cluster_name
        self.registry = MetricRegistry(namespace, self.subsystem, cluster_name)

        self._up = 0.0
        self._total_scrapes = 0
        self._json_parse_failures = 0

    @property
    def up(self) -> float:
        return self._up

    @property
    def total_scrapes(self) -> int:
        return self._total_scrapes

    @property
    def json_parse_failures(self) -> int:
        return self._json_parse_failures

    def _name(self, suffix: str) -> str:
        return build_fq_name(self.namespace, self.subsystem, suffix)

    def _fixed_metrics(self) -> list[Metric]:
        up = GaugeMetricFamily(
            self._name("up"),
            "Was the last scrape of the JSON endpoint successful.",
            value=self._up,
        )
        total = CounterMetricFamily(
            self._name("total_scrapes"),
            "Current total JSON endpoint scrapes.",
            value=self._total_scrapes,
        )
        failures = CounterMetricFamily(
            self._name("json_parse_failures"),
            "Number of errors while parsing JSON.",
            value=self._json_parse_failures,
        )
        return [up, total, failures]

    def describe(self) -> Iterator[Metric]:
        with self.registry.lock:
            families = self._fixed_metrics() + self.registry.describe()
        yield from families

    def collect(self) -> Iterator[Metric]:
        with self.registry.lock:
            self.scrape()
            families = self._fixed_metrics() + self.registry.snapshot()
        yield from families

    def scrape(self) -> ScrapeOutcome:
        """Fetch, decode and flatten the document into the registry once."""
        with self.registry.lock:
            self._total_scrapes += 1

            try:
                body = self._client.get(self.path)
            except EndpointError as exc:
                self._up = 0.0
                self._log.warning("scrape_transport_error", reason=exc.message, **_without_url(exc.details))
                return ScrapeOutcome.TRANSPORT_FAILURE

            try:
                samples = self._parse(body)
            except ParseError as exc:
                self._up = 0.0
                self._json_parse_failures += 1
                self._log.warning("scrape_parse_error", reason=exc.message, **_without_url(exc.details))
                return ScrapeOutcome.PARSE_FAILURE

            self._up = 1.0
            samples = self._drop_reserved(samples)
            if self.prune_stale:
                dropped = self.registry.prune(name for name, _ in samples)
                if dropped:
                    self._log.info("stale_metrics_pruned", count=len(dropped))
            self.registry.upsert_all(samples)
            return ScrapeOutcome.SUCCESS

    def _drop_reserved(self, samples: list[Sample]) -> list[Sample]:
        kept = []
        for name, value in samples:
            if name in RESERVED_NAMES:
                self._log.warning("reserved_metric_name_skipped", name=name)
            else:
                kept.append((name, value))
        return kept

    def _parse(self, body: bytes) -> list[Sample]:
        try:
            document: Any = json.loads(body)
        except (ValueError, RecursionError) as exc:
            raise ParseError("Failed to decode JSON response body", {"error": str(exc)}) from exc
        if not isinstance(document, dict):
            raise ParseError("JSON response body is not an object", {"type": type(document).__name__})
        try:
            return flatten(document, max_depth=self.max_depth)
        except RecursionError as exc:
            raise ParseError("JSON document too deeply nested", {"max_depth": self.max_depth}) from exc


def _without_url(details: dict[str, Any]) -> dict[str, Any]:
    # url is already bound on the collector's logger
    return {k: v for k, v in details.items() if k != "url"}
