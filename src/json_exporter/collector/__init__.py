"""Translation of JSON documents into Prometheus gauges."""

from json_exporter.collector.flatten import flatten
from json_exporter.collector.generic_query import GenericQueryCollector, ScrapeOutcome
from json_exporter.collector.naming import derive_subsystem, metric_name
from json_exporter.collector.registry import MetricEntry, MetricRegistry
from json_exporter.collector.values import ValueKind, classify

__all__ = [
    "GenericQueryCollector",
    "MetricEntry",
    "MetricRegistry",
    "ScrapeOutcome",
    "ValueKind",
    "classify",
    "derive_subsystem",
    "flatten",
    "metric_name",
]
