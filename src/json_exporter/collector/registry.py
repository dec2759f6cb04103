"""
Per-endpoint store of flattened gauges between scrapes.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Iterable

from prometheus_client.core import GaugeMetricFamily

from json_exporter.collector.naming import build_fq_name

CLUSTER_LABEL = "cluster"


@dataclass
class MetricEntry:
    """One flattened leaf as last observed."""

    name: str
    subsystem: str
    cluster: str
    value: float

    @property
    def help_text(self) -> str:
        return self.name


class MetricRegistry:
    """
    Mutable mapping from metric name to its latest value.

    Entries are created on first sight and overwritten on every later scrape
    that observes the same name. Nothing is evicted unless ``prune`` is called.

    ``lock`` is re-entrant: the owning collector holds it for a whole
    scrape-and-snapshot cycle while the individual methods take it again.
    """

    def __init__(self, namespace: str, subsystem: str, cluster_name: str = "") -> None:
        self.namespace = namespace
        self.subsystem = subsystem
        self.cluster_name = cluster_name
        self.lock = threading.RLock()
        self._entries: dict[str, MetricEntry] = {}

    def __len__(self) -> int:
        with self.lock:
            return len(self._entries)

    def __contains__(self, name: object) -> bool:
        with self.lock:
            return name in self._entries

    def upsert(self, name: str, value: float) -> None:
        with self.lock:
            entry = self._entries.get(name)
            if entry is None:
                self._entries[name] = MetricEntry(name, self.subsystem, self.cluster_name, float(value))
            else:
                entry.value = float(value)

    def upsert_all(self, samples: Iterable[tuple[str, float]]) -> None:
        with self.lock:
            for name, value in samples:
                self.upsert(name, value)

    def prune(self, keep: Iterable[str]) -> list[str]:
        """Drop every entry whose name is not in ``keep``; return the dropped names."""
        keep = set(keep)
        with self.lock:
            stale = [name for name in self._entries if name not in keep]
            for name in stale:
                del self._entries[name]
            return stale

    def get(self, name: str) -> float | None:
        with self.lock:
            entry = self._entries.get(name)
            return entry.value if entry else None

    def names(self) -> list[str]:
        with self.lock:
            return sorted(self._entries)

    def snapshot(self) -> list[GaugeMetricFamily]:
        """Gauge families with current values, one per entry, in name order."""
        with self.lock:
            families = []
            for name in sorted(self._entries):
                entry = self._entries[name]
                family = self._family(entry)
                family.add_metric([entry.cluster], entry.value)
                families.append(family)
            return families

    def describe(self) -> list[GaugeMetricFamily]:
        """Gauge families without samples, for schema discovery."""
        with self.lock:
            return [self._family(self._entries[name]) for name in sorted(self._entries)]

    def _family(self, entry: MetricEntry) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            build_fq_name(self.namespace, entry.subsystem, entry.name),
            entry.help_text,
            labels=[CLUSTER_LABEL],
        )
