"""
Metric and subsystem name synthesis.

Turns request paths and JSON key paths into identifiers that are valid
Prometheus name segments (``[a-zA-Z0-9_]``).
"""

from __future__ import annotations

import re

_LEADING_SEGMENT = re.compile(r"^/?_?([^/_]+)")
_INNER_SEPARATOR = re.compile(r"/_?([^/])")
_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9_]")
_LEADING_UNDERSCORE = re.compile(r"^_(.+)")


def sanitize(name: str) -> str:
    """Replace every character Prometheus rejects in a name with ``_``."""
    return _INVALID_CHARS.sub("_", name)


def derive_subsystem(path: str) -> str:
    """
    Derive the subsystem segment from a request path.

    ``/_cluster/health`` becomes ``cluster_health`` and ``/_nodes/_local/stats``
    becomes ``nodes_local_stats``. Case is preserved; the result is idempotent.
    """
    subsystem = _LEADING_SEGMENT.sub(r"\1", path, count=1)
    subsystem = _INNER_SEPARATOR.sub(r"_\1", subsystem)
    return sanitize(subsystem.rstrip("/"))


def join_path(prefix: str, segment: str) -> str:
    """Append a key or index to a flattened path.

    A single leading underscore produced by the join is dropped, so ``_shards``
    under a parent ``""`` or a ``_``-prefixed key never yields ``__`` runs at the
    front of the name.
    """
    if not prefix:
        return segment
    return _LEADING_UNDERSCORE.sub(r"\1", f"{prefix}_{segment}")


def metric_name(path: str) -> str:
    """Normalize a flattened path into the metric name stored in the registry."""
    return sanitize(_LEADING_UNDERSCORE.sub(r"\1", path).lower())


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join non-empty name parts with ``_`` like client_golang's BuildFQName."""
    return "_".join(part for part in (namespace, subsystem, name) if part)
