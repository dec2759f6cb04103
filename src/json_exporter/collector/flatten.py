"""
Recursive flattening of a JSON document into named numeric samples.

Every number or boolean leaf becomes one ``(name, value)`` pair whose name is
the ``_``-joined key/index path from the root, normalized by
``naming.metric_name``. Strings only contribute when they hold an embedded JSON
object, which is walked under the string's own path.

Mapping keys are visited in sorted order. When two paths normalize to the same
name the pair emitted last (lexicographically greatest path) wins once the
pairs are upserted in order.
"""

from __future__ import annotations

from typing import Any

import structlog

from json_exporter.collector.naming import join_path, metric_name
from json_exporter.collector.values import ValueKind, classify, decode_embedded
from json_exporter.core.errors import FlattenDepthError, ParseError

logger = structlog.get_logger()

DEFAULT_MAX_DEPTH = 64

Sample = tuple[str, float]


def flatten(value: Any, prefix: str = "", *, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Sample]:
    """
    Flatten ``value`` into ``(metric_name, float)`` pairs.

    Args:
        value: A decoded JSON value, normally the root object
        prefix: Path of ``value`` within the document ("" for the root)
        max_depth: Maximum container nesting, embedded documents included

    Raises:
        FlattenDepthError: When nesting exceeds ``max_depth``
        ParseError: When an integer leaf does not fit in a float
    """
    samples: list[Sample] = []
    _walk(value, prefix, 0, max_depth, samples)
    return samples


def _walk(value: Any, path: str, depth: int, max_depth: int, out: list[Sample]) -> None:
    kind = classify(value)

    if kind is ValueKind.NUMBER:
        try:
            number = float(value)
        except OverflowError as exc:
            raise ParseError("Numeric value out of float range", {"path": path}) from exc
        out.append((metric_name(path), number))
    elif kind is ValueKind.BOOLEAN:
        out.append((metric_name(path), 1.0 if value else 0.0))
    elif kind is ValueKind.STRING:
        embedded = decode_embedded(value, path)
        if embedded is not None:
            _walk(embedded, path, depth, max_depth, out)
    elif kind is ValueKind.OBJECT:
        _check_depth(path, depth, max_depth)
        for key in sorted(value):
            _walk(value[key], join_path(path, key), depth + 1, max_depth, out)
    elif kind is ValueKind.ARRAY:
        _check_depth(path, depth, max_depth)
        for index, item in enumerate(value):
            _walk(item, join_path(path, str(index)), depth + 1, max_depth, out)
    elif kind is ValueKind.NULL:
        pass
    else:
        logger.warning("unrecognized_value_kind", path=path, type=type(value).__name__)


def _check_depth(path: str, depth: int, max_depth: int) -> None:
    if depth >= max_depth:
        raise FlattenDepthError(
            "JSON document nests deeper than the configured limit",
            {"path": path, "max_depth": max_depth},
        )
