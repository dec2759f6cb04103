"""
Classification of decoded JSON values.

``json.loads`` hands back plain Python objects; ``classify`` maps each one onto
exactly one ``ValueKind`` so the walker can dispatch exhaustively.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

import structlog

logger = structlog.get_logger()


class ValueKind(str, Enum):
    """Kinds a decoded JSON value can take."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"
    UNKNOWN = "unknown"


def classify(value: Any) -> ValueKind:
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    if value is None:
        return ValueKind.NULL
    return ValueKind.UNKNOWN


def looks_like_embedded_json(text: str) -> bool:
    """Return True for strings that may hold a double-encoded JSON object."""
    return len(text) > 2 and text.lstrip().startswith("{")


def decode_embedded(text: str, path: str = "") -> dict[str, Any] | None:
    """
    Decode a string field that carries a JSON object.

    Returns None for plain strings and for strings that fail to decode into an
    object; failures are logged, never raised.
    """
    if not looks_like_embedded_json(text):
        return None
    try:
        decoded = json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.warning("embedded_json_decode_failed", path=path, error=str(exc))
        return None
    if not isinstance(decoded, dict):
        logger.warning("embedded_json_not_object", path=path, kind=classify(decoded).value)
        return None
    return decoded
