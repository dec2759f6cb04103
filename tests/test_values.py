"""Tests for JSON value classification and embedded document decoding."""

import pytest

from json_exporter.collector.values import (
    ValueKind,
    classify,
    decode_embedded,
    looks_like_embedded_json,
)


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "value,kind",
        [
            (1, ValueKind.NUMBER),
            (1.5, ValueKind.NUMBER),
            (True, ValueKind.BOOLEAN),
            (False, ValueKind.BOOLEAN),
            ("green", ValueKind.STRING),
            ({"a": 1}, ValueKind.OBJECT),
            ([1, 2], ValueKind.ARRAY),
            (None, ValueKind.NULL),
            (object(), ValueKind.UNKNOWN),
        ],
    )
    def test_kinds(self, value, kind):
        assert classify(value) is kind

    def test_bool_is_not_number(self):
        """bool subclasses int but must classify as BOOLEAN."""
        assert classify(True) is not ValueKind.NUMBER


class TestDecodeEmbedded:
    """Tests for decode_embedded."""

    def test_object_string(self):
        assert decode_embedded('{"b": 5}') == {"b": 5}

    def test_leading_whitespace_allowed(self):
        assert decode_embedded('  {"b": 5}') == {"b": 5}

    def test_plain_string_ignored(self):
        assert decode_embedded("green") is None

    def test_too_short(self):
        """Strings of length two or less are never decoded."""
        assert looks_like_embedded_json("{}") is False
        assert decode_embedded("{}") is None

    def test_invalid_json_returns_none(self):
        assert decode_embedded("{not json", "a") is None

    def test_array_string_not_decoded(self):
        assert decode_embedded("[1, 2, 3]") is None
