# -*- coding: utf-8 -*-
"""Location: ./tests/unit/jsonretain/test_codec.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for jsonretain.codec.
"""

# Standard
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Optional

# Third-Party
import orjson
from pydantic import ValidationError
import pytest

# First-Party
from jsonretain import codec
from jsonretain.config import get_settings
from jsonretain.errors import DocumentTypeError


@dataclass
class Point:
    x: int = 0
    y: int = 0


@dataclass
class Cached:
    key: str = ""
    _cache: Optional[str] = None


class TestParseObject:
    """parse_object."""

    def test_preserves_document_order(self):
        """Keys come back in document order."""
        assert list(codec.parse_object(b'{"z":1,"a":2,"m":3}')) == ["z", "a", "m"]

    def test_memoryview_input(self):
        """Any bytes-like document is accepted."""
        assert codec.parse_object(memoryview(b'{"a":1}')) == {"a": 1}

    def test_malformed(self):
        """orjson errors pass through."""
        with pytest.raises(orjson.JSONDecodeError):
            codec.parse_object("{")

    def test_not_an_object(self):
        """DocumentTypeError is also a ValueError."""
        with pytest.raises(ValueError) as exc:
            codec.parse_object("[1, 2]")
        assert isinstance(exc.value, DocumentTypeError)
        assert str(exc.value) == "cannot decode JSON array into object"


class TestSplitObject:
    """split_object."""

    def test_raw_values_in_document_order(self):
        """Members come back as compacted JSON text, in document order."""
        members = codec.split_object(b'{ "z" : 1 ,\n "a": [ 1, {"b" : null} ], "m":"x" }')
        assert list(members) == ["z", "a", "m"]
        assert members == {"z": b"1", "a": b'[1,{"b":null}]', "m": b'"x"'}

    def test_numbers_keep_their_digits(self):
        """Wide integers and float spellings are not reinterpreted."""
        members = codec.split_object(b'{"big":123456789012345678901234567890,"f":1.50,"e":1E+2}')
        assert members == {"big": b"123456789012345678901234567890", "f": b"1.50", "e": b"1E+2"}

    def test_strings_are_untouched(self):
        """Whitespace and escapes inside strings survive, including structural characters."""
        document = '{"s":"a , b } c","q":"say \\"hi\\"","u":"\\u00e9 é"}'
        members = codec.split_object(document)
        assert members["s"] == b'"a , b } c"'
        assert members["q"] == b'"say \\"hi\\""'
        assert members["u"] == '"\\u00e9 é"'.encode()

    def test_escaped_keys_are_decoded(self):
        """Keys are unescaped like any JSON string."""
        assert codec.split_object(b'{"na\\u006de":1}') == {"name": b"1"}

    @pytest.mark.parametrize("document", ["{}", " { } ", b"{}", bytearray(b"{}"), memoryview(b"{}")])
    def test_empty_object(self, document):
        """Empty objects in any input form have no members."""
        assert codec.split_object(document) == {}

    def test_last_duplicate_wins(self):
        """Repeated keys keep the last value."""
        assert codec.split_object(b'{"a":1,"a":2}') == {"a": b"2"}

    def test_errors_match_parse_object(self):
        """Malformed and non-object documents fail like parse_object."""
        with pytest.raises(orjson.JSONDecodeError):
            codec.split_object(b'{"a":1')
        with pytest.raises(DocumentTypeError, match="cannot decode JSON null into object"):
            codec.split_object(b"null")


class TestDecodeValue:
    """decode_value."""

    @pytest.mark.parametrize(
        "raw,annotation,expected",
        [
            (b'"s"', str, "s"),
            (b"1", int, 1),
            (b"1", float, 1.0),
            (b"null", Optional[int], None),
            (b"[1,2]", List[int], [1, 2]),
            (b"[1,2]", tuple, (1, 2)),
            (b'{"a":"b"}', Dict[str, str], {"a": "b"}),
            (b'{"x":1,"y":2}', Point, Point(1, 2)),
            (b"123456789012345678901234567890", int, 123456789012345678901234567890),
        ],
    )
    def test_decodes(self, raw, annotation, expected):
        """Raw values decode into their declared type."""
        assert codec.decode_value(raw, annotation) == expected

    @pytest.mark.parametrize("raw,annotation", [(b'"1"', int), (b"1", str), (b"[1]", Dict[str, int]), (b"null", int), (b"1.5", int)])
    def test_strict_mismatch(self, raw, annotation):
        """No coercion happens in strict mode."""
        with pytest.raises(ValidationError):
            codec.decode_value(raw, annotation)

    def test_lax_mode(self, monkeypatch):
        """Disabling strict types allows pydantic's lax coercion."""
        monkeypatch.setenv("JSONRETAIN_STRICT_TYPES", "false")
        get_settings.cache_clear()
        assert codec.decode_value(b'"1"', int) == 1

    def test_whole_documents(self):
        """Whole documents decode in any input form."""
        assert codec.decode_value('{"x": 3}', Point) == Point(3, 0)
        assert codec.decode_value(memoryview(b"[1]"), List[int]) == [1]


class TestEncodeValue:
    """encode_value and encode_object."""

    def test_sorted_by_default(self):
        """Keys are sorted, recursively."""
        assert codec.encode_object({"b": {"d": 1, "c": 2}, "a": 0}) == b'{"a":0,"b":{"c":2,"d":1}}'

    def test_plain_dataclass_by_attribute_name(self):
        """Nested dataclasses encode public attributes by name."""
        assert codec.encode_value(Point(1, 2)) == b'{"x":1,"y":2}'
        assert codec.encode_object({"p": Point(3, 4)}) == b'{"p":{"x":3,"y":4}}'
        assert codec.encode_value(Cached("k", "hidden")) == b'{"key":"k"}'

    def test_sets_become_arrays(self):
        """Sets encode as JSON arrays."""
        assert codec.encode_value(frozenset({1})) == b"[1]"

    def test_encode_hook_embedded(self):
        """Objects with encode_json are embedded verbatim."""

        class Hooked:
            def encode_json(self):
                return b'{"raw":true}'

        assert codec.encode_object({"h": Hooked()}) == b'{"h":{"raw":true}}'

    def test_unsupported(self):
        """Values without a JSON form raise orjson's error."""
        with pytest.raises(orjson.JSONEncodeError):
            codec.encode_value({"c": complex(1, 2)})

    def test_class_is_not_serializable(self):
        """Classes are never treated as records."""
        with pytest.raises(orjson.JSONEncodeError):
            codec.encode_value(Point)

    def test_mapping_input(self):
        """Non-dict mappings are accepted."""
        assert codec.encode_object(MappingProxyType({"a": 1})) == b'{"a":1}'


class TestQuote:
    """quote."""

    @pytest.mark.parametrize("text,expected", [("name", '"name"'), ("", '""'), ('a"b', '"a\\"b"'), ("-", '"-"')])
    def test_quote(self, text, expected):
        """Strings are quoted the JSON way."""
        assert codec.quote(text) == expected
