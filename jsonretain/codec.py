# -*- coding: utf-8 -*-
"""Location: ./jsonretain/codec.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

JSON codec used by the retention machinery.

The retention core needs three capabilities from a codec: split a document
into an ordered ``str`` -> raw JSON value mapping, decode one raw value into
a typed target, and serialize a mapping back to bytes. This module provides
them on top of ``orjson`` (parsing and printing) and pydantic
``TypeAdapter`` (typed decoding). Errors raised by either library are
propagated unchanged.

Raw values are the member's JSON text with insignificant whitespace removed.
They are never parsed into Python objects, so numbers keep every digit and
strings keep their escapes when they are written back through
``orjson.Fragment``.

Examples:
    >>> split_object(b'{"n": 123456789012345678901234567890, "o": {"a" : [1, 2]}}')
    {'n': b'123456789012345678901234567890', 'o': b'{"a":[1,2]}'}
    >>> encode_object({"b": 1, "a": orjson.Fragment(b"1.50")})
    b'{"a":1.50,"b":1}'
    >>> decode_value(b"[1, 2]", List[int])
    [1, 2]
    >>> quote('say "hi"')
    '"say \\\\"hi\\\\""'
"""

# Standard
import dataclasses
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Tuple, Union

# Third-Party
import orjson
from pydantic import TypeAdapter

# First-Party
from jsonretain.config import settings
from jsonretain.errors import DocumentTypeError

Document = Union[bytes, bytearray, memoryview, str]

NULL = b"null"

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_COMMA = ord(",")
_CLOSE_BRACE = ord("}")
_OPENERS = b"{["
_CLOSERS = b"}]"
_WHITESPACE = b" \t\n\r"


def json_kind(value: Any) -> str:
    """Name the JSON kind of an already parsed value.

    Args:
        value: Parsed JSON value.

    Returns:
        str: One of ``object``, ``array``, ``string``, ``number``, ``bool``, ``null``.

    Examples:
        >>> [json_kind(v) for v in ({}, [], "", 1, 1.5, True, None)]
        ['object', 'array', 'string', 'number', 'number', 'bool', 'null']
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _as_bytes(data: Document) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def parse_object(data: Document) -> Dict[str, Any]:
    """Parse a JSON document whose top-level value must be an object.

    Args:
        data: JSON text as bytes-like or str.

    Returns:
        Dict[str, Any]: Key to parsed value mapping, in document order.

    Raises:
        DocumentTypeError: If the document is valid JSON but not an object.

    Examples:
        >>> parse_object('{}')
        {}
        >>> parse_object('[1]')
        Traceback (most recent call last):
        ...
        jsonretain.errors.DocumentTypeError: cannot decode JSON array into object
        >>> parse_object('{"a":')  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        orjson.JSONDecodeError: ...
    """
    if isinstance(data, memoryview):
        data = bytes(data)
    document = orjson.loads(data)
    if not isinstance(document, dict):
        raise DocumentTypeError(f"cannot decode JSON {json_kind(document)} into object")
    return document


def _skip_whitespace(text: bytes, pos: int) -> int:
    while text[pos] in _WHITESPACE:
        pos += 1
    return pos


def _string_end(text: bytes, pos: int) -> int:
    """Index just past the JSON string starting at ``text[pos]``."""
    pos += 1
    while True:
        ch = text[pos]
        if ch == _BACKSLASH:
            pos += 2
            continue
        pos += 1
        if ch == _QUOTE:
            return pos


def _scan_value(text: bytes, pos: int) -> Tuple[bytes, int]:
    """Copy one member value out of a validated document, compacted.

    Stops at the ``,`` or ``}`` that ends the member.

    Args:
        text: The whole document.
        pos: Index just past the member's ``:``.

    Returns:
        Tuple[bytes, int]: The value's JSON text and the index of its terminator.
    """
    out = bytearray()
    depth = 0
    while True:
        ch = text[pos]
        if ch == _QUOTE:
            end = _string_end(text, pos)
            out += text[pos:end]
            pos = end
            continue
        if ch in _CLOSERS:
            if depth == 0:
                break
            depth -= 1
        elif ch == _COMMA and depth == 0:
            break
        elif ch in _OPENERS:
            depth += 1
        if ch not in _WHITESPACE:
            out.append(ch)
        pos += 1
    return bytes(out), pos


def split_object(data: Document) -> Dict[str, bytes]:
    """Split a JSON object document into its members, keeping raw values.

    The document is validated with ``orjson`` first, so malformed input and
    non-object documents fail exactly as in :func:`parse_object`. When a key
    repeats, the last value wins.

    Args:
        data: JSON text as bytes-like or str.

    Returns:
        Dict[str, bytes]: Key to compacted raw JSON value, in document order.

    Raises:
        DocumentTypeError: If the document is valid JSON but not an object.

    Examples:
        >>> split_object('{ "s" : "a \\\\"b\\\\" c", "e": {} }')
        {'s': b'"a \\\\"b\\\\" c"', 'e': b'{}'}
        >>> split_object('"text"')
        Traceback (most recent call last):
        ...
        jsonretain.errors.DocumentTypeError: cannot decode JSON string into object
    """
    parse_object(data)
    text = _as_bytes(data)

    members: Dict[str, bytes] = {}
    pos = _skip_whitespace(text, _skip_whitespace(text, 0) + 1)
    while text[pos] != _CLOSE_BRACE:
        end = _string_end(text, pos)
        key = orjson.loads(text[pos:end])
        pos = _skip_whitespace(text, end)
        value, pos = _scan_value(text, pos + 1)
        members[key] = value
        if text[pos] == _COMMA:
            pos = _skip_whitespace(text, pos + 1)
    return members


@lru_cache(maxsize=None)
def _cached_type_adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def _type_adapter(annotation: Any) -> TypeAdapter:
    """Return a (cached when possible) TypeAdapter for ``annotation``.

    Args:
        annotation: A type or typing construct.

    Returns:
        TypeAdapter: Adapter validating values of that type.
    """
    try:
        return _cached_type_adapter(annotation)
    except TypeError:
        # unhashable annotation
        return TypeAdapter(annotation)


def _has_decode_hook(annotation: Any) -> bool:
    return isinstance(annotation, type) and callable(getattr(annotation, "decode_json", None))


def decode_value(data: Document, annotation: Any) -> Any:
    """Decode JSON text, a whole document or one raw member value, into ``annotation``.

    Record classes exposing a ``decode_json`` entry point are instantiated
    with no arguments and handed the text as is, so they apply their own
    decoding and keep their own unknown fields verbatim. Everything else goes
    through a pydantic ``TypeAdapter`` in JSON mode, strict unless
    ``JSONRETAIN_STRICT_TYPES`` is disabled.

    Args:
        data: JSON text as bytes-like or str.
        annotation: Target type.

    Returns:
        Any: The decoded value.

    Raises:
        pydantic.ValidationError: If the text does not fit ``annotation``.

    Examples:
        >>> decode_value(b'[1, 2]', tuple)
        (1, 2)
        >>> decode_value(b'123456789012345678901234567890', int)
        123456789012345678901234567890
        >>> decode_value('"1"', int)  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        pydantic_core._pydantic_core.ValidationError: 1 validation error for int
    """
    if _has_decode_hook(annotation):
        target = annotation()
        target.decode_json(data)
        return target
    if isinstance(data, memoryview):
        data = bytes(data)
    return _type_adapter(annotation).validate_json(data, strict=settings.strict_types)


def _default(obj: Any) -> Any:
    """``orjson`` fallback for values it does not serialize natively.

    Args:
        obj: Value orjson could not serialize on its own.

    Returns:
        Any: A serializable replacement.

    Raises:
        TypeError: If there is no JSON representation for ``obj``.
    """
    if not isinstance(obj, type):
        encode_hook = getattr(obj, "encode_json", None)
        if callable(encode_hook):
            return orjson.Fragment(encode_hook())
        if dataclasses.is_dataclass(obj):
            return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj) if not f.name.startswith("_")}
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def encode_value(value: Any) -> bytes:
    """Serialize any supported value to JSON bytes.

    Values orjson handles natively are encoded directly, ``orjson.Fragment``
    values are embedded verbatim. Records with an ``encode_json`` entry point
    are embedded the same way, other dataclasses are encoded by attribute
    name (private attributes excluded), and sets become arrays.

    Args:
        value: Value to serialize.

    Returns:
        bytes: The JSON document.

    Raises:
        orjson.JSONEncodeError: If a value cannot be serialized.

    Examples:
        >>> encode_value([1, "a", None])
        b'[1,"a",null]'
        >>> try:
        ...     encode_value({"bad": object()})
        ... except orjson.JSONEncodeError as exc:
        ...     print(type(exc).__name__)
        JSONEncodeError
    """
    return orjson.dumps(value, default=_default, option=settings.dump_options())


def encode_object(mapping: Mapping[str, Any]) -> bytes:
    """Serialize a ``str``-keyed mapping to a JSON object.

    Args:
        mapping: Keys and values to serialize.

    Returns:
        bytes: The JSON document.

    Examples:
        >>> encode_object({"s": {3}, "t": (1, 2)})
        b'{"s":[3],"t":[1,2]}'
    """
    if not isinstance(mapping, dict):
        mapping = dict(mapping)
    return encode_value(mapping)


def quote(text: str) -> str:
    """Quote ``text`` as a JSON string, for use in error messages.

    Args:
        text: String to quote.

    Returns:
        str: Double-quoted, escaped string.

    Examples:
        >>> quote("name")
        '"name"'
    """
    return orjson.dumps(text).decode()
