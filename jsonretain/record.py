# -*- coding: utf-8 -*-
"""Location: ./jsonretain/record.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Record entry points and the document-level ``loads`` / ``dumps`` helpers.

A retaining record is any object exposing ``decode_json(data)`` and
``encode_json()``; this is checked structurally through the
:class:`RetainingRecord` protocol, not through inheritance. :class:`Record`
is a convenience dataclass base that wires both entry points to a private
:class:`~jsonretain.retain.Retain`.

Examples:
    >>> from dataclasses import dataclass
    >>> from jsonretain.descriptors import json_field
    >>> @dataclass
    ... class Page(Record):
    ...     title: str = json_field("title", default="")
    ...     slug: str = json_field("slug", default="")
    >>> page = loads('{"title":"Contact Us","slug":"contact","icon":"email"}', Page)
    >>> page.slug = "contact-us"
    >>> dumps(page)
    b'{"icon":"email","slug":"contact-us","title":"Contact Us"}'
    >>> dict(page.unknown_fields)
    {'icon': 'email'}
    >>> isinstance(page, RetainingRecord)
    True
"""

# Standard
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable, Type, TypeVar

# Third-Party
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema, to_json

# First-Party
from jsonretain import codec
from jsonretain.codec import Document
from jsonretain.errors import DocumentTypeError
from jsonretain.retain import Retain

R = TypeVar("R")


@runtime_checkable
class RetainingRecord(Protocol):
    """Anything the document machinery can decode into and encode from."""

    def decode_json(self, data: Document) -> None:
        """Replace this record's content with the decoded document."""

    def encode_json(self) -> bytes:
        """Return this record as a JSON document."""


@dataclass
class Record:
    """Dataclass base that keeps unknown JSON fields.

    Subclasses declare their fields with :func:`jsonretain.descriptors.json_field`
    (or plain dataclass fields, keyed by attribute name) and must be
    constructible without arguments for :func:`loads`.
    """

    _retain: Retain = field(default_factory=Retain, init=False, repr=False)

    def decode_json(self, data: Document) -> None:
        """Decode ``data`` into this record.

        Args:
            data: JSON object document.
        """
        self._retain.from_json(data, self)

    def encode_json(self) -> bytes:
        """Encode this record, including the retained unknown fields.

        Returns:
            bytes: The JSON document.
        """
        return self._retain.to_json(self)

    @property
    def unknown_fields(self) -> Mapping[str, Any]:
        """Read-only snapshot of the fields retained by the last decode.

        Returns:
            Mapping[str, Any]: Unknown key to parsed JSON value.
        """
        return self._retain.unknown_fields

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        """Decode records nested in other annotations through their own entry point.

        Lets fields such as ``Optional[Author]`` or ``List[Author]`` hold
        retaining records. pydantic hands over the parsed object, which is
        re-serialized and passed to ``decode_json`` of a fresh instance.

        Args:
            source_type: The annotated record class.
            handler: pydantic schema handler (unused).

        Returns:
            core_schema.CoreSchema: A plain validator schema.
        """
        return core_schema.no_info_plain_validator_function(cls._from_parsed)

    @classmethod
    def _from_parsed(cls, value: Any) -> "Record":
        if isinstance(value, cls):
            return value
        if not isinstance(value, dict):
            raise DocumentTypeError(f"cannot decode JSON {codec.json_kind(value)} into object")
        record = cls()
        record.decode_json(to_json(value))
        return record


def loads(data: Document, cls: Type[R]) -> R:
    """Decode a JSON document into a new instance of ``cls``.

    Retaining record classes are instantiated with no arguments and their
    ``decode_json`` entry point is invoked; other types are decoded by the
    codec.

    Args:
        data: JSON document.
        cls: Target type.

    Returns:
        R: The decoded value.
    """
    return codec.decode_value(data, cls)


def dumps(obj: Any) -> bytes:
    """Encode ``obj`` as a JSON document.

    Retaining records are encoded through their ``encode_json`` entry point;
    anything else is encoded by the codec.

    Args:
        obj: Value to encode.

    Returns:
        bytes: The JSON document.

    Examples:
        >>> dumps({"b": [1], "a": None})
        b'{"a":null,"b":[1]}'
    """
    if isinstance(obj, RetainingRecord) and not isinstance(obj, type):
        return obj.encode_json()
    return codec.encode_value(obj)
