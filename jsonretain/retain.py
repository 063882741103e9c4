# -*- coding: utf-8 -*-
"""Location: ./jsonretain/retain.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Retention of unknown JSON fields across decode -> mutate -> encode.

A record keeps a :class:`Retain` in a private attribute and routes its JSON
entry points through it::

    @dataclass
    class Page:
        _retain: Retain = field(default_factory=Retain, init=False, repr=False)

        title: str = json_field("title", default="")
        slug: str = json_field("slug", default="")

        def decode_json(self, data):
            self._retain.from_json(data, self)

        def encode_json(self):
            return self._retain.to_json(self)

:class:`jsonretain.record.Record` provides exactly this wiring as a base
class.

Decode is not safe to run concurrently on the same record; callers sharing a
record must serialise decodes themselves. Encode never mutates the retained
state and may run concurrently.

Examples:
    >>> from dataclasses import dataclass, field
    >>> from jsonretain.descriptors import json_field
    >>> @dataclass
    ... class Page:
    ...     _retain: Retain = field(default_factory=Retain, init=False, repr=False)
    ...     title: str = json_field("title", default="")
    ...     slug: str = json_field("slug", default="")
    >>> page = Page()
    >>> page._retain.from_json('{"title":"Contact Us","slug":"contact","icon":"email"}', page)
    >>> page
    Page(title='Contact Us', slug='contact')
    >>> page.slug = "contact-us"
    >>> page._retain.to_json(page)
    b'{"icon":"email","slug":"contact-us","title":"Contact Us"}'
"""

# Standard
import dataclasses
import logging
from numbers import Number
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

# Third-Party
import orjson

# First-Party
from jsonretain import codec
from jsonretain.codec import Document
from jsonretain.descriptors import field_descriptors, type_name
from jsonretain.errors import ShapeError

logger = logging.getLogger(__name__)

_SIZED_TYPES = (str, bytes, bytearray, list, tuple, dict, set, frozenset)


def is_empty(value: Any) -> bool:
    """Whether ``value`` counts as empty for ``omitempty`` fields.

    Empty means ``None``, a zero number or ``False``, a zero-length string,
    bytes or container, or a dataclass whose fields are all empty. A fixed
    size tuple is empty only when it has no elements at all.

    Args:
        value: Field value.

    Returns:
        bool: True when the value should be left out.

    Examples:
        >>> [is_empty(v) for v in (None, 0, 0.0, False, "", [], {}, (), set())]
        [True, True, True, True, True, True, True, True, True]
        >>> [is_empty(v) for v in (1, True, "x", [0], {"": ""}, (0,))]
        [False, False, False, False, False, False]
    """
    if value is None:
        return True
    if isinstance(value, _SIZED_TYPES):
        return len(value) == 0
    if isinstance(value, Number):
        return value == 0
    if isinstance(value, Retain):
        return not value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(is_empty(getattr(value, f.name)) for f in dataclasses.fields(value))
    return False


def _describe(obj: Any) -> str:
    if isinstance(obj, type):
        return f"class {obj.__name__}"
    if dataclasses.is_dataclass(obj) and obj.__dataclass_params__.frozen:
        return f"frozen {type_name(obj)}"
    return type_name(obj)


class Retain:
    """Unknown JSON fields of a single record instance.

    Holds the members of the last decoded document that did not map to a
    declared field. Values are kept as raw JSON text, so they are written
    back digit for digit. An instance with nothing retained compares equal
    to a fresh one.

    Examples:
        >>> Retain() == Retain()
        True
        >>> len(Retain()), bool(Retain())
        (0, False)
    """

    __slots__ = ("_raw",)

    def __init__(self) -> None:
        """Start with nothing retained."""
        self._raw: Optional[Dict[str, bytes]] = None

    @property
    def unknown_fields(self) -> Mapping[str, Any]:
        """Read-only snapshot of the retained fields, parsed.

        Returns:
            Mapping[str, Any]: Freshly parsed copy of the retained key/value pairs.
        """
        return MappingProxyType({key: orjson.loads(raw) for key, raw in (self._raw or {}).items()})

    @property
    def raw_fields(self) -> Mapping[str, bytes]:
        """Read-only view of the retained fields as JSON text.

        Returns:
            Mapping[str, bytes]: Retained key to compacted raw JSON value.
        """
        return MappingProxyType(dict(self._raw or {}))

    def __len__(self) -> int:
        return len(self._raw or ())

    def __bool__(self) -> bool:
        return bool(self._raw)

    def __contains__(self, key: object) -> bool:
        return key in (self._raw or ())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Retain):
            return NotImplemented
        return (self._raw or {}) == (other._raw or {})

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Retain(unknown={sorted(self._raw or ())!r})"

    def from_json(self, data: Document, obj: Any) -> None:
        """Decode ``data`` into ``obj``, retaining undeclared keys here.

        Every declared field whose key is present is decoded into its
        declared type and assigned on ``obj``. A ``null`` for a field whose
        type does not admit ``None`` consumes the key and leaves the field
        unchanged. Keys left over replace the previously retained fields; an
        empty leftover is stored as nothing retained.

        Decoding is not transactional: if a field fails to decode, fields
        assigned before it keep their new values, while the retained fields
        are left untouched.

        Args:
            data: JSON document whose top-level value is an object.
            obj: The mutable dataclass instance that owns this Retain.

        Raises:
            ShapeError: If ``obj`` is not a mutable dataclass instance.
            orjson.JSONDecodeError: If ``data`` is not valid JSON.
            DocumentTypeError: If ``data`` is not a JSON object.
            pydantic.ValidationError: If a field value does not fit its type.

        Examples:
            >>> Retain().from_json("{}", "text")
            Traceback (most recent call last):
            ...
            jsonretain.errors.ShapeError: from_json requires a mutable dataclass instance, got str
        """
        if isinstance(obj, type) or not dataclasses.is_dataclass(obj) or obj.__dataclass_params__.frozen:
            raise ShapeError(f"from_json requires a mutable dataclass instance, got {_describe(obj)}")

        members = codec.split_object(data)
        for descriptor in field_descriptors(obj):
            if descriptor.name not in members:
                continue
            raw = members.pop(descriptor.name)
            if raw == codec.NULL and not descriptor.nullable:
                continue
            setattr(obj, descriptor.attr, codec.decode_value(raw, descriptor.annotation))

        self._raw = members or None
        logger.debug(f"Decoded {type_name(obj)}, retained {len(members)} unknown field(s)")

    def to_json(self, obj: Any) -> bytes:
        """Encode ``obj`` merged with the retained fields.

        Retained fields are copied first and declared fields are laid over
        them, so a declared field always wins over a retained key of the
        same name. Fields tagged ``omitempty`` are skipped when empty.

        Args:
            obj: Dataclass instance that owns this Retain. Frozen instances
                are accepted.

        Returns:
            bytes: The JSON document.

        Raises:
            ShapeError: If ``obj`` is not a dataclass instance.
            orjson.JSONEncodeError: If a field value cannot be serialized.

        Examples:
            >>> Retain().to_json(3)
            Traceback (most recent call last):
            ...
            jsonretain.errors.ShapeError: to_json requires a dataclass instance, got int
        """
        if isinstance(obj, type) or not dataclasses.is_dataclass(obj):
            raise ShapeError(f"to_json requires a dataclass instance, got {_describe(obj)}")

        merged: Dict[str, Any] = {key: orjson.Fragment(raw) for key, raw in (self._raw or {}).items()}
        retained = len(merged)
        for descriptor in field_descriptors(obj):
            value = getattr(obj, descriptor.attr)
            if descriptor.omit_empty and is_empty(value):
                continue
            merged[descriptor.name] = value

        logger.debug(f"Encoding {type_name(obj)} with {retained} retained field(s)")
        return codec.encode_object(merged)
