# -*- coding: utf-8 -*-
"""Location: ./jsonretain/descriptors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Field descriptors for record dataclasses.

A record field declares its JSON key through a ``"json"`` entry in the
dataclass field metadata. The value is a tag with up to two comma separated
components, ``name`` and ``modifier``:

- ``""`` or no tag: the key is the attribute name.
- ``"title"``: the key is ``title``.
- ``",omitempty"``: attribute name, omitted from output when empty.
- ``"-"``: the field is never read from or written to a document.
- ``"-,"``: the key is literally ``-`` (only a bare ``-`` means ignore).

Attributes whose name starts with an underscore are private and are never
mapped to a document key.

Examples:
    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Page:
    ...     title: str = json_field("title", default="")
    ...     views: int = json_field("hits,omitempty", default=0)
    ...     cache: dict = json_field("-", default_factory=dict)
    ...     Owner: str = ""
    ...     _secret: str = ""
    >>> [(d.attr, d.name, d.omit_empty) for d in field_descriptors(Page)]
    [('title', 'title', False), ('views', 'hits', True), ('Owner', 'Owner', False)]
"""

# Standard
import dataclasses
from functools import lru_cache
import logging
from types import NoneType, UnionType
from typing import Annotated, Any, get_args, get_origin, get_type_hints, Tuple, Union

# First-Party
from jsonretain.errors import ShapeError

logger = logging.getLogger(__name__)

JSON_TAG_KEY = "json"
IGNORE_TAG = "-"
OMIT_EMPTY = "omitempty"


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """How one declared field maps to a document key.

    Attributes:
        attr: Attribute name on the record.
        name: Canonical document key.
        tag: Raw tag components, name first.
        annotation: Resolved declared type.
    """

    attr: str
    name: str
    tag: Tuple[str, ...]
    annotation: Any

    @property
    def modifiers(self) -> Tuple[str, ...]:
        """Tag components after the name.

        Returns:
            Tuple[str, ...]: Possibly empty tuple of modifier tokens.
        """
        return self.tag[1:]

    @property
    def omit_empty(self) -> bool:
        """Whether empty values are left out of encoded output.

        Returns:
            bool: True when the modifier is ``omitempty``.

        Examples:
            >>> FieldDescriptor("a", "a", ("a", "omitempty"), str).omit_empty
            True
            >>> FieldDescriptor("a", "-", ("-", ""), str).omit_empty
            False
        """
        return len(self.tag) > 1 and self.tag[1] == OMIT_EMPTY

    @property
    def nullable(self) -> bool:
        """Whether a JSON ``null`` can be assigned to this field.

        Returns:
            bool: True when the declared type admits ``None``.

        Examples:
            >>> from typing import Optional
            >>> FieldDescriptor("a", "a", ("a",), Optional[str]).nullable
            True
            >>> FieldDescriptor("a", "a", ("a",), str).nullable
            False
        """
        return accepts_none(self.annotation)


def accepts_none(annotation: Any) -> bool:
    """Whether ``annotation`` admits ``None``.

    Args:
        annotation: Resolved field annotation.

    Returns:
        bool: True for ``Any``, ``None``, and unions (``Optional``) containing one of those.

    Examples:
        >>> from typing import List, Optional
        >>> [accepts_none(a) for a in (Any, type(None), Optional[int], int | None, Annotated[Optional[int], "x"])]
        [True, True, True, True, True]
        >>> [accepts_none(a) for a in (int, List[int], Union[int, str])]
        [False, False, False]
    """
    if annotation is Any or annotation is None or annotation is NoneType:
        return True
    origin = get_origin(annotation)
    if origin is Annotated:
        return accepts_none(get_args(annotation)[0])
    if origin is Union or origin is UnionType:
        return any(accepts_none(arg) for arg in get_args(annotation))
    return False


def json_field(tag: str = "", **kwargs: Any) -> Any:
    """Declare a dataclass field with a JSON tag.

    Thin wrapper over :func:`dataclasses.field` that stores ``tag`` under the
    ``"json"`` metadata key, keeping any other metadata passed in.

    Args:
        tag: ``name[,modifier]`` tag.
        **kwargs: Forwarded to :func:`dataclasses.field`.

    Returns:
        Any: The dataclass field.

    Examples:
        >>> f = json_field("id,omitempty", default=0, metadata={"doc": "key"})
        >>> dict(f.metadata)
        {'doc': 'key', 'json': 'id,omitempty'}
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[JSON_TAG_KEY] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


def type_name(obj: Any) -> str:
    """Name of ``obj``'s type, or of ``obj`` itself when it is a class.

    Args:
        obj: Instance or class.

    Returns:
        str: The class ``__name__``.

    Examples:
        >>> type_name("x"), type_name(int)
        ('str', 'int')
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return cls.__name__


def record_type(obj: Any) -> type:
    """Return the dataclass type behind ``obj``.

    Args:
        obj: Dataclass type or instance.

    Returns:
        type: The dataclass type.

    Raises:
        ShapeError: If ``obj`` is not a dataclass type or instance.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if not dataclasses.is_dataclass(cls):
        raise ShapeError(f"{cls.__name__} is not a dataclass")
    return cls


@lru_cache(maxsize=None)
def _descriptors_for(cls: type) -> Tuple[FieldDescriptor, ...]:
    hints = get_type_hints(cls, include_extras=True)
    descriptors = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        tag_value = f.metadata.get(JSON_TAG_KEY, "")
        if tag_value == IGNORE_TAG:
            continue
        tag = tuple(tag_value.split(","))
        descriptors.append(FieldDescriptor(attr=f.name, name=tag[0] or f.name, tag=tag, annotation=hints.get(f.name, f.type)))
    logger.debug(f"Built {len(descriptors)} field descriptor(s) for {cls.__qualname__}")
    return tuple(descriptors)


def field_descriptors(obj: Any) -> Tuple[FieldDescriptor, ...]:
    """Describe the JSON-mapped fields of a record, in declaration order.

    The result is computed once per type and cached.

    Args:
        obj: Dataclass type or instance.

    Returns:
        Tuple[FieldDescriptor, ...]: One descriptor per mapped field.

    Raises:
        ShapeError: If ``obj`` is not a dataclass type or instance.

    Examples:
        >>> field_descriptors(3)
        Traceback (most recent call last):
        ...
        jsonretain.errors.ShapeError: int is not a dataclass
    """
    return _descriptors_for(record_type(obj))


def clear_descriptor_cache() -> None:
    """Drop all cached descriptors."""
    _descriptors_for.cache_clear()
