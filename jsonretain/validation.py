# -*- coding: utf-8 -*-
"""Location: ./jsonretain/validation.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Static checks that a record type can retain unknown fields safely.

A type is retainable when:
- it exposes the ``decode_json`` / ``encode_json`` entry points,
- it is a dataclass that is not frozen (decode assigns fields in place),
- no two declared fields map to the same JSON key,
- every tag modifier is one the retention code understands (``omitempty``).

:func:`validate_retainable` raises on the first problem found;
:func:`must_retainable` is the fail-fast variant meant to run at import
time, next to the type definition.

Examples:
    >>> from dataclasses import dataclass
    >>> from jsonretain.descriptors import json_field
    >>> from jsonretain.record import Record
    >>> @dataclass
    ... class Page(Record):
    ...     title: str = json_field("title", default="")
    ...     heading: str = json_field("title", default="")
    >>> is_retainable(Page)
    False
    >>> validate_retainable(Page)
    Traceback (most recent call last):
    ...
    jsonretain.errors.ConfigError: Page not retainable: duplicate field name "title"
"""

# Standard
import dataclasses
import logging
from typing import Any, TypeVar

# First-Party
from jsonretain.codec import quote
from jsonretain.descriptors import field_descriptors, OMIT_EMPTY, type_name
from jsonretain.errors import ConfigError
from jsonretain.record import RetainingRecord

logger = logging.getLogger(__name__)

SUPPORTED_MODIFIERS = frozenset({"", OMIT_EMPTY})

T = TypeVar("T")


def validate_retainable(obj: Any) -> None:
    """Check that ``obj``'s type can be used with field retention.

    Args:
        obj: Record type or instance.

    Raises:
        ConfigError: Describing the first problem found.
    """
    name = type_name(obj)
    cls = obj if isinstance(obj, type) else type(obj)

    if not isinstance(obj, RetainingRecord):
        raise ConfigError(name, "missing decode_json/encode_json hooks")
    if not dataclasses.is_dataclass(cls):
        raise ConfigError(name, "requires dataclass record")
    if cls.__dataclass_params__.frozen:
        raise ConfigError(name, "requires exclusive mutable handle")

    descriptors = field_descriptors(cls)

    seen = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise ConfigError(name, f"duplicate field name {quote(descriptor.name)}")
        seen.add(descriptor.name)

    for descriptor in descriptors:
        for token in descriptor.modifiers:
            if token not in SUPPORTED_MODIFIERS:
                raise ConfigError(name, f"field {quote(descriptor.name)} has unsupported tag {quote(token)}")

    logger.debug(f"{name} is retainable ({len(descriptors)} declared field(s))")


def is_retainable(obj: Any) -> bool:
    """Non-raising form of :func:`validate_retainable`.

    Args:
        obj: Record type or instance.

    Returns:
        bool: True when ``obj`` passes validation.
    """
    try:
        validate_retainable(obj)
    except ConfigError:
        return False
    return True


def must_retainable(obj: T) -> T:
    """Validate ``obj`` and fail fast when it is not retainable.

    Intended for import time, either as a class decorator or as a module
    level assertion::

        @must_retainable
        @dataclass
        class Page(Record):
            ...

        _ = must_retainable(Page)

    Args:
        obj: Record type or instance.

    Returns:
        T: ``obj`` unchanged.

    Raises:
        ConfigError: If ``obj`` is not retainable. The failure is logged at
            CRITICAL level before being raised.
    """
    try:
        validate_retainable(obj)
    except ConfigError as exc:
        logger.critical(f"Refusing misconfigured record type: {exc}")
        raise
    return obj
