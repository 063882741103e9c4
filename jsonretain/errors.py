# -*- coding: utf-8 -*-
"""Location: ./jsonretain/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Exceptions raised by jsonretain.

Errors coming from the JSON codec itself (``orjson.JSONDecodeError``,
``orjson.JSONEncodeError``, ``pydantic.ValidationError``) are never wrapped;
they reach the caller unchanged.

Examples:
    >>> err = ConfigError("Page", 'duplicate field name "name"')
    >>> str(err)
    'Page not retainable: duplicate field name "name"'
    >>> err.reason
    'duplicate field name "name"'
    >>> isinstance(ShapeError("bad"), TypeError)
    True
"""


class RetainError(Exception):
    """Base class for errors raised by jsonretain."""


class ConfigError(RetainError):
    """A record type is not safe to use with field retention.

    Raised by validation, typically at import time through
    :func:`jsonretain.validation.must_retainable`.

    Attributes:
        type_name: Name of the offending record type.
        reason: What is wrong with it.
    """

    def __init__(self, type_name: str, reason: str):
        """Build the error message from the type name and reason.

        Args:
            type_name: Name of the offending record type.
            reason: Human readable failure reason.
        """
        self.type_name = type_name
        self.reason = reason
        super().__init__(f"{type_name} not retainable: {reason}")


class ShapeError(RetainError, TypeError):
    """Decode or encode was given a value of the wrong kind."""


class DocumentTypeError(RetainError, ValueError):
    """A JSON document parsed fine but its top-level value is not an object."""
