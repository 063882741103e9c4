# -*- coding: utf-8 -*-
"""jsonretain: keep unknown JSON fields across decode and encode.

Decode a JSON object into a dataclass record, change the declared fields,
and encode it again without losing keys the record does not declare.

SPDX-License-Identifier: Apache-2.0
"""

__version__ = "0.1.0"

from jsonretain.descriptors import clear_descriptor_cache, field_descriptors, FieldDescriptor, json_field
from jsonretain.errors import ConfigError, DocumentTypeError, RetainError, ShapeError
from jsonretain.record import dumps, loads, Record, RetainingRecord
from jsonretain.retain import is_empty, Retain
from jsonretain.validation import is_retainable, must_retainable, validate_retainable

__all__ = [
    "ConfigError",
    "DocumentTypeError",
    "FieldDescriptor",
    "Record",
    "Retain",
    "RetainError",
    "RetainingRecord",
    "ShapeError",
    "clear_descriptor_cache",
    "dumps",
    "field_descriptors",
    "is_empty",
    "is_retainable",
    "json_field",
    "loads",
    "must_retainable",
    "validate_retainable",
]
