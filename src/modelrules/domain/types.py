"""Declared-type classification for model properties.

A *simple* property holds a flat value (string, number, temporal value,
flag, identifier or enum member). Column-derived rules further split
simple types into string-like, numeric and date-like groups.
"""

from __future__ import annotations

import types
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, Union, get_args, get_origin
from uuid import UUID

SIMPLE_TYPES: tuple[type, ...] = (str, int, float, bool, Decimal, date, time, UUID, bytes)


def unwrap_optional(annotation: Any) -> Any:
    """Return ``X`` for ``X | None`` / ``Optional[X]``, else the annotation itself."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def is_simple_type(annotation: Any) -> bool:
    """Whether *annotation* describes a flat, non-composite value."""
    value_type = unwrap_optional(annotation)
    if get_origin(value_type) is not None or not isinstance(value_type, type):
        return False
    return issubclass(value_type, SIMPLE_TYPES) or issubclass(value_type, Enum)


def is_string_type(value_type: type) -> bool:
    return issubclass(value_type, str)


def is_date_type(value_type: type) -> bool:
    # datetime is a date subclass
    return issubclass(value_type, (date, time))


def is_numeric_type(value_type: type) -> bool:
    """Numbers, excluding ``bool`` (which subclasses ``int``)."""
    if issubclass(value_type, bool):
        return False
    return issubclass(value_type, (int, float, Decimal))


def is_integral_type(value_type: type) -> bool:
    return is_numeric_type(value_type) and issubclass(value_type, int)
