"""Column-derived rules — turn one persisted property into rules.

Only properties backed by exactly one column are considered, and only
string-like, numeric (not bool) and date-like declared types:

- string: ``LengthRule(length)`` when the column length is positive.
- date: ``MarkRule(required)`` when the column is NOT NULL.
- numeric: ``MarkRule(required)`` when NOT NULL, then a ``DecimalRule``
  from the effective precision/scale when ``precision > scale >= 0``.

Integral columns cap their precision by bit width and force scale to 0.
"""

from __future__ import annotations

from modelrules.domain.rules import DecimalRule, LengthRule, Mark, MarkRule, ValidationRule
from modelrules.domain.types import (
    is_date_type,
    is_integral_type,
    is_numeric_type,
    is_string_type,
)
from modelrules.infrastructure.schema import PersistedProperty

# Decimal digits needed for the widest value of each signed integer width
INTEGER_PRECISION_CEILINGS: dict[int, int] = {64: 20, 32: 11, 16: 5, 8: 3}


def effective_precision(prop: PersistedProperty) -> tuple[int, int]:
    """Return ``(precision, scale)`` after applying the integer width cap."""
    if prop.value_type is None or not is_integral_type(prop.value_type):
        return prop.precision, prop.scale
    precision = prop.precision
    ceiling = INTEGER_PRECISION_CEILINGS.get(prop.integer_width or 0)
    if ceiling is not None:
        precision = min(precision, ceiling)
    return precision, 0


def derive_column_rules(prop: PersistedProperty) -> list[ValidationRule]:
    """Return the rules implied by *prop*'s column mapping."""
    if prop.column_count != 1 or prop.value_type is None:
        return []
    value_type = prop.value_type

    if is_string_type(value_type):
        if prop.length > 0:
            return [LengthRule(max_length=prop.length)]
        return []

    if is_date_type(value_type):
        return [] if prop.nullable else [MarkRule(Mark.REQUIRED)]

    if not is_numeric_type(value_type):
        return []

    rules: list[ValidationRule] = []
    if not prop.nullable:
        rules.append(MarkRule(Mark.REQUIRED))
    precision, scale = effective_precision(prop)
    if scale >= 0 and precision > scale:
        rules.append(DecimalRule(precision=precision, scale=scale))
    return rules
