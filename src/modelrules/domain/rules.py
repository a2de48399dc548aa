"""Validation rule variants.

A rule describes one constraint kind for one property. Rules are plain
dataclasses so builders can update them in place while a configuration is
being derived; once the owning configuration is sealed they are treated as
read-only.

Rules are looked up by :attr:`ValidationRule.key`. Every variant is keyed by
its own class except :class:`MarkRule`, which is keyed by ``(MarkRule, mark)``
so that distinct marks (``required``, ``email``) can coexist on one property.
"""

from __future__ import annotations

import re
from collections.abc import Hashable
from dataclasses import asdict, dataclass, fields
from decimal import Decimal
from enum import StrEnum
from typing import Any, ClassVar, cast

RuleKey = Hashable
Bound = int | float | Decimal


class Mark(StrEnum):
    """Presence/shape marks carried by :class:`MarkRule`."""

    REQUIRED = "required"
    NOT_BLANK = "not_blank"
    EMAIL = "email"


@dataclass(eq=False)
class ValidationRule:
    """Base class for all rule variants.

    Equality compares the concrete class and field values. The hash only
    covers :attr:`key`, which never changes during an in-place update.
    """

    kind: ClassVar[str] = "rule"

    def __post_init__(self) -> None:
        self.validate()

    @property
    def key(self) -> RuleKey:
        return type(self)

    def validate(self) -> None:
        """Raise :class:`ValueError` if the rule's invariants do not hold."""

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **asdict(self)}

    def _values(self) -> tuple[Any, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._values() == cast(ValidationRule, other)._values()

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(eq=False)
class LengthRule(ValidationRule):
    """Character length bounds for string-like values."""

    kind: ClassVar[str] = "length"

    max_length: int
    min_length: int = 0

    def validate(self) -> None:
        if self.max_length <= 0:
            msg = f"max_length must be positive, got {self.max_length}"
            raise ValueError(msg)
        if not 0 <= self.min_length <= self.max_length:
            msg = f"min_length must be within [0, {self.max_length}], got {self.min_length}"
            raise ValueError(msg)


@dataclass(eq=False)
class DecimalRule(ValidationRule):
    """Total digits (*precision*) and fractional digits (*scale*) of a number."""

    kind: ClassVar[str] = "decimal"

    precision: int
    scale: int = 0

    def validate(self) -> None:
        if self.scale < 0 or self.precision <= self.scale:
            msg = f"expected precision > scale >= 0, got ({self.precision}, {self.scale})"
            raise ValueError(msg)


@dataclass(eq=False)
class RangeRule(ValidationRule):
    """Numeric lower and/or upper bound."""

    kind: ClassVar[str] = "range"

    minimum: Bound | None = None
    maximum: Bound | None = None
    min_inclusive: bool = True
    max_inclusive: bool = True

    def validate(self) -> None:
        if self.minimum is not None and self.maximum is not None:
            if self.minimum > self.maximum:
                msg = f"minimum {self.minimum} exceeds maximum {self.maximum}"
                raise ValueError(msg)


@dataclass(eq=False)
class RegexRule(ValidationRule):
    """Full-match regular expression for string-like values."""

    kind: ClassVar[str] = "regex"

    pattern: str

    def validate(self) -> None:
        try:
            re.compile(self.pattern)
        except re.error as exc:
            msg = f"invalid pattern {self.pattern!r}: {exc}"
            raise ValueError(msg) from exc


@dataclass(eq=False)
class MarkRule(ValidationRule):
    """A data-less marker such as ``required``."""

    kind: ClassVar[str] = "mark"

    mark: Mark

    @property
    def key(self) -> RuleKey:
        return (MarkRule, self.mark)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "mark": str(self.mark)}
