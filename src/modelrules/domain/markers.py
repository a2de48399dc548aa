"""Constraint markers, the redirection marker, and accessor tagging.

A *constraint marker* is a declarative object attached to a property that
some registered builder turns into a rule. Marker *types* qualify when they
subclass :class:`annotated_types.BaseMetadata` (``MaxLen``, ``Ge``, ... as
produced by ``Annotated[...]`` or ``pydantic.Field``) or carry the
:func:`constraint_marker` tag.

Markers reach the engine two ways:

- Field level: ``Annotated[str, NotBlank()]`` on a pydantic model, or
  ``mapped_column(..., info={"constraints": [NotBlank()]})`` on an entity.
- Accessor level: :func:`constrain` on the property's validator method
  (``@field_validator`` / ``@validates``). Apply it innermost, directly on
  the function.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import annotated_types

CONSTRAINT_MARKER_ATTR = "__constraint_marker__"
ACCESSOR_MARKERS_ATTR = "__constraint_markers__"

T = TypeVar("T")


def constraint_marker(cls: type[T]) -> type[T]:
    """Tag *cls* as a constraint marker type."""
    setattr(cls, CONSTRAINT_MARKER_ATTR, True)
    return cls


def is_constraint_marker(marker_type: object) -> bool:
    """Whether *marker_type* is a class tagged as a constraint marker."""
    if not isinstance(marker_type, type):
        return False
    if issubclass(marker_type, annotated_types.BaseMetadata):
        return True
    return getattr(marker_type, CONSTRAINT_MARKER_ATTR, False) is True


def constrain(*markers: object) -> Callable[[T], T]:
    """Attach constraint *markers* to a property's accessor method.

    Usage::

        @field_validator("age")
        @classmethod
        @constrain(Le(150))
        def _check_age(cls, value: int) -> int:
            return value
    """

    def decorator(func: T) -> T:
        target = getattr(func, "__func__", func)
        existing = getattr(target, ACCESSOR_MARKERS_ATTR, ())
        setattr(target, ACCESSOR_MARKERS_ATTR, (*existing, *markers))
        return func

    return decorator


def accessor_markers(func: Any) -> tuple[object, ...]:
    """Return markers attached to *func* by :func:`constrain`."""
    target = getattr(func, "__func__", func)
    return tuple(getattr(target, ACCESSOR_MARKERS_ATTR, ()))


# ---------------------------------------------------------------------------
# Built-in constraint markers
# ---------------------------------------------------------------------------


@constraint_marker
@dataclass(frozen=True)
class Required:
    """Value must be present (not ``None``)."""


@constraint_marker
@dataclass(frozen=True)
class NotBlank:
    """String must contain at least one non-whitespace character."""


@constraint_marker
@dataclass(frozen=True)
class Email:
    """String must be an e-mail address."""


@constraint_marker
@dataclass(frozen=True)
class Length:
    max_length: int
    min_length: int = 0


@constraint_marker
@dataclass(frozen=True)
class Digits:
    """At most *integer* integral digits and *fraction* fractional digits."""

    integer: int
    fraction: int = 0


@constraint_marker
@dataclass(frozen=True)
class Pattern:
    regex: str


# ---------------------------------------------------------------------------
# Redirection marker (not a constraint marker)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InheritRules:
    """Redirect rule inheritance for one projection field.

    Attributes:
        property: Entity attribute to inherit from (default: same name).
        entity: Entity class to inherit from (default: the projection's
            generic entity argument).
    """

    property: str | None = None
    entity: type | None = None
