"""RuleBuilder — the plugin capability that turns a marker into a rule."""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from modelrules.domain.rules import RuleKey, ValidationRule

RuleT = TypeVar("RuleT", bound=ValidationRule)


class RuleBuilder(ABC, Generic[RuleT]):
    """Creates or updates rules of :attr:`rule_type` from constraint markers.

    Subclasses declare the rule kind they produce through :attr:`rule_type`
    and the marker types they understand through :attr:`marker_types`.

    Usage::

        class LengthRuleBuilder(RuleBuilder[LengthRule]):
            rule_type = LengthRule
            marker_types = (MaxLen,)

            def create(self, marker): ...
            def update(self, marker, rule): ...
    """

    rule_type: ClassVar[type[ValidationRule]]
    marker_types: tuple[type, ...] = ()

    def rule_key(self, marker: Any) -> RuleKey:
        """Key of the rule this builder produces for *marker*."""
        return self.rule_type

    @abstractmethod
    def create(self, marker: Any) -> RuleT:
        """Return a new rule built from *marker*."""

    @abstractmethod
    def update(self, marker: Any, rule: RuleT) -> None:
        """Apply *marker* to an existing *rule* in place."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def assign(rule: RuleT, **changes: Any) -> None:
    """Apply *changes* to *rule* in place, all or nothing.

    The changed values are validated on a copy first, so an invalid update
    raises :class:`ValueError` and leaves *rule* untouched.
    """
    dataclasses.replace(rule, **changes)
    for name, value in changes.items():
        setattr(rule, name, value)
