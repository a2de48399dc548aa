"""Standard rule builders for the shipped constraint markers.

``update`` overrides whatever the marker declares, so a marker processed
later (accessor after field, field after column) takes priority.
"""

from __future__ import annotations

from annotated_types import Ge, Gt, Le, Lt, MaxLen

from modelrules.builders.base import RuleBuilder, assign
from modelrules.domain.markers import Digits, Email, Length, NotBlank, Pattern, Required
from modelrules.domain.rules import (
    DecimalRule,
    LengthRule,
    Mark,
    MarkRule,
    RangeRule,
    RegexRule,
    RuleKey,
)


class LengthRuleBuilder(RuleBuilder[LengthRule]):
    rule_type = LengthRule
    marker_types = (MaxLen, Length)

    def create(self, marker: MaxLen | Length) -> LengthRule:
        if isinstance(marker, Length):
            return LengthRule(max_length=marker.max_length, min_length=marker.min_length)
        return LengthRule(max_length=marker.max_length)

    def update(self, marker: MaxLen | Length, rule: LengthRule) -> None:
        if isinstance(marker, Length):
            assign(rule, max_length=marker.max_length, min_length=marker.min_length)
        else:
            assign(rule, max_length=marker.max_length)


class DecimalRuleBuilder(RuleBuilder[DecimalRule]):
    rule_type = DecimalRule
    marker_types = (Digits,)

    def create(self, marker: Digits) -> DecimalRule:
        return DecimalRule(precision=marker.integer + marker.fraction, scale=marker.fraction)

    def update(self, marker: Digits, rule: DecimalRule) -> None:
        assign(rule, precision=marker.integer + marker.fraction, scale=marker.fraction)


class RangeRuleBuilder(RuleBuilder[RangeRule]):
    """Collects ``Gt``/``Ge``/``Lt``/``Le`` bounds into one :class:`RangeRule`."""

    rule_type = RangeRule
    marker_types = (Gt, Ge, Lt, Le)

    def create(self, marker: Gt | Ge | Lt | Le) -> RangeRule:
        rule = RangeRule()
        self.update(marker, rule)
        return rule

    def update(self, marker: Gt | Ge | Lt | Le, rule: RangeRule) -> None:
        match marker:
            case Gt(gt=value):
                assign(rule, minimum=value, min_inclusive=False)
            case Ge(ge=value):
                assign(rule, minimum=value, min_inclusive=True)
            case Lt(lt=value):
                assign(rule, maximum=value, max_inclusive=False)
            case Le(le=value):
                assign(rule, maximum=value, max_inclusive=True)


class RegexRuleBuilder(RuleBuilder[RegexRule]):
    rule_type = RegexRule
    marker_types = (Pattern,)

    def create(self, marker: Pattern) -> RegexRule:
        return RegexRule(pattern=marker.regex)

    def update(self, marker: Pattern, rule: RegexRule) -> None:
        assign(rule, pattern=marker.regex)


class MarkRuleBuilder(RuleBuilder[MarkRule]):
    """Maps marker types onto a single :class:`Mark`."""

    rule_type = MarkRule

    def __init__(self, mark: Mark, *marker_types: type) -> None:
        self.mark = mark
        self.marker_types = marker_types

    def rule_key(self, marker: object) -> RuleKey:
        return (MarkRule, self.mark)

    def create(self, marker: object) -> MarkRule:
        return MarkRule(self.mark)

    def update(self, marker: object, rule: MarkRule) -> None:
        """Marks carry no data; nothing to update."""

    def __repr__(self) -> str:
        return f"MarkRuleBuilder({self.mark.value!r})"


def standard_builders() -> list[RuleBuilder]:
    """Return fresh instances of every shipped builder."""
    return [
        LengthRuleBuilder(),
        DecimalRuleBuilder(),
        RangeRuleBuilder(),
        RegexRuleBuilder(),
        MarkRuleBuilder(Mark.REQUIRED, Required),
        MarkRuleBuilder(Mark.NOT_BLANK, NotBlank),
        MarkRuleBuilder(Mark.EMAIL, Email),
    ]
