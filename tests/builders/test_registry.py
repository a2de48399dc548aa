"""Tests for RuleBuilderRegistry registration priority."""

from __future__ import annotations

from typing import Any

import pytest
from annotated_types import MaxLen

from modelrules.builders.base import RuleBuilder
from modelrules.builders.registry import RuleBuilderRegistry
from modelrules.builders.standard import LengthRuleBuilder, MarkRuleBuilder, standard_builders
from modelrules.domain.markers import Email, Length, NotBlank
from modelrules.domain.rules import LengthRule, Mark


class FixedLengthBuilder(RuleBuilder[LengthRule]):
    rule_type = LengthRule
    marker_types = (MaxLen,)

    def create(self, marker: Any) -> LengthRule:
        return LengthRule(max_length=1)

    def update(self, marker: Any, rule: LengthRule) -> None:
        pass


class NotAMarker:
    pass


class StrBuilder(FixedLengthBuilder):
    marker_types = (NotAMarker,)


class TestRegister:
    def test_resolve_exact_type(self) -> None:
        registry = RuleBuilderRegistry()
        builder = LengthRuleBuilder()
        registry.register(builder)
        assert registry.resolve(MaxLen) is builder
        assert registry.resolve(Length) is builder
        assert registry.resolve(NotBlank) is None
        assert MaxLen in registry
        assert len(registry) == 2

    def test_explicit_replaces_explicit(self) -> None:
        registry = RuleBuilderRegistry()
        registry.register(LengthRuleBuilder())
        replacement = FixedLengthBuilder()
        registry.register(replacement)
        assert registry.resolve(MaxLen) is replacement

    def test_explicit_replaces_discovered(self) -> None:
        registry = RuleBuilderRegistry()
        registry.register_discovered(standard_builders())
        explicit = FixedLengthBuilder()
        registry.register(explicit)
        assert registry.resolve(MaxLen) is explicit
        # Length stays with the discovered builder
        assert isinstance(registry.resolve(Length), LengthRuleBuilder)

    def test_rejects_non_marker_type(self) -> None:
        registry = RuleBuilderRegistry()
        with pytest.raises(TypeError, match="not a constraint marker"):
            registry.register(StrBuilder())
        assert len(registry) == 0


class TestRegisterDiscovered:
    def test_never_overrides_explicit(self) -> None:
        registry = RuleBuilderRegistry()
        explicit = FixedLengthBuilder()
        registry.register(explicit)
        registry.register_discovered([LengthRuleBuilder()])
        assert registry.resolve(MaxLen) is explicit
        assert isinstance(registry.resolve(Length), LengthRuleBuilder)

    def test_first_discovered_wins(self) -> None:
        registry = RuleBuilderRegistry()
        first = MarkRuleBuilder(Mark.EMAIL, Email)
        second = MarkRuleBuilder(Mark.NOT_BLANK, Email)
        registry.register_discovered([first, second])
        assert registry.resolve(Email) is first

    def test_rejects_non_marker_type(self) -> None:
        registry = RuleBuilderRegistry()
        with pytest.raises(TypeError):
            registry.register_discovered([StrBuilder()])

    def test_items_and_marker_types(self) -> None:
        registry = RuleBuilderRegistry()
        registry.register_discovered(standard_builders())
        assert set(registry.marker_types()) == {marker for marker, _ in registry.items()}
