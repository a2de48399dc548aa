"""ValidationConfiguration — the derived rule set of one model class."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from modelrules.domain.rules import RuleKey, ValidationRule


class ValidationConfiguration:
    """Per-property rule sets for one model class.

    Each property holds at most one rule per :attr:`ValidationRule.key`.
    The derivation engine fills the configuration and then seals it; a
    sealed configuration rejects further additions.
    """

    def __init__(self, model_class: type) -> None:
        self.model_class = model_class
        self._rules: dict[str, dict[RuleKey, ValidationRule]] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def property_names(self) -> list[str]:
        return [name for name, rules in self._rules.items() if rules]

    def seal(self) -> None:
        self._sealed = True

    def add_rule(self, property_name: str, rule: ValidationRule) -> bool:
        """Add *rule* unless a rule of the same kind is already present.

        Returns True when the rule was added.
        """
        if self._sealed:
            msg = f"Configuration for {self.model_class.__name__} is sealed"
            raise RuntimeError(msg)
        rules = self._rules.setdefault(property_name, {})
        if rule.key in rules:
            return False
        rules[rule.key] = rule
        return True

    def add_rules(self, property_name: str, rules: Iterable[ValidationRule]) -> None:
        for rule in rules:
            self.add_rule(property_name, rule)

    def get_rule(self, property_name: str, key: RuleKey) -> ValidationRule | None:
        return self._rules.get(property_name, {}).get(key)

    def get_rules(self, property_name: str) -> frozenset[ValidationRule]:
        return frozenset(self._rules.get(property_name, {}).values())

    def is_empty(self) -> bool:
        return not self.property_names

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Render rules per property, sorted by kind for stable output."""
        return {
            name: sorted((rule.to_dict() for rule in rules.values()), key=_sort_key)
            for name, rules in sorted(self._rules.items())
            if rules
        }

    def __repr__(self) -> str:
        return f"ValidationConfiguration({self.model_class.__name__}, {self.property_names})"


def _sort_key(rule: dict[str, Any]) -> tuple[str, str]:
    return rule["kind"], str(rule.get("mark", ""))
