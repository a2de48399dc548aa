"""Rule builders and the marker type -> builder registry."""

from modelrules.builders.base import RuleBuilder
from modelrules.builders.registry import RuleBuilderRegistry
from modelrules.builders.standard import standard_builders

__all__ = ["RuleBuilder", "RuleBuilderRegistry", "standard_builders"]
