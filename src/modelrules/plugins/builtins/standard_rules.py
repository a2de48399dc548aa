"""Built-in plugin contributing the standard rule builders.

Registered directly by :func:`modelrules.services.bootstrap.create_factory`
and also exposed through the ``modelrules.plugins`` entry point group.
"""

from __future__ import annotations

from modelrules.builders.base import RuleBuilder
from modelrules.builders.standard import standard_builders
from modelrules.plugins.hookspecs import hookimpl

PLUGIN_NAME = "standard_rules"


class StandardRulesPlugin:
    """Provides builders for the shipped constraint markers."""

    @hookimpl
    def register_rule_builders(self) -> list[RuleBuilder]:
        return standard_builders()
