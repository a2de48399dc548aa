"""Pluggy hook specifications for modelrules plugins.

Plugins contribute rule builders at startup. Builders collected this way
are auto-discovered registrations: they never replace a builder that was
registered explicitly through configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from modelrules.builders.base import RuleBuilder

PROJECT_NAME = "modelrules"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class ModelRulesHookSpec:
    """Hook specifications for the modelrules plugin system."""

    @hookspec
    def register_rule_builders(self) -> list[RuleBuilder] | None:
        """Return rule builders to add to the builder registry."""
