"""Startup wiring — settings -> registry -> plugins -> factory.

Registration order matters: builders listed in ``[registry] builders`` are
registered explicitly first, then plugin-contributed builders fill the
remaining marker types without replacing explicit ones.
"""

from __future__ import annotations

import logging

from modelrules.builders.base import RuleBuilder
from modelrules.builders.registry import RuleBuilderRegistry
from modelrules.config.settings import ModelRulesSettings
from modelrules.infrastructure.schema import SqlAlchemySchemaProvider
from modelrules.plugins.builtins.standard_rules import PLUGIN_NAME, StandardRulesPlugin
from modelrules.plugins.manager import PluginManager
from modelrules.services._helpers import import_object
from modelrules.services.factory import ValidationConfigurationFactory

logger = logging.getLogger(__name__)


def load_builder(path: str) -> RuleBuilder:
    """Import and instantiate the builder at *path*.

    *path* may name a builder class (instantiated without arguments), a
    zero-argument factory function, or a builder instance.

    Raises:
        ValueError: If the path cannot be imported or does not yield a builder.
    """
    obj = import_object(path)
    if not isinstance(obj, RuleBuilder) and callable(obj):
        obj = obj()
    if not isinstance(obj, RuleBuilder):
        msg = f"{path!r} does not provide a RuleBuilder (got {type(obj).__name__})"
        raise ValueError(msg)
    return obj


def create_plugin_manager(settings: ModelRulesSettings) -> PluginManager:
    """Plugin manager with the built-in plugin plus discovered ones."""
    pm = PluginManager()
    pm.register_plugin(StandardRulesPlugin(), name=PLUGIN_NAME)
    if settings.plugins.enabled:
        pm.discover_and_load(local_dir=settings.plugins_dir)
    return pm


def create_registry(
    settings: ModelRulesSettings, plugin_manager: PluginManager | None = None
) -> RuleBuilderRegistry:
    registry = RuleBuilderRegistry()
    for path in settings.registry.builders:
        registry.register(load_builder(path))
        logger.debug("Registered explicit builder %s", path)

    pm = plugin_manager or create_plugin_manager(settings)
    registry.register_discovered(pm.collect_rule_builders())
    return registry


def create_factory(
    settings: ModelRulesSettings | None = None,
    *,
    plugin_manager: PluginManager | None = None,
) -> ValidationConfigurationFactory:
    """Build a ready-to-use :class:`ValidationConfigurationFactory`.

    Raises:
        ValueError: If an explicit builder path cannot be loaded.
        TypeError: If any builder declares a non-constraint marker type.
    """
    settings = settings or ModelRulesSettings.from_cli()
    registry = create_registry(settings, plugin_manager)
    schema_provider = SqlAlchemySchemaProvider(
        default_precision=settings.columns.default_precision,
        default_scale=settings.columns.default_scale,
    )
    return ValidationConfigurationFactory(registry, schema_provider=schema_provider)
