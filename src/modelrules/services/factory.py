"""ValidationConfigurationFactory — derives and caches per-class rule sets.

Derivation for one model class:

1. Persistent entity: column-derived rules from the schema provider.
2. Else transport model: rules inherited from the backing entity (this may
   build the entity's configuration first, on the same thread).
3. Every simple property: field markers, then accessor markers, each run
   through the builder registry. A marker creates its rule when no rule of
   that kind exists yet, and updates the existing rule otherwise.
4. Seal and cache.

Each class is built at most once. Builds are serialized per class with a
reentrant lock, so concurrent requests for the same class wait for the one
build while different classes build independently. The cache lives for the
lifetime of the factory; configurations are pure functions of static
metadata and are never invalidated.

INVARIANT: derivation never fails on incomplete metadata. Misses are
logged and produce no rule.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from modelrules.config.logging import derivation_context
from modelrules.domain.configuration import ValidationConfiguration
from modelrules.domain.markers import is_constraint_marker
from modelrules.domain.models import is_projection
from modelrules.infrastructure.metadata import ModelMetadataProvider
from modelrules.infrastructure.schema import SqlAlchemySchemaProvider, is_entity
from modelrules.services.columns import derive_column_rules
from modelrules.services.inheritance import InheritanceResolver

if TYPE_CHECKING:
    from modelrules.builders.registry import RuleBuilderRegistry
    from modelrules.infrastructure.metadata import MetadataProvider
    from modelrules.infrastructure.schema import SchemaMetadataProvider

logger = logging.getLogger(__name__)


class ValidationConfigurationFactory:
    """Builds one :class:`ValidationConfiguration` per model class, on demand.

    Parameters:
        registry: Marker type -> builder dispatch table.
        metadata_provider: Simple properties and their markers per class.
        schema_provider: Persisted-property descriptors per entity class.
    """

    def __init__(
        self,
        registry: RuleBuilderRegistry,
        *,
        metadata_provider: MetadataProvider | None = None,
        schema_provider: SchemaMetadataProvider | None = None,
    ) -> None:
        self._registry = registry
        self._metadata = metadata_provider or ModelMetadataProvider()
        self._schema = schema_provider or SqlAlchemySchemaProvider()
        self._inheritance = InheritanceResolver(self._metadata)
        self._configurations: dict[type, ValidationConfiguration] = {}
        self._locks: dict[type, threading.RLock] = {}
        self._locks_guard = threading.Lock()
        self._build_count = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def registry(self) -> RuleBuilderRegistry:
        return self._registry

    @property
    def build_count(self) -> int:
        """Number of derivations performed so far."""
        return self._build_count

    def get_configuration(self, model_class: type) -> ValidationConfiguration:
        """Return the sealed configuration of *model_class*, building it once."""
        configuration = self._configurations.get(model_class)
        if configuration is not None:
            return configuration

        with self._lock_for(model_class):
            configuration = self._configurations.get(model_class)
            if configuration is None:
                configuration = self._build(model_class)
                self._configurations[model_class] = configuration
        return configuration

    def cached_classes(self) -> list[type]:
        return list(self._configurations)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _lock_for(self, model_class: type) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(model_class)
            if lock is None:
                lock = self._locks[model_class] = threading.RLock()
            return lock

    def _build(self, model_class: type) -> ValidationConfiguration:
        with self._locks_guard:
            self._build_count += 1
        configuration = ValidationConfiguration(model_class)
        with derivation_context(model_class):
            logger.debug("Deriving validation configuration for %s", model_class.__name__)
            if is_entity(model_class):
                self._add_column_rules(configuration)
            elif is_projection(model_class):
                self._inheritance.apply(configuration, self.get_configuration)
            self._add_marker_rules(configuration)
        configuration.seal()
        return configuration

    def _add_column_rules(self, configuration: ValidationConfiguration) -> None:
        for prop in self._schema.persisted_properties(configuration.model_class):
            rules = derive_column_rules(prop)
            if rules:
                configuration.add_rules(prop.name, rules)

    def _add_marker_rules(self, configuration: ValidationConfiguration) -> None:
        model_class = configuration.model_class
        for prop in self._metadata.simple_properties(model_class):
            with derivation_context(model_class, prop.name):
                # Accessor markers run second and so take priority.
                for marker in (*prop.field_markers, *prop.accessor_markers):
                    self._apply_marker(configuration, prop.name, marker)

    def _apply_marker(
        self, configuration: ValidationConfiguration, property_name: str, marker: object
    ) -> None:
        marker_type = type(marker)
        if not is_constraint_marker(marker_type):
            return
        builder = self._registry.resolve(marker_type)
        if builder is None:
            logger.debug(
                "No builder for %s on %s.%s",
                marker_type.__name__,
                configuration.model_class.__name__,
                property_name,
            )
            return

        try:
            rule = configuration.get_rule(property_name, builder.rule_key(marker))
            if rule is None:
                configuration.add_rule(property_name, builder.create(marker))
            else:
                builder.update(marker, rule)
        except ValueError as exc:
            logger.warning(
                "Ignoring %r on %s.%s: %s",
                marker,
                configuration.model_class.__name__,
                property_name,
                exc,
            )
