"""Rule inheritance from a projection's backing entity.

For every simple field of a ``TransportModel[Entity]`` subclass the target
defaults to the same-named attribute of ``Entity``. An ``InheritRules``
marker on the field overrides the target attribute and/or entity class.
The target entity's rules are copied by value, so later updates on the
projection never touch the entity's configuration.

Targets must be persistent entities; anything else is skipped silently.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from modelrules.domain.configuration import ValidationConfiguration
from modelrules.domain.markers import InheritRules
from modelrules.domain.models import entity_type_of
from modelrules.infrastructure.metadata import MetadataProvider, PropertyMetadata
from modelrules.infrastructure.schema import is_entity

logger = logging.getLogger(__name__)

ConfigurationLookup = Callable[[type], ValidationConfiguration]


def inherit_target(
    prop: PropertyMetadata, default_entity: type | None
) -> tuple[type | None, str]:
    """Resolve ``(entity_class, property_name)`` to inherit *prop*'s rules from."""
    entity_class, property_name = default_entity, prop.name
    redirect = next((m for m in prop.field_markers if isinstance(m, InheritRules)), None)
    if redirect is not None:
        if redirect.property and redirect.property.strip():
            property_name = redirect.property
        if redirect.entity is not None:
            entity_class = redirect.entity
    return entity_class, property_name


class InheritanceResolver:
    """Copies entity rules onto the fields of a projection configuration."""

    def __init__(self, metadata_provider: MetadataProvider) -> None:
        self._metadata = metadata_provider

    def apply(self, configuration: ValidationConfiguration, lookup: ConfigurationLookup) -> None:
        projection_class = configuration.model_class
        default_entity = entity_type_of(projection_class)
        for prop in self._metadata.simple_properties(projection_class):
            entity_class, property_name = inherit_target(prop, default_entity)
            if entity_class is None or not is_entity(entity_class):
                continue
            rules = lookup(entity_class).get_rules(property_name)
            if not rules:
                logger.debug(
                    "No rules on %s.%s for %s.%s",
                    entity_class.__name__,
                    property_name,
                    projection_class.__name__,
                    prop.name,
                )
                continue
            configuration.add_rules(prop.name, (dataclasses.replace(rule) for rule in rules))
