"""Property metadata providers — simple properties plus their markers.

Each provider flattens one model flavour into :class:`PropertyMetadata`
records. Field-level markers and accessor-level markers are kept apart so
the engine can apply accessor markers after field markers.

- SQLAlchemy entities: ``Column.info["constraints"]`` and the ``@validates``
  method of the attribute.
- Pydantic models: ``FieldInfo.metadata`` and the ``@field_validator``
  methods naming the field (or ``"*"``).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

import annotated_types
from pydantic import BaseModel
from sqlalchemy import Column
from sqlalchemy.exc import SQLAlchemyError

from modelrules.domain.markers import accessor_markers
from modelrules.domain.types import is_simple_type, unwrap_optional
from modelrules.infrastructure.schema import entity_mapper, python_type_of

logger = logging.getLogger(__name__)

COLUMN_INFO_KEY = "constraints"


@dataclass(frozen=True)
class PropertyMetadata:
    """One simple property with the markers declared on it."""

    name: str
    value_type: Any
    field_markers: tuple[object, ...] = ()
    accessor_markers: tuple[object, ...] = ()


class MetadataProvider(Protocol):
    def simple_properties(self, model_class: type) -> list[PropertyMetadata]: ...


def expand_markers(markers: Iterable[object]) -> tuple[object, ...]:
    """Flatten grouped metadata such as ``annotated_types.Interval``."""
    expanded: list[object] = []
    for marker in markers:
        if isinstance(marker, annotated_types.GroupedMetadata):
            expanded.extend(marker)
        else:
            expanded.append(marker)
    return tuple(expanded)


class SqlAlchemyMetadataProvider:
    """Simple properties of a mapped entity class."""

    def simple_properties(self, model_class: type) -> list[PropertyMetadata]:
        mapper = entity_mapper(model_class)
        if mapper is None:
            return []
        try:
            column_attrs = list(mapper.column_attrs)
            validators = dict(mapper.validators)
        except SQLAlchemyError:
            logger.warning(
                "Mapper configuration failed for %s", model_class.__name__, exc_info=True
            )
            return []

        properties: list[PropertyMetadata] = []
        for prop in column_attrs:
            columns = [c for c in prop.columns if isinstance(c, Column)]
            if not columns:
                continue
            value_type = python_type_of(columns[0].type)
            if value_type is None or not is_simple_type(value_type):
                continue
            field_markers: list[object] = []
            for column in columns:
                field_markers.extend(column.info.get(COLUMN_INFO_KEY, ()))
            properties.append(
                PropertyMetadata(
                    name=prop.key,
                    value_type=value_type,
                    field_markers=expand_markers(field_markers),
                    accessor_markers=self._validator_markers(validators.get(prop.key)),
                )
            )
        return properties

    @staticmethod
    def _validator_markers(entry: Any) -> tuple[object, ...]:
        if entry is None:
            return ()
        # Mapper.validators maps key -> (method, options)
        method = entry[0] if isinstance(entry, tuple) else entry
        return expand_markers(accessor_markers(method))


class PydanticMetadataProvider:
    """Simple fields of a pydantic model class."""

    def simple_properties(self, model_class: type) -> list[PropertyMetadata]:
        if not (isinstance(model_class, type) and issubclass(model_class, BaseModel)):
            return []

        validators_by_field: dict[str, list[object]] = {}
        decorators = model_class.__pydantic_decorators__.field_validators
        for decorator in decorators.values():
            markers = accessor_markers(decorator.func)
            if not markers:
                continue
            field_names: Iterable[str] = decorator.info.fields
            if "*" in field_names:
                field_names = model_class.model_fields
            for field_name in field_names:
                validators_by_field.setdefault(field_name, []).extend(markers)

        properties: list[PropertyMetadata] = []
        for name, info in model_class.model_fields.items():
            if not is_simple_type(info.annotation):
                continue
            properties.append(
                PropertyMetadata(
                    name=name,
                    value_type=unwrap_optional(info.annotation),
                    field_markers=expand_markers(info.metadata),
                    accessor_markers=expand_markers(validators_by_field.get(name, ())),
                )
            )
        return properties


class ModelMetadataProvider:
    """Dispatches to the provider matching the model class flavour."""

    def __init__(self) -> None:
        self._pydantic = PydanticMetadataProvider()
        self._sqlalchemy = SqlAlchemyMetadataProvider()

    def simple_properties(self, model_class: type) -> list[PropertyMetadata]:
        if isinstance(model_class, type) and issubclass(model_class, BaseModel):
            return self._pydantic.simple_properties(model_class)
        if entity_mapper(model_class) is not None:
            return self._sqlalchemy.simple_properties(model_class)
        logger.debug("No metadata provider for %s", getattr(model_class, "__name__", model_class))
        return []
