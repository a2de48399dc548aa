"""Persisted-property descriptors read from SQLAlchemy mappers.

A persistent entity is any class ``sqlalchemy.inspect`` maps to a
:class:`~sqlalchemy.orm.Mapper`. Each column attribute becomes one
:class:`PersistedProperty` carrying the physical column facts the
column-rule derivation needs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol

from sqlalchemy import BigInteger, Column, Integer, SmallInteger
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.dialects.mysql import TINYINT
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Mapper
from sqlalchemy.types import TypeDecorator, TypeEngine

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 19
DEFAULT_SCALE = 2

# Most specific first: BigInteger, SmallInteger and TINYINT subclass Integer.
_INTEGER_WIDTHS: tuple[tuple[type[TypeEngine[Any]], int], ...] = (
    (BigInteger, 64),
    (SmallInteger, 16),
    (TINYINT, 8),
    (Integer, 32),
)


@dataclass(frozen=True)
class PersistedProperty:
    """Physical mapping facts of one entity attribute.

    Attributes:
        name: Mapped attribute name.
        value_type: Declared Python type, or None when unknown.
        length: Column length; 0 when the column has none.
        nullable: Whether the column accepts NULL.
        precision: Total numeric digits.
        scale: Fractional numeric digits.
        integer_width: Bit width of an integral column, None otherwise.
        column_count: Number of physical columns backing the attribute.
    """

    name: str
    value_type: type | None
    length: int = 0
    nullable: bool = True
    precision: int = DEFAULT_PRECISION
    scale: int = DEFAULT_SCALE
    integer_width: int | None = None
    column_count: int = 1


class SchemaMetadataProvider(Protocol):
    def persisted_properties(self, entity_class: type) -> Iterator[PersistedProperty]: ...


def entity_mapper(model_class: type) -> Mapper[Any] | None:
    """Return the ORM mapper of *model_class*, or None if it is not mapped."""
    try:
        mapper = sa_inspect(model_class, raiseerr=False)
    except SQLAlchemyError:
        logger.warning("Could not inspect %s", model_class.__name__, exc_info=True)
        return None
    return mapper if isinstance(mapper, Mapper) else None


def is_entity(model_class: object) -> bool:
    return isinstance(model_class, type) and entity_mapper(model_class) is not None


def python_type_of(type_: TypeEngine[Any]) -> type | None:
    try:
        value_type = type_.python_type
    except NotImplementedError:
        return None
    return value_type if isinstance(value_type, type) else None


def integer_width_of(type_: TypeEngine[Any]) -> int | None:
    if isinstance(type_, TypeDecorator):
        type_ = type_.impl_instance
    for sql_type, width in _INTEGER_WIDTHS:
        if isinstance(type_, sql_type):
            return width
    return None


class SqlAlchemySchemaProvider:
    """Yields :class:`PersistedProperty` descriptors from an entity's mapper.

    Precision and scale missing on the column type fall back to
    *default_precision* / *default_scale*.
    """

    def __init__(
        self,
        *,
        default_precision: int = DEFAULT_PRECISION,
        default_scale: int = DEFAULT_SCALE,
    ) -> None:
        self._default_precision = default_precision
        self._default_scale = default_scale

    def persisted_properties(self, entity_class: type) -> Iterator[PersistedProperty]:
        mapper = entity_mapper(entity_class)
        if mapper is None:
            return
        try:
            column_attrs = list(mapper.column_attrs)
        except SQLAlchemyError:
            logger.warning(
                "Mapper configuration failed for %s", entity_class.__name__, exc_info=True
            )
            return

        for prop in column_attrs:
            columns = [c for c in prop.columns if isinstance(c, Column)]
            if len(columns) != 1:
                yield PersistedProperty(
                    name=prop.key,
                    value_type=None,
                    column_count=len(columns),
                )
                continue
            yield self._describe(prop.key, columns[0])

    def _describe(self, name: str, column: Column[Any]) -> PersistedProperty:
        type_ = column.type
        precision = getattr(type_, "precision", None)
        scale = getattr(type_, "scale", None)
        return PersistedProperty(
            name=name,
            value_type=python_type_of(type_),
            length=getattr(type_, "length", None) or 0,
            nullable=bool(column.nullable),
            precision=self._default_precision if precision is None else precision,
            scale=self._default_scale if scale is None else scale,
            integer_width=integer_width_of(type_),
            column_count=1,
        )
