"""Tests for SQLAlchemy persisted-property descriptors."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import BigInteger, Integer, Numeric, SmallInteger, String
from sqlalchemy.dialects.mysql import TINYINT
from sqlalchemy.types import TypeDecorator

from modelrules.infrastructure.schema import (
    DEFAULT_PRECISION,
    DEFAULT_SCALE,
    SqlAlchemySchemaProvider,
    entity_mapper,
    integer_width_of,
    is_entity,
    python_type_of,
)
from tests.sample_models import NotAModel, User, UserForm


class Cents(TypeDecorator):
    impl = SmallInteger
    cache_ok = True


def _properties(entity_class: type, **kwargs: int) -> dict:
    provider = SqlAlchemySchemaProvider(**kwargs)
    return {prop.name: prop for prop in provider.persisted_properties(entity_class)}


class TestEntityDetection:
    def test_mapped_class(self) -> None:
        assert is_entity(User)
        assert entity_mapper(User) is not None

    def test_unmapped_classes(self) -> None:
        assert not is_entity(UserForm)
        assert not is_entity(NotAModel)
        assert entity_mapper(NotAModel) is None


class TestIntegerWidth:
    def test_widths(self) -> None:
        assert integer_width_of(BigInteger()) == 64
        assert integer_width_of(Integer()) == 32
        assert integer_width_of(SmallInteger()) == 16
        assert integer_width_of(TINYINT()) == 8

    def test_type_decorator_uses_impl(self) -> None:
        assert integer_width_of(Cents()) == 16

    def test_non_integer(self) -> None:
        assert integer_width_of(String(10)) is None
        assert integer_width_of(Numeric(10, 2)) is None


class TestPythonType:
    def test_known(self) -> None:
        assert python_type_of(String(10)) is str
        assert python_type_of(Numeric(10, 2)) is Decimal


class TestPersistedProperties:
    def test_string_column(self) -> None:
        props = _properties(User)
        assert props["username"].value_type is str
        assert props["username"].length == 50
        assert props["username"].nullable is False
        assert props["nickname"].nullable is True

    def test_unbounded_text(self) -> None:
        assert _properties(User)["bio"].length == 0

    def test_numeric_precision(self) -> None:
        balance = _properties(User)["balance"]
        assert balance.value_type is Decimal
        assert (balance.precision, balance.scale) == (12, 2)

    def test_integer_defaults(self) -> None:
        age = _properties(User)["age"]
        assert age.value_type is int
        assert age.integer_width == 32
        assert (age.precision, age.scale) == (DEFAULT_PRECISION, DEFAULT_SCALE)

    def test_configured_defaults(self) -> None:
        age = _properties(User, default_precision=7, default_scale=1)["age"]
        assert (age.precision, age.scale) == (7, 1)

    def test_date_column(self) -> None:
        born_on = _properties(User)["born_on"]
        assert born_on.value_type is date
        assert born_on.nullable is False

    def test_single_column_count(self) -> None:
        assert all(prop.column_count == 1 for prop in _properties(User).values())

    def test_non_entity_yields_nothing(self) -> None:
        assert _properties(UserForm) == {}
