"""Transport (projection) model base.

A transport model mirrors a subset of an entity's properties for external
use and is parametrized by that entity::

    class AccountView(TransportModel[Account]):
        username: str
        nickname: str | None = None

Rules derived for ``Account`` are inherited by same-named fields of
``AccountView`` unless a field redirects with ``InheritRules``.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel

EntityT = TypeVar("EntityT")


class TransportModel(BaseModel, Generic[EntityT]):
    """Pydantic projection of the entity class ``EntityT``."""


def is_projection(model_class: type) -> bool:
    return isinstance(model_class, type) and issubclass(model_class, TransportModel)


def entity_type_of(projection_class: type) -> type | None:
    """Return the entity argument of *projection_class*'s ``TransportModel`` base.

    Walks the MRO for the parametrized ``TransportModel[...]`` class. Returns
    None for an unparametrized projection.
    """
    for base in projection_class.__mro__:
        meta = getattr(base, "__pydantic_generic_metadata__", None)
        if not meta or meta.get("origin") is None:
            continue
        origin = meta["origin"]
        args = meta.get("args") or ()
        if isinstance(origin, type) and issubclass(origin, TransportModel) and args:
            entity = args[0]
            return entity if isinstance(entity, type) else None
    return None
