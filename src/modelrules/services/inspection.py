"""InspectService — report derived configurations and registered builders."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modelrules.domain.models import entity_type_of, is_projection
from modelrules.infrastructure.schema import is_entity
from modelrules.services._helpers import import_object
from modelrules.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from modelrules.services.factory import ValidationConfigurationFactory

logger = logging.getLogger(__name__)


def _qualname(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class InspectService:
    """Read-only views over a :class:`ValidationConfigurationFactory`."""

    def __init__(self, factory: ValidationConfigurationFactory) -> None:
        self._factory = factory

    def describe(self, target: str) -> ServiceResult:
        """Derive the configuration of the model class at import path *target*."""
        op = "inspect"
        try:
            model_class = import_object(target)
        except ValueError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="IMPORT_FAILED", message=str(exc)),
            )
        if not isinstance(model_class, type):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_A_CLASS",
                    message=f"{target!r} is not a class",
                    detail={"type": type(model_class).__name__},
                ),
            )

        configuration = self._factory.get_configuration(model_class)
        warnings: list[str] = []
        data: dict[str, object] = {"model": _qualname(model_class), "kind": "plain"}
        if is_entity(model_class):
            data["kind"] = "entity"
        elif is_projection(model_class):
            data["kind"] = "projection"
            entity = entity_type_of(model_class)
            data["entity"] = _qualname(entity) if entity is not None else None
            if entity is None:
                warnings.append("Projection has no entity type argument")
        data["properties"] = configuration.to_dict()
        if configuration.is_empty():
            warnings.append(f"No rules derived for {model_class.__name__}")
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def list_builders(self) -> ServiceResult:
        """List each registered marker type with the builder handling it."""
        builders = [
            {
                "marker": _qualname(marker_type),
                "builder": repr(builder),
                "rule": builder.rule_type.kind,
            }
            for marker_type, builder in self._factory.registry.items()
        ]
        builders.sort(key=lambda entry: entry["marker"])
        return ServiceResult(ok=True, op="builders", data={"builders": builders})
