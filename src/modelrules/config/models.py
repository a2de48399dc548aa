"""Section models of the modelrules configuration table.

Defaults live here; a config file only carries overrides, so an empty
table (or no file at all) is a valid configuration. The sections are
composed by :class:`modelrules.config.settings.ModelRulesSettings`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from modelrules.infrastructure.schema import DEFAULT_PRECISION, DEFAULT_SCALE


class RegistryConfig(BaseModel):
    """[registry] section.

    ``builders`` lists ``"package.module:Name"`` import paths of rule
    builders registered explicitly, ahead of plugin discovery.
    """

    model_config = {"frozen": True}

    builders: list[str] = Field(default_factory=list)


class ColumnsConfig(BaseModel):
    """[columns] section.

    Precision and scale assumed for numeric columns whose SQL type does
    not declare them.
    """

    model_config = {"frozen": True}

    default_precision: int = Field(default=DEFAULT_PRECISION, ge=1)
    default_scale: int = Field(default=DEFAULT_SCALE, ge=0)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: Path | None = Path(".modelrules/plugins")

