"""Shared pytest fixtures and test helpers for modelrules tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from modelrules.builders.registry import RuleBuilderRegistry
from modelrules.builders.standard import standard_builders
from modelrules.domain.configuration import ValidationConfiguration
from modelrules.services.factory import ValidationConfigurationFactory


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package_logger = logging.getLogger("modelrules")
    package_level = package_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package_logger.setLevel(package_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def registry() -> RuleBuilderRegistry:
    """Registry holding the standard builders."""
    registry = RuleBuilderRegistry()
    registry.register_discovered(standard_builders())
    return registry


@pytest.fixture
def factory(registry: RuleBuilderRegistry) -> ValidationConfigurationFactory:
    return ValidationConfigurationFactory(registry)


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no modelrules env overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MODELRULES_CONFIG", raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def rule_dicts(configuration: ValidationConfiguration, name: str) -> list[dict]:
    """Rules of one property rendered as sorted dicts."""
    return configuration.to_dict().get(name, [])
