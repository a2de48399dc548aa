"""Tests for ModelRulesSettings priority chain."""

from __future__ import annotations

from pathlib import Path

import pytest

from modelrules.config.settings import ConfigFileError, ModelRulesSettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MODELRULES_CONFIG", "MODELRULES_VERBOSE", "MODELRULES_COLUMNS__DEFAULT_SCALE"):
        monkeypatch.delenv(name, raising=False)


def _write_config(root: Path, body: str) -> Path:
    path = root / "modelrules.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestFromCli:
    def test_defaults(self, tmp_path: Path) -> None:
        settings = ModelRulesSettings.from_cli(project_root=tmp_path)
        assert settings.config_path is None
        assert settings.project_root == tmp_path
        assert settings.columns.default_precision == 19
        assert settings.json_output is False

    def test_discovered_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, '[registry]\nbuilders = ["a.b:C"]\n')
        monkeypatch.chdir(tmp_path)
        settings = ModelRulesSettings.from_cli()
        assert settings.config_path is not None
        assert settings.config_path.resolve() == path.resolve()
        assert settings.project_root.resolve() == tmp_path.resolve()
        assert settings.registry.builders == ["a.b:C"]

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text("[plugins]\nenabled = false\n", encoding="utf-8")
        settings = ModelRulesSettings.from_cli(config_path=str(path))
        assert settings.plugins.enabled is False
        assert settings.project_root == tmp_path

    def test_pyproject_tool_table(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text(
            "[project]\nname = 'app'\n\n[tool.modelrules.columns]\ndefault_precision = 12\n",
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)
        settings = ModelRulesSettings.from_cli()
        assert settings.config_path is not None
        assert settings.config_path.name == "pyproject.toml"
        assert settings.columns.default_precision == 12
        assert settings.columns.default_scale == 2

    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ModelRulesSettings.from_cli(project_root=tmp_path, verbose=True)
        assert settings.verbose is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, "[columns]\ndefault_scale = 4\n")
        monkeypatch.setenv("MODELRULES_COLUMNS__DEFAULT_SCALE", "6")
        settings = ModelRulesSettings.from_cli(config_path=str(path))
        assert settings.columns.default_scale == 6

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[columns\n")
        with pytest.raises(ConfigFileError, match="Invalid TOML"):
            ModelRulesSettings.from_cli(config_path=str(path))

    def test_invalid_values_rejected(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[columns]\ndefault_precision = 0\n")
        with pytest.raises(ValueError):
            ModelRulesSettings.from_cli(config_path=str(path))


class TestPluginsDir:
    def test_relative_to_project_root(self, tmp_path: Path) -> None:
        settings = ModelRulesSettings.from_cli(project_root=tmp_path)
        assert settings.plugins_dir == tmp_path / ".modelrules" / "plugins"

    def test_absolute(self, tmp_path: Path) -> None:
        settings = ModelRulesSettings.from_cli(
            project_root=tmp_path, plugins={"local_dir": str(tmp_path / "p")}
        )
        assert settings.plugins_dir == tmp_path / "p"

    def test_disabled(self, tmp_path: Path) -> None:
        settings = ModelRulesSettings.from_cli(project_root=tmp_path, plugins={"local_dir": None})
        assert settings.plugins_dir is None
