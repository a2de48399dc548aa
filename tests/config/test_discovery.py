"""Tests for locating and reading the configuration table."""

from __future__ import annotations

from pathlib import Path

import pytest

from modelrules.config.discovery import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    PYPROJECT_FILENAME,
    ConfigFileError,
    find_config,
    read_config,
)


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestFindConfig:
    def test_finds_in_start_dir(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("", encoding="utf-8")
        assert find_config(tmp_path) == config.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        config = tmp_path / CONFIG_FILENAME
        config.write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == config.resolve()

    def test_not_found(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_pyproject_with_tool_table(self, tmp_path: Path) -> None:
        pyproject = tmp_path / PYPROJECT_FILENAME
        pyproject.write_text("[tool.modelrules.columns]\ndefault_scale = 4\n", encoding="utf-8")
        nested = tmp_path / "src"
        nested.mkdir()
        assert find_config(nested) == pyproject.resolve()

    def test_pyproject_without_tool_table_skipped(self, tmp_path: Path) -> None:
        (tmp_path / PYPROJECT_FILENAME).write_text("[project]\nname = 'x'\n", encoding="utf-8")
        assert find_config(tmp_path) is None

    def test_unreadable_pyproject_skipped(self, tmp_path: Path) -> None:
        (tmp_path / PYPROJECT_FILENAME).write_text("[tool.modelrules\n", encoding="utf-8")
        assert find_config(tmp_path) is None

    def test_dedicated_file_preferred(self, tmp_path: Path) -> None:
        (tmp_path / PYPROJECT_FILENAME).write_text("[tool.modelrules]\n", encoding="utf-8")
        config = tmp_path / CONFIG_FILENAME
        config.write_text("", encoding="utf-8")
        assert find_config(tmp_path) == config.resolve()

    def test_nearest_directory_wins(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
        nested = tmp_path / "pkg"
        nested.mkdir()
        pyproject = nested / PYPROJECT_FILENAME
        pyproject.write_text("[tool.modelrules]\n", encoding="utf-8")
        assert find_config(nested) == pyproject.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        explicit = tmp_path / "elsewhere.toml"
        explicit.write_text("", encoding="utf-8")
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(explicit))
        assert find_config(tmp_path) == explicit

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        (tmp_path / CONFIG_FILENAME).write_text("", encoding="utf-8")
        assert find_config(tmp_path) is None


class TestReadConfig:
    def test_dedicated_file_is_the_table(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[columns]\ndefault_scale = 4\n", encoding="utf-8")
        assert read_config(path) == {"columns": {"default_scale": 4}}

    def test_pyproject_tool_table(self, tmp_path: Path) -> None:
        path = tmp_path / PYPROJECT_FILENAME
        path.write_text(
            "[project]\nname = 'x'\n\n[tool.modelrules.plugins]\nenabled = false\n",
            encoding="utf-8",
        )
        assert read_config(path) == {"plugins": {"enabled": False}}

    def test_pyproject_without_table(self, tmp_path: Path) -> None:
        path = tmp_path / PYPROJECT_FILENAME
        path.write_text("[project]\nname = 'x'\n", encoding="utf-8")
        assert read_config(path) == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILENAME
        path.write_text("[columns\n", encoding="utf-8")
        with pytest.raises(ConfigFileError, match="Invalid TOML"):
            read_config(path)
