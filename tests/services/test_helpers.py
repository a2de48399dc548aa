"""Tests for import_object."""

from __future__ import annotations

from pathlib import Path

import pytest

from modelrules.builders.standard import LengthRuleBuilder
from modelrules.services._helpers import import_object


class TestImportObject:
    def test_colon_form(self) -> None:
        assert import_object("modelrules.builders.standard:LengthRuleBuilder") is (
            LengthRuleBuilder
        )

    def test_dotted_form(self) -> None:
        assert import_object("modelrules.builders.standard.LengthRuleBuilder") is (
            LengthRuleBuilder
        )

    def test_nested_attribute(self) -> None:
        assert import_object("modelrules.builders.standard:LengthRuleBuilder.create") is (
            LengthRuleBuilder.create
        )

    @pytest.mark.parametrize("path", ["", "nomodule", ":Name", "module:"])
    def test_malformed(self, path: str) -> None:
        with pytest.raises(ValueError, match="Invalid import path"):
            import_object(path)

    def test_missing_attribute(self) -> None:
        with pytest.raises(ValueError, match="has no attribute"):
            import_object("modelrules.builders.standard:Nope")

    def test_missing_module(self) -> None:
        with pytest.raises(ValueError, match="Cannot import module"):
            import_object("modelrules_missing_pkg:Builder")

    @pytest.mark.parametrize(
        ("module_name", "source"),
        [
            ("mr_broken_syntax", "def broken(:\n"),
            ("mr_broken_name", "undefined_name\n"),
        ],
    )
    def test_module_failing_on_import(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, module_name: str, source: str
    ) -> None:
        (tmp_path / f"{module_name}.py").write_text(source)
        monkeypatch.syspath_prepend(str(tmp_path))
        with pytest.raises(ValueError, match="Cannot import module"):
            import_object(f"{module_name}:Builder")
