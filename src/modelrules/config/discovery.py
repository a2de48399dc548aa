"""Locating and reading the modelrules configuration table.

Settings live either in a dedicated ``modelrules.toml`` or in the
``[tool.modelrules]`` table of a project's ``pyproject.toml``. Both are
found by walking up from the working directory; ``MODELRULES_CONFIG``
names a file explicitly and disables the walk.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "modelrules.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "MODELRULES_CONFIG"
TOOL_TABLE = "modelrules"


class ConfigFileError(ValueError):
    """Raised when a configuration file cannot be parsed."""


def find_config(start: Path | None = None) -> Path | None:
    """Return the configuration file in effect, or None.

    In each directory from *start* (default: cwd) up to the filesystem
    root, ``modelrules.toml`` is preferred over a ``pyproject.toml``
    carrying a ``[tool.modelrules]`` table.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    start_dir = (start or Path.cwd()).resolve()
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _declares_tool_table(pyproject):
            return pyproject
    return None


def read_config(path: Path) -> dict[str, Any]:
    """Return the settings table stored in *path*.

    A ``pyproject.toml`` contributes only its ``[tool.modelrules]`` table;
    any other file is the table itself.

    Raises:
        ConfigFileError: If *path* is not valid TOML.
    """
    data = _parse(path)
    if path.name == PYPROJECT_FILENAME:
        table = data.get("tool", {}).get(TOOL_TABLE, {})
        return table if isinstance(table, dict) else {}
    return data


def _declares_tool_table(pyproject: Path) -> bool:
    try:
        tool = _parse(pyproject).get("tool", {})
    except ConfigFileError:
        logger.warning("Skipping unreadable %s", pyproject, exc_info=True)
        return False
    return isinstance(tool, dict) and TOOL_TABLE in tool


def _parse(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigFileError(msg) from exc
