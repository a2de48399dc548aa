"""Shared service helpers."""

from __future__ import annotations

import importlib
from typing import Any


def import_object(path: str) -> Any:
    """Import ``"package.module:attr"`` (or ``"package.module.attr"``).

    Raises:
        ValueError: If the path is malformed or cannot be imported.
    """
    module_name, sep, attr_path = path.partition(":")
    if not sep:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        msg = f"Invalid import path {path!r}; expected 'package.module:Name'"
        raise ValueError(msg)

    try:
        obj: Any = importlib.import_module(module_name)
    except Exception as exc:
        msg = f"Cannot import module {module_name!r}: {exc}"
        raise ValueError(msg) from exc

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            msg = f"Module {module_name!r} has no attribute {attr_path!r}"
            raise ValueError(msg) from exc
    return obj
