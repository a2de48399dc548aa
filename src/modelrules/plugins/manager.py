"""Plugin discovery, loading, and rule builder collection.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus local directory discovery (typically ``.modelrules/plugins/``).
Capability: contributing rule builders through ``register_rule_builders``.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from modelrules.plugins.hookspecs import PROJECT_NAME, ModelRulesHookSpec

if TYPE_CHECKING:
    from modelrules.builders.base import RuleBuilder

ENTRY_POINT_GROUP = f"{PROJECT_NAME}.plugins"
LOCAL_MODULE_PREFIX = f"{PROJECT_NAME}_local_plugin_"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and builder collection."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ModelRulesHookSpec)

    def discover_and_load(
        self, *, local_dir: Path | None = None, entry_points: bool = True
    ) -> list[str]:
        """Discover plugins from entry points and an optional local directory.

        Entry points are read from the ``modelrules.plugins`` group; entry
        points whose name is already registered are skipped by pluggy.
        Returns a list of loaded plugin names.
        """
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        """Plugin names in registration order."""
        return [name for name, plugin in self._pm.list_name_plugin() if plugin is not None]

    def collect_rule_builders(self) -> list[RuleBuilder]:
        """Gather builders from every plugin's ``register_rule_builders`` hook.

        Plugins are visited in registration order. A plugin whose hook raises
        or returns something other than a list is skipped with a warning.
        """
        builders: list[RuleBuilder] = []
        for plugin_name, plugin in self._pm.list_name_plugin():
            # Blocked names map to None
            hook = getattr(plugin, "register_rule_builders", None)
            if hook is None:
                continue
            try:
                contributed = hook()
            except Exception:
                logger.warning(
                    "Failed to collect rule builders from plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            if contributed is None:
                continue
            if not isinstance(contributed, (list, tuple)):
                logger.warning("Plugin %s returned non-list rule builders", plugin_name)
                continue
            builders.extend(contributed)
            logger.debug("Plugin %s contributed %d builders", plugin_name, len(contributed))
        return builders

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes defined in the module that carry hookimpl-decorated
        methods are instantiated and registered. A broken file is logged and
        skipped.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"{LOCAL_MODULE_PREFIX}{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=module_name)
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )
                    continue
                logger.debug("Loaded local plugin %s from %s", obj.__name__, py_file)

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading registers the referenced class itself; hook
        calls on a class leave ``self`` unbound.
        """
        for plugin_name, plugin in list(self._pm.list_name_plugin()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue

            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("modelrules")`` sets a ``modelrules_impl``
        attribute on decorated methods.
        """
        marker_attr = f"{PROJECT_NAME}_impl"
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, marker_attr, None):
                return True
        return False
