"""Plugin registry for zone providers, hosting platforms, and observers.

Plugins come from three places, registered in this order:

1. built-ins wired by the :class:`~sitectl.infrastructure.workspace.Workspace`,
2. installed distributions exposing the ``sitectl.plugins`` entry point group,
3. single-file modules dropped into ``.sitectl/plugins/``.

Platform and zone hooks are ``firstresult``: pluggy calls the most recently
registered implementation first, so later sources override earlier ones.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType

import pluggy

from sitectl.plugins.hookspecs import SitectlHookSpec

PROJECT_NAME = "sitectl"
ENTRY_POINT_GROUP = "sitectl.plugins"
LOCAL_MODULE_PREFIX = "sitectl_local_plugin_"

logger = logging.getLogger(__name__)


def _is_plugin_class(obj: object) -> bool:
    """True for a class with at least one public ``@hookimpl`` method."""
    if not inspect.isclass(obj):
        return False
    return any(
        getattr(getattr(obj, name, None), f"{PROJECT_NAME}_impl", None)
        for name in dir(obj)
        if not name.startswith("_")
    )


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` with discovery."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SitectlHookSpec)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        """Whether :meth:`discover_and_load` has run."""
        return self._loaded

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved)
        logger.debug("Registered plugin: %s", resolved)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def answering_plugin(self, hook_name: str) -> str | None:
        """Name of the plugin a ``firstresult`` hook would ask first.

        ``get_hookimpls()`` lists implementations in ascending call
        priority, so the last entry is called first.
        """
        impls = getattr(self._pm.hook, hook_name).get_hookimpls()
        return impls[-1].plugin_name if impls else None

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then local ones from *local_dir*.

        Returns the names of every registered plugin, built-ins included.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_registered_classes()
        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("*.py")):
                if not path.name.startswith("_"):
                    self._load_local_file(path)
        self._loaded = True
        return self.list_plugin_names()

    def _instantiate_registered_classes(self) -> None:
        # Entry points may name a class; hooks on an unbound class cannot be called.
        for plugin in self.get_plugins():
            if not _is_plugin_class(plugin):
                continue
            name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
            logger.debug("Instantiated entry-point plugin: %s", name)

    def _load_local_file(self, path: Path) -> None:
        """Register every plugin class defined in *path*.

        A broken file is logged and skipped so one bad plugin never blocks
        a deploy.
        """
        module = self._import_file(path)
        if module is None:
            return
        for _, cls in inspect.getmembers(module, _is_plugin_class):
            if cls.__module__ != module.__name__:
                continue
            try:
                self.register_plugin(cls(), name=f"{module.__name__}.{cls.__name__}")
            except Exception:
                logger.warning(
                    "Failed to instantiate plugin class %s from %s",
                    cls.__name__,
                    path,
                    exc_info=True,
                )

    @staticmethod
    def _import_file(path: Path) -> ModuleType | None:
        module_name = f"{LOCAL_MODULE_PREFIX}{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            logger.warning("Could not create module spec for %s", path)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            logger.warning("Failed to load local plugin %s", path, exc_info=True)
            sys.modules.pop(module_name, None)
            return None
        return module
