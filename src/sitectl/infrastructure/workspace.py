"""Workspace: the single dependency injected into every service.

A workspace is a project directory holding ``sitectl.toml``. It owns the
resolved settings, the plugin manager, and the local platform store, and
wires the built-in plugins according to the ``[plugins]`` config section.
External plugins (entry points or ``.sitectl/plugins/*.py``) register
alongside the built-ins; for ``firstresult`` hooks the most recently
registered implementation answers first, so external plugins take over
from the built-ins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sitectl.infrastructure.platform import LocalPlatform
from sitectl.plugins.builtins.local_platform import LocalPlatformPlugin
from sitectl.plugins.builtins.zones import StaticZonesPlugin
from sitectl.plugins.manager import PluginManager

if TYPE_CHECKING:
    from pathlib import Path

    import pluggy

    from sitectl.config.settings import SitectlSettings
    from sitectl.domain.binding import HostedZone

logger = logging.getLogger(__name__)


class Workspace:
    """Project root plus its plugins and platform state."""

    def __init__(self, settings: SitectlSettings, *, discover: bool = True) -> None:
        self.settings = settings
        self.platform = LocalPlatform(settings.state_dir)
        self.plugins = PluginManager()

        if settings.plugins.static_zones.get("enabled", True):
            self.plugins.register_plugin(
                StaticZonesPlugin(settings.zones.hosted), name="static_zones"
            )
        if settings.plugins.local_platform.get("enabled", True):
            self.plugins.register_plugin(LocalPlatformPlugin(self.platform), name="local_platform")
        if discover:
            self.plugins.discover_and_load(local_dir=settings.state_dir / "plugins")
        logger.debug(
            "Workspace plugins: %s (platform: %s)",
            self.plugins.list_plugin_names(),
            self.plugins.answering_plugin("sitectl_register_app"),
        )

    @property
    def root(self) -> Path:
        return self.settings.project_root

    @property
    def hook(self) -> pluggy.HookRelay:
        return self.plugins.hook

    def resolve_zone(self, domain_name: str) -> HostedZone | None:
        """Ask the zone provider plugins for the zone containing *domain_name*."""
        return self.hook.sitectl_resolve_zone(domain_name=domain_name)

    def close(self) -> None:
        self.platform.close()
