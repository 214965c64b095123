"""Extension layer: plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus the built-in zone and platform plugins registered by the workspace.
"""

from sitectl.plugins.manager import PluginManager

__all__ = ["PluginManager"]
