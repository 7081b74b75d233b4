"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures in lifecycle hooks are warnings, never errors.
"""

from optmark.plugins.manager import PluginManager

__all__ = ["PluginManager"]
