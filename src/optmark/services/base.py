"""BaseService — shared foundation for optmark services.

Every service receives the resolved :class:`OptmarkSettings` and a
:class:`PluginManager`. Services translate settings into pipeline options
and turn pipeline outcomes into :class:`ServiceResult` values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from optmark.plugins.builtins.openapi import OpenApiSchemaPlugin
from optmark.plugins.manager import PluginManager

if TYPE_CHECKING:
    from optmark.config.settings import OptmarkSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class TransformService(BaseService):
            def transform(self, definition: TypeDefinition) -> ServiceResult:
                outcome = process_definition(definition, self._options())
                ...
    """

    def __init__(self, settings: OptmarkSettings, plugins: PluginManager | None = None) -> None:
        self._settings = settings
        if plugins is None:
            plugins = PluginManager()
            loaded = plugins.discover_and_load()
            logger.debug("Loaded plugins: %s", ", ".join(loaded) or "none")
        if settings.schema_metadata.enabled and not plugins.hook.schema_attributes.get_hookimpls():
            plugins.register_plugin(
                OpenApiSchemaPlugin(namespace=settings.schema_metadata.namespace),
                name="openapi",
            )
        self._plugins = plugins

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a lifecycle hook on every plugin.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        try:
            getattr(self._plugins.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
