"""Pluggy hook specifications for optmark.

One extension hook supplies schema-documentation attributes for the
resolved schema flags; one lifecycle hook fires after each transform.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from optmark.domain.fields import Attribute
    from optmark.domain.schema import SchemaFlags

hookspec = pluggy.HookspecMarker("optmark")


class OptmarkHookSpec:
    """Hook specifications for the optmark plugin system."""

    @hookspec(firstresult=True)
    def schema_attributes(self, flags: SchemaFlags) -> list[Attribute] | None:
        """Return the schema attributes documenting *flags*.

        Must be a pure function of *flags*: the result is also used to
        recognize attributes emitted by an earlier pass.
        """

    @hookspec
    def post_transform(
        self,
        definition_name: str,
        field_count: int,
        diagnostic_count: int,
    ) -> None:
        """Called after a type definition has been resolved."""
