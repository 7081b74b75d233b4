"""Built-in OpenAPI schema plugin.

An ``Option<T>`` property is documented by OpenAPI generators as nullable
and not required. Only flags that differ from that default are emitted:

* nullable            -> ``#[schema(required = true)]``
* not required        -> ``#[schema(nullable = false)]``
* nullable + optional -> nothing
"""

from __future__ import annotations

import pluggy

from optmark.domain.fields import Attribute, Directive
from optmark.domain.schema import SchemaFlags

hookimpl = pluggy.HookimplMarker("optmark")

OPTION_DEFAULT = SchemaFlags(nullable=True, required=False)


class OpenApiSchemaPlugin:
    """Translate schema flags into ``#[schema(...)]`` attributes."""

    def __init__(self, namespace: str = "schema") -> None:
        self._namespace = namespace

    @hookimpl
    def schema_attributes(self, flags: SchemaFlags) -> list[Attribute]:
        attributes: list[Attribute] = []
        if flags.required != OPTION_DEFAULT.required:
            attributes.append(self._flag("required", flags.required))
        if flags.nullable != OPTION_DEFAULT.nullable:
            attributes.append(self._flag("nullable", flags.nullable))
        return attributes

    def _flag(self, name: str, value: bool) -> Attribute:
        return Attribute(
            namespace=self._namespace,
            directives=(Directive(name=name, value="true" if value else "false"),),
        )
