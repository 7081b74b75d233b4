"""Annotation extraction: field descriptor -> FieldIntent.

Reads the ``#[nullable]`` / ``#[not_required]`` markers and the serde
directives that bear on presence and null handling. Attributes owned by
the synthesizer are not user intent and are skipped.
"""

from __future__ import annotations

from pydantic import BaseModel

from optmark.domain.fields import Attribute, FieldDescriptor
from optmark.domain.templates import DEFAULT_TEMPLATES, DirectiveTemplates
from optmark.domain.types import (
    DIRECTIVE_DEFAULT,
    DIRECTIVE_SKIP,
    DIRECTIVE_SKIP_DESERIALIZING,
    DIRECTIVE_SKIP_SERIALIZING,
    DIRECTIVE_SKIP_SERIALIZING_IF,
    HANDLER_DIRECTIVES,
    MARKER_NOT_REQUIRED,
    MARKER_NULLABLE,
    SERDE_NAMESPACE,
)


class FieldIntent(BaseModel):
    """Normalized view of what the field author asked for."""

    model_config = {"frozen": True}

    name: str
    nullable: bool = False
    not_required: bool = False
    has_explicit_default: bool = False
    has_skip: bool = False
    has_skip_serializing_if: bool = False
    has_custom_with_handler: bool = False
    handler: Attribute | None = None
    skip_serializing_if: Attribute | None = None

    @property
    def markers(self) -> tuple[str, ...]:
        found: list[str] = []
        if self.nullable:
            found.append(MARKER_NULLABLE)
        if self.not_required:
            found.append(MARKER_NOT_REQUIRED)
        return tuple(found)


def strip_markers(attributes: tuple[Attribute, ...]) -> tuple[Attribute, ...]:
    """Drop ``#[nullable]`` and ``#[not_required]``; they never reach serde."""
    return tuple(attr for attr in attributes if not attr.is_marker)


def extract(
    descriptor: FieldDescriptor,
    *,
    templates: DirectiveTemplates = DEFAULT_TEMPLATES,
) -> FieldIntent:
    """Build the FieldIntent for *descriptor*.

    ``skip`` and the pair ``skip_serializing`` + ``skip_deserializing``
    (possibly split over several attributes) both count as a skipped field.
    """
    nullable = False
    not_required = False
    names: set[str] = set()
    handler: Attribute | None = None
    predicate: Attribute | None = None

    for attr in descriptor.attributes:
        if attr.is_marker:
            if attr.namespace == MARKER_NULLABLE:
                nullable = True
            else:
                not_required = True
            continue
        if attr.namespace != SERDE_NAMESPACE:
            continue
        if templates.is_owned(attr):
            continue
        names.update(d.name for d in attr.directives)
        if handler is None and any(attr.has(name) for name in HANDLER_DIRECTIVES):
            handler = attr
        if predicate is None and attr.has(DIRECTIVE_SKIP_SERIALIZING_IF):
            predicate = attr

    has_default = DIRECTIVE_DEFAULT in names
    has_skip = DIRECTIVE_SKIP in names or {
        DIRECTIVE_SKIP_SERIALIZING,
        DIRECTIVE_SKIP_DESERIALIZING,
    } <= names

    return FieldIntent(
        name=descriptor.name,
        nullable=nullable,
        not_required=not_required,
        has_explicit_default=has_default,
        has_skip=has_skip,
        has_skip_serializing_if=predicate is not None,
        has_custom_with_handler=handler is not None,
        handler=handler,
        skip_serializing_if=predicate,
    )
