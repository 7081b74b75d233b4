"""Classification enums and marker names.

``SemanticCase`` is the decision-table outcome for a single field;
``TypeShape`` is how many layers of ``Option`` the declared type carries.
"""

from __future__ import annotations

from enum import StrEnum

# --- Marker attributes ---

MARKER_NULLABLE = "nullable"
MARKER_NOT_REQUIRED = "not_required"
MARKERS = (MARKER_NULLABLE, MARKER_NOT_REQUIRED)

SERDE_NAMESPACE = "serde"

# serde directive names the extractor inspects
DIRECTIVE_DEFAULT = "default"
DIRECTIVE_SKIP = "skip"
DIRECTIVE_SKIP_SERIALIZING = "skip_serializing"
DIRECTIVE_SKIP_DESERIALIZING = "skip_deserializing"
DIRECTIVE_SKIP_SERIALIZING_IF = "skip_serializing_if"
HANDLER_DIRECTIVES = ("with", "serialize_with", "deserialize_with")


class ItemKind(StrEnum):
    """Kinds of type definition the pipeline accepts."""

    STRUCT = "struct"
    ENUM = "enum"


class TypeShape(StrEnum):
    """Optionality depth of a declared field type."""

    NOT_OPTIONAL = "not_optional"
    OPTIONAL = "optional"
    DOUBLE_OPTIONAL = "double_optional"

    @property
    def is_optional(self) -> bool:
        return self is not TypeShape.NOT_OPTIONAL


class SemanticCase(StrEnum):
    """Resolved presence/null semantics for one field."""

    PLAIN_OPTIONAL = "plain_optional"
    NULLABLE = "nullable"
    NOT_REQUIRED = "not_required"
    NULLABLE_AND_NOT_REQUIRED = "nullable_and_not_required"
    SKIPPED = "skipped"
    CONFLICT = "conflict"


# Cases that replace the field's serde directives.
REWRITE_CASES: tuple[SemanticCase, ...] = (
    SemanticCase.NULLABLE,
    SemanticCase.NOT_REQUIRED,
    SemanticCase.NULLABLE_AND_NOT_REQUIRED,
)


class DiagnosticCode(StrEnum):
    """Diagnostic categories reported per field."""

    CONFLICT = "conflict"
    MALFORMED_TYPE_SHAPE = "malformed_type_shape"
    UNSUPPORTED_ITEM = "unsupported_item"


class SkipPolicy(StrEnum):
    """How a marker on a ``#[serde(skip)]`` field is treated."""

    IGNORE = "ignore"
    ERROR = "error"


class DefaultPolicy(StrEnum):
    """How ``#[not_required]`` combines with an explicit ``#[serde(default)]``."""

    PRESERVE = "preserve"
    ERROR = "error"
