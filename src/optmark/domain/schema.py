"""Schema-documentation flags derived from a SemanticCase.

The mapping is fixed and total: rewriting cases map to a pair of flags,
everything else maps to None. Whatever turns the flags into schema
attributes is an injected collaborator, so the core never depends on a
particular schema generator.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel

from optmark.domain.fields import Attribute
from optmark.domain.types import SemanticCase


class SchemaFlags(BaseModel):
    """Whether the documented property may be null and must be present."""

    model_config = {"frozen": True}

    nullable: bool
    required: bool


_FLAGS: dict[SemanticCase, SchemaFlags] = {
    SemanticCase.NULLABLE: SchemaFlags(nullable=True, required=True),
    SemanticCase.NOT_REQUIRED: SchemaFlags(nullable=False, required=False),
    SemanticCase.NULLABLE_AND_NOT_REQUIRED: SchemaFlags(nullable=True, required=False),
}


def schema_flags_for(case: SemanticCase) -> SchemaFlags | None:
    return _FLAGS.get(case)


SchemaCollaborator = Callable[[SchemaFlags], tuple[Attribute, ...]]
