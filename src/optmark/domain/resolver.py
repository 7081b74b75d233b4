"""Rule resolution: FieldIntent + declared type shape -> SemanticCase.

Rules are checked in order; the first one that applies decides:

1. ``#[serde(skip)]``           -> SKIPPED (or a conflict under SkipPolicy.ERROR)
2. no markers                   -> PLAIN_OPTIONAL
3. markers on a non-Option type -> MalformedTypeShapeError
4. markers + custom handler     -> ConflictError
5. not_required + default       -> ConflictError under DefaultPolicy.ERROR
6. nullable only                -> NULLABLE, or ConflictError with skip_serializing_if
7. not_required only            -> NOT_REQUIRED
8. both on Option<Option<T>>    -> NULLABLE_AND_NOT_REQUIRED
9. both on Option<T>            -> MalformedTypeShapeError

A nullable field must always write its key, so a user predicate that can
omit it is a conflict. Under not_required the user predicate replaces the
synthesized one.
"""

from __future__ import annotations

from pydantic import BaseModel

from optmark.domain.errors import ConflictError, MalformedTypeShapeError
from optmark.domain.extractor import FieldIntent
from optmark.domain.types import (
    MARKER_NOT_REQUIRED,
    DefaultPolicy,
    SemanticCase,
    SkipPolicy,
    TypeShape,
)

SKIP_ATTRIBUTE = "#[serde(skip)]"
DEFAULT_ATTRIBUTE = "#[serde(default)]"


class ResolverPolicy(BaseModel):
    """Tie-breaks for combinations with more than one sensible reading."""

    model_config = {"frozen": True}

    skip_policy: SkipPolicy = SkipPolicy.IGNORE
    default_policy: DefaultPolicy = DefaultPolicy.PRESERVE


DEFAULT_POLICY = ResolverPolicy()


def _marker_attrs(markers: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(f"#[{m}]" for m in markers)


def _describe(markers: tuple[str, ...]) -> str:
    return " and ".join(f"`{attr}`" for attr in _marker_attrs(markers))


def resolve(
    intent: FieldIntent,
    shape: TypeShape,
    *,
    policy: ResolverPolicy = DEFAULT_POLICY,
) -> SemanticCase:
    """Select the semantic case for one field.

    Raises:
        ConflictError: markers clash with an existing directive.
        MalformedTypeShapeError: the declared type cannot carry the markers.
    """
    markers = intent.markers

    if intent.has_skip:
        if markers and policy.skip_policy is SkipPolicy.ERROR:
            msg = f"{_describe(markers)} cannot be used in combination with `{SKIP_ATTRIBUTE}`"
            raise ConflictError(intent.name, msg, *_marker_attrs(markers), SKIP_ATTRIBUTE)
        return SemanticCase.SKIPPED

    if not markers:
        return SemanticCase.PLAIN_OPTIONAL

    if not shape.is_optional:
        msg = f"{_describe(markers)} may only be used on fields of type `Option<T>`."
        raise MalformedTypeShapeError(intent.name, msg, *_marker_attrs(markers))

    if intent.handler is not None:
        handler = intent.handler.render()
        msg = f"{_describe(markers)} cannot be used in combination with `{handler}`"
        raise ConflictError(intent.name, msg, *_marker_attrs(markers), handler)

    if (
        intent.not_required
        and intent.has_explicit_default
        and policy.default_policy is DefaultPolicy.ERROR
    ):
        msg = (
            f"{_describe((MARKER_NOT_REQUIRED,))} cannot be used in combination "
            f"with `{DEFAULT_ATTRIBUTE}`"
        )
        raise ConflictError(
            intent.name, msg, *_marker_attrs((MARKER_NOT_REQUIRED,)), DEFAULT_ATTRIBUTE
        )

    if intent.nullable and not intent.not_required:
        if intent.skip_serializing_if is not None:
            predicate = intent.skip_serializing_if.render()
            msg = f"{_describe(markers)} cannot be used in combination with `{predicate}`"
            raise ConflictError(intent.name, msg, *_marker_attrs(markers), predicate)
        return SemanticCase.NULLABLE
    if intent.not_required and not intent.nullable:
        return SemanticCase.NOT_REQUIRED
    if shape is TypeShape.DOUBLE_OPTIONAL:
        return SemanticCase.NULLABLE_AND_NOT_REQUIRED

    msg = (
        f"{_describe(markers)} together may only be used on fields of type "
        "`Option<Option<T>>`."
    )
    raise MalformedTypeShapeError(intent.name, msg, *_marker_attrs(markers))
