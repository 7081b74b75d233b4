"""Directive synthesis: SemanticCase -> the field's new attribute list."""

from __future__ import annotations

from collections.abc import Collection

from optmark.domain.extractor import FieldIntent, strip_markers
from optmark.domain.fields import Attribute
from optmark.domain.templates import DEFAULT_TEMPLATES, DirectiveTemplates
from optmark.domain.types import REWRITE_CASES, SemanticCase

DirectiveSet = tuple[Attribute, ...]


def synthesize(
    case: SemanticCase,
    intent: FieldIntent,
    existing: tuple[Attribute, ...],
    *,
    templates: DirectiveTemplates = DEFAULT_TEMPLATES,
    extra_owned: Collection[Attribute] = (),
) -> DirectiveSet:
    """Emit the attribute list for a field resolved to *case*.

    Non-rewriting cases return *existing* unchanged (minus markers).
    Rewriting cases keep every attribute they do not own, in order, and
    append one synthesized serde attribute. A caller-supplied ``default``
    or ``skip_serializing_if`` is left where it is and suppresses the
    synthesized directive of the same name, so no directive is repeated.
    """
    kept = strip_markers(existing)
    if case not in REWRITE_CASES:
        return kept

    kept = tuple(
        attr for attr in kept if not templates.is_owned(attr) and attr not in extra_owned
    )
    synthesized = templates.attribute_for(
        case,
        include_default=not intent.has_explicit_default,
        include_predicate=not intent.has_skip_serializing_if,
    )
    return (*kept, synthesized)
