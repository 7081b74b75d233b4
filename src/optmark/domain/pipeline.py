"""Per-field and per-definition resolution pipeline.

Call-order contract: ``process_definition`` must run, and its rewritten
attributes must replace the originals, before any serialization code
generation reads the fields. Markers are not valid serde input.

Every field is processed independently. Diagnostics are collected for all
fields in declaration order (struct fields, or enum variants and their
fields) so a caller can report every problem in one pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property

from pydantic import BaseModel, Field

from optmark.domain.errors import FieldDiagnostic, FieldDiagnosticError, UnsupportedItemError
from optmark.domain.extractor import extract
from optmark.domain.fields import Attribute, FieldDescriptor, TypeDefinition, VariantDescriptor
from optmark.domain.resolver import DEFAULT_POLICY, ResolverPolicy, resolve
from optmark.domain.schema import SchemaCollaborator, schema_flags_for
from optmark.domain.synthesizer import synthesize
from optmark.domain.templates import DEFAULT_TEMPLATES, DirectiveTemplates
from optmark.domain.types import REWRITE_CASES, ItemKind, SemanticCase


@dataclass(frozen=True)
class ResolveOptions:
    """Everything the pipeline needs besides the fields themselves."""

    templates: DirectiveTemplates = DEFAULT_TEMPLATES
    policy: ResolverPolicy = DEFAULT_POLICY
    schema: SchemaCollaborator | None = field(default=None, compare=False)

    @cached_property
    def schema_owned(self) -> frozenset[Attribute]:
        """Every attribute the schema collaborator can emit."""
        if self.schema is None:
            return frozenset()
        owned: set[Attribute] = set()
        for case in REWRITE_CASES:
            flags = schema_flags_for(case)
            if flags is not None:
                owned.update(self.schema(flags))
        return frozenset(owned)


class FieldOutcome(BaseModel):
    """Result of resolving one field."""

    model_config = {"frozen": True}

    name: str
    case: SemanticCase
    attributes: tuple[Attribute, ...]
    variant: str | None = None
    diagnostic: FieldDiagnostic | None = None
    ignored_markers: tuple[str, ...] = Field(default_factory=tuple)

    @property
    def location(self) -> str:
        if self.variant is None:
            return self.name
        return f"{self.variant}.{self.name}"


class DefinitionOutcome(BaseModel):
    """Result of resolving every field of a type definition."""

    model_config = {"frozen": True}

    definition: TypeDefinition
    fields: tuple[FieldOutcome, ...]
    diagnostics: tuple[FieldDiagnostic, ...]

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def process_field(
    descriptor: FieldDescriptor,
    options: ResolveOptions | None = None,
    *,
    variant: str | None = None,
) -> FieldOutcome:
    """Extract, resolve and synthesize one field.

    A field that fails resolution keeps its original attributes and
    carries the diagnostic instead.
    """
    opts = options or ResolveOptions()
    intent = extract(descriptor, templates=opts.templates)
    try:
        case = resolve(intent, descriptor.resolved_shape, policy=opts.policy)
    except FieldDiagnosticError as exc:
        return FieldOutcome(
            name=descriptor.name,
            case=SemanticCase.CONFLICT,
            attributes=descriptor.attributes,
            variant=variant,
            diagnostic=exc.to_diagnostic(variant=variant),
        )

    attributes = synthesize(
        case,
        intent,
        descriptor.attributes,
        templates=opts.templates,
        extra_owned=opts.schema_owned,
    )
    flags = schema_flags_for(case)
    if opts.schema is not None and flags is not None:
        attributes = (*attributes, *opts.schema(flags))

    return FieldOutcome(
        name=descriptor.name,
        case=case,
        attributes=attributes,
        variant=variant,
        ignored_markers=intent.markers if case is SemanticCase.SKIPPED else (),
    )


def _rewrite(
    fields: tuple[FieldDescriptor, ...],
    outcomes: list[FieldOutcome],
    options: ResolveOptions,
    variant: str | None = None,
) -> tuple[FieldDescriptor, ...]:
    rewritten: list[FieldDescriptor] = []
    for descriptor in fields:
        outcome = process_field(descriptor, options, variant=variant)
        outcomes.append(outcome)
        rewritten.append(descriptor.with_attributes(outcome.attributes))
    return tuple(rewritten)


def process_definition(
    definition: TypeDefinition,
    options: ResolveOptions | None = None,
) -> DefinitionOutcome:
    """Resolve every field of a struct, or of every variant of an enum.

    Raises:
        UnsupportedItemError: *definition* is neither a struct nor an enum.
    """
    opts = options or ResolveOptions()
    outcomes: list[FieldOutcome] = []

    if definition.kind == ItemKind.STRUCT:
        rewritten = definition.model_copy(
            update={"fields": _rewrite(definition.fields, outcomes, opts)}
        )
    elif definition.kind == ItemKind.ENUM:
        variants = tuple(
            VariantDescriptor(
                name=variant.name,
                fields=_rewrite(variant.fields, outcomes, opts, variant=variant.name),
            )
            for variant in definition.variants
        )
        rewritten = definition.model_copy(update={"variants": variants})
    else:
        raise UnsupportedItemError(definition.name, definition.kind)

    diagnostics = tuple(o.diagnostic for o in outcomes if o.diagnostic is not None)
    return DefinitionOutcome(definition=rewritten, fields=tuple(outcomes), diagnostics=diagnostics)
