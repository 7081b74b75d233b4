"""Diagnostics and the exceptions that carry them.

Resolution failures are raised per field and collected by the pipeline;
they never abort the remaining fields of a definition.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from optmark.domain.types import DiagnosticCode


class FieldDiagnostic(BaseModel):
    """One reportable problem tied to a field and the elements involved."""

    model_config = {"frozen": True}

    code: DiagnosticCode
    field: str
    message: str
    elements: tuple[str, ...] = Field(default_factory=tuple)
    variant: str | None = None

    @property
    def location(self) -> str:
        if self.variant is None:
            return self.field
        return f"{self.variant}.{self.field}"


class OptmarkError(Exception):
    """Base class for all optmark errors."""


class AttributeSyntaxError(OptmarkError, ValueError):
    """Attribute text could not be parsed."""


class FieldDiagnosticError(OptmarkError):
    """A field's markers cannot be turned into directives."""

    code: DiagnosticCode = DiagnosticCode.CONFLICT

    def __init__(self, field: str, message: str, *elements: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
        self.elements = elements

    def to_diagnostic(self, *, variant: str | None = None) -> FieldDiagnostic:
        return FieldDiagnostic(
            code=self.code,
            field=self.field,
            message=self.message,
            elements=self.elements,
            variant=variant,
        )


class ConflictError(FieldDiagnosticError):
    """Markers clash with an existing directive or with each other."""

    code = DiagnosticCode.CONFLICT


class MalformedTypeShapeError(FieldDiagnosticError):
    """The declared type cannot carry the requested markers."""

    code = DiagnosticCode.MALFORMED_TYPE_SHAPE


class UnsupportedItemError(OptmarkError):
    """The definition is neither a struct nor an enum."""

    def __init__(self, name: str, kind: str) -> None:
        message = "The attribute can only be applied to struct or enum definitions."
        super().__init__(message)
        self.name = name
        self.kind = kind
        self.message = message

    def to_diagnostic(self) -> FieldDiagnostic:
        return FieldDiagnostic(
            code=DiagnosticCode.UNSUPPORTED_ITEM,
            field=self.name,
            message=self.message,
            elements=(self.kind,),
        )
