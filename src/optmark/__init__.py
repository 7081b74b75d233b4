"""optmark — nullable / not-required marker resolution for serde-style fields."""

from optmark.domain.fields import Attribute, Directive, FieldDescriptor, TypeDefinition
from optmark.domain.pipeline import process_definition, process_field
from optmark.domain.types import SemanticCase

__version__ = "0.2.0"

__all__ = [
    "Attribute",
    "Directive",
    "FieldDescriptor",
    "SemanticCase",
    "TypeDefinition",
    "__version__",
    "process_definition",
    "process_field",
]
