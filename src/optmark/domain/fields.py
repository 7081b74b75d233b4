"""Field descriptor models and the attribute text format.

An attribute is ``#[namespace]`` or ``#[namespace(directive, ...)]`` where
each directive is ``name``, ``name = value`` or ``name(...)``. Values are
kept as raw literal text so rendering reproduces the input byte for byte.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from optmark.domain.errors import AttributeSyntaxError
from optmark.domain.type_shape import recognize_shape
from optmark.domain.types import MARKERS, TypeShape

_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_CLOSERS = {"(": ")", "[": "]", "<": ">"}


class Directive(BaseModel):
    """A single ``name`` or ``name = value`` token inside an attribute."""

    model_config = {"frozen": True}

    name: str
    value: str | None = None

    @property
    def literal(self) -> str | None:
        """The value with surrounding double quotes removed."""
        value = self.value
        if value is not None and len(value) >= 2 and value[0] == value[-1] == '"':
            return value[1:-1]
        return value

    def render(self) -> str:
        if self.value is None:
            return self.name
        # List-style arguments keep their parentheses.
        if self.value.startswith("("):
            return f"{self.name}{self.value}"
        return f"{self.name} = {self.value}"


class Attribute(BaseModel):
    """One ``#[namespace(...)]`` attribute attached to a field."""

    model_config = {"frozen": True}

    namespace: str
    directives: tuple[Directive, ...] = Field(default_factory=tuple)

    @property
    def is_marker(self) -> bool:
        return self.namespace in MARKERS and not self.directives

    def has(self, name: str) -> bool:
        return any(d.name == name for d in self.directives)

    def render(self) -> str:
        if not self.directives:
            return f"#[{self.namespace}]"
        inner = ", ".join(d.render() for d in self.directives)
        return f"#[{self.namespace}({inner})]"


class FieldDescriptor(BaseModel):
    """A field as handed over by the type-definition parser."""

    model_config = {"frozen": True, "populate_by_name": True}

    name: str
    type_name: str = Field(default="", alias="type")
    shape: TypeShape | None = None
    attributes: tuple[Attribute, ...] = Field(default_factory=tuple)

    @field_validator("attributes", mode="before")
    @classmethod
    def _parse_attribute_text(cls, value: Any) -> Any:
        """Accept attribute text wherever a structured attribute is expected."""
        if isinstance(value, (list, tuple)):
            return tuple(parse_attribute(v) if isinstance(v, str) else v for v in value)
        return value

    @model_validator(mode="after")
    def _require_type_information(self) -> FieldDescriptor:
        if not self.type_name and self.shape is None:
            msg = f"field {self.name!r} needs a declared type or an explicit shape"
            raise ValueError(msg)
        return self

    @property
    def resolved_shape(self) -> TypeShape:
        """The explicit shape tag, or the shape recognized from the declared type."""
        if self.shape is not None:
            return self.shape
        return recognize_shape(self.type_name)

    def with_attributes(self, attributes: tuple[Attribute, ...]) -> FieldDescriptor:
        return self.model_copy(update={"attributes": attributes})


class VariantDescriptor(BaseModel):
    """An enum variant and the fields it carries."""

    model_config = {"frozen": True}

    name: str
    fields: tuple[FieldDescriptor, ...] = Field(default_factory=tuple)


class TypeDefinition(BaseModel):
    """A struct or enum definition whose fields are to be rewritten.

    ``kind`` is left as free text so unsupported items surface as a
    diagnostic instead of a validation error.
    """

    model_config = {"frozen": True}

    name: str
    kind: str = "struct"
    fields: tuple[FieldDescriptor, ...] = Field(default_factory=tuple)
    variants: tuple[VariantDescriptor, ...] = Field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Attribute text parsing
# ---------------------------------------------------------------------------


def _split_top_level(text: str) -> list[str]:
    """Split on commas that are not nested in brackets or string literals."""
    parts: list[str] = []
    stack: list[str] = []
    current: list[str] = []
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif stack and ch == stack[-1]:
            stack.pop()
        elif ch == "," and not stack:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    if in_string or stack:
        msg = f"unbalanced attribute arguments: {text!r}"
        raise AttributeSyntaxError(msg)
    parts.append("".join(current))
    return parts


def _parse_directive(item: str) -> Directive:
    match = _IDENT.match(item)
    if match is None:
        msg = f"expected a directive name, got {item!r}"
        raise AttributeSyntaxError(msg)
    name = match.group()
    rest = item[match.end() :].strip()
    if not rest:
        return Directive(name=name)
    if rest.startswith("="):
        value = rest[1:].strip()
        if not value:
            msg = f"missing value for directive {name!r}"
            raise AttributeSyntaxError(msg)
        return Directive(name=name, value=value)
    if rest.startswith("(") and rest.endswith(")"):
        return Directive(name=name, value=rest)
    msg = f"unexpected text after directive {name!r}: {rest!r}"
    raise AttributeSyntaxError(msg)


def parse_attribute(text: str) -> Attribute:
    """Parse ``#[ns(...)]`` (the ``#[...]`` wrapper is optional)."""
    body = text.strip()
    if body.startswith("#[") and body.endswith("]"):
        body = body[2:-1].strip()
    match = _IDENT.match(body)
    if match is None:
        msg = f"expected an attribute namespace, got {text!r}"
        raise AttributeSyntaxError(msg)
    namespace = match.group()
    rest = body[match.end() :].strip()
    if not rest:
        return Attribute(namespace=namespace)
    if not (rest.startswith("(") and rest.endswith(")")):
        msg = f"malformed attribute: {text!r}"
        raise AttributeSyntaxError(msg)
    items = [part.strip() for part in _split_top_level(rest[1:-1])]
    directives = tuple(_parse_directive(item) for item in items if item)
    return Attribute(namespace=namespace, directives=directives)
