"""serde directive templates emitted for each rewriting case.

Any attribute equal to one of these templates is "owned": the extractor
ignores it and the synthesizer replaces it. This is what makes a second
pass over already rewritten fields a no-op.
"""

from __future__ import annotations

from itertools import product

from pydantic import BaseModel

from optmark.domain.fields import Attribute, Directive
from optmark.domain.types import (
    DIRECTIVE_DEFAULT,
    DIRECTIVE_SKIP_SERIALIZING_IF,
    REWRITE_CASES,
    SERDE_NAMESPACE,
    SemanticCase,
)


def _quoted(path: str) -> str:
    return f'"{path}"'


class DirectiveTemplates(BaseModel):
    """Handler paths used when synthesizing serde attributes."""

    model_config = {"frozen": True}

    nullable_handler: str = "Option"
    unwrap_or_skip_handler: str = "serde_with::rust::unwrap_or_skip"
    double_option_handler: str = "serde_with::rust::double_option"
    is_none_predicate: str = "Option::is_none"

    def attribute_for(
        self,
        case: SemanticCase,
        *,
        include_default: bool = True,
        include_predicate: bool = True,
    ) -> Attribute:
        """Build the serde attribute for a rewriting *case*.

        ``include_default`` and ``include_predicate`` are dropped when the
        field already carries its own ``default`` or ``skip_serializing_if``.
        Both are ignored for ``NULLABLE``, which emits neither.
        """
        if case is SemanticCase.NULLABLE:
            return Attribute(
                namespace=SERDE_NAMESPACE,
                directives=(Directive(name="with", value=_quoted(self.nullable_handler)),),
            )
        if case is SemanticCase.NOT_REQUIRED:
            handler = self.unwrap_or_skip_handler
        elif case is SemanticCase.NULLABLE_AND_NOT_REQUIRED:
            handler = self.double_option_handler
        else:
            msg = f"no directives are synthesized for {case}"
            raise ValueError(msg)

        directives: list[Directive] = []
        if include_default:
            directives.append(Directive(name=DIRECTIVE_DEFAULT))
        if include_predicate:
            directives.append(
                Directive(name=DIRECTIVE_SKIP_SERIALIZING_IF, value=_quoted(self.is_none_predicate))
            )
        directives.append(Directive(name="with", value=_quoted(handler)))
        return Attribute(namespace=SERDE_NAMESPACE, directives=tuple(directives))

    @property
    def owned(self) -> frozenset[Attribute]:
        """Every attribute this template set can emit."""
        return frozenset(
            self.attribute_for(case, include_default=default, include_predicate=predicate)
            for case in REWRITE_CASES
            for default, predicate in product((True, False), repeat=2)
        )

    def is_owned(self, attribute: Attribute) -> bool:
        return attribute in self.owned


DEFAULT_TEMPLATES = DirectiveTemplates()
