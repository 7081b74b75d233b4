"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, optmark.toml only contains overrides.
An empty (or missing) optmark.toml reproduces the stock serde_with expansion.
"""

from __future__ import annotations

from pydantic import BaseModel

from optmark.domain.resolver import ResolverPolicy
from optmark.domain.templates import DirectiveTemplates
from optmark.domain.types import DefaultPolicy, SkipPolicy

# --- optmark.toml sections ---


class ResolverConfig(BaseModel):
    """[resolver] section."""

    model_config = {"frozen": True}

    skip_policy: SkipPolicy = SkipPolicy.IGNORE
    default_policy: DefaultPolicy = DefaultPolicy.PRESERVE

    def to_policy(self) -> ResolverPolicy:
        return ResolverPolicy(skip_policy=self.skip_policy, default_policy=self.default_policy)


class DirectivesConfig(BaseModel):
    """[directives] section."""

    model_config = {"frozen": True}

    nullable_handler: str = "Option"
    unwrap_or_skip_handler: str = "serde_with::rust::unwrap_or_skip"
    double_option_handler: str = "serde_with::rust::double_option"
    is_none_predicate: str = "Option::is_none"

    def to_templates(self) -> DirectiveTemplates:
        return DirectiveTemplates.model_validate(self.model_dump())


class SchemaMetadataConfig(BaseModel):
    """[schema_metadata] section."""

    model_config = {"frozen": True}

    enabled: bool = False
    namespace: str = "schema"
