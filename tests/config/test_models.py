"""Tests for the optmark.toml section models."""

import pytest
from pydantic import ValidationError

from optmark.config.models import DirectivesConfig, ResolverConfig, SchemaMetadataConfig
from optmark.domain.resolver import ResolverPolicy
from optmark.domain.templates import DEFAULT_TEMPLATES
from optmark.domain.types import DefaultPolicy, SkipPolicy


class TestResolverConfig:
    def test_defaults_match_pipeline_defaults(self) -> None:
        assert ResolverConfig().to_policy() == ResolverPolicy()

    def test_to_policy(self) -> None:
        cfg = ResolverConfig(skip_policy="error", default_policy="error")
        policy = cfg.to_policy()
        assert policy.skip_policy is SkipPolicy.ERROR
        assert policy.default_policy is DefaultPolicy.ERROR

    def test_rejects_unknown_policy(self) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig(default_policy="overwrite")


class TestDirectivesConfig:
    def test_defaults_match_stock_templates(self) -> None:
        assert DirectivesConfig().to_templates() == DEFAULT_TEMPLATES

    def test_to_templates(self) -> None:
        templates = DirectivesConfig(unwrap_or_skip_handler="crate::unwrap").to_templates()
        assert templates.unwrap_or_skip_handler == "crate::unwrap"
        assert templates.nullable_handler == "Option"


class TestSchemaMetadataConfig:
    def test_defaults(self) -> None:
        cfg = SchemaMetadataConfig()
        assert cfg.enabled is False
        assert cfg.namespace == "schema"

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            SchemaMetadataConfig().enabled = True  # type: ignore[misc]
