"""Shared pytest fixtures and test helpers for optmark tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from optmark.config.settings import OptmarkSettings
from optmark.domain.fields import Attribute, FieldDescriptor
from optmark.plugins.manager import PluginManager
from optmark.services.transform import TransformService


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep stray OPTMARK_* variables and config files out of every test."""
    monkeypatch.delenv("OPTMARK_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() calls made by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    opt_level = logging.getLogger("optmark").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("optmark").setLevel(opt_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> OptmarkSettings:
    """Default settings rooted at a temp directory."""
    return OptmarkSettings.from_cli(search_from=tmp_path)


@pytest.fixture
def service(settings: OptmarkSettings) -> TransformService:
    """TransformService with an empty plugin manager (no entry points)."""
    return TransformService(settings, PluginManager())


@pytest.fixture
def write_definition(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a JSON type definition into the temp dir and return its path."""

    def _write(data: dict[str, Any], name: str = "item.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def field(name: str, type_name: str, *attributes: str) -> FieldDescriptor:
    """Build a FieldDescriptor from attribute text."""
    return FieldDescriptor.model_validate(
        {"name": name, "type": type_name, "attributes": list(attributes)}
    )


def rendered(attributes: tuple[Attribute, ...]) -> list[str]:
    return [attr.render() for attr in attributes]


# ---------------------------------------------------------------------------
# Reference serde interpreter
#
# Applies the serde semantics of the directives optmark emits to a single
# struct field, so tests can check JSON behaviour without a Rust toolchain.
# Option<T> values are plain Python values (None for None); the inner layer
# of Option<Option<T>> is wrapped in Some.
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Some:
    value: Any


class MissingField(Exception):
    """serde's ``missing field`` error."""


class InvalidType(Exception):
    """serde's ``invalid type`` error."""


class DuplicateDirective(Exception):
    """serde rejects a directive given twice on one field."""


def serde_directives(attributes: tuple[Attribute, ...]) -> dict[str, str | None]:
    """Collect serde directives by name; serde rejects a name given twice."""
    found: dict[str, str | None] = {}
    for attr in attributes:
        if attr.namespace != "serde":
            continue
        for directive in attr.directives:
            if directive.name in found:
                raise DuplicateDirective(directive.name)
            found[directive.name] = directive.literal
    return found


def serialize_field(attributes: tuple[Attribute, ...], name: str, value: Any) -> dict[str, Any]:
    """Serialize one field into a JSON object fragment."""
    d = serde_directives(attributes)
    if "skip" in d or "skip_serializing" in d:
        return {}
    if d.get("skip_serializing_if") == "Option::is_none" and value is None:
        return {}
    handler = d.get("with")
    if handler == "serde_with::rust::double_option":
        if value is None:
            return {name: None}
        assert isinstance(value, Some)
        return {name: value.value}
    return {name: value}


def deserialize_field(
    attributes: tuple[Attribute, ...],
    name: str,
    payload: dict[str, Any],
    defaults: dict[str, Callable[[], Any]] | None = None,
) -> Any:
    """Deserialize one field from a JSON object."""
    d = serde_directives(attributes)
    if "skip" in d or "skip_deserializing" in d:
        return None
    handler = d.get("with")
    if name not in payload:
        if "default" in d:
            path = d["default"]
            return None if path is None else (defaults or {})[path]()
        # serde only treats a missing Option as None when no `with` is set.
        if handler is None:
            return None
        raise MissingField(name)

    raw = payload[name]
    if handler == "serde_with::rust::double_option":
        return Some(raw)
    if handler == "serde_with::rust::unwrap_or_skip" and raw is None:
        raise InvalidType(name)
    return raw
