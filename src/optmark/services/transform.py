"""TransformService — resolve markers for a whole type definition.

Two operations over the same pipeline:

* ``transform``: rewrite every field, or refuse with every diagnostic.
* ``check``: linter mode, report diagnostics, never rewrite.

Log lines emitted while a definition is processed carry its name as the
``definition`` context variable (and ``source`` for file input).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from optmark.domain.errors import UnsupportedItemError
from optmark.domain.fields import TypeDefinition
from optmark.domain.pipeline import DefinitionOutcome, ResolveOptions, process_definition
from optmark.services.base import BaseService
from optmark.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def load_definition(path: Path) -> TypeDefinition:
    """Read a JSON type definition from *path*.

    Raises:
        OSError: the file cannot be read.
        ValueError: the file is not JSON or does not describe a type
            (``json.JSONDecodeError`` and pydantic's ``ValidationError``
            are both ``ValueError`` subclasses).
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    return TypeDefinition.model_validate(raw)


class TransformService(BaseService):
    """Runs the extract/resolve/synthesize pipeline for type definitions."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def transform(self, definition: TypeDefinition) -> ServiceResult:
        """Rewrite every field, or fail with all diagnostics collected."""
        op = "transform"
        with structlog.contextvars.bound_contextvars(definition=definition.name):
            outcome = self._run(definition, op=op)
            if isinstance(outcome, ServiceResult):
                return outcome
            warnings = self._skip_warnings(outcome)

        self._dispatch_event(
            "post_transform",
            {
                "definition_name": definition.name,
                "field_count": len(outcome.fields),
                "diagnostic_count": len(outcome.diagnostics),
            },
            warnings,
        )

        if not outcome.ok:
            diagnostics = [d.model_dump(mode="json") for d in outcome.diagnostics]
            return ServiceResult(
                ok=False,
                op=op,
                warnings=warnings,
                error=ServiceError(
                    code="FIELD_DIAGNOSTICS",
                    message=f"{len(diagnostics)} field diagnostic(s) in {definition.name}",
                    detail={"diagnostics": diagnostics},
                ),
            )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": definition.name,
                "kind": definition.kind,
                "fields": self._field_rows(outcome),
                "definition": outcome.definition.model_dump(mode="json", by_alias=True),
            },
            warnings=warnings,
            meta={"count": len(outcome.fields), "config": self._config_label()},
        )

    def check(self, definition: TypeDefinition) -> ServiceResult:
        """Report diagnostics for *definition* without rewriting anything."""
        op = "check"
        with structlog.contextvars.bound_contextvars(definition=definition.name):
            outcome = self._run(definition, op=op)
            warnings = [] if isinstance(outcome, ServiceResult) else self._skip_warnings(outcome)
        if isinstance(outcome, ServiceResult):
            issues = outcome.diagnostics
            return ServiceResult(
                ok=True,
                op=op,
                data={"name": definition.name, "issues": issues, "count": len(issues)},
            )

        issues = [d.model_dump(mode="json") for d in outcome.diagnostics]
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": definition.name, "issues": issues, "count": len(issues)},
            warnings=warnings,
        )

    def transform_file(self, path: Path) -> ServiceResult:
        """Load a JSON definition from *path* and transform it."""
        with structlog.contextvars.bound_contextvars(source=str(path)):
            definition = self._load(path, op="transform")
            if isinstance(definition, ServiceResult):
                return definition
            return self.transform(definition)

    def check_file(self, path: Path) -> ServiceResult:
        """Load a JSON definition from *path* and check it."""
        with structlog.contextvars.bound_contextvars(source=str(path)):
            definition = self._load(path, op="check")
            if isinstance(definition, ServiceResult):
                return definition
            return self.check(definition)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _config_label(self) -> str:
        path = self._settings.config_path
        return str(path) if path is not None else "defaults"

    def _options(self) -> ResolveOptions:
        schema = None
        if self._settings.schema_metadata.enabled:
            schema = self._plugins.schema_collaborator()
        return ResolveOptions(
            templates=self._settings.directives.to_templates(),
            policy=self._settings.resolver.to_policy(),
            schema=schema,
        )

    def _run(self, definition: TypeDefinition, *, op: str) -> DefinitionOutcome | ServiceResult:
        try:
            outcome = process_definition(definition, self._options())
        except UnsupportedItemError as exc:
            logger.warning("Unsupported item %s of kind %r", exc.name, exc.kind)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="UNSUPPORTED_ITEM",
                    message=exc.message,
                    detail={"diagnostics": [exc.to_diagnostic().model_dump(mode="json")]},
                ),
            )
        for field in outcome.fields:
            logger.debug("Resolved field %s as %s", field.location, field.case)
        return outcome

    @staticmethod
    def _load(path: Path, *, op: str) -> TypeDefinition | ServiceResult:
        try:
            return load_definition(path)
        except (OSError, ValueError) as exc:
            logger.warning("Cannot load definition from %s", path)
            detail: dict[str, Any] = {"path": str(path)}
            if isinstance(exc, ValidationError):
                detail["errors"] = exc.errors(include_url=False, include_context=False)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_DEFINITION",
                    message=f"Error reading {path}: {exc}",
                    detail=detail,
                ),
            )

    @staticmethod
    def _skip_warnings(outcome: DefinitionOutcome) -> list[str]:
        warnings: list[str] = []
        for field in outcome.fields:
            if not field.ignored_markers:
                continue
            markers = ", ".join(f"#[{m}]" for m in field.ignored_markers)
            logger.warning("Ignoring %s on skipped field %s", markers, field.location)
            warnings.append(f"{field.location}: {markers} ignored on a #[serde(skip)] field")
        return warnings

    @staticmethod
    def _field_rows(outcome: DefinitionOutcome) -> list[dict[str, Any]]:
        return [
            {
                "name": field.name,
                "variant": field.variant,
                "case": str(field.case),
                "attributes": [attr.render() for attr in field.attributes],
            }
            for field in outcome.fields
        ]
