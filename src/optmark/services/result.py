"""ServiceResult and ServiceError — the service contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI and any embedding build step consume this type.

Error codes produced by :class:`~optmark.services.transform.TransformService`:

- ``INVALID_DEFINITION``: the input file is unreadable, not JSON, or not a
  type definition.
- ``UNSUPPORTED_ITEM``: the item is neither a struct nor an enum.
- ``FIELD_DIAGNOSTICS``: one or more fields were rejected; the field
  diagnostics are listed under ``detail["diagnostics"]``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (``"transform"`` or ``"check"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, such as markers ignored on skipped fields.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (field count, config file in effect).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def diagnostics(self) -> list[dict[str, Any]]:
        """Field diagnostics carried by a failed result, as JSON dicts."""
        if self.error is None:
            return []
        return list(self.error.detail.get("diagnostics", []))
