"""Tests for operation-specific Rich renderers."""

from optmark.output.renderers import render_quiet, render_result
from optmark.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


DIAGNOSTIC = {
    "code": "malformed_type_shape",
    "field": "count",
    "message": "`#[nullable]` may only be used on fields of type `Option<T>`.",
    "elements": ["#[nullable]"],
    "variant": None,
}


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("transform", "INVALID_DEFINITION", "Error reading x"))
        assert "ERROR" in output
        assert "transform" in output
        assert "Error reading x" in output

    def test_lists_diagnostics(self) -> None:
        result = _err("transform", "FIELD_DIAGNOSTICS", "1 issue", diagnostics=[DIAGNOSTIC])
        output = render_result(result)
        assert "malformed_type_shape [count]" in output
        assert "#[nullable]" in output

    def test_variant_location(self) -> None:
        issue = {**DIAGNOSTIC, "variant": "Created"}
        output = render_result(_err("transform", "FIELD_DIAGNOSTICS", "1", diagnostics=[issue]))
        assert "[Created.count]" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("transform", "INVALID_DEFINITION", "Bad", path="item.json")
        output = render_result(result, verbose=True)
        assert "path: item.json" in output

    def test_no_error_object(self) -> None:
        output = render_result(ServiceResult(ok=False, op="test"))
        assert "Unknown error" in output


# ── Transform renderer ───────────────────────────────────────────────


class TestTransformRenderer:
    def test_table(self) -> None:
        result = _ok(
            "transform",
            name="Example",
            kind="struct",
            fields=[
                {"name": "id", "variant": None, "case": "plain_optional", "attributes": []},
                {
                    "name": "at",
                    "variant": "Created",
                    "case": "nullable",
                    "attributes": ['#[serde(with = "Option")]'],
                },
            ],
        )
        output = render_result(result)
        assert "OK" in output
        assert "name: Example" in output
        assert "Created.at" in output
        assert "nullable" in output
        assert '#[serde(with = "Option")]' in output

    def test_verbose_shows_meta(self) -> None:
        result = ServiceResult(
            ok=True,
            op="transform",
            data={"name": "E", "kind": "struct", "fields": []},
            meta={"count": 0},
        )
        output = render_result(result, verbose=True)
        assert "meta:" in output
        assert "count: 0" in output


# ── Check renderer ───────────────────────────────────────────────────


class TestCheckRenderer:
    def test_no_issues(self) -> None:
        output = render_result(_ok("check", name="Example", issues=[], count=0))
        assert "No issues found." in output

    def test_issues(self) -> None:
        output = render_result(_ok("check", name="Example", issues=[DIAGNOSTIC], count=1))
        assert "Example" in output
        assert "malformed_type_shape [count]" in output
        assert "1 issue(s)" in output

    def test_verbose_lists_elements(self) -> None:
        output = render_result(
            _ok("check", name="Example", issues=[DIAGNOSTIC], count=1), verbose=True
        )
        assert "count: #[nullable]" in output


# ── Quiet ────────────────────────────────────────────────────────────


class TestQuietRenderer:
    def test_success(self) -> None:
        assert render_quiet(_ok("transform")) == "OK: transform"

    def test_check_count(self) -> None:
        assert render_quiet(_ok("check", count=2)) == "2"

    def test_error(self) -> None:
        assert render_quiet(_err("check", "X", "nope")) == "ERROR: check — nope"

    def test_error_without_payload(self) -> None:
        assert "Unknown error" in render_quiet(ServiceResult(ok=False, op="x"))
