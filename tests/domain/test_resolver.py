"""Tests for rule resolution."""

import itertools

import pytest

from optmark.domain.errors import ConflictError, FieldDiagnosticError, MalformedTypeShapeError
from optmark.domain.extractor import FieldIntent
from optmark.domain.fields import parse_attribute
from optmark.domain.resolver import ResolverPolicy, resolve
from optmark.domain.types import DefaultPolicy, DiagnosticCode, SemanticCase, SkipPolicy, TypeShape

HANDLER = parse_attribute('#[serde(with = "my::codec")]')
PREDICATE = parse_attribute('#[serde(skip_serializing_if = "Option::is_none")]')


def intent(**kwargs: object) -> FieldIntent:
    if kwargs.get("has_custom_with_handler"):
        kwargs.setdefault("handler", HANDLER)
    if kwargs.get("has_skip_serializing_if"):
        kwargs.setdefault("skip_serializing_if", PREDICATE)
    return FieldIntent(name="f", **kwargs)  # type: ignore[arg-type]


class TestSkip:
    def test_skip_wins_over_markers(self) -> None:
        result = resolve(
            intent(has_skip=True, nullable=True, not_required=True),
            TypeShape.NOT_OPTIONAL,
        )
        assert result is SemanticCase.SKIPPED

    def test_skip_wins_over_handler(self) -> None:
        result = resolve(
            intent(has_skip=True, nullable=True, has_custom_with_handler=True),
            TypeShape.OPTIONAL,
        )
        assert result is SemanticCase.SKIPPED

    def test_skip_error_policy_with_marker(self) -> None:
        policy = ResolverPolicy(skip_policy=SkipPolicy.ERROR)
        with pytest.raises(ConflictError) as exc_info:
            resolve(intent(has_skip=True, nullable=True), TypeShape.OPTIONAL, policy=policy)
        exc = exc_info.value
        assert exc.field == "f"
        assert exc.elements == ("#[nullable]", "#[serde(skip)]")
        assert exc.message == "`#[nullable]` cannot be used in combination with `#[serde(skip)]`"

    def test_skip_error_policy_without_marker(self) -> None:
        policy = ResolverPolicy(skip_policy=SkipPolicy.ERROR)
        result = resolve(intent(has_skip=True), TypeShape.OPTIONAL, policy=policy)
        assert result is SemanticCase.SKIPPED


class TestPlain:
    @pytest.mark.parametrize("shape", list(TypeShape))
    def test_no_markers_is_plain(self, shape: TypeShape) -> None:
        assert resolve(intent(), shape) is SemanticCase.PLAIN_OPTIONAL

    def test_handler_without_markers_is_plain(self) -> None:
        result = resolve(intent(has_custom_with_handler=True), TypeShape.OPTIONAL)
        assert result is SemanticCase.PLAIN_OPTIONAL


class TestMarkers:
    @pytest.mark.parametrize("shape", [TypeShape.OPTIONAL, TypeShape.DOUBLE_OPTIONAL])
    def test_nullable(self, shape: TypeShape) -> None:
        assert resolve(intent(nullable=True), shape) is SemanticCase.NULLABLE

    @pytest.mark.parametrize("shape", [TypeShape.OPTIONAL, TypeShape.DOUBLE_OPTIONAL])
    def test_not_required(self, shape: TypeShape) -> None:
        assert resolve(intent(not_required=True), shape) is SemanticCase.NOT_REQUIRED

    def test_both_on_double_option(self) -> None:
        result = resolve(intent(nullable=True, not_required=True), TypeShape.DOUBLE_OPTIONAL)
        assert result is SemanticCase.NULLABLE_AND_NOT_REQUIRED

    def test_both_on_single_option(self) -> None:
        with pytest.raises(MalformedTypeShapeError) as exc_info:
            resolve(intent(nullable=True, not_required=True), TypeShape.OPTIONAL)
        exc = exc_info.value
        assert exc.code is DiagnosticCode.MALFORMED_TYPE_SHAPE
        assert exc.elements == ("#[nullable]", "#[not_required]")
        assert "`Option<Option<T>>`" in exc.message

    def test_default_does_not_change_nullable(self) -> None:
        result = resolve(intent(nullable=True, has_explicit_default=True), TypeShape.OPTIONAL)
        assert result is SemanticCase.NULLABLE


class TestMalformedShape:
    def test_nullable_on_plain_type(self) -> None:
        with pytest.raises(MalformedTypeShapeError) as exc_info:
            resolve(intent(nullable=True), TypeShape.NOT_OPTIONAL)
        assert exc_info.value.message == (
            "`#[nullable]` may only be used on fields of type `Option<T>`."
        )
        assert exc_info.value.elements == ("#[nullable]",)

    def test_not_required_on_plain_type(self) -> None:
        with pytest.raises(MalformedTypeShapeError) as exc_info:
            resolve(intent(not_required=True), TypeShape.NOT_OPTIONAL)
        assert exc_info.value.message == (
            "`#[not_required]` may only be used on fields of type `Option<T>`."
        )

    def test_shape_checked_before_handler(self) -> None:
        with pytest.raises(MalformedTypeShapeError):
            resolve(intent(nullable=True, has_custom_with_handler=True), TypeShape.NOT_OPTIONAL)


class TestConflicts:
    def test_marker_with_handler(self) -> None:
        with pytest.raises(ConflictError) as exc_info:
            resolve(intent(nullable=True, has_custom_with_handler=True), TypeShape.OPTIONAL)
        exc = exc_info.value
        assert exc.code is DiagnosticCode.CONFLICT
        assert exc.elements == ("#[nullable]", '#[serde(with = "my::codec")]')
        assert exc.message == (
            '`#[nullable]` cannot be used in combination with `#[serde(with = "my::codec")]`'
        )

    def test_both_markers_with_handler_names_both(self) -> None:
        with pytest.raises(ConflictError) as exc_info:
            resolve(
                intent(nullable=True, not_required=True, has_custom_with_handler=True),
                TypeShape.DOUBLE_OPTIONAL,
            )
        assert exc_info.value.message.startswith("`#[nullable]` and `#[not_required]`")

    def test_default_preserved_by_default(self) -> None:
        result = resolve(intent(not_required=True, has_explicit_default=True), TypeShape.OPTIONAL)
        assert result is SemanticCase.NOT_REQUIRED

    def test_default_error_policy(self) -> None:
        policy = ResolverPolicy(default_policy=DefaultPolicy.ERROR)
        with pytest.raises(ConflictError) as exc_info:
            resolve(
                intent(not_required=True, has_explicit_default=True),
                TypeShape.OPTIONAL,
                policy=policy,
            )
        assert exc_info.value.elements == ("#[not_required]", "#[serde(default)]")

    def test_default_error_policy_leaves_nullable_alone(self) -> None:
        policy = ResolverPolicy(default_policy=DefaultPolicy.ERROR)
        result = resolve(
            intent(nullable=True, has_explicit_default=True),
            TypeShape.OPTIONAL,
            policy=policy,
        )
        assert result is SemanticCase.NULLABLE


class TestSkipSerializingIf:
    @pytest.mark.parametrize("shape", [TypeShape.OPTIONAL, TypeShape.DOUBLE_OPTIONAL])
    def test_nullable_with_predicate_conflicts(self, shape: TypeShape) -> None:
        with pytest.raises(ConflictError) as exc_info:
            resolve(intent(nullable=True, has_skip_serializing_if=True), shape)
        exc = exc_info.value
        assert exc.code is DiagnosticCode.CONFLICT
        assert exc.elements == ("#[nullable]", PREDICATE.render())
        assert exc.message == (
            "`#[nullable]` cannot be used in combination with "
            '`#[serde(skip_serializing_if = "Option::is_none")]`'
        )

    def test_not_required_keeps_user_predicate(self) -> None:
        result = resolve(
            intent(not_required=True, has_skip_serializing_if=True), TypeShape.OPTIONAL
        )
        assert result is SemanticCase.NOT_REQUIRED

    def test_both_markers_keep_user_predicate(self) -> None:
        result = resolve(
            intent(nullable=True, not_required=True, has_skip_serializing_if=True),
            TypeShape.DOUBLE_OPTIONAL,
        )
        assert result is SemanticCase.NULLABLE_AND_NOT_REQUIRED

    def test_skip_wins_over_predicate_conflict(self) -> None:
        result = resolve(
            intent(nullable=True, has_skip=True, has_skip_serializing_if=True),
            TypeShape.OPTIONAL,
        )
        assert result is SemanticCase.SKIPPED


_FLAGS = (
    "nullable",
    "not_required",
    "has_explicit_default",
    "has_skip",
    "has_skip_serializing_if",
    "has_custom_with_handler",
)


@pytest.mark.parametrize("shape", list(TypeShape))
@pytest.mark.parametrize("flags", list(itertools.product((False, True), repeat=len(_FLAGS))))
def test_every_combination_resolves_or_diagnoses(
    shape: TypeShape, flags: tuple[bool, ...]
) -> None:
    field_intent = intent(**dict(zip(_FLAGS, flags, strict=True)))
    try:
        result = resolve(field_intent, shape)
    except FieldDiagnosticError as exc:
        assert exc.field == "f"
        assert exc.elements
    else:
        assert result is not SemanticCase.CONFLICT
