"""Composite Validator tests — aggregation without losing error detail.

Tests cover:
    - Errors are the in-order concatenation of every constituent's errors
    - All constituents run even after an earlier failure
    - Valid iff every constituent is valid
    - Empty composite rejected at construction
    - Composites nest and expose their constituents
"""

from datetime import datetime, timezone

import pytest

from content_core.core.composite_validator import CompositeValidator, create_composite_validator
from content_core.core.content import Article
from content_core.core.errors import EmptyCompositeValidatorError
from content_core.core.validation import ARTICLE_VALIDATOR, RuleValidator, ValidationResult

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


class _RecordingValidator:
    """Validator stub that records calls and returns fixed errors."""

    def __init__(self, *errors: str):
        self.errors = errors
        self.calls = 0

    def validate(self, data) -> ValidationResult:
        self.calls += 1
        return ValidationResult.from_errors(self.errors)


def test_errors_concatenate_in_constituent_order():
    composite = create_composite_validator(
        _RecordingValidator("a1", "a2"), _RecordingValidator(), _RecordingValidator("c1"),
    )
    result = composite.validate(object())
    assert result.errors == ("a1", "a2", "c1")
    assert result.is_valid is False


def test_every_constituent_runs_after_failure():
    first = _RecordingValidator("boom")
    second = _RecordingValidator("again")
    third = _RecordingValidator()
    CompositeValidator(first, second, third).validate(object())
    assert (first.calls, second.calls, third.calls) == (1, 1, 1)


def test_valid_only_when_all_constituents_valid():
    assert CompositeValidator(_RecordingValidator(), _RecordingValidator()).validate(None).is_valid
    assert not CompositeValidator(_RecordingValidator(), _RecordingValidator("x")).validate(None).is_valid


def test_matches_individual_results_for_article():
    extra = RuleValidator(lambda a: "Title too short." if len(a.title) < 3 else None)
    composite = create_composite_validator(ARTICLE_VALIDATOR, extra)
    article = Article(
        id="a1", title="", content="C", author_id="u1", created_at=T0, updated_at=T0,
    )
    expected = ARTICLE_VALIDATOR.validate(article).errors + extra.validate(article).errors
    assert composite.validate(article).errors == expected
    assert expected == ("Title is required.", "Title too short.")


def test_empty_composite_rejected():
    with pytest.raises(EmptyCompositeValidatorError) as exc_info:
        create_composite_validator()
    assert exc_info.value.code == "COMPOSITE_EMPTY"


def test_constituents_exposed_in_order():
    a, b = _RecordingValidator(), _RecordingValidator()
    composite = CompositeValidator(a, b)
    assert composite.validators == (a, b)
    assert len(composite) == 2


def test_composites_nest():
    inner = CompositeValidator(_RecordingValidator("i1"), _RecordingValidator("i2"))
    outer = CompositeValidator(_RecordingValidator("o1"), inner)
    assert outer.validate(None).errors == ("o1", "i1", "i2")
