"""Composite Validator — aggregates validators without losing individual errors.

Invariants:
    - Every constituent runs, in the order supplied, even after a failure
    - errors == concatenation of each constituent's errors, in order
    - is_valid iff every constituent is valid
    - At least one constituent: an empty composite is a configuration error

Design Decisions:
    - Composite satisfies the Validator protocol itself, so composites nest
    - Empty composite rejected at construction, not treated as vacuously valid
"""

from typing import Generic, TypeVar

from content_core.core.errors import EmptyCompositeValidatorError
from content_core.core.validation import ValidationResult, Validator

T = TypeVar("T")


class CompositeValidator(Generic[T]):
    """Runs all constituent validators and concatenates their errors."""

    def __init__(self, *validators: Validator[T]):
        if not validators:
            raise EmptyCompositeValidatorError()
        self.validators: tuple[Validator[T], ...] = validators

    def validate(self, data: T) -> ValidationResult:
        errors: list[str] = []
        for validator in self.validators:
            errors.extend(validator.validate(data).errors)
        return ValidationResult.from_errors(errors)

    def __len__(self) -> int:
        return len(self.validators)


def create_composite_validator(*validators: Validator[T]) -> CompositeValidator[T]:
    """Factory mirroring the constructor, for call sites that prefer functions."""
    return CompositeValidator(*validators)
