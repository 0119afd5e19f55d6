"""Content Validation — pure validators that report every violated rule.

Invariants:
    - All functions are PURE: no IO, no side effects, no mutation of the input
    - Rule functions return an error message on violation, None on success
    - Validators run EVERY rule (no first-error-wins) and keep rule order
    - ValidationResult.is_valid is derived from errors, so it cannot disagree

Design Decisions:
    - Rules as plain check_* functions: testable one by one without fixtures
    - Returning data (not exceptions): invalid input is a normal, described outcome
"""

from dataclasses import dataclass
from typing import Callable, Generic, Protocol, Sequence, TypeVar

from content_core.core.content import Article, Product

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

Rule = Callable[[T], str | None]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass. Empty errors means valid."""
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @classmethod
    def from_errors(cls, errors: Sequence[str]) -> "ValidationResult":
        return cls(errors=tuple(errors))


class Validator(Protocol[T_contra]):
    """Structural contract: anything with validate(data) -> ValidationResult."""
    def validate(self, data: T_contra) -> ValidationResult: ...


class RuleValidator(Generic[T]):
    """Validator built from an ordered list of rule functions."""

    def __init__(self, *rules: Rule[T]):
        self.rules: tuple[Rule[T], ...] = rules

    def validate(self, data: T) -> ValidationResult:
        errors = [message for message in (rule(data) for rule in self.rules) if message]
        return ValidationResult.from_errors(errors)

    def __repr__(self) -> str:
        names = ", ".join(getattr(r, "__name__", repr(r)) for r in self.rules)
        return f"RuleValidator({names})"


def _is_missing_or_negative(value: float | int | None) -> bool:
    """Absence and negativity are the same violation."""
    return value is None or value < 0


# --- Article rules -------------------------------------------------------------

def check_title_required(article: Article) -> str | None:
    if not article.title:
        return "Title is required."
    return None


def check_content_required(article: Article) -> str | None:
    if not article.content:
        return "Content is required."
    return None


def check_author_required(article: Article) -> str | None:
    if not article.author_id:
        return "Author ID is required."
    return None


# --- Product rules -------------------------------------------------------------

def check_name_required(product: Product) -> str | None:
    if not product.name:
        return "Name is required."
    return None


def check_price_non_negative(product: Product) -> str | None:
    if _is_missing_or_negative(product.price):
        return "Price must be a positive number."
    return None


def check_stock_non_negative(product: Product) -> str | None:
    if _is_missing_or_negative(product.stock):
        return "Stock must be a positive number."
    return None


ARTICLE_VALIDATOR: RuleValidator[Article] = RuleValidator(
    check_title_required,
    check_content_required,
    check_author_required,
)

PRODUCT_VALIDATOR: RuleValidator[Product] = RuleValidator(
    check_name_required,
    check_price_non_negative,
    check_stock_non_negative,
)
