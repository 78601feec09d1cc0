"""Structural validation for loaded catalogs."""

from __future__ import annotations

from .enums import OPTION_KEYS
from .exceptions import ValidationError
from .models import Catalog, Category, Question


def validate_catalog(catalog: Catalog) -> None:
    """Check ``catalog`` against the invariants every loader must satisfy.

    Validation is pure and stops at the first violation.

    Raises:
        ValidationError: Naming the category, question and field at fault.
    """
    if not catalog.categories:
        raise ValidationError("Catalog contains no categories")

    seen_names: set[str] = set()
    for category in catalog.categories:
        validate_category(category)
        lowered = category.name.casefold()
        if lowered in seen_names:
            raise ValidationError(f"Duplicate category name: {category.name}")
        seen_names.add(lowered)


def validate_category(category: Category) -> None:
    if not category.name or not category.name.strip():
        raise ValidationError("Category name is missing")
    if not category.questions:
        raise ValidationError(f"Category '{category.name}' has no questions")

    seen_values: set[int] = set()
    for question in category.questions:
        validate_question(question, category.name)
        if question.value in seen_values:
            raise ValidationError(
                f"Category '{category.name}' has repeated question value: {question.value}"
            )
        seen_values.add(question.value)


def validate_question(question: Question, category_name: str) -> None:
    label = f"Question '{category_name}' / {question.value}"
    if question.category != category_name:
        raise ValidationError(
            f"{label} is filed under '{category_name}' but names category '{question.category}'"
        )
    if isinstance(question.value, bool) or not isinstance(question.value, int):
        raise ValidationError(f"{label} has a non-integer value")
    if question.value <= 0:
        raise ValidationError(f"{label} has invalid value: {question.value}")
    if not question.text or not question.text.strip():
        raise ValidationError(f"{label} has no question text")

    missing = [key for key in OPTION_KEYS if key not in question.options]
    if missing:
        raise ValidationError(f"{label} is missing option(s) {', '.join(missing)}")
    extra = sorted(key for key in question.options if key not in OPTION_KEYS)
    if extra:
        raise ValidationError(f"{label} has unexpected option(s) {', '.join(extra)}")
    for key in OPTION_KEYS:
        text = question.options[key]
        if not isinstance(text, str) or not text.strip():
            raise ValidationError(f"{label} option {key} cannot be empty")

    if question.correct_key not in OPTION_KEYS:
        raise ValidationError(
            f"{label} has invalid correct answer '{question.correct_key}'. "
            "Must be A, B, C, or D"
        )
