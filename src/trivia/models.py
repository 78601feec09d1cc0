"""Canonical question catalog models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional, Tuple

from .enums import OPTION_KEYS


@dataclass(slots=True)
class Question:
    """A single multiple-choice question.

    Everything except ``answered`` is fixed once the question is loaded.
    """

    category: str
    value: int
    text: str
    options: Mapping[str, str]
    correct_key: str
    answered: bool = False

    def __post_init__(self) -> None:
        self.options = {str(key).upper(): text for key, text in self.options.items()}
        self.correct_key = self.correct_key.strip().upper()

    def is_correct(self, answer: str | None) -> bool:
        """Return True if ``answer`` names the correct option (case-insensitive)."""

        if answer is None:
            return False
        return answer.strip().upper() == self.correct_key

    def option_text(self, key: str | None) -> Optional[str]:
        """Return the option text for ``key``, or None if there is no such option."""

        if key is None:
            return None
        return self.options.get(key.strip().upper())

    @property
    def correct_text(self) -> Optional[str]:
        return self.options.get(self.correct_key)

    def mark_answered(self) -> None:
        self.answered = True

    def copy(self) -> "Question":
        return Question(
            category=self.category,
            value=self.value,
            text=self.text,
            options=dict(self.options),
            correct_key=self.correct_key,
            answered=self.answered,
        )


@dataclass(frozen=True, slots=True)
class Category:
    """Named group of questions, kept ordered by point value."""

    name: str
    questions: Tuple[Question, ...] = ()

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.questions, key=lambda question: question.value))
        object.__setattr__(self, "questions", ordered)

    @property
    def values(self) -> Tuple[int, ...]:
        return tuple(question.value for question in self.questions)

    def question(self, value: int) -> Optional[Question]:
        """Return the question worth ``value`` points, if any."""

        for question in self.questions:
            if question.value == value:
                return question
        return None

    def available_questions(self) -> Tuple[Question, ...]:
        """Return unanswered questions in value order."""

        return tuple(question for question in self.questions if not question.answered)

    def has_available_questions(self) -> bool:
        return any(not question.answered for question in self.questions)

    def matches(self, name: str) -> bool:
        return self.name.casefold() == name.strip().casefold()


@dataclass(frozen=True, slots=True)
class Catalog:
    """Root of the canonical model: the categories loaded from one file."""

    categories: Tuple[Category, ...] = field(default_factory=tuple)

    @classmethod
    def from_questions(cls, questions: Iterable[Question]) -> "Catalog":
        """Group questions into categories in order of first appearance."""

        grouped: dict[str, list[Question]] = {}
        for question in questions:
            grouped.setdefault(question.category, []).append(question)
        return cls(tuple(Category(name, tuple(items)) for name, items in grouped.items()))

    @property
    def category_names(self) -> Tuple[str, ...]:
        return tuple(category.name for category in self.categories)

    @property
    def total_categories(self) -> int:
        return len(self.categories)

    @property
    def total_questions(self) -> int:
        return sum(len(category.questions) for category in self.categories)

    @property
    def questions(self) -> Tuple[Question, ...]:
        return tuple(question for category in self.categories for question in category.questions)

    def is_empty(self) -> bool:
        return self.total_questions == 0

    def category(self, name: str) -> Optional[Category]:
        """Look up a category by name, ignoring case."""

        for category in self.categories:
            if category.matches(name):
                return category
        return None

    def question(self, category_name: str, value: int) -> Optional[Question]:
        category = self.category(category_name)
        if category is None:
            return None
        return category.question(value)

    def all_answered(self) -> bool:
        return all(question.answered for question in self.questions)

    def copy(self) -> "Catalog":
        """Return a deep copy whose answered flags can change independently."""

        return Catalog(
            tuple(
                Category(category.name, tuple(question.copy() for question in category.questions))
                for category in self.categories
            )
        )


def option_mapping(values: Iterable[str]) -> dict[str, str]:
    """Pair option texts with the keys A-D in order."""

    return dict(zip(OPTION_KEYS, values))
