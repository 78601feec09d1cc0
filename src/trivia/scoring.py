"""Scoring rules applied to answered questions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .exceptions import ConfigurationError


class ScoringStrategy(Protocol):
    """Computes the signed score change for an answer."""

    @property
    def name(self) -> str:
        ...

    def points(self, value: int, correct: bool) -> int:
        """Return the score delta for a question worth ``value``."""
        ...


@dataclass(frozen=True, slots=True)
class StandardScoringStrategy:
    """Correct answers earn the question value; wrong answers lose it."""

    name: str = "Standard Scoring"

    def points(self, value: int, correct: bool) -> int:
        return value if correct else -value


SCORING_STRATEGIES: dict[str, ScoringStrategy] = {
    "standard": StandardScoringStrategy(),
}


def scoring_strategy(name: str) -> ScoringStrategy:
    """Look up a registered scoring strategy by its configuration key."""

    key = name.strip().lower()
    if key not in SCORING_STRATEGIES:
        raise ConfigurationError(
            f"Unknown scoring strategy: {name}. "
            f"Available: {', '.join(sorted(SCORING_STRATEGIES))}"
        )
    return SCORING_STRATEGIES[key]
