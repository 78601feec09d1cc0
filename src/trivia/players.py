"""Player-related domain models."""

from __future__ import annotations

from dataclasses import dataclass

PlayerId = str


@dataclass(slots=True)
class Player:
    """Participant in a trivia session.

    The score never drops below zero: subtractions that would overshoot are clamped.
    """

    player_id: PlayerId
    display_name: str
    score: int = 0

    def __post_init__(self) -> None:
        if not self.display_name:
            raise ValueError("display_name may not be empty")
        if self.score < 0:
            raise ValueError("score may not be negative")

    def add_points(self, points: int) -> None:
        if points < 0:
            raise ValueError("points must be non-negative")
        self.score += points

    def subtract_points(self, points: int) -> None:
        if points < 0:
            raise ValueError("points must be non-negative")
        self.score = max(0, self.score - points)

    def apply_delta(self, delta: int) -> None:
        """Add a signed score change, clamping the result at zero."""

        if delta >= 0:
            self.add_points(delta)
        else:
            self.subtract_points(-delta)

    def snapshot(self) -> "Player":
        return Player(player_id=self.player_id, display_name=self.display_name, score=self.score)
