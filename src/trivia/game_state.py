"""Turn and scoring management for trivia sessions."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Sequence, Tuple

from .enums import Activity, AnswerResult, SessionStatus
from .events import EventLog, GameEvent
from .exceptions import (
    AlreadyAnsweredError,
    InvalidActionError,
    InvalidSetupError,
    QuestionNotFoundError,
)
from .models import Catalog, Category, Question
from .players import Player, PlayerId
from .scoring import ScoringStrategy, StandardScoringStrategy
from .validator import validate_catalog

logger = logging.getLogger(__name__)

_STATUS_ORDER = {
    SessionStatus.SETUP: 0,
    SessionStatus.IN_PROGRESS: 1,
    SessionStatus.FINISHED: 2,
}


class AnswerStatus(str, Enum):
    """Outcome of a submitted answer."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    NOT_FOUND = "not_found"
    ALREADY_ANSWERED = "already_answered"


@dataclass(frozen=True, slots=True)
class AnswerOutcome:
    """Result of :meth:`GameSession.answer`.

    Rejected attempts (unknown or already answered questions) leave scores and
    answered flags untouched and record no event.
    """

    status: AnswerStatus
    player_id: Optional[PlayerId] = None
    points: int = 0
    score_after: Optional[int] = None
    event: Optional[GameEvent] = None

    @property
    def accepted(self) -> bool:
        return self.status in (AnswerStatus.CORRECT, AnswerStatus.INCORRECT)

    @property
    def correct(self) -> bool:
        return self.status is AnswerStatus.CORRECT


def generate_case_id(prefix: str = "GAME") -> str:
    """Return a session identifier of the form ``<prefix><epoch millis>``."""

    return f"{prefix}{time.time_ns() // 1_000_000}"


@dataclass(slots=True)
class GameSession:
    """Mutable state of a single trivia game.

    Status only moves forward: setup, in progress, finished. Turn order is never
    advanced implicitly; drivers call :meth:`advance_turn` after each answer.
    """

    case_id: str = field(default_factory=generate_case_id)
    scoring: ScoringStrategy = field(default_factory=StandardScoringStrategy)
    event_log: Optional[EventLog] = field(default=None, repr=False)
    players: Tuple[Player, ...] = ()
    catalog: Optional[Catalog] = field(default=None, repr=False)
    status: SessionStatus = SessionStatus.SETUP
    turn_index: int = 0
    turns_taken: int = 0
    _players_by_id: Dict[PlayerId, Player] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        if self.event_log is None:
            self.event_log = EventLog(self.case_id)
        elif self.event_log.case_id != self.case_id:
            raise InvalidSetupError("Event log case id does not match the session case id")
        self._players_by_id = {player.player_id: player for player in self.players}

    def initialize(self, player_names: Sequence[str], catalog: Optional[Catalog]) -> None:
        """Register players and start the game on a validated catalog.

        Players receive ids ``P1``, ``P2``... in the order their names are given.
        The session keeps its own copy of ``catalog``.

        Raises:
            InvalidSetupError: If no names are given, a name is blank, or the catalog is empty.
            ValidationError: If the catalog violates a structural invariant.
            InvalidActionError: If the session has already been started.
        """
        if self.status is not SessionStatus.SETUP:
            raise InvalidActionError("Session has already been initialized")
        names = [str(name).strip() for name in player_names or ()]
        if not names:
            raise InvalidSetupError("At least one player name is required")
        if any(not name for name in names):
            raise InvalidSetupError("Player names must be non-empty")
        if catalog is None or catalog.is_empty():
            raise InvalidSetupError("Cannot start a session without questions")
        validate_catalog(catalog)

        self.catalog = catalog.copy()
        self.players = tuple(
            Player(player_id=f"P{index}", display_name=name)
            for index, name in enumerate(names, start=1)
        )
        self._players_by_id = {player.player_id: player for player in self.players}
        self.turn_index = 0
        self.turns_taken = 0

        self._record(
            Activity.LOAD_QUESTIONS,
            result=f"Success: {self.catalog.total_questions} questions",
        )
        for player in self.players:
            self._record(Activity.JOIN_GAME, player_id=player.player_id, result="Success")
        self._set_status(SessionStatus.IN_PROGRESS)
        self._record(Activity.START_GAME, result="Success")
        logger.info(
            "Session %s started with %d player(s) and %d question(s)",
            self.case_id,
            len(self.players),
            self.catalog.total_questions,
        )

    @property
    def players_by_id(self) -> Mapping[PlayerId, Player]:
        """Return mapping from player identifier to player object."""

        return dict(self._players_by_id)

    @property
    def current_player(self) -> Player:
        """Return the player whose turn it is."""

        if not self.players:
            raise InvalidActionError("No players have joined the session")
        return self.players[self.turn_index]

    @property
    def is_finished(self) -> bool:
        return self.status is SessionStatus.FINISHED

    @property
    def events(self) -> Tuple[GameEvent, ...]:
        assert self.event_log is not None
        return self.event_log.events

    def player(self, player_id: PlayerId) -> Player:
        try:
            return self._players_by_id[player_id]
        except KeyError:
            raise KeyError(f"Unknown player id: {player_id}") from None

    def categories(self) -> Tuple[Category, ...]:
        return self.catalog.categories if self.catalog else ()

    def available_categories(self) -> Tuple[Category, ...]:
        """Return categories that still have unanswered questions."""

        return tuple(
            category for category in self.categories() if category.has_available_questions()
        )

    def available_questions(self, category_name: str) -> Tuple[Question, ...]:
        if self.catalog is None:
            return ()
        category = self.catalog.category(category_name)
        if category is None:
            return ()
        return category.available_questions()

    def require_question(self, category_name: str, value: int) -> Question:
        """Return the unanswered question at (category, value) or raise."""

        question = self.catalog.question(category_name, value) if self.catalog else None
        if question is None:
            raise QuestionNotFoundError(f"Question not found: {category_name} - {value}")
        if question.answered:
            raise AlreadyAnsweredError(
                f"Question already answered: {question.category} - {question.value}"
            )
        return question

    def answer(self, category_name: str, value: int, given_answer: str | None) -> AnswerOutcome:
        """Let the current player answer the question at (category, value).

        The question is consumed whether or not the answer is right. Unknown or
        already answered questions are reported through the returned outcome.

        Raises:
            InvalidActionError: If the session is not in progress.
        """
        self._ensure_in_progress()
        player = self.current_player
        try:
            question = self.require_question(category_name, value)
        except QuestionNotFoundError:
            logger.info("%s: no question at %s/%s", self.case_id, category_name, value)
            return AnswerOutcome(status=AnswerStatus.NOT_FOUND, player_id=player.player_id)
        except AlreadyAnsweredError:
            logger.info("%s: %s/%s was already answered", self.case_id, category_name, value)
            return AnswerOutcome(status=AnswerStatus.ALREADY_ANSWERED, player_id=player.player_id)

        correct = question.is_correct(given_answer)
        points = self.scoring.points(question.value, correct)
        raw_answer = (given_answer or "").strip()
        answer_text = question.option_text(raw_answer) or raw_answer

        player.apply_delta(points)
        question.mark_answered()
        self.turns_taken += 1
        result = AnswerResult.CORRECT if correct else AnswerResult.INCORRECT
        event = self._record(
            Activity.ANSWER_QUESTION,
            player_id=player.player_id,
            category=question.category,
            question_value=question.value,
            answer_given=answer_text,
            result=result.value,
            score_after=player.score,
            question_text=question.text,
        )
        logger.debug(
            "%s: %s answered %s/%d %s, score %d",
            self.case_id,
            player.player_id,
            question.category,
            question.value,
            result.value,
            player.score,
        )
        return AnswerOutcome(
            status=AnswerStatus.CORRECT if correct else AnswerStatus.INCORRECT,
            player_id=player.player_id,
            points=points,
            score_after=player.score,
            event=event,
        )

    def advance_turn(self) -> None:
        """Pass the turn to the next player, wrapping around."""

        if not self.players:
            return
        self.turn_index = (self.turn_index + 1) % len(self.players)

    def check_completion(self) -> bool:
        """Finish the session if every question has been answered.

        Returns True only when no question is left, so a forced finish with
        questions remaining still reports False.
        """

        if self.status is SessionStatus.FINISHED:
            return self.catalog is not None and self.catalog.all_answered()
        if self.status is not SessionStatus.IN_PROGRESS or self.catalog is None:
            return False
        if not self.catalog.all_answered():
            return False
        self._finish("all questions answered")
        return True

    def force_finish(self) -> None:
        """End the session immediately, regardless of remaining questions."""

        if self.status is SessionStatus.FINISHED:
            return
        self._finish("forced by operator")

    def winners(self) -> Tuple[Player, ...]:
        """Return every player holding the top score; more than one means a tie."""

        if not self.players:
            return ()
        top = max(player.score for player in self.players)
        return tuple(player for player in self.players if player.score == top)

    def result_text(self) -> str:
        winners = self.winners()
        if not winners:
            return "No winners"
        if len(winners) == 1:
            return f"Winner: {winners[0].display_name}"
        return "Tie: " + ", ".join(player.display_name for player in winners)

    def _finish(self, reason: str) -> None:
        self._set_status(SessionStatus.FINISHED)
        self._record(Activity.GAME_END, result=self.result_text())
        logger.info("Session %s finished (%s): %s", self.case_id, reason, self.result_text())

    def _set_status(self, status: SessionStatus) -> None:
        if _STATUS_ORDER[status] < _STATUS_ORDER[self.status]:
            raise InvalidActionError(
                f"Cannot move from {self.status.value} back to {status.value}"
            )
        self.status = status

    def _ensure_in_progress(self) -> None:
        if self.status is SessionStatus.FINISHED:
            raise InvalidActionError("Game is already over")
        if self.status is not SessionStatus.IN_PROGRESS:
            raise InvalidActionError(
                f"Action requires status {SessionStatus.IN_PROGRESS.value}, "
                f"current status is {self.status.value}"
            )

    def _record(self, activity: Activity, **fields: object) -> GameEvent:
        assert self.event_log is not None
        return self.event_log.record(activity, **fields)  # type: ignore[arg-type]
