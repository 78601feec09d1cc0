"""Facade used by presentation layers to drive a trivia game."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

from .config import EngineConfig
from .events import EventLog, EventSink
from .exceptions import InvalidActionError, InvalidSetupError
from .game_state import AnswerOutcome, GameSession, generate_case_id
from .loaders import load_catalog
from .models import Catalog
from .persistence import CsvEventRecorder
from .players import Player
from .report import generate_report, write_report
from .validator import validate_catalog


@dataclass(frozen=True, slots=True)
class QuestionView:
    """Read-only view of a question for display."""

    category: str
    value: int
    text: str
    options: Mapping[str, str]
    answered: bool


class GameController:
    """Single entry point for loading questions, playing turns and reporting.

    The controller never advances the turn on its own; drivers call
    :meth:`advance_turn` after each answer.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        event_sink: EventSink | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._sink = event_sink or CsvEventRecorder(self.config.event_log_path)
        self._catalog: Optional[Catalog] = None
        self._session: Optional[GameSession] = None
        self._last_outcome: Optional[AnswerOutcome] = None

    @property
    def session(self) -> GameSession:
        if self._session is None:
            raise InvalidActionError("No game session has been started")
        return self._session

    @property
    def catalog(self) -> Optional[Catalog]:
        return self._catalog

    @property
    def last_outcome(self) -> Optional[AnswerOutcome]:
        return self._last_outcome

    def load_catalog(self, path: str | Path) -> Catalog:
        """Load and validate a question bank; it becomes the catalog for the next session."""

        catalog = load_catalog(path)
        validate_catalog(catalog)
        self._catalog = catalog
        return catalog

    def start_session(
        self,
        names: Sequence[str],
        catalog: Catalog | None = None,
        *,
        case_id: str | None = None,
    ) -> GameSession:
        """Start a new session with ``names`` on ``catalog`` (or the last loaded one)."""

        chosen = catalog if catalog is not None else self._catalog
        if chosen is None:
            raise InvalidSetupError("Load a question file before starting a session")
        session_id = case_id or generate_case_id(self.config.case_id_prefix)
        session = GameSession(
            case_id=session_id,
            scoring=self.config.strategy,
            event_log=EventLog(session_id, sink=self._sink),
        )
        session.initialize(names, chosen)
        self._session = session
        self._last_outcome = None
        return session

    def current_player(self) -> Player:
        return self.session.current_player

    def players(self) -> Tuple[Player, ...]:
        return self.session.players

    def list_categories(self) -> Tuple[str, ...]:
        """Return category names in board order."""

        return tuple(category.name for category in self.session.categories())

    def available_categories(self) -> Tuple[str, ...]:
        return tuple(category.name for category in self.session.available_categories())

    def available_values(self, category_name: str) -> Tuple[int, ...]:
        questions = self.session.available_questions(category_name)
        return tuple(question.value for question in questions)

    def question_view(self, category_name: str, value: int) -> Optional[QuestionView]:
        catalog = self.session.catalog
        question = catalog.question(category_name, value) if catalog else None
        if question is None:
            return None
        return QuestionView(
            category=question.category,
            value=question.value,
            text=question.text,
            options=dict(question.options),
            answered=question.answered,
        )

    def submit_answer(self, category_name: str, value: int, answer: str | None) -> bool:
        """Answer for the current player; return True only for a correct answer.

        Use :attr:`last_outcome` to tell a wrong answer from a rejected attempt.
        """
        outcome = self.session.answer(category_name, value, answer)
        self._last_outcome = outcome
        return outcome.correct

    def advance_turn(self) -> None:
        self.session.advance_turn()

    def is_complete(self) -> bool:
        return self.session.check_completion()

    def force_finish(self) -> None:
        self.session.force_finish()

    def winners(self) -> Tuple[Player, ...]:
        return self.session.winners()

    def generate_report(self, path: str | Path | None = None) -> Path:
        """Render the report for the finished session and write it to disk.

        Raises:
            NotFinishedError: If the session is still in progress.
        """
        session = self.session
        text = generate_report(
            session.events,
            session.players,
            status=session.status,
            case_id=session.case_id,
        )
        return write_report(text, path or self.config.report_path)

    def summary(self) -> str:
        session = self.session
        return (
            f"Game ID: {session.case_id}\n"
            f"Players: {len(session.players)}\n"
            f"Total Turns: {session.turns_taken}\n"
            f"Game State: {session.status.value}\n"
            f"Scoring: {session.scoring.name}"
        )
