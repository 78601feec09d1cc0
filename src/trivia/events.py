"""Structured event records for trivia game sessions."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Protocol, Sequence

from .enums import SYSTEM_ACTOR, Activity, AnswerResult
from .exceptions import LogWriteError

logger = logging.getLogger(__name__)

EVENT_LOG_HEADER: tuple[str, ...] = (
    "Case_ID",
    "Player_ID",
    "Activity",
    "Timestamp",
    "Category",
    "Question_Value",
    "Answer_Given",
    "Result",
    "Score_After_Play",
)


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Immutable fact captured during play."""

    case_id: str
    activity: Activity
    timestamp: datetime
    player_id: str = SYSTEM_ACTOR
    category: Optional[str] = None
    question_value: Optional[int] = None
    answer_given: Optional[str] = None
    result: Optional[str] = None
    score_after: Optional[int] = None
    question_text: Optional[str] = None

    @property
    def is_answer(self) -> bool:
        return self.activity is Activity.ANSWER_QUESTION

    @property
    def is_correct(self) -> bool:
        return self.result == AnswerResult.CORRECT.value

    def to_row(self) -> list[str]:
        """Return the audit log columns in header order; absent fields are empty."""

        return [
            self.case_id,
            self.player_id or SYSTEM_ACTOR,
            self.activity.value,
            self.timestamp.isoformat(),
            _text(self.category),
            _text(self.question_value),
            _text(self.answer_given),
            _text(self.result),
            _text(self.score_after),
        ]

    @classmethod
    def from_row(cls, row: Sequence[str]) -> "GameEvent":
        """Rebuild an event from a row produced by :meth:`to_row`."""

        if len(row) != len(EVENT_LOG_HEADER):
            raise ValueError(
                f"Event rows must have {len(EVENT_LOG_HEADER)} columns, got {len(row)}"
            )
        (
            case_id,
            player_id,
            activity,
            timestamp,
            category,
            value,
            answer,
            result,
            score,
        ) = row
        return cls(
            case_id=case_id,
            activity=Activity(activity),
            timestamp=datetime.fromisoformat(timestamp),
            player_id=player_id or SYSTEM_ACTOR,
            category=category or None,
            question_value=int(value) if value else None,
            answer_given=answer or None,
            result=result or None,
            score_after=int(score) if score else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "case_id": self.case_id,
            "activity": self.activity.value,
            "timestamp": self.timestamp.isoformat(),
            "player_id": self.player_id,
            "category": self.category,
            "question_value": self.question_value,
            "answer_given": self.answer_given,
            "result": self.result,
            "score_after": self.score_after,
            "question_text": self.question_text,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GameEvent":
        timestamp_str = data.get("timestamp")
        if not isinstance(timestamp_str, str):
            raise ValueError("Event timestamp must be a string")
        return cls(
            case_id=str(data["case_id"]),
            activity=Activity(data["activity"]),
            timestamp=datetime.fromisoformat(timestamp_str),
            player_id=data.get("player_id") or SYSTEM_ACTOR,
            category=data.get("category"),
            question_value=data.get("question_value"),
            answer_given=data.get("answer_given"),
            result=data.get("result"),
            score_after=data.get("score_after"),
            question_text=data.get("question_text"),
        )


class EventSink(Protocol):
    """Durable destination for recorded events."""

    def record(self, event: GameEvent, /) -> None:
        """Persist ``event`` or raise :class:`LogWriteError`."""


class EventLog:
    """Append-only log of :class:`GameEvent` instances for one session.

    Events are kept in memory for reporting and forwarded to an optional durable
    sink. Sink failures are logged and remembered but never raised, so a disk
    problem cannot interrupt play.
    """

    def __init__(
        self,
        case_id: str,
        *,
        sink: EventSink | None = None,
        events: Iterable[GameEvent] | None = None,
    ) -> None:
        self.case_id = case_id
        self._sink = sink
        self._events: list[GameEvent] = list(events) if events else []
        self._failures: list[LogWriteError] = []
        self._lock = threading.Lock()

    def record(
        self,
        activity: Activity,
        *,
        player_id: str | None = None,
        category: str | None = None,
        question_value: int | None = None,
        answer_given: str | None = None,
        result: str | None = None,
        score_after: int | None = None,
        question_text: str | None = None,
        timestamp: datetime | None = None,
    ) -> GameEvent:
        """Build a new event for this session, append it and return it."""

        event = GameEvent(
            case_id=self.case_id,
            activity=activity,
            timestamp=timestamp or datetime.now(timezone.utc),
            player_id=player_id or SYSTEM_ACTOR,
            category=category,
            question_value=question_value,
            answer_given=answer_given,
            result=result,
            score_after=score_after,
            question_text=question_text,
        )
        self.append(event)
        return event

    def append(self, event: GameEvent) -> bool:
        """Append a prebuilt event; return False if the durable write failed."""

        with self._lock:
            self._events.append(event)
            if self._sink is None:
                return True
            try:
                self._sink.record(event)
            except LogWriteError as exc:
                self._failures.append(exc)
                logger.error(
                    "Failed to persist %s event for %s: %s",
                    event.activity.value,
                    event.case_id,
                    exc,
                )
                return False
            return True

    @property
    def events(self) -> tuple[GameEvent, ...]:
        """Return all events recorded so far."""

        return tuple(self._events)

    @property
    def write_failures(self) -> tuple[LogWriteError, ...]:
        return tuple(self._failures)

    def answer_events(self) -> tuple[GameEvent, ...]:
        return tuple(event for event in self._events if event.is_answer)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._events)


def _text(value: object) -> str:
    return "" if value is None else str(value)


__all__ = [
    "EVENT_LOG_HEADER",
    "EventLog",
    "EventSink",
    "GameEvent",
]
