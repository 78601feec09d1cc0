"""Enumerations for trivia game entities."""

from __future__ import annotations

from enum import Enum

OPTION_KEYS: tuple[str, ...] = ("A", "B", "C", "D")

SYSTEM_ACTOR = "System"


class SessionStatus(str, Enum):
    """Lifecycle status of a game session."""

    SETUP = "setup"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Activity(str, Enum):
    """Activity names written to the audit log."""

    LOAD_QUESTIONS = "Load Questions"
    JOIN_GAME = "Join Game"
    START_GAME = "Start Game"
    ANSWER_QUESTION = "Answer Question"
    GAME_END = "Game End"


class AnswerResult(str, Enum):
    """Outcome label attached to answer events."""

    CORRECT = "Correct"
    INCORRECT = "Incorrect"


class CatalogFormat(str, Enum):
    """Supported question bank file formats, keyed by extension."""

    CSV = ".csv"
    JSON = ".json"
    XML = ".xml"
