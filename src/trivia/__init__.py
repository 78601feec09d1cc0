"""Turn-based multiple-choice trivia engine."""

from .config import EngineConfig
from .config_loader import SessionSetupConfig, load_config_file
from .controller import GameController, QuestionView
from .enums import OPTION_KEYS, SYSTEM_ACTOR, Activity, AnswerResult, CatalogFormat, SessionStatus
from .events import EVENT_LOG_HEADER, EventLog, EventSink, GameEvent
from .exceptions import (
    AlreadyAnsweredError,
    ConfigurationError,
    FormatError,
    InvalidActionError,
    InvalidSetupError,
    LogWriteError,
    NotFinishedError,
    QuestionNotFoundError,
    TriviaError,
    UnsupportedFormatError,
    ValidationError,
)
from .game_state import AnswerOutcome, AnswerStatus, GameSession, generate_case_id
from .interaction import (
    CLIInteraction,
    InteractionEventType,
    InteractionIO,
    InteractionLogEntry,
    InteractionResult,
    run_interactive_game,
)
from .loaders import detect_format, load_catalog, load_csv, load_json, load_xml
from .models import Catalog, Category, Question
from .persistence import CsvEventRecorder, read_event_log
from .players import Player, PlayerId
from .report import generate_report, write_report
from .scoring import ScoringStrategy, StandardScoringStrategy, scoring_strategy
from .validator import validate_catalog

__all__ = [
    "Activity",
    "AlreadyAnsweredError",
    "AnswerOutcome",
    "AnswerResult",
    "AnswerStatus",
    "CLIInteraction",
    "Catalog",
    "CatalogFormat",
    "Category",
    "ConfigurationError",
    "CsvEventRecorder",
    "EVENT_LOG_HEADER",
    "EngineConfig",
    "EventLog",
    "EventSink",
    "FormatError",
    "GameController",
    "GameEvent",
    "GameSession",
    "InteractionEventType",
    "InteractionIO",
    "InteractionLogEntry",
    "InteractionResult",
    "InvalidActionError",
    "InvalidSetupError",
    "LogWriteError",
    "NotFinishedError",
    "OPTION_KEYS",
    "Player",
    "PlayerId",
    "Question",
    "QuestionNotFoundError",
    "QuestionView",
    "SYSTEM_ACTOR",
    "ScoringStrategy",
    "SessionSetupConfig",
    "SessionStatus",
    "StandardScoringStrategy",
    "TriviaError",
    "UnsupportedFormatError",
    "ValidationError",
    "detect_format",
    "generate_case_id",
    "generate_report",
    "load_catalog",
    "load_config_file",
    "load_csv",
    "load_json",
    "load_xml",
    "read_event_log",
    "run_interactive_game",
    "scoring_strategy",
    "validate_catalog",
    "write_report",
]
