"""Custom exception types for trivia catalogs and game flow."""

from __future__ import annotations

from typing import Optional


class TriviaError(Exception):
    """Base class for every error raised by the trivia engine."""


class ConfigurationError(TriviaError, ValueError):
    """Raised when a session configuration file is malformed."""


class FormatError(TriviaError, ValueError):
    """Raised when a question bank cannot be parsed into a catalog."""

    def __init__(
        self,
        message: str,
        *,
        record_index: Optional[int] = None,
        field_name: Optional[str] = None,
    ) -> None:
        self.record_index = record_index
        self.field_name = field_name
        super().__init__(message)


class UnsupportedFormatError(FormatError):
    """Raised when a question bank has an unrecognised file extension."""


class ValidationError(TriviaError, ValueError):
    """Raised when a catalog violates a structural invariant."""


class InvalidSetupError(TriviaError, ValueError):
    """Raised when a session is started without players or questions."""


class InvalidActionError(TriviaError, RuntimeError):
    """Raised when a game action is not allowed in the current status."""


class QuestionNotFoundError(InvalidActionError):
    """Raised when no question matches the requested category and value."""


class AlreadyAnsweredError(InvalidActionError):
    """Raised when a question has already been attempted."""


class NotFinishedError(InvalidActionError):
    """Raised when a report is requested before the session has finished."""


class LogWriteError(TriviaError, OSError):
    """Raised when an event cannot be written to the audit log."""
