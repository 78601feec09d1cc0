"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigurationError
from .scoring import ScoringStrategy, scoring_strategy

DEFAULT_EVENT_LOG_PATH = Path("logs") / "game_event_log.csv"
DEFAULT_REPORT_PATH = Path("report") / "summary_report.txt"


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Where a session writes its audit log and report, and how it scores."""

    event_log_path: Path = DEFAULT_EVENT_LOG_PATH
    report_path: Path = DEFAULT_REPORT_PATH
    case_id_prefix: str = "GAME"
    scoring: str = "standard"

    def __post_init__(self) -> None:
        object.__setattr__(self, "event_log_path", Path(self.event_log_path))
        object.__setattr__(self, "report_path", Path(self.report_path))
        if not self.case_id_prefix.strip():
            raise ConfigurationError("case_id_prefix must be non-empty")
        # Fail early on unknown strategy names.
        scoring_strategy(self.scoring)

    @property
    def strategy(self) -> ScoringStrategy:
        return scoring_strategy(self.scoring)

