"""Plain-text end-of-game reports built from recorded events."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .enums import SessionStatus
from .events import GameEvent
from .exceptions import NotFinishedError
from .players import Player

logger = logging.getLogger(__name__)

REPORT_TITLE = "TRIVIA GAME REPORT"


def generate_report(
    events: Iterable[GameEvent],
    players: Sequence[Player],
    *,
    status: SessionStatus,
    case_id: Optional[str] = None,
) -> str:
    """Render the end-of-game report.

    Only answer events are replayed, in recorded order. Scores and results are
    taken from the events and the final player snapshot as they are; nothing is
    recomputed here, so the same inputs always give the same text.

    Args:
        events: Recorded session events in order.
        players: Final player snapshot, in seating order.
        status: Session status; must be finished.
        case_id: Session identifier. Defaults to the case id of the first event.

    Raises:
        NotFinishedError: If the session has not finished.
    """
    if status is not SessionStatus.FINISHED:
        raise NotFinishedError("Report requested before the game finished")

    recorded = list(events)
    if case_id is None:
        case_id = recorded[0].case_id if recorded else ""
    names = {player.player_id: player.display_name for player in players}

    lines = [
        REPORT_TITLE,
        "=" * len(REPORT_TITLE),
        "",
        f"Case ID: {case_id}",
        "",
        "Players: " + ", ".join(player.display_name for player in players),
        "",
        "Gameplay Summary:",
        "-----------------",
    ]
    answers = [event for event in recorded if event.is_answer]
    for turn, event in enumerate(answers, start=1):
        lines.extend(_turn_lines(turn, event, names))
        lines.append("")

    lines.append("Final Scores:")
    for player in players:
        lines.append(f"{player.display_name}: {player.score}")
    lines.append("")

    winners = _top_scorers(players)
    if len(winners) > 1:
        lines.append(
            "It's a tie! Winners: "
            + ", ".join(f"{player.display_name} ({player.score} points)" for player in winners)
        )
    return "\n".join(lines) + "\n"


def write_report(text: str, path: str | Path) -> Path:
    """Write a rendered report as UTF-8, creating parent directories."""

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(text, encoding="utf-8")
    logger.info("Wrote summary report to %s", destination)
    return destination


def _turn_lines(turn: int, event: GameEvent, names: dict[str, str]) -> list[str]:
    name = names.get(event.player_id, event.player_id)
    value = event.question_value if event.question_value is not None else 0
    sign = "+" if event.is_correct else "-"
    return [
        f"Turn {turn}: {name} ({event.player_id}) selected {event.category} for {value} pts",
        f"Question: {event.question_text or ''}",
        f"Answer: {event.answer_given or ''} - {event.result or ''} ({sign}{value} pts)",
        f"Score after turn: {name} = {event.score_after if event.score_after is not None else ''}",
    ]


def _top_scorers(players: Sequence[Player]) -> list[Player]:
    if not players:
        return []
    top = max(player.score for player in players)
    return [player for player in players if player.score == top]
