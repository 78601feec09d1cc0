"""Basic interaction layer for driving trivia games via prompts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from .controller import GameController
from .enums import OPTION_KEYS
from .players import Player

QUIT_VALUES = {"q", "quit", "exit"}


class InteractionIO(Protocol):
    """Minimal IO surface for interactive play backends."""

    def read(self, prompt: str) -> str:
        """Return a response to a visible prompt."""
        ...

    def write(self, message: str) -> None:
        """Display a message to the players."""
        ...


@dataclass
class CLIInteraction:
    """Console-backed IO using ``input`` and ``print``."""

    def read(self, prompt: str) -> str:
        return input(prompt)

    def write(self, message: str) -> None:
        print(message)


class InteractionEventType(str, Enum):
    """Kinds of interaction events recorded during a session."""

    PROMPT = "prompt"
    OUTPUT = "output"


@dataclass(frozen=True, slots=True)
class InteractionLogEntry:
    """Single prompt/response or output emitted during play."""

    event: InteractionEventType
    message: str
    response: str | None = None


@dataclass(frozen=True, slots=True)
class InteractionResult:
    """Final outcome of an interactive game paired with its transcript."""

    winners: tuple[Player, ...]
    report_path: Path
    forced: bool
    transcript: tuple[InteractionLogEntry, ...]


def run_interactive_game(
    controller: GameController,
    player_names: list[str] | tuple[str, ...],
    *,
    io: InteractionIO | None = None,
) -> InteractionResult:
    """Play a full game on the controller's loaded catalog.

    Args:
        controller: Controller with a catalog already loaded.
        player_names: Names in seating order.
        io: Interaction backend (defaults to CLI).

    Returns:
        InteractionResult with winners, report location and transcript.
    """

    backend = io or CLIInteraction()
    log: list[InteractionLogEntry] = []
    forced = False

    session = controller.start_session(list(player_names))
    _write(backend, log, "\n=== Trivia ===")
    _write(backend, log, f"Case ID: {session.case_id}")
    _announce_roster(controller.players(), backend, log)

    while not controller.is_complete():
        player = controller.current_player()
        _announce_scores(controller, backend, log)
        _write(backend, log, f"\n{player.display_name}, it's your turn.")

        category = _prompt_category(controller, backend, log)
        if category is None:
            controller.force_finish()
            forced = True
            _write(backend, log, "Game ended early.")
            break
        value = _prompt_value(controller, category, backend, log)
        view = controller.question_view(category, value)
        assert view is not None
        _write(backend, log, f"\n{view.category} for {view.value}: {view.text}")
        for key in OPTION_KEYS:
            _write(backend, log, f"  {key}. {view.options[key]}")
        answer = _prompt_answer(backend, log)

        correct = controller.submit_answer(category, value, answer)
        outcome = controller.last_outcome
        if outcome is None or not outcome.accepted:
            _write(backend, log, "That question is no longer available. Pick another.")
            continue
        verdict = "Correct!" if correct else "Incorrect."
        _write(
            backend, log, f"{verdict} {player.display_name} now has {outcome.score_after} points."
        )
        controller.advance_turn()

    winners = controller.winners()
    _write(backend, log, "\n=== Final Scores ===")
    for player in controller.players():
        _write(backend, log, f"  {player.display_name}: {player.score}")
    if len(winners) > 1:
        _write(backend, log, "It's a tie: " + ", ".join(p.display_name for p in winners))
    elif winners:
        _write(backend, log, f"Winner: {winners[0].display_name}")

    report_path = controller.generate_report()
    _write(backend, log, f"Report written to {report_path}")
    return InteractionResult(
        winners=winners,
        report_path=report_path,
        forced=forced,
        transcript=tuple(log),
    )


def _announce_roster(
    players: tuple[Player, ...], backend: InteractionIO, log: list[InteractionLogEntry]
) -> None:
    _write(backend, log, "\nRoster:")
    for player in players:
        _write(backend, log, f"  {player.player_id}: {player.display_name}")


def _announce_scores(
    controller: GameController,
    backend: InteractionIO,
    log: list[InteractionLogEntry],
) -> None:
    standings = ", ".join(f"{p.display_name} {p.score}" for p in controller.players())
    _write(backend, log, f"\nScores: {standings}")


def _prompt_category(
    controller: GameController,
    backend: InteractionIO,
    log: list[InteractionLogEntry],
) -> Optional[str]:
    available = controller.available_categories()
    _write(backend, log, "Categories: " + ", ".join(available))
    while True:
        response = _read(backend, log, "Choose a category (or 'quit'): \n").strip()
        if response.lower() in QUIT_VALUES:
            return None
        for name in available:
            if name.casefold() == response.casefold():
                return name
        _write(backend, log, "Please choose one of the listed categories.")


def _prompt_value(
    controller: GameController,
    category: str,
    backend: InteractionIO,
    log: list[InteractionLogEntry],
) -> int:
    values = controller.available_values(category)
    listed = ", ".join(str(value) for value in values)
    while True:
        response = _read(backend, log, f"Choose a value ({listed}): \n").strip()
        if response.isdigit() and int(response) in values:
            return int(response)
        _write(backend, log, f"Please enter one of: {listed}")


def _prompt_answer(backend: InteractionIO, log: list[InteractionLogEntry]) -> str:
    while True:
        response = _read(backend, log, "Your answer (A/B/C/D): \n").strip().upper()
        if response in OPTION_KEYS:
            return response
        _write(backend, log, "Please answer with A, B, C or D.")


def _read(backend: InteractionIO, log: list[InteractionLogEntry], prompt: str) -> str:
    response = backend.read(prompt)
    log.append(InteractionLogEntry(InteractionEventType.PROMPT, prompt, response))
    return response


def _write(backend: InteractionIO, log: list[InteractionLogEntry], message: str) -> None:
    backend.write(message)
    log.append(InteractionLogEntry(InteractionEventType.OUTPUT, message))
