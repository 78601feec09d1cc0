"""CLI helper for running a trivia game from a YAML session file."""

import logging
import sys

from trivia.config_loader import load_config_file
from trivia.controller import GameController
from trivia.exceptions import TriviaError
from trivia.interaction import CLIInteraction, run_interactive_game


def main() -> None:
    """Run a console trivia game."""
    if len(sys.argv) < 2:
        print("Usage: python run_game.py <config-file>")
        print("Example: python run_game.py session.yaml")
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename="trivia.log",
    )

    config_path = sys.argv[1]
    try:
        setup = load_config_file(config_path)
    except (OSError, TriviaError) as exc:
        print(f"Error loading config file: {exc}")
        sys.exit(1)

    controller = GameController(setup.engine_config)
    try:
        catalog = controller.load_catalog(setup.question_file)
    except TriviaError as exc:
        print(f"Error loading questions: {exc}")
        sys.exit(1)

    print("\n=== Trivia Game ===")
    print(f"Configuration: {config_path}")
    print(f"Questions: {catalog.total_questions} in {catalog.total_categories} categories")
    print(f"Players: {', '.join(setup.player_names)}")

    try:
        result = run_interactive_game(controller, setup.player_names, io=CLIInteraction())
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user")
        sys.exit(0)

    print("\n=== Game Complete ===")
    print(controller.summary())
    print(f"Report: {result.report_path}")


if __name__ == "__main__":
    main()
