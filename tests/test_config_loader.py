"""Tests for YAML configuration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from trivia.config import DEFAULT_EVENT_LOG_PATH
from trivia.config_loader import load_config_file
from trivia.exceptions import ConfigurationError


def _write_config(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "game.yaml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_full_config(tmp_path: Path) -> None:
    """All keys are read and relative paths resolve next to the file."""
    path = _write_config(
        tmp_path,
        """
players:
  - Alice
  - name: Bob
questions: data/questions.csv
event_log: out/events.csv
report: out/report.txt
case_id_prefix: QUIZ
scoring: standard
""",
    )

    setup = load_config_file(path)

    assert setup.player_names == ("Alice", "Bob")
    assert setup.question_file == tmp_path / "data" / "questions.csv"
    assert setup.engine_config.event_log_path == tmp_path / "out" / "events.csv"
    assert setup.engine_config.report_path == tmp_path / "out" / "report.txt"
    assert setup.engine_config.case_id_prefix == "QUIZ"


def test_optional_keys_fall_back_to_defaults(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "players: [Alice]\nquestions: bank.json\n")

    setup = load_config_file(path)

    assert setup.engine_config.event_log_path == DEFAULT_EVENT_LOG_PATH
    assert setup.engine_config.scoring == "standard"


def test_missing_file_raises() -> None:
    with pytest.raises(FileNotFoundError):
        load_config_file("nonexistent.yaml")


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("questions: bank.csv\n", "players"),
        ("players: Alice\nquestions: bank.csv\n", "must be a list"),
        ("players: [Alice, '  ']\nquestions: bank.csv\n", "Player entry 2"),
        ("players: [Alice]\n", "questions"),
        ("players: [Alice]\nquestions: bank.csv\nscoring: 3\n", "'scoring' must be a string"),
        ("players: [Alice]\nquestions: bank.csv\nscoring: bonus\n", "Unknown scoring"),
        ("players: [Alice]\nquestions: bank.csv\nreport: ''\n", "'report' must be a file path"),
        ("- just\n- a list\n", "YAML mapping"),
        ("players: [Alice\n", "Invalid YAML"),
    ],
)
def test_invalid_config_rejected(tmp_path: Path, content: str, message: str) -> None:
    path = _write_config(tmp_path, content)

    with pytest.raises(ConfigurationError, match=message):
        load_config_file(path)
