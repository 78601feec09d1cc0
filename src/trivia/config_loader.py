"""YAML configuration file loader for game sessions."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .config import EngineConfig
from .exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class SessionSetupConfig:
    """Complete session setup loaded from a configuration file."""

    engine_config: EngineConfig
    player_names: tuple[str, ...]
    question_file: Path


def load_config_file(config_path: str | Path) -> SessionSetupConfig:
    """Load session configuration from a YAML file.

    Relative paths in the file are resolved against the file's directory.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        SessionSetupConfig with engine settings, player names and the question file.

    Raises:
        ConfigurationError: If the file is invalid or missing required fields.
        FileNotFoundError: If the config file doesn't exist.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open("r", encoding="utf-8") as f:
        try:
            data: dict[str, Any] = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Config file must contain a YAML mapping")

    player_data = data.get("players")
    if not player_data:
        raise ConfigurationError("Config file must specify 'players' list")
    if not isinstance(player_data, list):
        raise ConfigurationError("'players' must be a list")

    names: list[str] = []
    for idx, entry in enumerate(player_data):
        # Accept bare names or {name: ...} mappings
        if isinstance(entry, dict):
            entry = entry.get("name")
        if not isinstance(entry, (str, int)) or not str(entry).strip():
            raise ConfigurationError(f"Player entry {idx + 1} must be a non-empty name")
        names.append(str(entry).strip())

    questions = data.get("questions")
    if not isinstance(questions, str) or not questions.strip():
        raise ConfigurationError("Config file must specify a 'questions' file path")

    base_dir = path.parent
    options: dict[str, Any] = {}
    for key, field_name in (("event_log", "event_log_path"), ("report", "report_path")):
        raw = data.get(key)
        if raw is None:
            continue
        if not isinstance(raw, str) or not raw.strip():
            raise ConfigurationError(f"'{key}' must be a file path")
        options[field_name] = base_dir / raw.strip()

    for key in ("case_id_prefix", "scoring"):
        raw = data.get(key)
        if raw is None:
            continue
        if not isinstance(raw, str):
            raise ConfigurationError(f"'{key}' must be a string")
        options[key] = raw

    return SessionSetupConfig(
        engine_config=EngineConfig(**options),
        player_names=tuple(names),
        question_file=base_dir / questions.strip(),
    )
