from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from .puzzle_core import DEFAULT_PIANO_KEYS, DEFAULT_PUZZLE_LENGTH, PuzzleConfig, PuzzleConfigError

CONFIG_ENV_VAR = "MUSIC_PUZZLE_CONFIG"


def puzzle_config_from_mapping(data: Mapping[str, object]) -> PuzzleConfig:
    """Build and validate a PuzzleConfig from decoded JSON.

    Missing fields fall back to the sixteen-key, five-long default puzzle.
    """

    raw_keys = data.get("keys", DEFAULT_PIANO_KEYS)
    if isinstance(raw_keys, str) or not isinstance(raw_keys, (list, tuple)):
        raise PuzzleConfigError("'keys' must be a list of strings")

    raw_length = data.get("puzzle_length", DEFAULT_PUZZLE_LENGTH)
    if isinstance(raw_length, bool) or not isinstance(raw_length, int):
        raise PuzzleConfigError("'puzzle_length' must be an integer")

    config = PuzzleConfig(keys=tuple(raw_keys), puzzle_length=raw_length)
    config.validate()
    return config


def load_puzzle_config(path: Path) -> PuzzleConfig:
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PuzzleConfigError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise PuzzleConfigError(f"{path}: expected a JSON object")
    return puzzle_config_from_mapping(data)


def config_from_env(environ: Mapping[str, str] | None = None) -> PuzzleConfig:
    env = os.environ if environ is None else environ
    path = env.get(CONFIG_ENV_VAR, "").strip()
    if not path:
        return PuzzleConfig()
    return load_puzzle_config(Path(path))
