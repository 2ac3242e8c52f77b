from __future__ import annotations

import json
from pathlib import Path

import pytest

from music_puzzle.config import CONFIG_ENV_VAR, config_from_env, load_puzzle_config, puzzle_config_from_mapping
from music_puzzle.puzzle_core import DEFAULT_PIANO_KEYS, PuzzleConfig, PuzzleConfigError


def test_mapping_defaults_to_piano_scene() -> None:
    cfg = puzzle_config_from_mapping({})
    assert cfg == PuzzleConfig()
    assert cfg.keys == DEFAULT_PIANO_KEYS
    assert cfg.puzzle_length == 5


def test_load_from_json_file(tmp_path: Path) -> None:
    path = tmp_path / "puzzle.json"
    path.write_text(json.dumps({"keys": ["C4", "D4", "E4"], "puzzle_length": 2}), encoding="utf-8")

    cfg = load_puzzle_config(path)
    assert cfg.keys == ("C4", "D4", "E4")
    assert cfg.puzzle_length == 2


@pytest.mark.parametrize(
    "data",
    [
        {"keys": "C4"},
        {"keys": []},
        {"keys": ["C4", "C4"]},
        {"puzzle_length": "5"},
        {"puzzle_length": True},
        {"puzzle_length": 0},
    ],
)
def test_bad_mappings_raise_config_error(data: dict[str, object]) -> None:
    with pytest.raises(PuzzleConfigError):
        puzzle_config_from_mapping(data)


def test_malformed_json_raises_config_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PuzzleConfigError):
        load_puzzle_config(path)

    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(PuzzleConfigError):
        load_puzzle_config(path)


def test_missing_file_propagates(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_puzzle_config(tmp_path / "nope.json")


def test_config_from_env(tmp_path: Path) -> None:
    assert config_from_env({}) == PuzzleConfig()

    path = tmp_path / "env.json"
    path.write_text(json.dumps({"puzzle_length": 3}), encoding="utf-8")
    cfg = config_from_env({CONFIG_ENV_VAR: str(path)})
    assert cfg.puzzle_length == 3
    assert cfg.keys == DEFAULT_PIANO_KEYS
