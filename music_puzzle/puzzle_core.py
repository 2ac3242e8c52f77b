from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

DEFAULT_PIANO_KEYS: tuple[str, ...] = ("White Key_0",) + tuple(
    f"White Key_0 ({i})" for i in range(1, 16)
)
DEFAULT_PUZZLE_LENGTH = 5


class PuzzleConfigError(ValueError):
    """Raised when a puzzle is configured with an unusable key set or length."""


class Outcome(StrEnum):
    IN_PROGRESS = "in_progress"
    MISMATCH = "mismatch"
    SOLVED = "solved"
    RESET = "reset"


@dataclass(frozen=True, slots=True)
class PuzzleConfig:
    keys: tuple[str, ...] = DEFAULT_PIANO_KEYS
    puzzle_length: int = DEFAULT_PUZZLE_LENGTH

    def validate(self) -> None:
        if isinstance(self.puzzle_length, bool) or not isinstance(self.puzzle_length, int):
            raise PuzzleConfigError("puzzle_length must be an integer")
        if self.puzzle_length < 1:
            raise PuzzleConfigError("puzzle_length must be >= 1")
        if not self.keys:
            raise PuzzleConfigError("keys must contain at least one key")
        for key in self.keys:
            if not isinstance(key, str):
                raise PuzzleConfigError(f"key identifiers must be strings, got {key!r}")
        if len(set(self.keys)) != len(self.keys):
            dupes = sorted({k for k in self.keys if self.keys.count(k) > 1})
            raise PuzzleConfigError(f"keys must be distinct, duplicated: {dupes}")

    @property
    def effective_length(self) -> int:
        """Length of every generated target (clamped to the key count)."""

        return min(self.puzzle_length, len(self.keys))


@dataclass(frozen=True, slots=True)
class PressEvent:
    index: int
    key: str
    expected: str | None  # None when the press overflowed the target
    outcome: Outcome
    input_length: int  # after the press was applied, before any reset
    pressed_at_s: float


@dataclass(frozen=True, slots=True)
class PuzzleSummary:
    presses: int
    solves: int
    mismatches: int
    overflow_resets: int
    scares_triggered: int


@dataclass(frozen=True, slots=True)
class PuzzleSnapshot:
    """View model for a host (pure data, target withheld)."""

    target_length: int
    input_length: int
    progress: float
    last_outcome: Outcome | None
    solved_count: int


class SeededRng:
    """Seeded RNG wrapper so generated targets can be replayed in tests."""

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(int(seed))

    def sample(self, population: Sequence[str], k: int) -> list[str]:
        return self._rng.sample(list(population), k)


def generate_sequence(keys: Sequence[str], length: int, rng: SeededRng) -> tuple[str, ...]:
    """Draw ``min(length, len(keys))`` distinct keys in random order.

    Total for degenerate input: an empty key set or non-positive length
    yields an empty target.
    """

    n = min(int(length), len(keys))
    if n <= 0:
        return ()
    return tuple(rng.sample(keys, n))


def is_prefix_match(pressed: Sequence[str], target: Sequence[str]) -> bool:
    if len(pressed) > len(target):
        return False
    return all(p == t for p, t in zip(pressed, target))
