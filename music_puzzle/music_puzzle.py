from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Sequence

from .clock import Clock
from .puzzle_core import (
    DEFAULT_PIANO_KEYS,
    DEFAULT_PUZZLE_LENGTH,
    Outcome,
    PressEvent,
    PuzzleConfig,
    PuzzleSnapshot,
    PuzzleSummary,
    SeededRng,
    generate_sequence,
    is_prefix_match,
)

logger = logging.getLogger(__name__)

# Press history kept for diagnostics; counters in summary() cover the whole run.
DEFAULT_MAX_EVENTS = 256

Notification = Callable[[], None]
SequenceListener = Callable[[tuple[str, ...]], None]


class PuzzleController:
    """Piano sequence puzzle: generate a target, check presses prefix-wise.

    - Deterministic: targets come from an RNG seeded at construction.
    - Every terminal condition (mismatch, solve, overflow) resets the input
      within the same call, so between calls the input is always a correct
      prefix of the target.
    - Side effects go out through optional callbacks; a missing callback is
      skipped.
    """

    def __init__(
        self,
        *,
        config: PuzzleConfig,
        clock: Clock,
        seed: int,
        on_mismatch: Notification | None = None,
        on_solved: Notification | None = None,
        on_sequence_generated: SequenceListener | None = None,
        max_events: int = DEFAULT_MAX_EVENTS,
    ) -> None:
        config.validate()

        self._config = config
        self._clock = clock
        self._seed = int(seed)
        self._rng = SeededRng(self._seed)

        self._on_mismatch = on_mismatch
        self._on_solved = on_solved
        self._on_sequence_generated = on_sequence_generated

        if on_solved is None:
            logger.warning("No success notification registered; solves will be silent")
        if on_mismatch is None:
            logger.warning("No scare effect registered; mismatches will be silent")

        self._target: tuple[str, ...] = ()
        self._input: list[str] = []
        self._scare_latched = False

        if max_events < 1:
            raise ValueError("max_events must be >= 1")
        self._events: deque[PressEvent] = deque(maxlen=int(max_events))
        self._presses = 0
        self._last_outcome: Outcome | None = None
        self._solves = 0
        self._mismatches = 0
        self._overflow_resets = 0
        self._scares = 0

        self.regenerate()

    @property
    def config(self) -> PuzzleConfig:
        return self._config

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def input_length(self) -> int:
        return len(self._input)

    @property
    def target_length(self) -> int:
        return len(self._target)

    @property
    def scare_latched(self) -> bool:
        return self._scare_latched

    def on_mismatch(self, callback: Notification | None) -> None:
        self._on_mismatch = callback

    def on_solved(self, callback: Notification | None) -> None:
        self._on_solved = callback

    def on_sequence_generated(self, callback: SequenceListener | None) -> None:
        self._on_sequence_generated = callback

    def submit_key_press(self, key: str) -> Outcome:
        """Apply one key press and return what it did to the puzzle."""

        pressed_at_s = self._clock.now()

        if len(self._input) >= len(self._target):
            # Only reachable through re-entrant or duplicated presses.
            logger.warning(
                "Key %r arrived with %d/%d keys already entered; resetting puzzle",
                key,
                len(self._input),
                len(self._target),
            )
            self._record(key, None, Outcome.RESET, len(self._input), pressed_at_s)
            self._overflow_resets += 1
            self.reset()
            return Outcome.RESET

        expected = self._target[len(self._input)]
        self._input.append(key)
        logger.debug("Key pressed: %s", key)

        if not is_prefix_match(self._input, self._target):
            self._record(key, expected, Outcome.MISMATCH, len(self._input), pressed_at_s)
            self._mismatches += 1
            try:
                self._trigger_scare()
            finally:
                self.reset()
            return Outcome.MISMATCH

        if len(self._input) == len(self._target):
            self._record(key, expected, Outcome.SOLVED, len(self._input), pressed_at_s)
            self._solves += 1
            logger.info("Puzzle solved after %d keys", len(self._target))
            try:
                if self._on_solved is not None:
                    self._on_solved()
            finally:
                self.regenerate()
            return Outcome.SOLVED

        self._record(key, expected, Outcome.IN_PROGRESS, len(self._input), pressed_at_s)
        return Outcome.IN_PROGRESS

    def reset(self) -> None:
        """Abandon the current attempt. The target is left alone."""

        self._input.clear()
        self._scare_latched = False
        logger.debug("Puzzle reset, ready for new input")

    def regenerate(self) -> None:
        """Draw a fresh target and start a clean attempt against it."""

        self._target = generate_sequence(
            self._config.keys, self._config.puzzle_length, self._rng
        )
        logger.debug("Generated sequence: %s", ", ".join(self._target))
        self.reset()
        if self._on_sequence_generated is not None:
            self._on_sequence_generated(self._target)

    def events(self) -> list[PressEvent]:
        """Most recent presses, oldest first (at most ``max_events``)."""

        return list(self._events)

    def summary(self) -> PuzzleSummary:
        return PuzzleSummary(
            presses=self._presses,
            solves=self._solves,
            mismatches=self._mismatches,
            overflow_resets=self._overflow_resets,
            scares_triggered=self._scares,
        )

    def snapshot(self) -> PuzzleSnapshot:
        total = len(self._target)
        progress = 0.0 if total == 0 else len(self._input) / total
        return PuzzleSnapshot(
            target_length=total,
            input_length=len(self._input),
            progress=progress,
            last_outcome=self._last_outcome,
            solved_count=self._solves,
        )

    def _trigger_scare(self) -> None:
        if self._scare_latched:
            return
        self._scare_latched = True
        if self._on_mismatch is None:
            return
        self._scares += 1
        logger.info("Wrong sequence, scare effect triggered")
        self._on_mismatch()

    def _record(
        self,
        key: str,
        expected: str | None,
        outcome: Outcome,
        input_length: int,
        pressed_at_s: float,
    ) -> None:
        self._last_outcome = outcome
        self._presses += 1
        self._events.append(
            PressEvent(
                index=self._presses - 1,
                key=str(key),
                expected=expected,
                outcome=outcome,
                input_length=input_length,
                pressed_at_s=pressed_at_s,
            )
        )


def build_music_puzzle(
    *,
    clock: Clock,
    seed: int,
    keys: Sequence[str] = DEFAULT_PIANO_KEYS,
    puzzle_length: int = DEFAULT_PUZZLE_LENGTH,
    config: PuzzleConfig | None = None,
    on_mismatch: Notification | None = None,
    on_solved: Notification | None = None,
    on_sequence_generated: SequenceListener | None = None,
    max_events: int = DEFAULT_MAX_EVENTS,
) -> PuzzleController:
    cfg = config or PuzzleConfig(keys=tuple(keys), puzzle_length=puzzle_length)
    return PuzzleController(
        config=cfg,
        clock=clock,
        seed=seed,
        on_mismatch=on_mismatch,
        on_solved=on_solved,
        on_sequence_generated=on_sequence_generated,
        max_events=max_events,
    )
