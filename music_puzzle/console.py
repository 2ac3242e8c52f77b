from __future__ import annotations

import logging
import random
from typing import TextIO

from .clock import Clock, RealClock
from .effects import PuzzleEffects, PuzzleSounds, RewardIndicator, ScareEffect
from .music_puzzle import build_music_puzzle
from .puzzle_core import Outcome, PuzzleConfig

logger = logging.getLogger(__name__)

_OUTCOME_TEXT = {
    Outcome.IN_PROGRESS: "ok",
    Outcome.MISMATCH: "WRONG - the piano shrieks. Start again.",
    Outcome.SOLVED: "SOLVED - a reward appears. A new melody is set.",
    Outcome.RESET: "too many keys - puzzle reset",
}


def _new_seed() -> int:
    return random.SystemRandom().randint(1, 2**31 - 1)


def _resolve_key(line: str, keys: tuple[str, ...]) -> str:
    """Map a typed line to a key id; exact names win, then 1-based numbers pick from the key list."""

    if line in keys:
        return line
    if line.isdigit():
        idx = int(line)
        if 1 <= idx <= len(keys):
            return keys[idx - 1]
    return line


def run_console(
    *,
    stdin: TextIO,
    stdout: TextIO,
    config: PuzzleConfig | None = None,
    seed: int | None = None,
    clock: Clock | None = None,
    sounds: PuzzleSounds | None = None,
) -> int:
    """Line-mode puzzle session: one key per line until EOF or ``:quit``.

    Commands: ``:keys`` lists the key set, ``:reset`` abandons the attempt.
    """

    cfg = config or PuzzleConfig()
    clk = clock or RealClock()
    reward = RewardIndicator()
    effects = PuzzleEffects(reward=reward, scare=ScareEffect(clk), sounds=sounds)
    puzzle = build_music_puzzle(
        clock=clk,
        seed=_new_seed() if seed is None else seed,
        config=cfg,
        on_mismatch=effects.handle_mismatch,
        on_solved=effects.handle_solved,
    )
    effects.attach(puzzle)

    stdout.write(
        f"Play the hidden {puzzle.target_length}-key melody "
        f"({len(cfg.keys)} keys, ':keys' to list, ':quit' to stop).\n"
    )

    for raw in stdin:
        line = raw.strip()
        if not line:
            continue
        if line == ":quit":
            break
        if line == ":keys":
            for i, key in enumerate(cfg.keys, start=1):
                stdout.write(f"{i:>3}  {key}\n")
            continue
        if line == ":reset":
            puzzle.reset()
            stdout.write("attempt abandoned\n")
            continue

        outcome = puzzle.submit_key_press(_resolve_key(line, cfg.keys))
        snap = puzzle.snapshot()
        stdout.write(f"[{snap.input_length}/{snap.target_length}] {_OUTCOME_TEXT[outcome]}\n")

    s = puzzle.summary()
    stdout.write(
        f"Presses: {s.presses}  Solved: {s.solves}  Mistakes: {s.mismatches}  "
        f"Reward visible: {'yes' if reward.visible else 'no'}\n"
    )
    return 0
