from __future__ import annotations

import random
from dataclasses import dataclass

from music_puzzle.effects import PuzzleEffects, RewardIndicator, ScareEffect
from music_puzzle.music_puzzle import build_music_puzzle
from music_puzzle.puzzle_core import DEFAULT_PIANO_KEYS, Outcome, SeededRng, generate_sequence


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += float(dt)


@dataclass
class RecordingSounds:
    successes: int = 0
    scares: int = 0

    def play_success(self) -> None:
        self.successes += 1

    def play_scare(self) -> None:
        self.scares += 1


def test_headless_sim_scripted_scenarios() -> None:
    keys = ("A", "B", "C", "D", "E")
    seed = 2024
    clock = FakeClock()

    mirror = SeededRng(seed)
    first = generate_sequence(keys, 3, mirror)
    second = generate_sequence(keys, 3, mirror)

    reward = RewardIndicator("brass key")
    scare = ScareEffect(clock)
    sounds = RecordingSounds()
    effects = PuzzleEffects(reward=reward, scare=scare, sounds=sounds)

    puzzle = build_music_puzzle(clock=clock, seed=seed, keys=keys, puzzle_length=3)
    effects.attach(puzzle)
    assert reward.visible is False

    # Wrong second key: scare, same target survives.
    wrong = next(k for k in keys if k != first[1])
    assert puzzle.submit_key_press(first[0]) is Outcome.IN_PROGRESS
    clock.advance(0.4)
    assert puzzle.submit_key_press(wrong) is Outcome.MISMATCH
    assert scare.trigger_count == 1
    assert scare.last_triggered_at_s == 0.4
    assert sounds.scares == 1
    assert reward.visible is False

    # Full correct run: success sound, reward, fresh target.
    for key in first:
        clock.advance(0.3)
        outcome = puzzle.submit_key_press(key)
    assert outcome is Outcome.SOLVED
    assert sounds.successes == 1
    assert reward.visible is True

    # Second target; reward stays visible through a later mistake.
    wrong_first = next(k for k in keys if k != second[0])
    assert puzzle.submit_key_press(wrong_first) is Outcome.MISMATCH
    assert reward.visible is True
    for key in second:
        outcome = puzzle.submit_key_press(key)
    assert outcome is Outcome.SOLVED

    s = puzzle.summary()
    assert s.solves == 2
    assert s.mismatches == 2
    assert s.scares_triggered == 2
    assert s.overflow_resets == 0
    assert s.presses == 2 + 3 + 1 + 3


def test_headless_sim_random_player_matches_reference_model() -> None:
    """Random presses: MISMATCH exactly when the key differs from the target slot."""

    seed = 99
    length = 5
    keys = DEFAULT_PIANO_KEYS
    mirror = SeededRng(seed)
    target = generate_sequence(keys, length, mirror)

    scares: list[float] = []
    solves: list[int] = []
    clock = FakeClock()
    puzzle = build_music_puzzle(
        clock=clock,
        seed=seed,
        keys=keys,
        puzzle_length=length,
        on_mismatch=lambda: scares.append(clock.now()),
        on_solved=lambda: solves.append(1),
    )

    player = random.Random(7)
    position = 0
    expected_mismatches = 0
    for _ in range(2000):
        clock.advance(0.1)
        if player.random() < 0.8:
            key = target[position]
        else:
            key = player.choice(keys)
        outcome = puzzle.submit_key_press(key)

        if key != target[position]:
            assert outcome is Outcome.MISMATCH
            expected_mismatches += 1
            position = 0
        elif position == length - 1:
            assert outcome is Outcome.SOLVED
            target = generate_sequence(keys, length, mirror)
            position = 0
        else:
            assert outcome is Outcome.IN_PROGRESS
            position += 1

        assert puzzle.input_length == position
        assert puzzle.target_length == length
        assert puzzle.scare_latched is False

    s = puzzle.summary()
    assert s.presses == 2000
    assert s.mismatches == expected_mismatches
    assert len(scares) == expected_mismatches
    assert len(solves) == s.solves
    assert s.overflow_resets == 0
    assert s.solves > 0
