from __future__ import annotations

import logging
from typing import Protocol

from .clock import Clock
from .music_puzzle import PuzzleController

logger = logging.getLogger(__name__)


class PuzzleSounds(Protocol):
    def play_success(self) -> None:
        ...

    def play_scare(self) -> None:
        ...


class RewardIndicator:
    """Reward shown once the puzzle is solved (a key, a clue...).

    Hidden at setup. Later solves leave it visible; hiding it again is up to
    whatever re-arms the room.
    """

    def __init__(self, name: str = "reward") -> None:
        self.name = name
        self._visible = False

    @property
    def visible(self) -> bool:
        return self._visible

    def reveal(self) -> None:
        if not self._visible:
            logger.info("Reward %r revealed", self.name)
        self._visible = True

    def hide(self) -> None:
        self._visible = False


class ScareEffect:
    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._count = 0
        self._last_triggered_at_s: float | None = None

    @property
    def trigger_count(self) -> int:
        return self._count

    @property
    def last_triggered_at_s(self) -> float | None:
        return self._last_triggered_at_s

    def trigger(self) -> None:
        self._count += 1
        self._last_triggered_at_s = self._clock.now()


class PuzzleEffects:
    """Routes controller notifications to the scene's reward, scare and sounds.

    Any collaborator may be None; its part of the reaction is skipped.
    """

    def __init__(
        self,
        *,
        reward: RewardIndicator | None = None,
        scare: ScareEffect | None = None,
        sounds: PuzzleSounds | None = None,
    ) -> None:
        self.reward = reward
        self.scare = scare
        self.sounds = sounds

    def attach(self, controller: PuzzleController) -> None:
        if self.reward is None:
            logger.warning("Reward is not assigned")
        if self.scare is None:
            logger.warning("Scare effect is not assigned")
        if self.sounds is None:
            logger.warning("Success sound is not assigned")
        if self.reward is not None:
            self.reward.hide()
        controller.on_solved(self.handle_solved)
        controller.on_mismatch(self.handle_mismatch)

    def handle_solved(self) -> None:
        if self.sounds is not None:
            self.sounds.play_success()
        if self.reward is not None:
            self.reward.reveal()

    def handle_mismatch(self) -> None:
        if self.scare is not None:
            self.scare.trigger()
        if self.sounds is not None:
            self.sounds.play_scare()
