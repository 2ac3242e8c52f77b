from __future__ import annotations

import logging
import math
import random
from array import array

import pygame

logger = logging.getLogger(__name__)

# C major arpeggio for a solved puzzle, low dissonant cluster for the scare.
_SUCCESS_NOTES_HZ: tuple[float, ...] = (261.63, 329.63, 392.0, 523.25)
_SCARE_CLUSTER_HZ: tuple[float, ...] = (92.5, 98.0, 103.8)


class PuzzleAudioAdapter:
    """Pygame sounds for the puzzle's success and scare notifications.

    Sounds are rendered into memory at start-up, so no asset files are needed.
    If the mixer cannot be initialised every call is a silent no-op.
    """

    _sample_rate = 22050
    _amp = 32767

    def __init__(self, *, volume: float = 0.8) -> None:
        self._available = False
        self._volume = max(0.0, min(1.0, float(volume)))
        self._success_sound: pygame.mixer.Sound | None = None
        self._scare_sound: pygame.mixer.Sound | None = None
        self._channel: pygame.mixer.Channel | None = None

        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=self._sample_rate, size=-16, channels=1, buffer=512)
            self._success_sound = self._build_success_sound()
            self._scare_sound = self._build_scare_sound()
            self._channel = pygame.mixer.Channel(0)
            self._available = True
        except pygame.error as exc:
            logger.warning("Audio unavailable, puzzle sounds disabled: %s", exc)
            self._available = False

    @property
    def available(self) -> bool:
        return self._available

    def play_success(self) -> None:
        if self._available and self._success_sound is not None:
            self._play(self._success_sound)

    def play_scare(self) -> None:
        if self._available and self._scare_sound is not None:
            self._play(self._scare_sound)

    def stop(self) -> None:
        if not self._available:
            return
        assert self._channel is not None
        self._channel.stop()

    def _play(self, sound: pygame.mixer.Sound) -> None:
        assert self._channel is not None
        self._channel.set_volume(self._volume)
        self._channel.play(sound)

    def _build_success_sound(self) -> pygame.mixer.Sound:
        parts: list[array[int]] = []
        for i, freq in enumerate(_SUCCESS_NOTES_HZ):
            last = i == len(_SUCCESS_NOTES_HZ) - 1
            parts.append(self._render_tone_pcm(freq, 0.22 if last else 0.09, gain=0.34))
            parts.append(self._render_silence_pcm(0.015))
        return pygame.mixer.Sound(buffer=self._concat_pcm(tuple(parts)).tobytes())

    def _build_scare_sound(self) -> pygame.mixer.Sound:
        sample_count = max(1, int(self._sample_rate * 0.55))
        rng = random.Random(0x5CA2E)
        out = array("h")
        for idx in range(sample_count):
            t = idx / float(self._sample_rate)
            envelope = 1.0 - (idx / float(sample_count))
            tone = sum(math.sin(2.0 * math.pi * f * t) for f in _SCARE_CLUSTER_HZ) / len(_SCARE_CLUSTER_HZ)
            noise = rng.uniform(-1.0, 1.0) * 0.35
            sample = (tone * 0.65 + noise) * 0.6 * envelope
            out.append(int(max(-1.0, min(1.0, sample)) * self._amp))
        return pygame.mixer.Sound(buffer=out.tobytes())

    def _render_tone_pcm(self, frequency_hz: float, duration_s: float, *, gain: float) -> array[int]:
        sample_count = max(1, int(self._sample_rate * duration_s))
        fade_n = max(1, int(self._sample_rate * 0.008))
        out = array("h")
        for idx in range(sample_count):
            envelope = 1.0
            if idx < fade_n:
                envelope = idx / float(fade_n)
            tail = sample_count - idx - 1
            if tail < fade_n:
                envelope = min(envelope, tail / float(fade_n))
            phase = (2.0 * math.pi * float(frequency_hz) * idx) / float(self._sample_rate)
            sample = math.sin(phase) * gain * max(0.0, envelope)
            out.append(int(max(-1.0, min(1.0, sample)) * self._amp))
        return out

    def _render_silence_pcm(self, duration_s: float) -> array[int]:
        sample_count = max(1, int(self._sample_rate * duration_s))
        return array("h", [0] * sample_count)

    @staticmethod
    def _concat_pcm(parts: tuple[array[int], ...]) -> array[int]:
        out = array("h")
        for part in parts:
            out.extend(part)
        return out
