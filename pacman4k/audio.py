"""
Procedural audio: every effect is a short square-wave note sequence
rendered into a 16-bit mono buffer for pygame's mixer.
"""

from __future__ import annotations

import array
import logging
from typing import Dict, List, Sequence, Tuple

import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# (frequency Hz, seconds); frequency 0 is a rest
Note = Tuple[float, float]


class SilentAudio:
    """Audio collaborator that ignores every event."""

    enabled = False

    def play(self, name: str):
        pass

    def stop_all(self):
        pass


def render_notes(notes: Sequence[Note], duty: float = 0.25, volume: float = 0.3,
                 bend: float = 0.0, release: float = 0.2) -> List[float]:
    """Square-wave samples in [-1, 1] for a note list.

    bend drops each note's pitch by that fraction over its length;
    release is the fraction of each note spent fading out.
    """
    samples: List[float] = []
    for freq, dur in notes:
        n = int(SAMPLE_RATE * dur)
        if freq <= 0:
            samples.extend([0.0] * n)
            continue
        phase = 0.0
        for i in range(n):
            progress = i / n
            phase = (phase + freq * (1.0 - bend * progress) / SAMPLE_RATE) % 1.0
            wave = 1.0 if phase < duty else -1.0
            env = 1.0
            if release and progress > 1.0 - release:
                env = (1.0 - progress) / release
            samples.append(wave * env * volume)
    return samples


def sweep(start: float, end: float, dur: float, steps: int = 12) -> List[Note]:
    """Approximate a pitch glide with a run of short notes."""
    step = dur / steps
    return [(start + (end - start) * k / (steps - 1), step) for k in range(steps)]


class AudioEngine:
    """pygame mixer backed audio; disables itself when the mixer is unavailable."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.waka_toggle = False
        if not self.enabled:
            return
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, 512)
            pygame.mixer.init()
            self._generate_sounds()
        except pygame.error as exc:
            logger.warning("audio disabled, mixer failed to start: %s", exc)
            self.enabled = False
            self.sounds = {}

    def _generate_sounds(self):
        make = self._make_sound
        self.sounds["waka1"] = make(render_notes([(261.63, 0.055)], duty=0.125, bend=0.15, release=0.9))
        self.sounds["waka2"] = make(render_notes([(196.00, 0.055)], duty=0.125, bend=0.15, release=0.9))
        self.sounds["power"] = make(render_notes(sweep(200, 800, 0.25), volume=0.3, release=0.0))
        self.sounds["eat_ghost"] = make(render_notes(
            [(330, 0.08), (440, 0.08), (554, 0.08), (659, 0.15)], duty=0.125))
        death = [(523, 0.12), (494, 0.12), (466, 0.12), (440, 0.12), (415, 0.12),
                 (392, 0.12), (370, 0.12), (349, 0.12), (330, 0.15), (311, 0.15),
                 (294, 0.20)]
        self.sounds["death"] = make(render_notes(death + sweep(294, 90, 0.4, 8)))
        self.sounds["level_complete"] = make(render_notes(
            [(523, 0.1), (659, 0.1), (784, 0.1), (0, 0.05)] * 3 + [(1047, 0.3)]))
        self.sounds["fruit"] = make(render_notes(sweep(800, 1200, 0.12, 6), duty=0.125, release=0.0))
        self.sounds["extra_life"] = make(render_notes(
            [(523, 0.08), (659, 0.08), (784, 0.08), (1047, 0.15)], duty=0.125))
        intro = [(494, 0.12), (988, 0.12), (740, 0.12), (622, 0.12), (988, 0.12),
                 (740, 0.25), (0, 0.1), (622, 0.12), (523, 0.12), (415, 0.12),
                 (349, 0.12), (523, 0.12), (415, 0.30)]
        self.sounds["intro"] = make(render_notes(intro))

    @staticmethod
    def _make_sound(samples: Sequence[float]) -> pygame.mixer.Sound:
        buf = array.array('h', [int(max(-1.0, min(1.0, s)) * 32767) for s in samples])
        return pygame.mixer.Sound(buffer=buf)

    def play(self, name: str):
        if not self.enabled:
            return
        if name == "munch":
            name = "waka1" if self.waka_toggle else "waka2"
            self.waka_toggle = not self.waka_toggle
        sound = self.sounds.get(name)
        if sound is None:
            logger.debug("no sound for event %r", name)
            return
        sound.play()

    def stop_all(self):
        if self.enabled:
            pygame.mixer.stop()
