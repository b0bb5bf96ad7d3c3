"""
Procedural chiptune audio.

Every sound is synthesised at start-up from pulse waves into a 16-bit mono
buffer; nothing is loaded from disk. The engine plays whatever SoundCue the
simulation reported for the frame and runs a background siren that speeds
up as the maze empties.
"""

from __future__ import annotations

import array
import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pygame

from .config import SAMPLE_RATE
from .events import SoundCue

logger = logging.getLogger(__name__)

Note = Tuple[float, float]  # (frequency Hz, seconds); 0 Hz is a rest

SIREN_STAGES = 4


def pulse(phase: float, duty: float) -> float:
    return 1.0 if phase % 1.0 < duty else -1.0


def render_notes(notes: Sequence[Note], duty: float = 0.25, volume: float = 0.35,
                 release: float = 0.2) -> List[float]:
    """Play a note list back to back with a short release on each note."""
    samples = []
    for freq, dur in notes:
        n = int(SAMPLE_RATE * dur)
        for i in range(n):
            if freq <= 0:
                samples.append(0.0)
                continue
            t = i / SAMPLE_RATE
            progress = i / n
            env = 1.0 if progress < 1.0 - release else (1.0 - progress) / release
            samples.append(pulse(t * freq, duty) * env * volume)
    return samples


def render_sweep(start: float, end: float, duration: float, duty: float = 0.125,
                 volume: float = 0.35, decay: float = 1.0) -> List[float]:
    """Linear pitch sweep with a linear fade."""
    samples = []
    n = int(SAMPLE_RATE * duration)
    phase = 0.0
    for i in range(n):
        progress = i / n
        freq = start + (end - start) * progress
        phase += freq / SAMPLE_RATE
        env = 1.0 - progress * decay
        samples.append(pulse(phase, duty) * env * volume)
    return samples


def to_buffer(samples: Iterable[float]) -> array.array:
    return array.array("h", [int(max(-1.0, min(1.0, s)) * 32767) for s in samples])


class AudioEngine:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.muted = False
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.waka_toggle = False
        self.current_siren: Optional[str] = None
        if not self.enabled:
            return
        try:
            # Buffers are 16-bit mono
            if pygame.mixer.get_init() != (SAMPLE_RATE, -16, 1):
                pygame.mixer.quit()
                pygame.mixer.init(SAMPLE_RATE, -16, 1, 512)
            self._generate_sounds()
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)
            self.enabled = False

    # ---------------------------------------------------------------------------
    # SYNTHESIS
    # ---------------------------------------------------------------------------

    def _make_sound(self, samples: Iterable[float]) -> pygame.mixer.Sound:
        return pygame.mixer.Sound(buffer=to_buffer(samples))

    def _generate_sounds(self):
        # Two chomps a fifth apart make the waka
        self.sounds["waka1"] = self._make_sound(render_sweep(262, 222, 0.055, volume=0.4))
        self.sounds["waka2"] = self._make_sound(render_sweep(196, 167, 0.055, volume=0.4))
        self.sounds["power"] = self._make_sound(render_sweep(200, 800, 0.25, duty=0.25, decay=0.3))
        self.sounds["eat_ghost"] = self._make_sound(render_notes(
            [(330, 0.08), (440, 0.08), (554, 0.08), (659, 0.15)], duty=0.125))
        self.sounds["fruit"] = self._make_sound(render_sweep(800, 1200, 0.12))
        self.sounds["extra_life"] = self._make_sound(render_notes(
            [(523, 0.08), (659, 0.08), (784, 0.08), (1047, 0.15)], duty=0.125))
        self.sounds["death"] = self._make_sound(
            render_notes([(523 - 23 * i, 0.12) for i in range(10)])
            + render_sweep(294, 88, 0.4, duty=0.25, volume=0.3))
        self.sounds["intro"] = self._make_sound(render_notes(
            [(494, 0.12), (988, 0.12), (740, 0.12), (622, 0.12), (988, 0.12),
             (740, 0.25), (0, 0.1), (622, 0.12), (523, 0.12), (415, 0.12),
             (349, 0.12), (523, 0.12), (415, 0.30)]))
        self.sounds["level_complete"] = self._make_sound(render_notes(
            [(659, 0.1), (784, 0.1), (988, 0.1), (1319, 0.25)], duty=0.125))
        self.sounds["game_over"] = self._make_sound(render_notes(
            [(392, 0.2), (330, 0.2), (262, 0.4)], volume=0.3))
        for stage in range(1, SIREN_STAGES + 1):
            self.sounds["siren%d" % stage] = self._make_sound(self._siren(stage))

    def _siren(self, stage: int) -> List[float]:
        """Background wail; higher stages wobble faster and higher."""
        samples = []
        base = 80 + stage * 25
        duration = max(0.25, 0.6 - stage * 0.08)
        n = int(SAMPLE_RATE * duration)
        phase = 0.0
        for i in range(n):
            t = i / SAMPLE_RATE
            freq = base + 40 * math.sin(2 * math.pi * (2 + stage) * t)
            phase += freq / SAMPLE_RATE
            samples.append(pulse(phase, 0.5) * 0.12)
        return samples

    # ---------------------------------------------------------------------------
    # PLAYBACK
    # ---------------------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self.enabled and not self.muted

    def play(self, name: str, loops: int = 0):
        if not self.active or name not in self.sounds:
            return
        self.sounds[name].play(loops=loops)

    def stop(self, name: str):
        if not self.enabled or name not in self.sounds:
            return
        self.sounds[name].stop()

    def play_waka(self):
        self.play("waka1" if self.waka_toggle else "waka2")
        self.waka_toggle = not self.waka_toggle

    def play_cue(self, cue: SoundCue):
        if cue is SoundCue.DOT:
            self.play_waka()
        elif cue is SoundCue.POWER_PELLET:
            self.play("power")
        elif cue is SoundCue.GHOST_EATEN:
            self.play("eat_ghost")
        elif cue is SoundCue.FRUIT:
            self.play("fruit")
        elif cue is SoundCue.EXTRA_LIFE:
            self.play("extra_life")
        elif cue is SoundCue.GAME_START:
            self.play("intro")
        elif cue is SoundCue.DEATH:
            self.stop_siren()
            self.play("death")
        elif cue is SoundCue.LEVEL_COMPLETE:
            self.stop_siren()
            self.play("level_complete")
        elif cue is SoundCue.GAME_OVER:
            self.stop_siren()
            self.play("game_over")

    def play_events(self, cues: Iterable[SoundCue]):
        for cue in cues:
            self.play_cue(cue)

    def update_siren(self, dots_remaining: int, total_dots: int):
        """Pick the siren stage from how much of the maze is left."""
        if not self.active:
            return
        ratio = dots_remaining / max(1, total_dots)
        if ratio > 0.6:
            stage = 1
        elif ratio > 0.4:
            stage = 2
        elif ratio > 0.2:
            stage = 3
        else:
            stage = 4
        name = "siren%d" % stage
        if name != self.current_siren:
            self.stop_siren()
            self.current_siren = name
            self.play(name, loops=-1)

    def stop_siren(self):
        if self.current_siren:
            self.stop(self.current_siren)
            self.current_siren = None

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        if self.muted:
            self.stop_all()
        return self.muted

    def stop_all(self):
        if not self.enabled:
            return
        pygame.mixer.stop()
        self.current_siren = None
