"""
Difficulty presets: ghost speeds, release pacing and scatter/chase timing.
"""

from __future__ import annotations

from dataclasses import dataclass

from .enums import ChoiceEnum


class Difficulty(ChoiceEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class DifficultyPreset:
    label: str
    description: str
    ghost_speed: float            # px/ms
    frightened_speed: float       # px/ms
    eaten_speed: float            # px/ms
    house_speed: float            # px/ms, bounce and exit
    release_delay_multiplier: float
    scatter_duration: int         # ms
    chase_duration: int           # ms
    clyde_shy_distance: int       # tiles


PRESETS = {
    Difficulty.EASY: DifficultyPreset(
        label="Easy",
        description="Slower ghosts, longer scatter periods",
        ghost_speed=0.12,
        frightened_speed=0.06,
        eaten_speed=0.22,
        house_speed=0.05,
        release_delay_multiplier=1.5,
        scatter_duration=3000,
        chase_duration=30000,
        clyde_shy_distance=8,
    ),
    Difficulty.MEDIUM: DifficultyPreset(
        label="Medium",
        description="Balanced challenge",
        ghost_speed=0.14,
        frightened_speed=0.08,
        eaten_speed=0.25,
        house_speed=0.06,
        release_delay_multiplier=1.0,
        scatter_duration=1500,
        chase_duration=45000,
        clyde_shy_distance=5,
    ),
    Difficulty.HARD: DifficultyPreset(
        label="Hard",
        description="Fast ghosts, relentless pursuit",
        ghost_speed=0.18,
        frightened_speed=0.10,
        eaten_speed=0.30,
        house_speed=0.07,
        release_delay_multiplier=0.7,
        scatter_duration=1000,
        chase_duration=60000,
        clyde_shy_distance=3,
    ),
}


def preset_for(difficulty) -> DifficultyPreset:
    """Preset for a difficulty; anything unknown gets MEDIUM."""
    parsed = Difficulty.parse(difficulty)
    return PRESETS[parsed or Difficulty.MEDIUM]
