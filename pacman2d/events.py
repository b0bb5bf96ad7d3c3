from __future__ import annotations

from enum import Enum


class SoundCue(Enum):
    """Things that happened during a tick that the audio side may voice."""
    GAME_START = "game_start"
    DOT = "dot"
    POWER_PELLET = "power_pellet"
    GHOST_EATEN = "ghost_eaten"
    FRUIT = "fruit"
    DEATH = "death"
    EXTRA_LIFE = "extra_life"
    LEVEL_COMPLETE = "level_complete"
    GAME_OVER = "game_over"
