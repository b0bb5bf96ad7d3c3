"""
Bonus fruit that appears at a fixed tile after enough dots are eaten.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import (
    FRUIT_DURATION,
    FRUIT_POPUP_TIME,
    FRUIT_SPAWN_THRESHOLDS,
    FRUIT_SPAWN_TILE,
)
from .geometry import Tile


class FruitKind(Enum):
    CHERRY = "cherry"
    STRAWBERRY = "strawberry"
    ORANGE = "orange"
    APPLE = "apple"
    GRAPES = "grapes"
    GALAXIAN = "galaxian"
    BELL = "bell"
    KEY = "key"


FRUIT_POINTS = {
    FruitKind.CHERRY: 100,
    FruitKind.STRAWBERRY: 300,
    FruitKind.ORANGE: 500,
    FruitKind.APPLE: 700,
    FruitKind.GRAPES: 1000,
    FruitKind.GALAXIAN: 2000,
    FruitKind.BELL: 3000,
    FruitKind.KEY: 5000,
}

# Two levels per fruit, key from level 15 on
_LEVEL_BANDS = (
    FruitKind.CHERRY,
    FruitKind.STRAWBERRY,
    FruitKind.ORANGE,
    FruitKind.APPLE,
    FruitKind.GRAPES,
    FruitKind.GALAXIAN,
    FruitKind.BELL,
)


def fruit_for_level(level: int) -> FruitKind:
    band = (max(1, level) - 1) // 2
    if band < len(_LEVEL_BANDS):
        return _LEVEL_BANDS[band]
    return FruitKind.KEY


def fruit_points(kind: Optional[FruitKind]) -> int:
    return FRUIT_POINTS.get(kind, 0)


@dataclass
class LevelFruit:
    active: bool = False
    kind: Optional[FruitKind] = None
    tile: Tile = FRUIT_SPAWN_TILE
    expiry_ms: float = 0
    spawn_count: int = 0
    last_points: int = 0
    popup_ms: float = 0

    def should_spawn(self, dots_collected: int) -> bool:
        if self.spawn_count >= len(FRUIT_SPAWN_THRESHOLDS):
            return False
        return dots_collected >= FRUIT_SPAWN_THRESHOLDS[self.spawn_count]

    def spawn(self, level: int):
        self.active = True
        self.kind = fruit_for_level(level)
        self.expiry_ms = FRUIT_DURATION
        self.spawn_count += 1

    def check_spawn(self, dots_collected: int, level: int) -> bool:
        """Spawn when the next dot threshold has been reached."""
        if self.should_spawn(dots_collected):
            self.spawn(level)
            return True
        return False

    def try_collect(self, tile: Tile) -> int:
        """Collect the fruit if the player stands on it; returns points."""
        if not self.active or tile != self.tile:
            return 0
        points = fruit_points(self.kind)
        self.active = False
        self.kind = None
        self.expiry_ms = 0
        self.last_points = points
        self.popup_ms = FRUIT_POPUP_TIME
        return points

    def update(self, dt_ms: float):
        if self.popup_ms > 0:
            self.popup_ms = max(0, self.popup_ms - dt_ms)
        if not self.active:
            return
        self.expiry_ms -= dt_ms
        if self.expiry_ms <= 0:
            self.active = False
            self.kind = None
            self.expiry_ms = 0
