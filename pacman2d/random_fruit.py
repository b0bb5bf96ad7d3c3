"""
Random bonus fruit.

Fruits pop up on cleared floor tiles at random intervals, fade in, blink
near the end of their life and vanish if nobody picks them up. Spawning is
best effort: when no tile qualifies the attempt is dropped and the timer is
re-armed.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .config import (
    FRUIT_BLINK_PERIOD,
    FRUIT_BLINK_TIME,
    FRUIT_FADE_IN,
    FRUIT_LIFETIME,
    MAX_ACTIVE_FRUITS,
    MAX_SPAWN_INTERVAL,
    MIN_SPAWN_DISTANCE,
    MIN_SPAWN_INTERVAL,
    POINTS_DISPLAY_TIME,
)
from .dots import DotField
from .fruit import FruitKind, fruit_points
from .geometry import Tile, manhattan
from .maze import Maze

logger = logging.getLogger(__name__)

# Cherry is the most common, bell the rarest
RANDOM_FRUIT_WEIGHTS = (
    (FruitKind.CHERRY, 30),
    (FruitKind.STRAWBERRY, 25),
    (FruitKind.ORANGE, 20),
    (FruitKind.APPLE, 15),
    (FruitKind.GRAPES, 7),
    (FruitKind.GALAXIAN, 2),
    (FruitKind.BELL, 1),
)
RARE_WEIGHT = 10


@dataclass
class RandomFruit:
    id: int
    tile: Tile
    kind: FruitKind
    lifetime_ms: float = FRUIT_LIFETIME
    fade_in_ms: float = FRUIT_FADE_IN

    @property
    def points(self) -> int:
        return fruit_points(self.kind)

    @property
    def is_blinking(self) -> bool:
        return self.lifetime_ms < FRUIT_BLINK_TIME

    @property
    def opacity(self) -> float:
        fade = 1.0 - self.fade_in_ms / FRUIT_FADE_IN
        blink = 1.0
        if self.is_blinking and int(self.lifetime_ms // FRUIT_BLINK_PERIOD) % 2 == 0:
            blink = 0.3
        return min(fade, blink)


@dataclass
class PointsPopup:
    id: int
    tile: Tile
    points: int
    remaining_ms: float = POINTS_DISPLAY_TIME


class RandomFruitSpawner:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.active: List[RandomFruit] = []
        self.popups: List[PointsPopup] = []
        self.next_id = 1
        self.next_spawn_ms = self.spawn_interval()

    def spawn_interval(self) -> float:
        return self.rng.uniform(MIN_SPAWN_INTERVAL, MAX_SPAWN_INTERVAL)

    def select_kind(self, level: int) -> FruitKind:
        """Weighted draw; rare fruits get more likely on later levels."""
        bonus = max(0, min(level - 1, 5))
        kinds = []
        weights = []
        for kind, weight in RANDOM_FRUIT_WEIGHTS:
            kinds.append(kind)
            weights.append(weight + (bonus if weight < RARE_WEIGHT else 0))
        return self.rng.choices(kinds, weights=weights)[0]

    def valid_spawn_tiles(self, maze: Maze, dots: DotField,
                          player_tiles: Iterable[Tile]) -> List[Tile]:
        players = list(player_tiles)
        taken = {fruit.tile for fruit in self.active}
        tiles = []
        for tile in maze.open_tiles():
            if tile in taken or dots.has_uncollected_at(tile):
                continue
            if any(manhattan(tile, p) < MIN_SPAWN_DISTANCE for p in players):
                continue
            tiles.append(tile)
        return tiles

    def try_spawn(self, maze: Maze, dots: DotField,
                  player_tiles: Iterable[Tile], level: int) -> Optional[RandomFruit]:
        if len(self.active) >= MAX_ACTIVE_FRUITS:
            return None
        tiles = self.valid_spawn_tiles(maze, dots, player_tiles)
        if not tiles:
            logger.debug("no free tile for a random fruit, skipping spawn")
            return None
        tile = self.rng.choice(tiles)
        fruit = RandomFruit(self.next_id, tile, self.select_kind(level))
        self.next_id += 1
        self.active.append(fruit)
        logger.debug("random %s spawned at %s", fruit.kind.value, tile)
        return fruit

    def try_collect(self, tile: Tile) -> Optional[RandomFruit]:
        for fruit in self.active:
            if fruit.tile == tile:
                self.active.remove(fruit)
                self.popups.append(PointsPopup(fruit.id, fruit.tile, fruit.points))
                return fruit
        return None

    def update(self, dt_ms: float) -> bool:
        """Age fruits and popups; returns True when a spawn attempt is due."""
        due = False
        self.next_spawn_ms -= dt_ms
        if self.next_spawn_ms <= 0:
            due = True
            self.next_spawn_ms = self.spawn_interval()

        for fruit in self.active:
            fruit.lifetime_ms -= dt_ms
            fruit.fade_in_ms = max(0, fruit.fade_in_ms - dt_ms)
        self.active = [f for f in self.active if f.lifetime_ms > 0]

        for popup in self.popups:
            popup.remaining_ms -= dt_ms
        self.popups = [p for p in self.popups if p.remaining_ms > 0]
        return due
