"""
Ghost AI.

Each ghost makes a decision whenever it reaches a tile centre: it picks the
legal, non-reversing direction whose next tile lies closest to its target
(ties broken UP, LEFT, DOWN, RIGHT). The target depends on the mode:

- SCATTER:    the ghost's home corner
- CHASE:      a per-ghost personality (see the *_target functions)
- FRIGHTENED: no target, a random legal turn
- EATEN:      the ghost house, at high speed
- IN_HOUSE:   bob up and down in the pen until released
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Sequence

from .config import (
    GHOST_BOUNCE_AMPLITUDE,
    GHOST_HOUSE_CENTER,
    GHOST_HOUSE_EXIT,
    GHOST_RELEASE_DELAYS,
    GHOST_RESPAWN_DELAY,
    GHOST_START_TILES,
    SCATTER_TARGETS,
    TILE_SIZE,
)
from .difficulty import DifficultyPreset
from .geometry import DECISION_ORDER, Direction, Tile, Vec2, manhattan, tile_dist_sq
from .maze import Maze

CENTER_EPSILON = 0.01
_STEP_EPSILON = 1e-9


class GhostType(Enum):
    BLINKY = "blinky"
    PINKY = "pinky"
    INKY = "inky"
    CLYDE = "clyde"


class GhostMode(Enum):
    IN_HOUSE = auto()
    CHASE = auto()
    SCATTER = auto()
    FRIGHTENED = auto()
    EATEN = auto()


ROAMING = (GhostMode.CHASE, GhostMode.SCATTER)


@dataclass(frozen=True)
class PlayerPose:
    """What a ghost knows about a player it may be hunting."""
    x: float
    y: float
    direction: Direction = Direction.NONE

    @property
    def tile(self) -> Tile:
        return Maze.tile_at_pixel(self.x, self.y)

    @property
    def pos(self) -> Vec2:
        return Vec2(self.x, self.y)


@dataclass
class GhostContext:
    maze: Maze
    players: Sequence[PlayerPose]
    blinky_tile: Tile
    global_mode: GhostMode
    preset: DifficultyPreset
    rng: random.Random


# ---------------------------------------------------------------------------
# TARGETING
# ---------------------------------------------------------------------------

def nearest_player(pos: Vec2, players: Sequence[PlayerPose]) -> PlayerPose:
    return min(players, key=lambda p: pos.dist_sq(p.pos))


def blinky_target(player: PlayerPose) -> Tile:
    """Chases the player's tile directly."""
    return player.tile


def pinky_target(player: PlayerPose) -> Tile:
    """Ambushes four tiles ahead of the player."""
    tx, ty = player.tile
    d = player.direction
    return (tx + 4 * d.dx, ty + 4 * d.dy)


def inky_target(player: PlayerPose, blinky_tile: Tile) -> Tile:
    """Doubles the vector from Blinky to two tiles ahead of the player."""
    tx, ty = player.tile
    d = player.direction
    ahead_x = tx + 2 * d.dx
    ahead_y = ty + 2 * d.dy
    bx, by = blinky_tile
    return (bx + 2 * (ahead_x - bx), by + 2 * (ahead_y - by))


def clyde_target(player: PlayerPose, clyde_tile: Tile, shy_distance: int) -> Tile:
    """Chases from afar, runs for his corner when close."""
    if manhattan(clyde_tile, player.tile) > shy_distance:
        return player.tile
    return SCATTER_TARGETS["CLYDE"]


def choose_direction(maze: Maze, tile: Tile, current: Direction, target: Tile) -> Direction:
    options = legal_moves(maze, tile, current)
    if not options:
        back = current.reverse
        if back is not Direction.NONE and maze.is_walkable(tile[0] + back.dx, tile[1] + back.dy):
            return back
        return Direction.NONE
    return min(options, key=lambda d: tile_dist_sq((tile[0] + d.dx, tile[1] + d.dy), target))


def legal_moves(maze: Maze, tile: Tile, current: Direction) -> List[Direction]:
    reverse_dir = current.reverse
    return [
        d for d in DECISION_ORDER
        if d is not reverse_dir and maze.is_walkable(tile[0] + d.dx, tile[1] + d.dy)
    ]


# ---------------------------------------------------------------------------
# GHOST
# ---------------------------------------------------------------------------

def _center(tile: Tile) -> Vec2:
    return Maze.pixel_center_of_tile(*tile)


@dataclass
class Ghost:
    type: GhostType
    home: Vec2
    release_delay_ms: float
    pos: Vec2 = None
    direction: Direction = Direction.UP
    mode: GhostMode = GhostMode.IN_HOUSE
    previous_mode: GhostMode = GhostMode.CHASE
    target_tile: Tile = (0, 0)
    time_in_house_ms: float = 0
    bounce_dir: Direction = Direction.UP
    is_exiting: bool = False
    scatter_tile: Tile = field(default=(0, 0))

    def __post_init__(self):
        if self.pos is None:
            self.pos = self.home.copy()
        self.scatter_tile = SCATTER_TARGETS[self.type.name]
        self.target_tile = self.scatter_tile

    @property
    def tile(self) -> Tile:
        return Maze.tile_at_pixel(self.pos.x, self.pos.y)

    @property
    def is_roaming(self) -> bool:
        return self.mode in ROAMING

    def at_tile_center(self) -> bool:
        c = _center(self.tile)
        return abs(self.pos.x - c.x) < CENTER_EPSILON and abs(self.pos.y - c.y) < CENTER_EPSILON

    def speed(self, preset: DifficultyPreset) -> float:
        if self.mode is GhostMode.FRIGHTENED:
            return preset.frightened_speed
        if self.mode is GhostMode.EATEN:
            return preset.eaten_speed
        if self.mode is GhostMode.IN_HOUSE:
            return preset.house_speed
        return preset.ghost_speed

    # --- Mode changes ---

    def reverse(self):
        self.direction = self.direction.reverse

    def apply_global_mode(self, mode: GhostMode):
        """Scatter/chase flip: roaming ghosts switch and turn around."""
        if self.is_roaming:
            self.mode = mode
            self.reverse()
        elif self.mode is GhostMode.FRIGHTENED:
            self.previous_mode = mode

    def frighten(self) -> bool:
        if not self.is_roaming:
            return False
        self.previous_mode = self.mode
        self.mode = GhostMode.FRIGHTENED
        self.reverse()
        return True

    def end_frightened(self):
        if self.mode is GhostMode.FRIGHTENED:
            self.mode = self.previous_mode if self.previous_mode in ROAMING else GhostMode.CHASE

    def eat(self) -> bool:
        if self.mode is not GhostMode.FRIGHTENED:
            return False
        self.mode = GhostMode.EATEN
        self.target_tile = GHOST_HOUSE_CENTER
        return True

    def _enter_house(self, pos: Vec2):
        self.pos = pos
        self.mode = GhostMode.IN_HOUSE
        self.time_in_house_ms = self.release_delay_ms - GHOST_RESPAWN_DELAY
        self.is_exiting = False
        self.bounce_dir = Direction.UP
        self.direction = Direction.UP

    def send_home(self):
        """Put an eaten ghost straight back in the pen (after a player death)."""
        self._enter_house(self.home.copy())

    # --- Update ---

    def compute_target(self, ctx: GhostContext) -> Tile:
        if self.mode is GhostMode.EATEN:
            return GHOST_HOUSE_CENTER
        if self.mode is GhostMode.SCATTER or not ctx.players:
            return self.scatter_tile

        player = nearest_player(self.pos, ctx.players)
        if self.type is GhostType.BLINKY:
            return blinky_target(player)
        if self.type is GhostType.PINKY:
            return pinky_target(player)
        if self.type is GhostType.INKY:
            return inky_target(player, ctx.blinky_tile)
        return clyde_target(player, self.tile, ctx.preset.clyde_shy_distance)

    def decide(self, ctx: GhostContext) -> Direction:
        tile = self.tile
        if self.mode is GhostMode.FRIGHTENED:
            options = legal_moves(ctx.maze, tile, self.direction)
            if options:
                return ctx.rng.choice(options)
            return choose_direction(ctx.maze, tile, self.direction, tile)
        self.target_tile = self.compute_target(ctx)
        return choose_direction(ctx.maze, tile, self.direction, self.target_tile)

    def update(self, ctx: GhostContext, dt_ms: float):
        if dt_ms <= 0:
            return
        if self.mode is GhostMode.IN_HOUSE:
            self._update_in_house(ctx, dt_ms)
            return
        self._advance(ctx, self.speed(ctx.preset) * dt_ms)

    def _advance(self, ctx: GhostContext, distance: float):
        remaining = distance
        while remaining > _STEP_EPSILON:
            if self.at_tile_center():
                tile = self.tile
                self.pos = _center(tile)
                if self.mode is GhostMode.EATEN and tile == GHOST_HOUSE_CENTER:
                    self._enter_house(self.pos)
                    return
                self.direction = self.decide(ctx)
                if self.direction is Direction.NONE:
                    return
                if not ctx.maze.is_walkable(tile[0] + self.direction.dx, tile[1] + self.direction.dy):
                    return

            to_center = self._distance_to_next_center()
            step = min(remaining, to_center)
            self.pos = self.pos + Vec2(self.direction.dx, self.direction.dy) * step
            remaining -= step
            if to_center - step <= _STEP_EPSILON:
                self.pos = _center(self.tile)

    def _distance_to_next_center(self) -> float:
        d = self.direction
        c = _center(self.tile)
        if d.is_horizontal:
            offset = (self.pos.x - c.x) * d.dx
        else:
            offset = (self.pos.y - c.y) * d.dy
        if offset < -CENTER_EPSILON:
            return -offset
        return TILE_SIZE - max(0.0, offset)

    def _update_in_house(self, ctx: GhostContext, dt_ms: float):
        self.time_in_house_ms += dt_ms
        if not self.is_exiting and self.time_in_house_ms >= self.release_delay_ms:
            self.is_exiting = True
        budget = ctx.preset.house_speed * dt_ms
        if self.is_exiting:
            self._exit_house(ctx, budget)
        else:
            self._bounce(budget)

    def _bounce(self, budget: float):
        self.pos.y += self.bounce_dir.dy * budget
        offset = self.pos.y - self.home.y
        if abs(offset) >= GHOST_BOUNCE_AMPLITUDE:
            self.pos.y = self.home.y + math.copysign(GHOST_BOUNCE_AMPLITUDE, offset)
            self.bounce_dir = self.bounce_dir.reverse
        self.direction = self.bounce_dir

    def _exit_house(self, ctx: GhostContext, budget: float):
        door = _center(GHOST_HOUSE_EXIT)
        # Line up with the door column first
        dx = door.x - self.pos.x
        if abs(dx) > CENTER_EPSILON:
            step = min(budget, abs(dx))
            self.pos.x += math.copysign(step, dx)
            budget -= step
            self.direction = Direction.RIGHT if dx > 0 else Direction.LEFT
            if abs(door.x - self.pos.x) > CENTER_EPSILON:
                return
        self.pos.x = door.x

        # Then rise to the exit tile
        dy = self.pos.y - door.y
        step = min(budget, max(0.0, dy))
        self.pos.y -= step
        self.direction = Direction.UP
        if self.pos.y - door.y <= CENTER_EPSILON:
            self.pos.y = door.y
            self.mode = ctx.global_mode
            self.previous_mode = ctx.global_mode
            self.direction = Direction.UP
            self.is_exiting = False
            self.time_in_house_ms = 0


def create_ghosts(preset: DifficultyPreset) -> Dict[GhostType, Ghost]:
    ghosts = {}
    for ghost_type in GhostType:
        tx, ty = GHOST_START_TILES[ghost_type.name]
        delay = GHOST_RELEASE_DELAYS[ghost_type.name] * preset.release_delay_multiplier
        ghosts[ghost_type] = Ghost(
            type=ghost_type,
            home=Vec2(tx * TILE_SIZE, ty * TILE_SIZE),
            release_delay_ms=delay,
        )
    return ghosts
