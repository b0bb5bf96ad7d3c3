"""
Tile-to-tile player locomotion with a single-slot pre-turn queue.

The mover sits on a source tile and interpolates towards a target tile.
At most one tile is completed (or one turn taken) per update, so callers
observe every tile arrival even when a frame is long. Time the update did
not use is handed back as ``remaining_ms`` and should be fed into the next
call within the same frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import PLAYER_SPEED, TILE_SIZE
from .geometry import Direction, Tile
from .maze import Maze

_PROGRESS_EPSILON = 1e-9


@dataclass(frozen=True)
class MoveResult:
    x: float
    y: float
    direction: Direction
    tile_x: int
    tile_y: int
    is_moving: bool
    remaining_ms: float = 0.0
class PlayerMover:
    def __init__(self, speed: float = PLAYER_SPEED, tile: Tile = (1, 1)):
        self.speed = speed
        self.source: Tile = tile
        self.target: Tile = tile
        center = Maze.pixel_center_of_tile(*tile)
        self.x = center.x
        self.y = center.y
        self.direction = Direction.NONE
        self.queued: Optional[Direction] = None
        self.is_moving = False
        self.move_progress = 0.0

    def set_position(self, x: float, y: float):
        """Place the mover at rest (spawn, respawn, reset)."""
        tile = Maze.tile_at_pixel(x, y)
        self.x = x
        self.y = y
        self.source = tile
        self.target = tile
        self.is_moving = False
        self.move_progress = 0.0
        self.queued = None

    def set_direction(self, direction: Direction):
        self.direction = direction

    def result(self, remaining_ms: float = 0.0) -> MoveResult:
        return MoveResult(
            x=self.x,
            y=self.y,
            direction=self.direction,
            tile_x=self.source[0],
            tile_y=self.source[1],
            is_moving=self.is_moving,
            remaining_ms=remaining_ms,
        )

    def _progress_to_ms(self, progress: float) -> float:
        if self.speed <= 0 or progress <= 0:
            return 0.0
        return progress * 1000 / self.speed

    def _try_move(self, maze: Maze, direction: Optional[Direction]) -> bool:
        if direction is None or direction is Direction.NONE:
            return False
        target = maze.step(self.source, direction)
        if target is None:
            return False
        self.target = target
        self.direction = direction
        self.is_moving = True
        self.move_progress = 0.0
        return True

    def _snap_to_source(self):
        center = Maze.pixel_center_of_tile(*self.source)
        self.x = center.x
        self.y = center.y

    def update(self, maze: Maze, dt_ms: float, input_direction=None) -> MoveResult:
        intent = Direction.parse(input_direction)
        if intent is not None:
            self.queued = intent

        if dt_ms <= 0:
            return self.result()

        # Start moving: queued direction first, then keep going
        if not self.is_moving:
            if self._try_move(maze, self.queued):
                self.queued = None
            if not self.is_moving:
                self._try_move(maze, self.direction)
            if not self.is_moving:
                self._snap_to_source()
                return self.result()

        if self.queued is self.direction:
            self.queued = None

        start_progress = self.move_progress
        self.move_progress += (self.speed * dt_ms) / 1000

        # Pre-turn once past the midpoint of the current tile
        if (self.queued is not None
                and self.queued.is_perpendicular(self.direction)
                and self.move_progress >= 0.5):
            next_tile = maze.step(self.target, self.queued)
            if next_tile is not None:
                unused = self.move_progress - max(start_progress, 0.5)
                self.source = self.target
                self.target = next_tile
                self.move_progress = 0.0
                self.direction = self.queued
                self.queued = None
                self._interpolate(maze)
                return self.result(min(dt_ms, self._progress_to_ms(unused)))

        if self.move_progress >= 1 - _PROGRESS_EPSILON:
            unused = self.move_progress - 1
            self.source = self.target
            self.move_progress = 0.0
            self.is_moving = False
            self._snap_to_source()
            return self.result(min(dt_ms, self._progress_to_ms(unused)))

        self._interpolate(maze)
        return self.result()

    def _interpolate(self, maze: Maze):
        # Every move spans exactly one tile; tunnel moves wrap around the edge
        start = Maze.pixel_center_of_tile(*self.source)
        width, height = maze.pixel_size
        self.x = (start.x + self.direction.dx * TILE_SIZE * self.move_progress) % width
        self.y = (start.y + self.direction.dy * TILE_SIZE * self.move_progress) % height
