"""
Static maze layout and tile queries.

Layout legend: '#' wall, '.' dot, 'o' power pellet, ' ' open floor.
"""

from __future__ import annotations

import math
from typing import Iterator, List, Optional, Sequence, Tuple

from .config import TILE_SIZE
from .geometry import Direction, Tile, Vec2

# ---------------------------------------------------------------------------
# CANONICAL 20x15 LAYOUT
# ---------------------------------------------------------------------------

MAZE_LAYOUT = [
    "####################",
    "#o.......##.......o#",
    "#.##.###.##.###.##.#",
    "#.##.###.##.###.##.#",
    "#..................#",
    "#.##.#.######.#.##.#",
    "#....#...##...#....#",
    "####.###.##.###.####",
    "#....#........#....#",
    "#.##.#.######.#.##.#",
    "#........##........#",
    "#.##.###.##.###.##.#",
    "#.##.###.##.###.##.#",
    "#o................o#",
    "####################",
]

WALL = "#"
POWER = "o"


class Maze:
    """Immutable tile grid. Out-of-bounds tiles count as walls."""

    def __init__(self, layout: Sequence[str] = MAZE_LAYOUT):
        if not layout or any(len(row) != len(layout[0]) for row in layout):
            raise ValueError("maze layout must be a non-empty rectangle")
        self._rows: Tuple[str, ...] = tuple(layout)
        self.cols = len(layout[0])
        self.rows = len(layout)
        self.power_pellet_tiles: Tuple[Tile, ...] = tuple(
            (c, r)
            for r, row in enumerate(self._rows)
            for c, char in enumerate(row)
            if char == POWER
        )

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self.cols, self.rows

    @property
    def pixel_size(self) -> Tuple[int, int]:
        return self.cols * TILE_SIZE, self.rows * TILE_SIZE

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.cols and 0 <= row < self.rows

    def is_walkable(self, col: int, row: int) -> bool:
        if not self.in_bounds(col, row):
            return False
        return self._rows[row][col] != WALL

    def char_at(self, col: int, row: int) -> str:
        if not self.in_bounds(col, row):
            return WALL
        return self._rows[row][col]

    def open_tiles(self) -> Iterator[Tile]:
        for r in range(self.rows):
            for c in range(self.cols):
                if self._rows[r][c] != WALL:
                    yield (c, r)

    def wall_tiles(self) -> List[Tile]:
        return [
            (c, r)
            for r in range(self.rows)
            for c in range(self.cols)
            if self._rows[r][c] == WALL
        ]

    @staticmethod
    def tile_at_pixel(x: float, y: float) -> Tile:
        return int(math.floor(x / TILE_SIZE)), int(math.floor(y / TILE_SIZE))

    @staticmethod
    def pixel_center_of_tile(col: int, row: int) -> Vec2:
        return Vec2(col * TILE_SIZE + TILE_SIZE / 2, row * TILE_SIZE + TILE_SIZE / 2)

    def wrap_tile(self, col: int, row: int, direction: Direction) -> Optional[Tile]:
        """Tunnel target when stepping from (col, row) off the edge, else None."""
        nc = col + direction.dx
        nr = row + direction.dy
        if self.in_bounds(nc, nr) or direction is Direction.NONE:
            return None
        if not self.is_walkable(col, row):
            return None
        if nc < 0:
            target = (self.cols - 1, row)
        elif nc >= self.cols:
            target = (0, row)
        elif nr < 0:
            target = (col, self.rows - 1)
        else:
            target = (col, 0)
        if self.is_walkable(*target):
            return target
        return None

    def step(self, tile: Tile, direction: Direction) -> Optional[Tile]:
        """Neighbouring tile in a direction, following tunnels; None if blocked."""
        nc = tile[0] + direction.dx
        nr = tile[1] + direction.dy
        if self.is_walkable(nc, nr):
            return (nc, nr)
        return self.wrap_tile(tile[0], tile[1], direction)
