from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional

from .config import DOT_POINTS, POWER_PELLET_POINTS
from .geometry import Tile
from .maze import Maze


class DotKind(Enum):
    REGULAR = auto()
    POWER = auto()


@dataclass
class Dot:
    tile: Tile
    kind: DotKind = DotKind.REGULAR
    collected: bool = False

    @property
    def points(self) -> int:
        return POWER_PELLET_POINTS if self.kind is DotKind.POWER else DOT_POINTS


class DotField:
    """Dot and power pellet inventory for one level."""

    def __init__(self, dots: Iterable[Dot]):
        self.dots: Dict[Tile, Dot] = {dot.tile: dot for dot in dots}
        self.total = len(self.dots)
        self.collected_count = sum(1 for dot in self.dots.values() if dot.collected)

    @classmethod
    def from_maze(cls, maze: Maze, exclude: Iterable[Tile] = ()) -> "DotField":
        skip = set(exclude)
        power = set(maze.power_pellet_tiles)
        return cls(
            Dot(tile, DotKind.POWER if tile in power else DotKind.REGULAR)
            for tile in maze.open_tiles()
            if tile not in skip
        )

    @property
    def remaining(self) -> int:
        return self.total - self.collected_count

    @property
    def all_collected(self) -> bool:
        return self.collected_count >= self.total

    def has_uncollected_at(self, tile: Tile) -> bool:
        dot = self.dots.get(tile)
        return dot is not None and not dot.collected

    def collect_at(self, tile: Tile) -> Optional[Dot]:
        """Collect the dot on a tile; returns it, or None if nothing to collect."""
        dot = self.dots.get(tile)
        if dot is None or dot.collected:
            return None
        dot.collected = True
        self.collected_count += 1
        return dot

    def uncollected(self) -> List[Dot]:
        return [dot for dot in self.dots.values() if not dot.collected]
