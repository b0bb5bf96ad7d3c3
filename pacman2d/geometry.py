from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Tile = Tuple[int, int]


@dataclass
class Vec2:
    x: float
    y: float

    def __add__(self, o): return Vec2(self.x + o.x, self.y + o.y)
    def __sub__(self, o): return Vec2(self.x - o.x, self.y - o.y)
    def __mul__(self, k): return Vec2(self.x * k, self.y * k)
    def __eq__(self, o): return abs(self.x - o.x) < 0.001 and abs(self.y - o.y) < 0.001

    def dist_sq(self, o):
        dx = self.x - o.x
        dy = self.y - o.y
        return dx * dx + dy * dy

    def copy(self):
        return Vec2(self.x, self.y)


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    NONE = (0, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def reverse(self) -> "Direction":
        return REVERSE[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    def is_perpendicular(self, other: "Direction") -> bool:
        if self is Direction.NONE or other is Direction.NONE:
            return False
        return self.is_horizontal != other.is_horizontal

    @classmethod
    def parse(cls, value) -> Optional["Direction"]:
        """Turn an intent into a movement direction, or None for no intent."""
        if isinstance(value, Direction):
            return None if value is Direction.NONE else value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None and member is not Direction.NONE:
                return member
        return None


# Reverse direction lookup
REVERSE = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.NONE: Direction.NONE,
}

# Classic ghost tie-break order
DECISION_ORDER = (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT)


def manhattan(a: Tile, b: Tile) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def tile_dist_sq(a: Tile, b: Tile) -> int:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    return dx * dx + dy * dy
