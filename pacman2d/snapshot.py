"""
Read-only views of the game state handed to renderers and tests.

Nothing in here points back into the live simulation: positions are copied,
collections are tuples, enums are shared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .difficulty import Difficulty
from .dots import DotKind
from .events import SoundCue
from .fruit import FruitKind
from .geometry import Direction, Tile
from .ghosts import GhostMode, GhostType
from .simulation import GameMode, Status


@dataclass(frozen=True)
class PlayerView:
    id: int
    x: float
    y: float
    tile: Tile
    direction: Direction
    facing: Direction
    is_moving: bool
    lives: int
    score: int
    invincible: bool
    invincibility_remaining: float
    active: bool
    eliminated: bool


@dataclass(frozen=True)
class GhostView:
    type: GhostType
    x: float
    y: float
    tile: Tile
    direction: Direction
    mode: GhostMode
    target_tile: Tile
    flashing: bool


@dataclass(frozen=True)
class DotView:
    tile: Tile
    kind: DotKind


@dataclass(frozen=True)
class LevelFruitView:
    active: bool
    kind: Optional[FruitKind]
    tile: Tile
    expiry_ms: float
    last_points: int
    popup_ms: float


@dataclass(frozen=True)
class RandomFruitView:
    id: int
    tile: Tile
    kind: FruitKind
    points: int
    opacity: float
    blinking: bool


@dataclass(frozen=True)
class PopupView:
    id: int
    tile: Tile
    points: int
    remaining_ms: float


@dataclass(frozen=True)
class GameSnapshot:
    status: Status
    game_mode: GameMode
    difficulty: Difficulty
    level: int
    score: int
    high_score: int
    lives: int
    players: Tuple[PlayerView, ...]
    ghosts: Tuple[GhostView, ...]
    dots: Tuple[DotView, ...]
    dots_total: int
    dots_collected: int
    level_fruit: LevelFruitView
    random_fruits: Tuple[RandomFruitView, ...]
    popups: Tuple[PopupView, ...]
    global_mode: GhostMode
    vulnerability_remaining: float
    ghosts_flashing: bool
    ghosts_eaten: int
    death_animation_remaining: float
    dying_player: Optional[int]
    elapsed_ms: float
    frame_count: int
    events: Tuple[SoundCue, ...] = ()

    def player(self, player_id: int) -> Optional[PlayerView]:
        for view in self.players:
            if view.id == player_id:
                return view
        return None

    def ghost(self, ghost_type) -> Optional[GhostView]:
        for view in self.ghosts:
            if view.type is ghost_type:
                return view
        return None
