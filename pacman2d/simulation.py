"""
Simulation core.

One Simulation owns the whole game world and advances it with tick(dt_ms).
A RUNNING tick runs these steps in order:

    1. move players (tiles passed mid-frame are consumed on arrival)
    2. count down invincibility
    3. scatter/chase schedule
    4. power pellet timer
    5. move ghosts
    6. per player: dots, level fruit, random fruit, ghost collisions
    7. fruit timers and popups
    8. level complete check
    9. extra lives

A DYING tick only runs the death animation timer. Every other status
ignores ticks.
"""

from __future__ import annotations

import logging
import math
import random
from enum import Enum, auto
from typing import Dict, List, Optional

from .config import (
    COLLISION_RADIUS,
    DEATH_ANIMATION_DURATION,
    FRIGHTENED_FLASH_TIME,
    INVINCIBILITY_DURATION,
    PLAYER_SPAWNS,
    POWER_PELLET_DURATION,
    STARTING_LIVES,
    TILE_SIZE,
)
from .difficulty import Difficulty, DifficultyPreset, preset_for
from .dots import DotField, DotKind
from .enums import ChoiceEnum
from .events import SoundCue
from .fruit import LevelFruit
from .geometry import Direction, Tile, Vec2
from .ghosts import Ghost, GhostContext, GhostMode, GhostType, PlayerPose, create_ghosts
from .maze import Maze
from .movement import PlayerMover
from .random_fruit import RandomFruitSpawner
from .scoring import ScoreBoard, extra_lives_earned, ghost_points

logger = logging.getLogger(__name__)


class Status(Enum):
    MODE_SELECT = auto()
    IDLE = auto()
    RUNNING = auto()
    PAUSED = auto()
    DYING = auto()
    GAME_OVER = auto()
    LEVEL_COMPLETE = auto()
    GAME_COMPLETE = auto()


class GameMode(ChoiceEnum):
    SINGLE = "single"
    TWO = "two"


# ---------------------------------------------------------------------------
# PLAYER
# ---------------------------------------------------------------------------

class Player:
    def __init__(self, player_id: int, active: bool = True):
        self.id = player_id
        sx, sy, facing = PLAYER_SPAWNS[player_id]
        self.spawn = Vec2(sx * TILE_SIZE, sy * TILE_SIZE)
        self.spawn_facing = Direction[facing]
        self.mover = PlayerMover()
        self.lives = STARTING_LIVES
        self.score = 0
        self.invincible = False
        self.invincibility_ms = 0.0
        self.active = active
        self.eliminated = False
        self.intent: Optional[Direction] = None
        self.facing = self.spawn_facing
        self.place_at_spawn()

    @property
    def alive(self) -> bool:
        return self.active and not self.eliminated

    @property
    def pos(self) -> Vec2:
        return Vec2(self.mover.x, self.mover.y)

    @property
    def tile(self) -> Tile:
        return Maze.tile_at_pixel(self.mover.x, self.mover.y)

    @property
    def spawn_tile(self) -> Tile:
        return Maze.tile_at_pixel(self.spawn.x, self.spawn.y)

    def pose(self) -> PlayerPose:
        return PlayerPose(self.mover.x, self.mover.y, self.mover.direction)

    def place_at_spawn(self):
        self.mover.set_position(self.spawn.x, self.spawn.y)
        self.mover.set_direction(Direction.NONE)
        self.facing = self.spawn_facing
        self.intent = None

    def respawn(self):
        self.place_at_spawn()
        self.invincible = True
        self.invincibility_ms = INVINCIBILITY_DURATION

    def tick_invincibility(self, dt_ms: float):
        if not self.invincible:
            return
        self.invincibility_ms = max(0.0, self.invincibility_ms - dt_ms)
        if self.invincibility_ms == 0:
            self.invincible = False


# ---------------------------------------------------------------------------
# SIMULATION
# ---------------------------------------------------------------------------

class Simulation:
    def __init__(self, rng: Optional[random.Random] = None,
                 maze: Optional[Maze] = None, high_score: int = 0):
        self.rng = rng or random.Random()
        self.maze = maze or Maze()
        self.scoreboard = ScoreBoard(high_score)
        self.events: List[SoundCue] = []
        self.reset()

    # --- Lifecycle ---

    def reset(self):
        """Fresh game at the mode select screen. The high score survives."""
        self.status = Status.MODE_SELECT
        self.game_mode = GameMode.SINGLE
        self.difficulty = Difficulty.MEDIUM
        self.level = 1
        self.elapsed_ms = 0.0
        self.frame_count = 0
        self.players: Dict[int, Player] = {
            1: Player(1),
            2: Player(2, active=False),
        }
        self.build_level()

    def build_level(self):
        """Restock dots, ghosts and fruit and put everyone back at spawn."""
        spawns = [p.spawn_tile for p in self.players.values()]
        self.dots = DotField.from_maze(self.maze, exclude=spawns)
        self.ghosts: Dict[GhostType, Ghost] = create_ghosts(self.preset)
        self.level_fruit = LevelFruit()
        self.random_fruit = RandomFruitSpawner(self.rng)
        self.global_mode = GhostMode.SCATTER
        self.mode_timer_ms = 0.0
        self.power_pellet_ms = 0.0
        self.ghosts_eaten = 0
        self.death_ms = 0.0
        self.dying_player_id: Optional[int] = None
        for player in self.players.values():
            player.place_at_spawn()
            player.invincible = False
            player.invincibility_ms = 0.0

    @property
    def preset(self) -> DifficultyPreset:
        return preset_for(self.difficulty)

    def set_game_mode(self, mode: GameMode):
        self.game_mode = mode
        self.players[2].active = mode is GameMode.TWO

    def set_difficulty(self, difficulty: Difficulty):
        self.difficulty = difficulty
        self.ghosts = create_ghosts(self.preset)

    def set_status(self, status: Status):
        if status is not self.status:
            logger.debug("status %s -> %s", self.status.name, status.name)
            self.status = status

    def live_players(self) -> List[Player]:
        return [p for p in self.players.values() if p.alive]

    @property
    def ghosts_flashing(self) -> bool:
        return 0 < self.power_pellet_ms <= FRIGHTENED_FLASH_TIME

    # --- Tick ---

    def tick(self, dt_ms) -> List[SoundCue]:
        self.events = []
        dt = _sanitize_dt(dt_ms)
        if self.status is Status.RUNNING:
            self._step(dt)
        elif self.status is Status.DYING:
            self._step_dying(dt)
        return self.events

    def _step(self, dt: float):
        self.elapsed_ms += dt
        self.frame_count += 1
        players = self.live_players()
        scores_before = {p.id: p.score for p in players}

        # 1. Players
        for player in players:
            self._move_player(player, dt)

        # 2. Invincibility
        for player in players:
            player.tick_invincibility(dt)

        # 3. Scatter / chase schedule
        self._update_global_mode(dt)

        # 4. Power pellet timer
        if self.power_pellet_ms > 0:
            self.power_pellet_ms = max(0.0, self.power_pellet_ms - dt)
            if self.power_pellet_ms == 0:
                self._end_frightened_window()

        # 5. Ghosts
        ctx = GhostContext(
            maze=self.maze,
            players=[p.pose() for p in players],
            blinky_tile=self.ghosts[GhostType.BLINKY].tile,
            global_mode=self.global_mode,
            preset=self.preset,
            rng=self.rng,
        )
        for ghost in self.ghosts.values():
            ghost.update(ctx, dt)

        # 6. Consumption and collisions
        for player in players:
            if self.status is not Status.RUNNING:
                break
            self._consume(player)
            self._resolve_ghost_collisions(player)

        # 7. Fruit timers
        self.level_fruit.update(dt)
        if self.random_fruit.update(dt):
            self.random_fruit.try_spawn(
                self.maze, self.dots, [p.tile for p in self.live_players()], self.level
            )

        # 8. Level complete
        if self.status is Status.RUNNING and self.dots.all_collected:
            logger.info("level %d complete", self.level)
            self.set_status(Status.LEVEL_COMPLETE)
            self.events.append(SoundCue.LEVEL_COMPLETE)

        # 9. Extra lives
        for player in players:
            earned = extra_lives_earned(scores_before[player.id], player.score)
            if earned:
                player.lives += earned
                self.events.append(SoundCue.EXTRA_LIFE)
                logger.info("player %d earned %d extra life(s) at %d",
                            player.id, earned, player.score)
        self.scoreboard.observe(*(p.score for p in self.players.values()))

    def _update_global_mode(self, dt: float):
        self.mode_timer_ms += dt
        while True:
            if self.global_mode is GhostMode.SCATTER:
                duration = self.preset.scatter_duration
            else:
                duration = self.preset.chase_duration
            if duration <= 0 or self.mode_timer_ms < duration:
                return
            self.mode_timer_ms -= duration
            if self.global_mode is GhostMode.SCATTER:
                self.global_mode = GhostMode.CHASE
            else:
                self.global_mode = GhostMode.SCATTER
            logger.debug("global ghost mode -> %s", self.global_mode.name)
            for ghost in self.ghosts.values():
                ghost.apply_global_mode(self.global_mode)

    def _move_player(self, player: Player, dt: float):
        """Spend the whole frame on movement, one tile at a time.

        Tiles reached before the frame is used up are consumed on arrival;
        the tile the player ends on is handled with the collisions.
        """
        remaining = dt
        while remaining > 0:
            result = player.mover.update(self.maze, remaining, player.intent)
            if result.direction is not Direction.NONE:
                player.facing = result.direction
            remaining = result.remaining_ms
            if remaining > 0:
                self._consume(player)

    def _award(self, player: Player, points: int):
        player.score += points

    def _consume(self, player: Player):
        tile = player.tile

        dot = self.dots.collect_at(tile)
        if dot is not None:
            self._award(player, dot.points)
            if dot.kind is DotKind.POWER:
                self.events.append(SoundCue.POWER_PELLET)
                self._start_frightened_window()
            else:
                self.events.append(SoundCue.DOT)

        if self.level_fruit.check_spawn(self.dots.collected_count, self.level):
            logger.debug("level fruit %s spawned", self.level_fruit.kind.value)
        points = self.level_fruit.try_collect(tile)
        if points:
            self._award(player, points)
            self.events.append(SoundCue.FRUIT)

        fruit = self.random_fruit.try_collect(tile)
        if fruit is not None:
            self._award(player, fruit.points)
            self.events.append(SoundCue.FRUIT)

    def _resolve_ghost_collisions(self, player: Player):
        limit = COLLISION_RADIUS * COLLISION_RADIUS
        pos = player.pos
        for ghost in self.ghosts.values():
            if ghost.mode in (GhostMode.IN_HOUSE, GhostMode.EATEN):
                continue
            if pos.dist_sq(ghost.pos) >= limit:
                continue
            if ghost.mode is GhostMode.FRIGHTENED:
                ghost.eat()
                self._award(player, ghost_points(self.ghosts_eaten))
                self.ghosts_eaten = min(self.ghosts_eaten + 1, 4)
                self.events.append(SoundCue.GHOST_EATEN)
            elif not player.invincible:
                self._start_dying(player)
                return

    # --- Frightened window ---

    def _start_frightened_window(self):
        self.power_pellet_ms = POWER_PELLET_DURATION
        self.ghosts_eaten = 0
        for ghost in self.ghosts.values():
            ghost.frighten()

    def _end_frightened_window(self):
        self.power_pellet_ms = 0.0
        self.ghosts_eaten = 0
        for ghost in self.ghosts.values():
            ghost.end_frightened()

    # --- Death ---

    def _start_dying(self, player: Player):
        logger.info("player %d caught (lives left %d)", player.id, player.lives)
        self.dying_player_id = player.id
        self.death_ms = DEATH_ANIMATION_DURATION
        self.set_status(Status.DYING)
        self.events.append(SoundCue.DEATH)

    def _step_dying(self, dt: float):
        self.death_ms = max(0.0, self.death_ms - dt)
        if self.death_ms > 0:
            return

        player = self.players[self.dying_player_id]
        self.dying_player_id = None
        if player.lives > 0:
            player.lives -= 1
            player.respawn()
        else:
            player.eliminated = True
            logger.info("player %d is out", player.id)

        if not self.live_players():
            self.set_status(Status.GAME_OVER)
            self.events.append(SoundCue.GAME_OVER)
            return

        self._end_frightened_window()
        for ghost in self.ghosts.values():
            if ghost.mode is GhostMode.EATEN:
                ghost.send_home()
        self.set_status(Status.RUNNING)


def _sanitize_dt(dt_ms) -> float:
    try:
        dt = float(dt_ms)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(dt) or dt < 0:
        return 0.0
    return dt
