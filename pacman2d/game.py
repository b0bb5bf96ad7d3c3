"""
Game facade: the only surface frontends and tests talk to.

Actions called in a status that doesn't allow them are ignored and return
False. Nothing here raises on bad input.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from .config import MAX_LEVEL
from .difficulty import Difficulty
from .events import SoundCue
from .geometry import Direction
from .ghosts import GhostMode
from .leaderboard import HighScoreStore, MemoryHighScoreStore
from .maze import Maze
from .simulation import GameMode, Simulation, Status
from .snapshot import (
    DotView,
    GameSnapshot,
    GhostView,
    LevelFruitView,
    PlayerView,
    PopupView,
    RandomFruitView,
)

logger = logging.getLogger(__name__)


class Game:
    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None,
                 high_score_store: Optional[HighScoreStore] = None,
                 maze: Optional[Maze] = None):
        self.rng = rng or random.Random(seed)
        self.store = high_score_store or MemoryHighScoreStore()
        self.sim = Simulation(self.rng, maze, self._load_high_score())
        self._pending_events: List[SoundCue] = []
        self._last_events: Tuple[SoundCue, ...] = ()

    @property
    def status(self) -> Status:
        return self.sim.status

    def _load_high_score(self) -> int:
        try:
            return int(self.store.load_high_score())
        except (OSError, TypeError, ValueError) as e:
            logger.warning("high score unavailable: %s", e)
            return 0

    def _save_high_score(self):
        try:
            self.store.save_high_score(self.sim.scoreboard.high_score)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("could not save high score: %s", e)

    def _ignored(self, action: str) -> bool:
        logger.debug("%s ignored in %s", action, self.sim.status.name)
        return False

    # ---------------------------------------------------------------------------
    # ACTIONS
    # ---------------------------------------------------------------------------

    def set_game_mode(self, mode) -> bool:
        if self.sim.status is not Status.MODE_SELECT:
            return self._ignored("set_game_mode")
        parsed = GameMode.parse(mode)
        if parsed is None:
            return self._ignored("set_game_mode(%r)" % (mode,))
        self.sim.set_game_mode(parsed)
        self.sim.set_status(Status.IDLE)
        return True

    def set_difficulty(self, difficulty) -> bool:
        if self.sim.status not in (Status.MODE_SELECT, Status.IDLE):
            return self._ignored("set_difficulty")
        parsed = Difficulty.parse(difficulty)
        if parsed is None:
            return self._ignored("set_difficulty(%r)" % (difficulty,))
        self.sim.set_difficulty(parsed)
        return True

    def start_game(self) -> bool:
        if self.sim.status not in (Status.IDLE, Status.MODE_SELECT):
            return self._ignored("start_game")
        logger.info("starting level %d (%s, %s)", self.sim.level,
                    self.sim.game_mode.name, self.sim.difficulty.name)
        self.sim.set_status(Status.RUNNING)
        self._pending_events.append(SoundCue.GAME_START)
        return True

    def pause_game(self) -> bool:
        if self.sim.status is not Status.RUNNING:
            return self._ignored("pause_game")
        self.sim.set_status(Status.PAUSED)
        return True

    def resume_game(self) -> bool:
        if self.sim.status is not Status.PAUSED:
            return self._ignored("resume_game")
        self.sim.set_status(Status.RUNNING)
        return True

    def toggle_pause(self) -> bool:
        if self.sim.status is Status.PAUSED:
            return self.resume_game()
        return self.pause_game()

    def reset_game(self) -> bool:
        if self.sim.status in (Status.GAME_OVER, Status.GAME_COMPLETE):
            self._save_high_score()
        self.sim.reset()
        self._pending_events = []
        self._last_events = ()
        return True

    def next_level(self) -> bool:
        if self.sim.status is not Status.LEVEL_COMPLETE:
            return self._ignored("next_level")
        if self.sim.level >= MAX_LEVEL:
            logger.info("all %d levels cleared", MAX_LEVEL)
            self.sim.set_status(Status.GAME_COMPLETE)
            self._save_high_score()
            return True
        self.sim.level += 1
        self.sim.build_level()
        self.sim.set_status(Status.IDLE)
        logger.info("advanced to level %d", self.sim.level)
        return True

    def set_player_input(self, player_id, direction) -> bool:
        player = self.sim.players.get(player_id)
        if player is None:
            return False
        player.intent = Direction.parse(direction)
        return True

    def tick(self, dt_ms) -> GameSnapshot:
        before = self.sim.status
        events = self.sim.tick(dt_ms)
        self._last_events = tuple(self._pending_events + events)
        self._pending_events = []
        if before is not self.sim.status and self.sim.status is Status.GAME_OVER:
            logger.info("game over, score %d", self.sim.players[1].score)
            self._save_high_score()
        return self.snapshot()

    # ---------------------------------------------------------------------------
    # SNAPSHOT
    # ---------------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        sim = self.sim
        flashing = sim.ghosts_flashing
        p1 = sim.players[1]
        return GameSnapshot(
            status=sim.status,
            game_mode=sim.game_mode,
            difficulty=sim.difficulty,
            level=sim.level,
            score=p1.score,
            high_score=sim.scoreboard.high_score,
            lives=p1.lives,
            players=tuple(
                PlayerView(
                    id=p.id,
                    x=p.mover.x,
                    y=p.mover.y,
                    tile=p.tile,
                    direction=p.mover.direction,
                    facing=p.facing,
                    is_moving=p.mover.is_moving,
                    lives=p.lives,
                    score=p.score,
                    invincible=p.invincible,
                    invincibility_remaining=p.invincibility_ms,
                    active=p.active,
                    eliminated=p.eliminated,
                )
                for p in sim.players.values()
            ),
            ghosts=tuple(
                GhostView(
                    type=g.type,
                    x=g.pos.x,
                    y=g.pos.y,
                    tile=g.tile,
                    direction=g.direction,
                    mode=g.mode,
                    target_tile=g.target_tile,
                    flashing=flashing and g.mode is GhostMode.FRIGHTENED,
                )
                for g in sim.ghosts.values()
            ),
            dots=tuple(DotView(d.tile, d.kind) for d in sim.dots.uncollected()),
            dots_total=sim.dots.total,
            dots_collected=sim.dots.collected_count,
            level_fruit=LevelFruitView(
                active=sim.level_fruit.active,
                kind=sim.level_fruit.kind,
                tile=sim.level_fruit.tile,
                expiry_ms=sim.level_fruit.expiry_ms,
                last_points=sim.level_fruit.last_points,
                popup_ms=sim.level_fruit.popup_ms,
            ),
            random_fruits=tuple(
                RandomFruitView(
                    id=f.id,
                    tile=f.tile,
                    kind=f.kind,
                    points=f.points,
                    opacity=f.opacity,
                    blinking=f.is_blinking,
                )
                for f in sim.random_fruit.active
            ),
            popups=tuple(
                PopupView(p.id, p.tile, p.points, p.remaining_ms)
                for p in sim.random_fruit.popups
            ),
            global_mode=sim.global_mode,
            vulnerability_remaining=sim.power_pellet_ms,
            ghosts_flashing=flashing,
            ghosts_eaten=sim.ghosts_eaten,
            death_animation_remaining=sim.death_ms,
            dying_player=sim.dying_player_id,
            elapsed_ms=sim.elapsed_ms,
            frame_count=sim.frame_count,
            events=self._last_events,
        )
