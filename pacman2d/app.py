"""
Pygame front end: window, keyboard, audio and the frame loop.

Controls
    1 / 2            one or two players (mode select)
    E / M / H        easy, medium, hard (before the game starts)
    SPACE / ENTER    start, next level
    ARROWS           player 1
    WASD             player 2 (player 1 too in single player)
    P / ESC          pause
    R                back to mode select
    N                mute
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from .audio import AudioEngine
from .config import FPS
from .difficulty import Difficulty
from .game import Game
from .geometry import Direction
from .leaderboard import Leaderboard
from .render import Renderer, screen_size
from .simulation import GameMode, Status
from .snapshot import GameSnapshot

logger = logging.getLogger(__name__)

ARROW_KEYS = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}

WASD_KEYS = {
    pygame.K_w: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
}

DIFFICULTY_KEYS = {
    pygame.K_e: Difficulty.EASY,
    pygame.K_m: Difficulty.MEDIUM,
    pygame.K_h: Difficulty.HARD,
}


class App:
    def __init__(self, game: Optional[Game] = None, leaderboard: Optional[Leaderboard] = None,
                 audio_enabled: bool = True):
        pygame.init()
        self.leaderboard = leaderboard or Leaderboard()
        self.game = game or Game(high_score_store=self.leaderboard)
        self.screen = pygame.display.set_mode(screen_size(self.game.sim.maze))
        pygame.display.set_caption("PAC-MAN 2D")
        self.clock = pygame.time.Clock()
        self.audio = AudioEngine(enabled=audio_enabled)
        self.renderer = Renderer(self.screen, self.game.sim.maze)
        self.running = True
        self.initials: Optional[str] = None
        self.score_saved = False
        self.snapshot = self.game.snapshot()
        self.board = self.leaderboard.entries()

    # ---------------------------------------------------------------------------
    # INPUT
    # ---------------------------------------------------------------------------

    def handle_event(self, e):
        if e.type == pygame.QUIT:
            self.running = False
            return
        if e.type != pygame.KEYDOWN:
            return

        if self.initials is not None:
            self._handle_initials(e)
            return

        status = self.game.status
        if e.key == pygame.K_n:
            muted = self.audio.toggle_mute()
            logger.info("sound %s", "off" if muted else "on")
        elif e.key == pygame.K_r:
            self.game.reset_game()
            self.score_saved = False
        elif e.key in ARROW_KEYS:
            self.game.set_player_input(1, ARROW_KEYS[e.key])
        elif e.key in WASD_KEYS:
            player_id = 2 if self.game.sim.game_mode is GameMode.TWO else 1
            self.game.set_player_input(player_id, WASD_KEYS[e.key])
        elif e.key in (pygame.K_p, pygame.K_ESCAPE):
            self.game.toggle_pause()
        elif status is Status.MODE_SELECT and e.key == pygame.K_1:
            self.game.set_game_mode(GameMode.SINGLE)
        elif status is Status.MODE_SELECT and e.key == pygame.K_2:
            self.game.set_game_mode(GameMode.TWO)
        elif e.key in DIFFICULTY_KEYS:
            self.game.set_difficulty(DIFFICULTY_KEYS[e.key])
        elif e.key in (pygame.K_SPACE, pygame.K_RETURN):
            if status is Status.LEVEL_COMPLETE:
                self.game.next_level()
            else:
                self.game.start_game()

    def _handle_initials(self, e):
        if e.key == pygame.K_RETURN:
            best = max(p.score for p in self.snapshot.players)
            rank = self.leaderboard.save_score(self.initials, best, self.snapshot.level)
            logger.info("saved %s with %d (rank %d)", self.initials, best, rank)
            self.initials = None
            self.score_saved = True
            self.board = self.leaderboard.entries()
        elif e.key == pygame.K_BACKSPACE:
            self.initials = self.initials[:-1]
        elif e.unicode and e.unicode.isalpha() and len(self.initials) < 3:
            self.initials += e.unicode.upper()

    def _check_game_end(self, snap: GameSnapshot):
        if snap.status not in (Status.GAME_OVER, Status.GAME_COMPLETE):
            self.score_saved = False
            return
        if self.initials is None and not self.score_saved:
            best = max(p.score for p in snap.players)
            if self.leaderboard.is_high_score(best):
                self.initials = ""
            else:
                self.score_saved = True

    # ---------------------------------------------------------------------------
    # LOOP
    # ---------------------------------------------------------------------------

    def step(self, dt_ms: float) -> GameSnapshot:
        snap = self.game.tick(dt_ms)
        self.audio.play_events(snap.events)
        if snap.status is Status.RUNNING:
            self.audio.update_siren(len(snap.dots), snap.dots_total)
        else:
            self.audio.stop_siren()
        self._check_game_end(snap)
        self.snapshot = snap
        return snap

    def draw(self):
        snap = self.snapshot
        self.renderer.draw(snap, pygame.time.get_ticks())
        self.renderer.draw_overlay(snap, self.board, self.initials)
        pygame.display.flip()

    def run(self):
        while self.running:
            dt = self.clock.tick(FPS)
            for e in pygame.event.get():
                self.handle_event(e)
            self.step(dt)
            self.draw()
        self.audio.stop_all()
        pygame.quit()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    print("=" * 40)
    print("       PAC-MAN 2D")
    print("=" * 40)
    print()
    print("1/2: players | E/M/H: difficulty | SPACE: start")
    print("P1: arrow keys | P2: WASD | P: pause | N: mute")
    print()
    App().run()


if __name__ == "__main__":
    main()
