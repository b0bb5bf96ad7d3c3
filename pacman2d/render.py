"""
Pygame renderer. Draws a GameSnapshot; never touches the simulation.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Sequence

import pygame

from .config import (
    BLACK,
    BLUE_FRIGHTENED,
    CYAN,
    DEATH_ANIMATION_DURATION,
    GREEN,
    GREY,
    HUD_HEIGHT,
    ORANGE,
    PELLET_COLOR,
    PINK,
    RED,
    SCALE,
    TILE_SIZE,
    WALL_BLUE,
    WHITE,
    YELLOW,
)
from .difficulty import Difficulty
from .dots import DotKind
from .fruit import FruitKind
from .geometry import Direction
from .ghosts import GhostMode, GhostType
from .maze import Maze
from .simulation import GameMode, Status
from .snapshot import GameSnapshot, GhostView, PlayerView

CELL = TILE_SIZE * SCALE

GHOST_COLORS = {
    GhostType.BLINKY: RED,
    GhostType.PINKY: PINK,
    GhostType.INKY: CYAN,
    GhostType.CLYDE: ORANGE,
}

PLAYER_COLORS = {1: YELLOW, 2: GREEN}

FRUIT_COLORS = {
    FruitKind.CHERRY: RED,
    FruitKind.STRAWBERRY: (255, 60, 90),
    FruitKind.ORANGE: ORANGE,
    FruitKind.APPLE: (220, 0, 0),
    FruitKind.GRAPES: (140, 60, 200),
    FruitKind.GALAXIAN: YELLOW,
    FruitKind.BELL: (255, 220, 60),
    FruitKind.KEY: CYAN,
}

# Screen-space angle of the mouth for each facing
FACING_ANGLES = {
    Direction.RIGHT: 0,
    Direction.UP: 90,
    Direction.LEFT: 180,
    Direction.DOWN: 270,
    Direction.NONE: 0,
}


def screen_size(maze: Maze):
    width, height = maze.pixel_size
    return width * SCALE, height * SCALE + HUD_HEIGHT * 2


class Renderer:
    def __init__(self, screen: pygame.Surface, maze: Maze):
        self.screen = screen
        self.maze = maze
        self.width, self.height = screen.get_size()
        pygame.font.init()
        self.font = pygame.font.SysFont("monospace", 18, bold=True)
        self.big_font = pygame.font.SysFont("monospace", 36, bold=True)
        self._precompute_walls()

    def _precompute_walls(self):
        """Which neighbours of each wall tile are also walls."""
        self.wall_data = {}
        for c, r in self.maze.wall_tiles():
            self.wall_data[(c, r)] = (
                not self.maze.is_walkable(c, r - 1),
                not self.maze.is_walkable(c, r + 1),
                not self.maze.is_walkable(c - 1, r),
                not self.maze.is_walkable(c + 1, r),
            )

    def to_screen(self, x: float, y: float):
        return int(x * SCALE), int(y * SCALE) + HUD_HEIGHT

    def tile_center(self, tile):
        return self.to_screen((tile[0] + 0.5) * TILE_SIZE, (tile[1] + 0.5) * TILE_SIZE)

    # ---------------------------------------------------------------------------
    # WORLD
    # ---------------------------------------------------------------------------

    def draw(self, snap: GameSnapshot, clock_ms: Optional[float] = None):
        now = snap.elapsed_ms if clock_ms is None else clock_ms
        self.screen.fill(BLACK)
        self.draw_maze()
        self.draw_dots(snap, now)
        self.draw_fruit(snap)
        for ghost in snap.ghosts:
            self.draw_ghost(ghost, now)
        for player in snap.players:
            if player.active and not player.eliminated:
                self.draw_player(player, snap, now)
        self.draw_popups(snap)
        self.draw_ui(snap)

    def draw_maze(self):
        for (c, r), (up, down, left, right) in self.wall_data.items():
            x, y = self.to_screen(c * TILE_SIZE, r * TILE_SIZE)
            s = CELL
            pygame.draw.rect(self.screen, (10, 10, 60), (x, y, s, s))
            # Outline only the sides that face open floor
            if not up:
                pygame.draw.line(self.screen, WALL_BLUE, (x, y + 1), (x + s - 1, y + 1), 2)
            if not down:
                pygame.draw.line(self.screen, WALL_BLUE, (x, y + s - 2), (x + s - 1, y + s - 2), 2)
            if not left:
                pygame.draw.line(self.screen, WALL_BLUE, (x + 1, y), (x + 1, y + s - 1), 2)
            if not right:
                pygame.draw.line(self.screen, WALL_BLUE, (x + s - 2, y), (x + s - 2, y + s - 1), 2)

    def draw_dots(self, snap: GameSnapshot, now: float):
        pellets_on = (int(now) // 150) % 2 == 0
        for dot in snap.dots:
            center = self.tile_center(dot.tile)
            if dot.kind is DotKind.POWER:
                if pellets_on:
                    pygame.draw.circle(self.screen, PELLET_COLOR, center, 3 * SCALE + 1)
            else:
                pygame.draw.circle(self.screen, PELLET_COLOR, center, SCALE + 1)

    def _draw_fruit_icon(self, kind: FruitKind, center, alpha: float = 1.0):
        color = FRUIT_COLORS.get(kind, WHITE)
        if alpha < 1.0:
            color = tuple(int(ch * max(0.0, alpha)) for ch in color)
        r = CELL // 3
        pygame.draw.circle(self.screen, color, center, r)
        pygame.draw.line(self.screen, GREEN, (center[0], center[1] - r),
                         (center[0] + r // 2, center[1] - r - 4), 2)

    def draw_fruit(self, snap: GameSnapshot):
        fruit = snap.level_fruit
        if fruit.active and fruit.kind is not None:
            self._draw_fruit_icon(fruit.kind, self.tile_center(fruit.tile))
        for extra in snap.random_fruits:
            self._draw_fruit_icon(extra.kind, self.tile_center(extra.tile), extra.opacity)

    def draw_popups(self, snap: GameSnapshot):
        fruit = snap.level_fruit
        if fruit.popup_ms > 0 and fruit.last_points:
            self.draw_text_at(str(fruit.last_points), self.tile_center(fruit.tile), CYAN)
        for popup in snap.popups:
            self.draw_text_at(str(popup.points), self.tile_center(popup.tile), CYAN)

    def draw_player(self, player: PlayerView, snap: GameSnapshot, now: float):
        x, y = self.to_screen(player.x, player.y)
        r = int(CELL * 0.45)
        color = PLAYER_COLORS.get(player.id, YELLOW)

        if snap.status is Status.DYING and snap.dying_player == player.id:
            progress = 1.0 - snap.death_animation_remaining / DEATH_ANIMATION_DURATION
            r = int(r * (1.0 - progress))
            if r > 0:
                pygame.draw.circle(self.screen, color, (x, y), r)
            return

        # Blink while invincible
        if player.invincible and (int(now) // 100) % 2:
            return

        pygame.draw.circle(self.screen, color, (x, y), r)
        mouth = abs(math.sin(now * 0.015)) if player.is_moving else 0.4
        if mouth > 0.05:
            angle = 45 * mouth
            base_angle = FACING_ANGLES[player.facing]
            pts = [(x, y)]
            for a in (base_angle + angle, base_angle - angle):
                rad = math.radians(a)
                pts.append((x + math.cos(rad) * (r + 2), y - math.sin(rad) * (r + 2)))
            pygame.draw.polygon(self.screen, BLACK, pts)

    def draw_ghost(self, ghost: GhostView, now: float):
        x, y = self.to_screen(ghost.x, ghost.y)
        r = int(CELL * 0.45)

        if ghost.mode is GhostMode.EATEN:
            self._draw_ghost_eyes(x, y, r, ghost.direction)
            return
        if ghost.mode is GhostMode.FRIGHTENED:
            color = WHITE if ghost.flashing and (int(now) // 150) % 2 else BLUE_FRIGHTENED
        else:
            color = GHOST_COLORS[ghost.type]

        # Dome and skirt
        pygame.draw.circle(self.screen, color, (x, y - 2), r)
        pygame.draw.rect(self.screen, color, (x - r, y - 2, r * 2, r))
        wave_pts = []
        for i in range(5):
            wx = x - r + i * (r * 2) // 4
            wy = y + r - 4 + (4 if i % 2 else 0)
            wave_pts.append((wx, wy))
        wave_pts.extend([(x + r, y + r - 4), (x + r, y), (x - r, y)])
        pygame.draw.polygon(self.screen, color, wave_pts)

        if ghost.mode is GhostMode.FRIGHTENED:
            # Wobbly mouth instead of eyes
            pts = [(x - r + 4 + i * (2 * r - 8) // 6, y + 4 + (3 if i % 2 else 0)) for i in range(7)]
            pygame.draw.lines(self.screen, WHITE, False, pts, 2)
            return
        self._draw_ghost_eyes(x, y, r, ghost.direction)

    def _draw_ghost_eyes(self, x: int, y: int, r: int, direction: Direction):
        eye_r = max(2, r // 3)
        off_x = r // 2
        pygame.draw.circle(self.screen, WHITE, (x - off_x, y - 3), eye_r)
        pygame.draw.circle(self.screen, WHITE, (x + off_x, y - 3), eye_r)
        pupil_r = max(1, eye_r // 2)
        dx = direction.dx * 3
        dy = direction.dy * 3
        pygame.draw.circle(self.screen, WALL_BLUE, (x - off_x + dx, y - 3 + dy), pupil_r)
        pygame.draw.circle(self.screen, WALL_BLUE, (x + off_x + dx, y - 3 + dy), pupil_r)

    # ---------------------------------------------------------------------------
    # HUD AND SCREENS
    # ---------------------------------------------------------------------------

    def draw_text_at(self, text: str, center, color=WHITE, font=None):
        surf = (font or self.font).render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=center))

    def draw_text_centered(self, text: str, y: int, color=WHITE, font=None):
        self.draw_text_at(text, (self.width // 2, y), color, font)

    def draw_ui(self, snap: GameSnapshot):
        p1 = snap.player(1)
        score_txt = self.font.render(f"1UP {p1.score:07d}", True, WHITE)
        self.screen.blit(score_txt, (10, 10))

        hi_txt = self.font.render(f"HIGH {snap.high_score:07d}", True, WHITE)
        self.screen.blit(hi_txt, hi_txt.get_rect(midtop=(self.width // 2, 10)))

        p2 = snap.player(2)
        if snap.game_mode is GameMode.TWO and p2 is not None:
            p2_txt = self.font.render(f"2UP {p2.score:07d}", True, GREEN)
            self.screen.blit(p2_txt, p2_txt.get_rect(topright=(self.width - 10, 10)))
        else:
            lvl_txt = self.font.render(f"LVL {snap.level}", True, YELLOW)
            self.screen.blit(lvl_txt, lvl_txt.get_rect(topright=(self.width - 10, 10)))

        # Spare lives along the bottom
        bottom = self.height - HUD_HEIGHT // 2
        for player in snap.players:
            if not player.active:
                continue
            color = PLAYER_COLORS.get(player.id, YELLOW)
            base_x = 20 if player.id == 1 else self.width - 20 - 30 * max(0, player.lives - 1)
            for i in range(player.lives):
                pygame.draw.circle(self.screen, color, (base_x + i * 30, bottom), 10)

        diff = snap.difficulty.value.upper()
        mid = self.font.render(f"LEVEL {snap.level}  {diff}", True, GREY)
        self.screen.blit(mid, mid.get_rect(center=(self.width // 2, bottom)))

    def draw_overlay(self, snap: GameSnapshot, leaderboard: Sequence[Dict] = (),
                     initials: Optional[str] = None):
        """Status screens drawn over the playfield."""
        cy = self.height // 2
        if snap.status is Status.MODE_SELECT:
            self._dim(200)
            self.draw_text_centered("PAC-MAN 2D", cy - 180, YELLOW, self.big_font)
            one = YELLOW if snap.game_mode is GameMode.SINGLE else WHITE
            self.draw_text_centered("1 - ONE PLAYER", cy - 110, one)
            self.draw_text_centered("2 - TWO PLAYERS", cy - 80, WHITE)
            self.draw_text_centered("E / M / H - DIFFICULTY", cy - 40, PELLET_COLOR)
            self.draw_text_centered(self._difficulty_line(snap.difficulty), cy - 15, CYAN)
            self.draw_text_centered("SPACE - START", cy + 20, WHITE)
            self._draw_leaderboard(leaderboard, cy + 60)
        elif snap.status is Status.IDLE:
            self.draw_text_centered("READY!", cy, YELLOW, self.big_font)
            self.draw_text_centered("PRESS SPACE", cy + 40, WHITE)
        elif snap.status is Status.PAUSED:
            self._dim(140)
            self.draw_text_centered("PAUSED", cy, YELLOW, self.big_font)
            self.draw_text_centered("P - RESUME", cy + 40, WHITE)
        elif snap.status is Status.LEVEL_COMPLETE:
            self._dim(140)
            self.draw_text_centered(f"LEVEL {snap.level} CLEAR!", cy, YELLOW, self.big_font)
            self.draw_text_centered("ENTER - NEXT LEVEL", cy + 40, WHITE)
        elif snap.status in (Status.GAME_OVER, Status.GAME_COMPLETE):
            overlay = pygame.Surface((self.width, self.height))
            overlay.set_alpha(100)
            overlay.fill(RED if snap.status is Status.GAME_OVER else BLUE_FRIGHTENED)
            self.screen.blit(overlay, (0, 0))
            title = "GAME OVER" if snap.status is Status.GAME_OVER else "YOU WIN!"
            self.draw_text_centered(title, cy - 60, YELLOW, self.big_font)
            self.draw_text_centered(f"FINAL SCORE: {snap.score}", cy - 10, WHITE)
            self.draw_text_centered(f"REACHED LEVEL {snap.level}", cy + 20, WHITE)
            if initials is not None:
                self.draw_text_centered(f"NEW HIGH SCORE! NAME: {initials:_<3}", cy + 70, CYAN)
                self.draw_text_centered("ENTER - SAVE", cy + 100, WHITE)
            else:
                self.draw_text_centered("R - MENU", cy + 70, WHITE)

    def _difficulty_line(self, current: Difficulty) -> str:
        return "  ".join(
            f"[{d.value.upper()}]" if d is current else d.value.upper() for d in Difficulty
        )

    def _draw_leaderboard(self, entries: Sequence[Dict], top: int):
        if not entries:
            return
        self.draw_text_centered("HIGH SCORES", top, YELLOW)
        for i, entry in enumerate(entries[:5]):
            line = f"{i + 1:2d}. {entry['initials']}  {entry['score']:7d}  L{entry.get('level', 1)}"
            self.draw_text_centered(line, top + 25 + i * 22, WHITE)

    def _dim(self, alpha: int):
        overlay = pygame.Surface((self.width, self.height))
        overlay.set_alpha(alpha)
        overlay.fill(BLACK)
        self.screen.blit(overlay, (0, 0))
