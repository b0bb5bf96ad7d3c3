import os
import random

import pytest

# Headless pygame for the frontend smoke tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from pacman2d.difficulty import Difficulty, preset_for
from pacman2d.game import Game
from pacman2d.ghosts import GhostContext, GhostMode
from pacman2d.maze import Maze
from pacman2d.simulation import Status


def center(col, row):
    c = Maze.pixel_center_of_tile(col, row)
    return c.x, c.y


@pytest.fixture
def maze():
    return Maze()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def game():
    return Game(seed=42)


@pytest.fixture
def running_game(game):
    game.set_game_mode("single")
    game.start_game()
    assert game.status is Status.RUNNING
    return game


@pytest.fixture
def ghost_ctx(maze, rng):
    def make(players, blinky_tile=(8, 8), global_mode=GhostMode.SCATTER,
             difficulty=Difficulty.MEDIUM):
        return GhostContext(
            maze=maze,
            players=players,
            blinky_tile=blinky_tile,
            global_mode=global_mode,
            preset=preset_for(difficulty),
            rng=rng,
        )
    return make
