"""
PAC-MAN 2D: a tick-driven Pac-Man simulation with a pygame front end.

The core (everything except audio, render and app) only needs the standard
library:

    from pacman2d import Game

    game = Game(seed=1)
    game.set_game_mode("single")
    game.start_game()
    game.set_player_input(1, "RIGHT")
    snap = game.tick(16)
"""

from .difficulty import Difficulty
from .events import SoundCue
from .game import Game
from .geometry import Direction
from .ghosts import GhostMode, GhostType
from .leaderboard import Leaderboard, MemoryHighScoreStore
from .maze import Maze
from .simulation import GameMode, Status
from .snapshot import GameSnapshot

__version__ = "1.0.0"

__all__ = [
    "Difficulty",
    "Direction",
    "Game",
    "GameMode",
    "GameSnapshot",
    "GhostMode",
    "GhostType",
    "Leaderboard",
    "Maze",
    "MemoryHighScoreStore",
    "SoundCue",
    "Status",
]
