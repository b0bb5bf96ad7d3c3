"""
Game constants.

All timings are in milliseconds, all speeds of ghosts in pixels per
millisecond and the player speed in tiles per second.
"""

# ---------------------------------------------------------------------------
# WORLD
# ---------------------------------------------------------------------------

TILE_SIZE = 20
MAZE_COLS = 20
MAZE_ROWS = 15
FPS = 60

# ---------------------------------------------------------------------------
# SCORING
# ---------------------------------------------------------------------------

DOT_POINTS = 10
POWER_PELLET_POINTS = 50
GHOST_EAT_POINTS = (200, 400, 800, 1600)
EXTRA_LIFE_SCORE = 10000

# ---------------------------------------------------------------------------
# TIMINGS
# ---------------------------------------------------------------------------

POWER_PELLET_DURATION = 8000
FRIGHTENED_FLASH_TIME = 2000
DEATH_ANIMATION_DURATION = 1500
INVINCIBILITY_DURATION = 2500
GHOST_RESPAWN_DELAY = 1000

# ---------------------------------------------------------------------------
# GAME RULES
# ---------------------------------------------------------------------------

MAX_LEVEL = 5
STARTING_LIVES = 3
PLAYER_SPEED = 4  # tiles per second

# Player/ghost overlap distance in pixels
COLLISION_RADIUS = TILE_SIZE * 0.6

# Player spawns: (tile_x + 0.5, tile_y + 0.5, facing)
PLAYER_SPAWNS = {
    1: (2.5, 4.5, "RIGHT"),
    2: (2.5, 10.5, "LEFT"),
}

# ---------------------------------------------------------------------------
# GHOST HOUSE
# The pen is the corridor on row 8 between columns 6 and 13. Ghosts leave it
# through column 11 and the exit tile (11, 7) directly above.
# ---------------------------------------------------------------------------

GHOST_HOUSE_CENTER = (11, 8)
GHOST_HOUSE_EXIT = (11, 7)
GHOST_BOUNCE_AMPLITUDE = 4.0  # pixels above/below the pen row centre

GHOST_START_TILES = {
    "BLINKY": (8.5, 8.5),
    "PINKY": (9.5, 8.5),
    "INKY": (10.5, 8.5),
    "CLYDE": (11.5, 8.5),
}

GHOST_RELEASE_DELAYS = {
    "BLINKY": 0,
    "PINKY": 2000,
    "INKY": 4000,
    "CLYDE": 6000,
}

SCATTER_TARGETS = {
    "BLINKY": (18, 1),   # Top-right
    "PINKY": (1, 1),     # Top-left
    "INKY": (18, 13),    # Bottom-right
    "CLYDE": (1, 13),    # Bottom-left
}

# ---------------------------------------------------------------------------
# LEVEL FRUIT
# ---------------------------------------------------------------------------

FRUIT_SPAWN_TILE = (9, 13)
FRUIT_SPAWN_THRESHOLDS = (30, 70)
FRUIT_DURATION = 10000
FRUIT_POPUP_TIME = 2000

# ---------------------------------------------------------------------------
# RANDOM FRUIT
# ---------------------------------------------------------------------------

MIN_SPAWN_INTERVAL = 8000
MAX_SPAWN_INTERVAL = 15000
FRUIT_LIFETIME = 7000
FRUIT_FADE_IN = 500
FRUIT_BLINK_TIME = 2000
FRUIT_BLINK_PERIOD = 200
MAX_ACTIVE_FRUITS = 2
POINTS_DISPLAY_TIME = 1500
MIN_SPAWN_DISTANCE = 3

# ---------------------------------------------------------------------------
# FRONTEND
# ---------------------------------------------------------------------------

SCALE = 2
HUD_HEIGHT = 40
SAMPLE_RATE = 22050

# Colors (Arcade Palette)
BLACK = (0, 0, 0)
WALL_BLUE = (33, 33, 222)
YELLOW = (255, 255, 0)
WHITE = (255, 255, 255)
PELLET_COLOR = (255, 184, 174)
RED = (255, 0, 0)
PINK = (255, 184, 255)
CYAN = (0, 255, 255)
ORANGE = (255, 184, 82)
GREEN = (0, 200, 0)
BLUE_FRIGHTENED = (33, 33, 255)
GREY = (150, 150, 150)
