import random

import pytest

from pacman2d.config import (
    DEATH_ANIMATION_DURATION,
    FRUIT_SPAWN_TILE,
    INVINCIBILITY_DURATION,
    POWER_PELLET_DURATION,
)
from pacman2d.dots import DotKind
from pacman2d.events import SoundCue
from pacman2d.geometry import Direction, Vec2
from pacman2d.ghosts import GhostMode, GhostType
from pacman2d.simulation import GameMode, Simulation, Status

from .conftest import center

# Right-hand end of row 10, clear of the tiles the tests use
PARKING = {
    GhostType.BLINKY: (16, 10),
    GhostType.PINKY: (17, 10),
    GhostType.INKY: (18, 10),
    GhostType.CLYDE: (15, 10),
}


@pytest.fixture
def sim():
    s = Simulation(random.Random(5))
    s.set_status(Status.RUNNING)
    return s


def place(player, col, row):
    player.mover.set_position(*center(col, row))


def put_ghost(ghost, col, row, mode=GhostMode.SCATTER, direction=Direction.LEFT):
    ghost.pos = Vec2(*center(col, row))
    ghost.mode = mode
    ghost.direction = direction


def roam_all(sim, mode=GhostMode.SCATTER):
    for ghost_type, tile in PARKING.items():
        put_ghost(sim.ghosts[ghost_type], *tile, mode=mode)


def collect_all_but(sim, *keep):
    for tile in list(sim.dots.dots):
        if tile not in keep:
            sim.dots.collect_at(tile)


# ---------------------------------------------------------------------------
# SETUP
# ---------------------------------------------------------------------------

def test_fresh_simulation():
    s = Simulation(random.Random(1))
    assert s.status is Status.MODE_SELECT
    assert s.level == 1
    assert s.global_mode is GhostMode.SCATTER
    assert s.dots.total == 136
    assert not s.dots.has_uncollected_at((2, 4))
    assert not s.dots.has_uncollected_at((2, 10))
    assert all(g.mode is GhostMode.IN_HOUSE for g in s.ghosts.values())
    p1, p2 = s.players[1], s.players[2]
    assert p1.alive and not p2.alive
    assert p1.tile == (2, 4) and p2.tile == (2, 10)
    assert p1.lives == 3


def test_two_player_mode_activates_player_two():
    s = Simulation(random.Random(1))
    s.set_game_mode(GameMode.TWO)
    assert [p.id for p in s.live_players()] == [1, 2]


def test_ticks_ignored_unless_running():
    s = Simulation(random.Random(1))
    assert s.tick(1000) == []
    assert s.elapsed_ms == 0
    s.set_status(Status.PAUSED)
    s.tick(1000)
    assert s.elapsed_ms == 0


@pytest.mark.parametrize("dt", [-16, "soon", None, float("nan"), float("inf")])
def test_bad_dt_counts_as_zero(sim, dt):
    sim.players[1].intent = Direction.RIGHT
    sim.tick(dt)
    assert sim.elapsed_ms == 0
    assert sim.players[1].tile == (2, 4)


# ---------------------------------------------------------------------------
# MOVEMENT AND DOTS
# ---------------------------------------------------------------------------

def test_first_ticks_keep_player_home(sim):
    sim.tick(200)
    p1 = sim.players[1]
    assert p1.tile == (2, 4)
    assert p1.score == 0
    blinky = sim.ghosts[GhostType.BLINKY]
    assert blinky.mode is GhostMode.IN_HOUSE
    assert blinky.is_exiting


def test_eating_a_dot(sim):
    sim.players[1].intent = Direction.RIGHT
    events = sim.tick(250)
    p1 = sim.players[1]
    assert p1.tile == (3, 4)
    assert p1.score == 10
    assert p1.facing is Direction.RIGHT
    assert SoundCue.DOT in events
    assert not sim.dots.has_uncollected_at((3, 4))


def test_long_frame_covers_full_distance(sim):
    sim.players[1].intent = Direction.RIGHT
    events = sim.tick(1000)
    p1 = sim.players[1]
    assert p1.tile == (6, 4)
    assert p1.mover.x == pytest.approx(center(6, 4)[0])
    assert p1.score == 40
    assert events.count(SoundCue.DOT) == 4


def test_distance_does_not_depend_on_frame_length(sim):
    sim.players[1].intent = Direction.RIGHT
    for _ in range(10):
        sim.tick(100)
    p1 = sim.players[1]
    assert p1.tile == (6, 4)
    assert p1.mover.x == pytest.approx(center(6, 4)[0])
    assert p1.score == 40


def test_intent_is_held_until_replaced(sim):
    sim.players[1].intent = Direction.RIGHT
    sim.tick(250)
    sim.tick(250)
    assert sim.players[1].tile == (4, 4)
    assert sim.players[1].intent is Direction.RIGHT


def test_level_fruit_spawns_and_is_eaten(sim):
    p1 = sim.players[1]
    others = [t for t in sim.dots.dots if t not in ((4, 4), FRUIT_SPAWN_TILE)]
    for tile in others[:29]:
        sim.dots.collect_at(tile)

    place(p1, 4, 4)
    sim.tick(0)
    assert sim.level_fruit.active

    place(p1, *FRUIT_SPAWN_TILE)
    before = p1.score
    events = sim.tick(0)
    assert p1.score - before == 10 + 100
    assert SoundCue.FRUIT in events
    assert not sim.level_fruit.active


# ---------------------------------------------------------------------------
# POWER PELLETS AND GHOSTS
# ---------------------------------------------------------------------------

def test_power_pellet_frightens_roaming_ghosts(sim):
    roam_all(sim)
    place(sim.players[1], 1, 1)
    events = sim.tick(0)
    assert sim.players[1].score == 50
    assert SoundCue.POWER_PELLET in events
    assert sim.power_pellet_ms == POWER_PELLET_DURATION
    assert sim.ghosts_eaten == 0
    for ghost in sim.ghosts.values():
        assert ghost.mode is GhostMode.FRIGHTENED
        assert ghost.direction is Direction.RIGHT


def test_power_pellet_leaves_house_ghosts_alone(sim):
    place(sim.players[1], 1, 1)
    sim.tick(0)
    assert all(g.mode is GhostMode.IN_HOUSE for g in sim.ghosts.values())
    assert sim.power_pellet_ms == POWER_PELLET_DURATION


def test_pellet_beats_ghost_on_the_same_tick(sim):
    p1 = sim.players[1]
    place(p1, 1, 1)
    put_ghost(sim.ghosts[GhostType.BLINKY], 1, 1, mode=GhostMode.CHASE)
    events = sim.tick(0)
    assert sim.status is Status.RUNNING
    assert sim.ghosts[GhostType.BLINKY].mode is GhostMode.EATEN
    assert p1.score == 50 + 200
    assert SoundCue.DEATH not in events


def test_ghost_combo(sim):
    p1 = sim.players[1]
    roam_all(sim)
    place(p1, 1, 1)
    sim.tick(0)

    place(p1, 4, 4)
    gained = []
    for ghost_type in GhostType:
        put_ghost(sim.ghosts[ghost_type], 4, 4, mode=GhostMode.FRIGHTENED)
        before = p1.score
        events = sim.tick(0)
        assert SoundCue.GHOST_EATEN in events
        assert sim.ghosts[ghost_type].mode is GhostMode.EATEN
        gained.append(p1.score - before)

    # The first tick on (4, 4) also ate the dot there
    assert gained == [210, 400, 800, 1600]
    assert sim.ghosts_eaten == 4
    assert sim.status is Status.RUNNING


def test_new_pellet_restarts_combo(sim):
    p1 = sim.players[1]
    roam_all(sim)
    place(p1, 1, 1)
    sim.tick(0)
    place(p1, 4, 4)
    put_ghost(sim.ghosts[GhostType.BLINKY], 4, 4, mode=GhostMode.FRIGHTENED)
    sim.tick(0)
    assert sim.ghosts_eaten == 1

    place(p1, 18, 1)
    sim.tick(0)
    assert sim.ghosts_eaten == 0
    assert sim.power_pellet_ms == POWER_PELLET_DURATION
    assert sim.ghosts[GhostType.BLINKY].mode is GhostMode.EATEN


def test_frightened_window_runs_out(sim):
    roam_all(sim)
    place(sim.players[1], 1, 1)
    sim.tick(0)
    sim.power_pellet_ms = 1.0
    sim.tick(1)
    assert sim.power_pellet_ms == 0
    assert sim.ghosts_eaten == 0
    assert not any(g.mode is GhostMode.FRIGHTENED for g in sim.ghosts.values())


def test_flashing_near_the_end(sim):
    sim.power_pellet_ms = 2500
    assert not sim.ghosts_flashing
    sim.power_pellet_ms = 2000
    assert sim.ghosts_flashing
    sim.power_pellet_ms = 0
    assert not sim.ghosts_flashing


# ---------------------------------------------------------------------------
# SCATTER / CHASE
# ---------------------------------------------------------------------------

def test_global_mode_flips_with_remainder(sim):
    sim.tick(1600)
    assert sim.global_mode is GhostMode.CHASE
    assert sim.mode_timer_ms == pytest.approx(100)


def test_long_tick_runs_several_flips(sim):
    sim.tick(1500 + 45000 + 1500 + 10)
    assert sim.global_mode is GhostMode.CHASE
    assert sim.mode_timer_ms == pytest.approx(10)


def test_flip_reverses_roaming_ghosts(sim):
    roam_all(sim)
    sim.mode_timer_ms = 1499
    sim.tick(1)
    for ghost in sim.ghosts.values():
        assert ghost.mode is GhostMode.CHASE


def test_flip_during_fright_sets_return_mode(sim):
    roam_all(sim)
    place(sim.players[1], 1, 1)
    sim.tick(0)
    sim.mode_timer_ms = 1500
    sim.tick(0)
    assert sim.global_mode is GhostMode.CHASE
    blinky = sim.ghosts[GhostType.BLINKY]
    assert blinky.mode is GhostMode.FRIGHTENED
    assert blinky.previous_mode is GhostMode.CHASE


# ---------------------------------------------------------------------------
# DEATH
# ---------------------------------------------------------------------------

def test_caught_by_ghost(sim):
    p1 = sim.players[1]
    roam_all(sim)
    place(p1, 4, 4)
    put_ghost(sim.ghosts[GhostType.BLINKY], 4, 4)
    put_ghost(sim.ghosts[GhostType.PINKY], 8, 4, mode=GhostMode.EATEN)
    events = sim.tick(0)
    assert SoundCue.DEATH in events
    assert sim.status is Status.DYING
    assert sim.death_ms == DEATH_ANIMATION_DURATION
    assert sim.dying_player_id == 1

    sim.tick(1000)
    assert sim.status is Status.DYING
    assert p1.lives == 3

    sim.tick(500)
    assert sim.status is Status.RUNNING
    assert p1.lives == 2
    assert p1.tile == (2, 4)
    assert p1.invincible
    assert p1.invincibility_ms == INVINCIBILITY_DURATION
    assert sim.dying_player_id is None
    assert sim.ghosts[GhostType.PINKY].mode is GhostMode.IN_HOUSE


def test_invincible_player_passes_through(sim):
    p1 = sim.players[1]
    p1.invincible = True
    p1.invincibility_ms = INVINCIBILITY_DURATION
    place(p1, 4, 4)
    put_ghost(sim.ghosts[GhostType.BLINKY], 4, 4)
    sim.tick(0)
    assert sim.status is Status.RUNNING


def test_invincibility_wears_off():
    s = Simulation(random.Random(1))
    p1 = s.players[1]
    p1.respawn()
    p1.tick_invincibility(INVINCIBILITY_DURATION - 1)
    assert p1.invincible
    p1.tick_invincibility(1)
    assert not p1.invincible


def test_last_life_ends_the_game(sim):
    p1 = sim.players[1]
    p1.lives = 0
    place(p1, 4, 4)
    put_ghost(sim.ghosts[GhostType.BLINKY], 4, 4)
    sim.tick(0)
    events = sim.tick(DEATH_ANIMATION_DURATION)
    assert sim.status is Status.GAME_OVER
    assert SoundCue.GAME_OVER in events
    assert p1.eliminated


def test_two_players_game_goes_on_after_one_is_out():
    s = Simulation(random.Random(1))
    s.set_game_mode(GameMode.TWO)
    s.set_status(Status.RUNNING)
    p1 = s.players[1]
    p1.lives = 0
    place(p1, 4, 4)
    put_ghost(s.ghosts[GhostType.BLINKY], 4, 4)
    s.tick(0)
    s.tick(DEATH_ANIMATION_DURATION)
    assert p1.eliminated
    assert s.status is Status.RUNNING
    assert [p.id for p in s.live_players()] == [2]


# ---------------------------------------------------------------------------
# SCORING AND LEVELS
# ---------------------------------------------------------------------------

def test_extra_life_at_ten_thousand(sim):
    p1 = sim.players[1]
    p1.score = 9990
    place(p1, 4, 4)
    events = sim.tick(0)
    assert p1.score == 10000
    assert p1.lives == 4
    assert SoundCue.EXTRA_LIFE in events
    assert sim.scoreboard.high_score == 10000


def test_level_complete(sim):
    collect_all_but(sim, (4, 4))
    place(sim.players[1], 4, 4)
    events = sim.tick(0)
    assert sim.status is Status.LEVEL_COMPLETE
    assert SoundCue.LEVEL_COMPLETE in events
    assert sim.dots.all_collected


def test_build_level_restocks(sim):
    collect_all_but(sim)
    sim.players[1].score = 700
    sim.build_level()
    assert sim.dots.remaining == 136
    assert sim.players[1].score == 700
    assert sim.players[1].tile == (2, 4)
    assert sim.global_mode is GhostMode.SCATTER


def test_power_dots_are_tracked(sim):
    power = [d for d in sim.dots.uncollected() if d.kind is DotKind.POWER]
    assert len(power) == 4


# ---------------------------------------------------------------------------
# INVARIANTS
# ---------------------------------------------------------------------------

def test_long_run_keeps_everyone_on_the_floor():
    s = Simulation(random.Random(11))
    s.set_game_mode(GameMode.TWO)
    s.set_status(Status.RUNNING)
    choices = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]
    steer = random.Random(3)
    width, height = s.maze.pixel_size
    last_scores = {1: 0, 2: 0}
    last_collected = 0

    for frame in range(3000):
        if frame % 20 == 0:
            for player in s.players.values():
                player.intent = steer.choice(choices)
        s.tick(16)
        if s.status not in (Status.RUNNING, Status.DYING):
            break
        for ghost in s.ghosts.values():
            assert s.maze.is_walkable(*ghost.tile), ghost
        for player in s.players.values():
            assert 0 <= player.mover.x < width
            assert 0 <= player.mover.y < height
            assert s.maze.is_walkable(*player.tile)
            assert player.score >= last_scores[player.id]
            last_scores[player.id] = player.score
        assert s.dots.collected_count >= last_collected
        last_collected = s.dots.collected_count
        assert 0 <= s.ghosts_eaten <= 4
        assert s.power_pellet_ms >= 0
