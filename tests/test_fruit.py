import pytest

from pacman2d.config import FRUIT_DURATION, FRUIT_POPUP_TIME, FRUIT_SPAWN_TILE
from pacman2d.fruit import FruitKind, LevelFruit, fruit_for_level, fruit_points


@pytest.mark.parametrize("level,kind", [
    (1, FruitKind.CHERRY),
    (2, FruitKind.CHERRY),
    (3, FruitKind.STRAWBERRY),
    (5, FruitKind.ORANGE),
    (13, FruitKind.BELL),
    (15, FruitKind.KEY),
    (99, FruitKind.KEY),
])
def test_fruit_for_level(level, kind):
    assert fruit_for_level(level) is kind


def test_fruit_points():
    assert fruit_points(FruitKind.CHERRY) == 100
    assert fruit_points(FruitKind.KEY) == 5000
    assert fruit_points(None) == 0


def test_spawns_at_dot_thresholds():
    fruit = LevelFruit()
    assert not fruit.check_spawn(29, 1)
    assert fruit.check_spawn(30, 1)
    assert fruit.active
    assert fruit.kind is FruitKind.CHERRY
    assert fruit.tile == FRUIT_SPAWN_TILE
    assert fruit.expiry_ms == FRUIT_DURATION

    assert not fruit.check_spawn(31, 1)
    assert fruit.check_spawn(70, 3)
    assert fruit.kind is FruitKind.STRAWBERRY
    # Two per level at most
    assert not fruit.check_spawn(120, 3)


def test_collect_on_fruit_tile_only():
    fruit = LevelFruit()
    fruit.check_spawn(30, 1)
    assert fruit.try_collect((1, 1)) == 0
    assert fruit.active

    assert fruit.try_collect(FRUIT_SPAWN_TILE) == 100
    assert not fruit.active
    assert fruit.kind is None
    assert fruit.last_points == 100
    assert fruit.popup_ms == FRUIT_POPUP_TIME
    assert fruit.try_collect(FRUIT_SPAWN_TILE) == 0


def test_expires():
    fruit = LevelFruit()
    fruit.check_spawn(30, 1)
    fruit.update(FRUIT_DURATION - 1)
    assert fruit.active
    fruit.update(1)
    assert not fruit.active
    assert fruit.kind is None


def test_popup_counts_down():
    fruit = LevelFruit()
    fruit.check_spawn(30, 1)
    fruit.try_collect(FRUIT_SPAWN_TILE)
    fruit.update(FRUIT_POPUP_TIME + 500)
    assert fruit.popup_ms == 0
