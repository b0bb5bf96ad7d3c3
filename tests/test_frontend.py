import pytest

pygame = pytest.importorskip("pygame")

from pacman2d.app import App  # noqa: E402
from pacman2d.audio import AudioEngine, render_notes, render_sweep, to_buffer  # noqa: E402
from pacman2d.config import DEATH_ANIMATION_DURATION, SAMPLE_RATE  # noqa: E402
from pacman2d.events import SoundCue  # noqa: E402
from pacman2d.game import Game  # noqa: E402
from pacman2d.geometry import Direction, Vec2  # noqa: E402
from pacman2d.ghosts import GhostMode, GhostType  # noqa: E402
from pacman2d.leaderboard import Leaderboard  # noqa: E402
from pacman2d.render import Renderer, screen_size  # noqa: E402
from pacman2d.simulation import GameMode, Status  # noqa: E402

from .conftest import center  # noqa: E402


def key(k, unicode=""):
    return pygame.event.Event(pygame.KEYDOWN, key=k, unicode=unicode, mod=0)


@pytest.fixture
def app(tmp_path):
    a = App(game=Game(seed=3), leaderboard=Leaderboard(tmp_path / "lb.json"),
            audio_enabled=False)
    yield a
    pygame.quit()


# ---------------------------------------------------------------------------
# AUDIO
# ---------------------------------------------------------------------------

def test_synth_lengths():
    assert len(render_notes([(440, 0.1), (0, 0.1)])) == int(SAMPLE_RATE * 0.1) * 2
    assert len(render_sweep(200, 400, 0.05)) == int(SAMPLE_RATE * 0.05)


def test_buffer_is_clipped():
    buf = to_buffer([2.0, -2.0, 0.0])
    assert list(buf) == [32767, -32767, 0]


def test_disabled_engine_is_silent():
    audio = AudioEngine(enabled=False)
    audio.play_events([SoundCue.DOT, SoundCue.DEATH, SoundCue.GAME_OVER])
    audio.update_siren(10, 100)
    assert audio.current_siren is None
    assert audio.toggle_mute()
    assert not audio.toggle_mute()
    audio.stop_all()


# ---------------------------------------------------------------------------
# RENDERING
# ---------------------------------------------------------------------------

def test_render_every_status():
    pygame.init()
    game = Game(seed=9)
    surface = pygame.Surface(screen_size(game.sim.maze))
    renderer = Renderer(surface, game.sim.maze)
    renderer.draw(game.snapshot(), 0)
    renderer.draw_overlay(game.snapshot(), [{"initials": "ABC", "score": 10, "level": 1}])

    game.set_game_mode("two")
    game.start_game()
    game.set_player_input(1, "RIGHT")
    for _ in range(30):
        snap = game.tick(50)
        renderer.draw(snap)
        renderer.draw_overlay(snap)

    game.pause_game()
    renderer.draw_overlay(game.snapshot())
    game.resume_game()

    sim = game.sim
    sim.power_pellet_ms = 1000
    for ghost in sim.ghosts.values():
        ghost.mode = GhostMode.FRIGHTENED
    sim.level_fruit.check_spawn(30, 1)
    renderer.draw(game.snapshot(), 1234)

    sim.set_status(Status.GAME_OVER)
    renderer.draw_overlay(game.snapshot(), initials="AB")
    pygame.quit()


# ---------------------------------------------------------------------------
# APP
# ---------------------------------------------------------------------------

def test_keyboard_flow(app):
    app.handle_event(key(pygame.K_2, "2"))
    assert app.game.sim.game_mode is GameMode.TWO
    app.handle_event(key(pygame.K_h, "h"))
    assert app.game.sim.difficulty.value == "hard"

    app.handle_event(key(pygame.K_SPACE, " "))
    assert app.game.status is Status.RUNNING

    app.handle_event(key(pygame.K_RIGHT))
    app.handle_event(key(pygame.K_w, "w"))
    assert app.game.sim.players[1].intent is Direction.RIGHT
    assert app.game.sim.players[2].intent is Direction.UP

    snap = app.step(16)
    assert snap.status is Status.RUNNING
    app.draw()

    app.handle_event(key(pygame.K_p, "p"))
    assert app.game.status is Status.PAUSED
    app.handle_event(key(pygame.K_ESCAPE))
    assert app.game.status is Status.RUNNING

    app.handle_event(key(pygame.K_n, "n"))
    assert app.audio.muted

    app.handle_event(key(pygame.K_r, "r"))
    assert app.game.status is Status.MODE_SELECT


def test_wasd_drives_player_one_in_single_mode(app):
    app.handle_event(key(pygame.K_1, "1"))
    app.handle_event(key(pygame.K_d, "d"))
    assert app.game.sim.players[1].intent is Direction.RIGHT


def test_quit_stops_loop(app):
    app.handle_event(pygame.event.Event(pygame.QUIT))
    assert not app.running


def test_high_score_initials(app):
    game = app.game
    game.set_game_mode("single")
    game.start_game()
    sim = game.sim
    p1 = sim.players[1]
    p1.lives = 0
    p1.score = 500
    p1.mover.set_position(*center(4, 4))
    blinky = sim.ghosts[GhostType.BLINKY]
    blinky.pos = Vec2(*center(4, 4))
    blinky.mode = GhostMode.SCATTER

    app.step(0)
    app.step(DEATH_ANIMATION_DURATION)
    assert app.snapshot.status is Status.GAME_OVER
    assert app.initials == ""

    for letter in "abcd":
        app.handle_event(key(getattr(pygame, "K_" + letter), letter))
    assert app.initials == "ABC"
    app.handle_event(key(pygame.K_BACKSPACE))
    assert app.initials == "AB"
    app.handle_event(key(pygame.K_z, "z"))
    app.draw()
    app.handle_event(key(pygame.K_RETURN, "\r"))

    assert app.initials is None
    assert app.score_saved
    assert app.board[0]["initials"] == "ABZ"
    assert app.board[0]["score"] == 510
    assert app.leaderboard.load_high_score() == 510
