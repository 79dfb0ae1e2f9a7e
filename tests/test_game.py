import pygame
import pytest

from starshooter.game import Game
from starshooter.scene_end import SceneEnd
from starshooter.scene_main import SceneMain


class RecordingScene:
    def __init__(self):
        self.calls = []

    def init(self):
        self.calls.append("init")

    def clean(self):
        self.calls.append("clean")

    def update(self, delta_time):
        self.calls.append(("update", delta_time))

    def render(self, surface):
        self.calls.append(("render", surface))

    def handle_event(self, event):
        self.calls.append(("event", event.type))


@pytest.fixture
def game(tmp_path):
    return Game(save_path=str(tmp_path / "save.dat"), assets_dir=str(tmp_path / "assets"))


@pytest.fixture
def text_game(game):
    pygame.font.init()
    game.screen = pygame.Surface((game.width, game.height), pygame.SRCALPHA)
    game.screen.fill((0, 0, 0, 0))
    game.text_font = pygame.font.Font(None, 32)
    game.title_font = pygame.font.Font(None, 64)
    return game


def test_frame_time_fits_fps(game):
    assert game.frame_time * game.fps <= 1000
    assert (game.frame_time + 1) * game.fps > 1000


def test_save_and_load_round_trip(game):
    game.insert_leaderboard(30, "amy")
    game.insert_leaderboard(70, "bob")
    game.save_data()
    other = Game(save_path=game.save_path)
    other.load_data()
    assert list(other.leaderboard) == [(70, "bob"), (30, "amy")]


def test_load_missing_file_keeps_entries(game):
    game.insert_leaderboard(10, "amy")
    game.load_data()
    assert list(game.leaderboard) == [(10, "amy")]


def test_save_to_missing_directory_is_tolerated(tmp_path):
    target = tmp_path / "missing" / "save.dat"
    game = Game(save_path=str(target))
    game.insert_leaderboard(5, "amy")
    game.save_data()
    assert not target.exists()


def test_leaderboard_keeps_eight(game):
    for score in range(12):
        game.insert_leaderboard(score, f"p{score}")
    scores = [score for score, _ in game.leaderboard]
    assert len(scores) == 8
    assert scores == sorted(scores, reverse=True)
    assert scores[0] == 11


def test_quit_event_stops_game(game):
    game.handle_event(pygame.event.Event(pygame.QUIT))
    assert game.is_running is False


def test_f4_toggles_fullscreen_flag(game):
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F4))
    assert game.is_fullscreen is True
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_F4))
    assert game.is_fullscreen is False


def test_events_reach_scene(game):
    scene = RecordingScene()
    game.current_scene = scene
    game.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a))
    assert scene.calls == [("event", pygame.KEYDOWN)]


def test_change_scene_cleans_old_and_inits_new(game):
    old, new = RecordingScene(), RecordingScene()
    game.change_scene(old)
    game.change_scene(new)
    assert old.calls == ["init", "clean"]
    assert new.calls == ["init"]
    assert game.current_scene is new


def test_update_scrolls_background_and_scene(game):
    scene = RecordingScene()
    game.current_scene = scene
    game.near_stars.height = 100
    game.far_stars.height = 50
    for _ in range(20):
        game.update(0.25)
        assert -100 <= game.near_stars.offset < 0
        assert -50 <= game.far_stars.offset < 0
    assert scene.calls[-1] == ("update", 0.25)


def test_render_passes_screen_to_scene(game):
    scene = RecordingScene()
    game.current_scene = scene
    game.screen = pygame.Surface((game.width, game.height))
    game.render()
    assert scene.calls == [("render", game.screen)]


def test_text_without_font_raises(game):
    with pytest.raises(RuntimeError):
        game.render_text_centered("hi", 0.5, False)


def test_render_text_centered_returns_end_point(text_game):
    end_x, end_y = text_game.render_text_centered("HELLO", 0.5, False)
    drawn = text_game.screen.get_bounding_rect()
    assert drawn.width > 0
    assert end_x > text_game.width // 2
    assert drawn.right <= end_x
    assert 0 <= end_y < text_game.height // 2 + 1
    assert drawn.top >= end_y


def test_render_text_pos_left(text_game):
    text_game.render_text_pos("HELLO", 100, 200)
    drawn = text_game.screen.get_bounding_rect()
    assert drawn.left >= 100
    assert drawn.top >= 200


def test_render_text_pos_right(text_game):
    text_game.render_text_pos("HELLO", 100, 200, False)
    drawn = text_game.screen.get_bounding_rect()
    assert drawn.right <= text_game.width - 100
    assert drawn.left > text_game.width // 2


def test_start_end_and_main_switch_scenes(game):
    game.start_end()
    assert isinstance(game.current_scene, SceneEnd)
    assert game.current_scene.is_typing is True
    game.start_main()
    assert isinstance(game.current_scene, SceneMain)
    assert game.current_scene.game is game
    assert game.current_scene.score == 0