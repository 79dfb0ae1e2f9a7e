import pygame
import pytest

from starshooter.scene_end import DEFAULT_NAME, SceneEnd, remove_last_char


class FakeGame:
    def __init__(self):
        self.final_score = 40
        self.height = 800
        self.leaderboard = []
        self.inserted = []
        self.centered = []
        self.positioned = []
        self.main_started = 0

    def insert_leaderboard(self, score, name):
        self.inserted.append((score, name))

    def render_text_centered(self, text, pos_y, is_title):
        self.centered.append((text, pos_y, is_title))
        return (321, 123)

    def render_text_pos(self, text, pos_x, pos_y, is_left=True):
        self.positioned.append((text, pos_x, pos_y, is_left))

    def start_main(self):
        self.main_started += 1


@pytest.fixture
def game():
    return FakeGame()


@pytest.fixture
def scene(game):
    return SceneEnd(game)


def key(code):
    return pygame.event.Event(pygame.KEYDOWN, key=code)


@pytest.mark.parametrize("text,expected", [("abc", "ab"), ("名字", "名"), ("", ""), ("a", "")])
def test_remove_last_char(text, expected):
    assert remove_last_char(text) == expected


def test_blink_timer_stays_in_period(scene):
    for _ in range(50):
        scene.update(0.07)
        assert 0 < scene.blink_timer <= 1.0


def test_text_input_appends(scene):
    scene.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="ab"))
    scene.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="名"))
    assert scene.name == "ab名"


def test_backspace_removes_last_character(scene):
    scene.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="名字"))
    scene.handle_event(key(pygame.K_BACKSPACE))
    assert scene.name == "名"


def test_return_with_empty_name_uses_default(scene, game):
    scene.handle_event(key(pygame.K_RETURN))
    assert scene.is_typing is False
    assert scene.name == DEFAULT_NAME
    assert game.inserted == [(game.final_score, DEFAULT_NAME)]


def test_return_submits_typed_name(scene, game):
    scene.handle_event(pygame.event.Event(pygame.TEXTINPUT, text="ace"))
    scene.handle_event(key(pygame.K_RETURN))
    assert scene.is_typing is False
    assert scene.name == "ace"
    assert game.inserted == [(game.final_score, "ace")]


def test_j_restarts_only_after_typing(scene, game):
    scene.handle_event(key(pygame.K_j))
    assert scene.is_typing is True
    assert scene.name == ""
    assert game.main_started == 0
    scene.handle_event(key(pygame.K_RETURN))
    assert scene.is_typing is False
    scene.handle_event(key(pygame.K_j))
    assert game.main_started == 1


def test_phase1_shows_score_and_title(scene, game):
    scene.render(None)
    assert scene.is_typing is True
    texts = [entry[0] for entry in game.centered]
    assert f"你的得分是：{game.final_score}" in texts
    assert ("Game Over", 0.4, True) in game.centered


def test_phase1_cursor_follows_name(scene, game):
    scene.name = "bob"
    scene.blink_timer = 0.2
    scene.render(None)
    assert scene.name == "bob"
    assert scene.blink_timer == 0.2
    assert ("bob", 0.8, False) in game.centered
    assert game.positioned == [("_", 321, 123, True)]


def test_phase1_cursor_hidden_in_second_half(scene, game):
    scene.blink_timer = 0.9
    scene.render(None)
    assert scene.blink_timer == 0.9
    assert scene.is_typing is True
    assert all(text != "_" for text, _, _ in game.centered)
    assert game.positioned == []


def test_phase2_lists_leaderboard(scene, game):
    game.leaderboard = [(90, "amy"), (50, "bob")]
    scene.is_typing = False
    scene.blink_timer = 0.9
    scene.render(None)
    assert scene.is_typing is False
    names = [p for p in game.positioned if p[3]]
    scores = [p for p in game.positioned if not p[3]]
    assert [p[0] for p in names] == ["1. amy", "2. bob"]
    assert [p[0] for p in scores] == ["90", "50"]
    assert names[1][2] - names[0][2] == 45
    assert all(text != "按 J 键重新开始游戏" for text, _, _ in game.centered)


def test_phase2_prompt_blinks(scene, game):
    scene.is_typing = False
    scene.blink_timer = 0.1
    scene.render(None)
    assert scene.is_typing is False
    assert scene.blink_timer == 0.1
    assert ("按 J 键重新开始游戏", 0.85, False) in game.centered