"""Game-over screen: name entry followed by the high-score table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pygame

from starshooter.scene import Scene

log = logging.getLogger(__name__)

DEFAULT_NAME = "无名氏"
_BLINK_PERIOD = 1.0
_ROW_SPACING = 45
_ROW_MARGIN = 100


def remove_last_char(text: str) -> str:
    """Return text without its last character; an empty string stays empty."""
    return text[:-1]


def _set_text_input(active: bool) -> None:
    if not pygame.display.get_init():
        return
    if active:
        pygame.key.start_text_input()
    else:
        pygame.key.stop_text_input()


class SceneEnd(Scene):
    """Asks for the player's name, then shows the leaderboard."""

    def __init__(self, game: Any) -> None:
        super().__init__(game)
        self.name = ""
        self.is_typing = True
        self.blink_timer = _BLINK_PERIOD
        self._music_loaded = False

    def init(self) -> None:
        """Start the closing music and text input."""
        if pygame.mixer.get_init():
            music = Path(getattr(self.game, "assets_dir", "assets")) / "music/06_Battle_in_Space_Intro.ogg"
            try:
                pygame.mixer.music.load(str(music))
                pygame.mixer.music.play(-1)
                self._music_loaded = True
            except (pygame.error, OSError) as exc:
                log.error("Failed to load music: %s", exc)
        try:
            _set_text_input(True)
        except pygame.error as exc:
            log.error("Text input error: %s", exc)

    def update(self, delta_time: float) -> None:
        """Advance the blinking cursor timer."""
        self.blink_timer -= delta_time
        if self.blink_timer <= 0:
            self.blink_timer += _BLINK_PERIOD

    def render(self, surface: Any) -> None:
        """Draw whichever phase the scene is in."""
        if self.is_typing:
            self.render_phase1(surface)
        else:
            self.render_phase2(surface)

    def clean(self) -> None:
        """Stop text input and the music."""
        _set_text_input(False)
        if self._music_loaded and pygame.mixer.get_init():
            pygame.mixer.music.stop()
            self._music_loaded = False

    def handle_event(self, event: Any) -> None:
        """Collect the name while typing; afterwards J starts a new game."""
        if self.is_typing:
            if event.type == pygame.TEXTINPUT:
                self.name += event.text
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_RETURN:
                    self.is_typing = False
                    _set_text_input(False)
                    if not self.name:
                        self.name = DEFAULT_NAME
                    self.game.insert_leaderboard(self.game.final_score, self.name)
                elif event.key == pygame.K_BACKSPACE:
                    self.name = remove_last_char(self.name)
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_j:
            self.game.start_main()

    def render_phase1(self, surface: Any) -> None:
        """Draw the score, the title and the name being typed."""
        game = self.game
        game.render_text_centered(f"你的得分是：{game.final_score}", 0.1, False)
        game.render_text_centered("Game Over", 0.4, True)
        game.render_text_centered("请输入你的名字，按回车键确认：", 0.6, False)
        cursor_visible = self.blink_timer < 0.5
        if self.name:
            end_x, end_y = game.render_text_centered(self.name, 0.8, False)
            if cursor_visible:
                game.render_text_pos("_", end_x, end_y)
        elif cursor_visible:
            game.render_text_centered("_", 0.8, False)

    def render_phase2(self, surface: Any) -> None:
        """Draw the leaderboard and the restart prompt."""
        game = self.game
        game.render_text_centered("得分榜", 0.05, True)
        pos_y = 0.2 * game.height
        for rank, (score, name) in enumerate(game.leaderboard, start=1):
            game.render_text_pos(f"{rank}. {name}", _ROW_MARGIN, int(pos_y))
            game.render_text_pos(str(score), _ROW_MARGIN, int(pos_y), False)
            pos_y += _ROW_SPACING
        if self.blink_timer < 0.5:
            game.render_text_centered("按 J 键重新开始游戏", 0.85, False)