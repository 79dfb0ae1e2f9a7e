"""The game object: window, main loop, star background, text and high scores."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

import pygame

from starshooter.leaderboard import Leaderboard
from starshooter.objects import Background
from starshooter.scene import Scene
from starshooter.scene_end import SceneEnd
from starshooter.scene_main import SceneMain

log = logging.getLogger(__name__)

_WHITE = (255, 255, 255)
_LEADERBOARD_SIZE = 8
_CHANNELS = 32


class Game:
    """Owns the window and drives the current scene."""

    def __init__(
        self,
        width: int = 600,
        height: int = 800,
        fps: int = 60,
        save_path: str = "assets/save.dat",
        assets_dir: str = "assets",
    ) -> None:
        self.width = width
        self.height = height
        self.fps = fps
        self.frame_time = 1000 // fps  # milliseconds
        self.delta_time = 0.0
        self.save_path = save_path
        self.assets_dir = assets_dir
        self.is_running = True
        self.is_fullscreen = False
        self.final_score = 0
        self.leaderboard = Leaderboard(_LEADERBOARD_SIZE)
        self.current_scene: Optional[Scene] = None
        self.screen: Optional[pygame.Surface] = None
        self.near_stars = Background()
        self.far_stars = Background()
        self.title_font: Optional[pygame.font.Font] = None
        self.text_font: Optional[pygame.font.Font] = None

    # -- lifecycle -------------------------------------------------------

    def _fail(self, what: str, exc: Exception) -> None:
        log.error("%s: %s", what, exc)
        self.is_running = False

    def _load_layer(self, layer: Background, relative: str) -> None:
        try:
            image = pygame.image.load(str(Path(self.assets_dir) / relative))
        except (pygame.error, OSError) as exc:
            log.error("Failed to load %s: %s", relative, exc)
            return
        layer.width = image.get_width() // 2
        layer.height = image.get_height() // 2
        layer.texture = pygame.transform.scale(image, (layer.width, layer.height)).convert_alpha()

    def init(self) -> None:
        """Open the window and audio, load shared assets and scores, start playing."""
        pygame.init()
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=2048)
            pygame.mixer.set_num_channels(_CHANNELS)
            pygame.mixer.music.set_volume(1 / 6)
            for index in range(_CHANNELS):
                pygame.mixer.Channel(index).set_volume(1 / 8)
        except pygame.error as exc:
            self._fail("Audio init error", exc)
        try:
            pygame.font.init()
        except pygame.error as exc:
            self._fail("Font init error", exc)
        try:
            self.screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption("Star Shooter")
        except pygame.error as exc:
            self._fail("Window init error", exc)
            return

        self._load_layer(self.near_stars, "image/Stars-A.png")
        self._load_layer(self.far_stars, "image/Stars-B.png")

        font_path = str(Path(self.assets_dir) / "font/VonwaonBitmap-16px.ttf")
        try:
            self.title_font = pygame.font.Font(font_path, 64)
            self.text_font = pygame.font.Font(font_path, 32)
        except (pygame.error, OSError) as exc:
            self._fail("Failed to open font", exc)

        self.load_data()
        self.start_main()

    def run(self) -> None:
        """Run the frame loop until the window closes, then save and clean up."""
        try:
            while self.is_running:
                frame_start = self.ticks()
                for event in pygame.event.get():
                    self.handle_event(event)
                self.update(self.delta_time)
                self.render()
                elapsed = self.ticks() - frame_start
                if elapsed < self.frame_time:
                    pygame.time.delay(self.frame_time - elapsed)
                    self.delta_time = self.frame_time / 1000.0
                else:
                    self.delta_time = elapsed / 1000.0
        finally:
            self.save_data()
            self.clean()

    def clean(self) -> None:
        """Release the scene, the background textures and pygame itself."""
        if self.current_scene is not None:
            self.current_scene.clean()
            self.current_scene = None
        self.near_stars.texture = None
        self.far_stars.texture = None
        self.title_font = None
        self.text_font = None
        self.screen = None
        pygame.quit()

    def change_scene(self, scene: Scene) -> None:
        """Clean the current scene and switch to a new one."""
        if self.current_scene is not None:
            self.current_scene.clean()
        self.current_scene = scene
        scene.init()

    def start_main(self) -> None:
        """Switch to a fresh playing field."""
        self.change_scene(SceneMain(self))

    def start_end(self) -> None:
        """Switch to the game-over screen."""
        self.change_scene(SceneEnd(self))

    def ticks(self) -> int:
        """Milliseconds since pygame was initialised."""
        return pygame.time.get_ticks()

    # -- frame -----------------------------------------------------------

    def handle_event(self, event: Any) -> None:
        """Handle quitting and F4 fullscreen, then pass the event to the scene."""
        if event.type == pygame.QUIT:
            self.is_running = False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_F4:
            self.is_fullscreen = not self.is_fullscreen
            if self.screen is not None:
                flags = pygame.FULLSCREEN if self.is_fullscreen else 0
                self.screen = pygame.display.set_mode((self.width, self.height), flags)
        if self.current_scene is not None:
            self.current_scene.handle_event(event)

    def update(self, delta_time: float) -> None:
        """Scroll the background and advance the scene."""
        self.background_update(delta_time)
        if self.current_scene is not None:
            self.current_scene.update(delta_time)

    def render(self) -> None:
        """Draw the background and the scene, then show the frame."""
        if self.screen is None:
            return
        self.screen.fill((0, 0, 0))
        self.render_background()
        if self.current_scene is not None:
            self.current_scene.render(self.screen)
        if pygame.display.get_init() and pygame.display.get_surface() is self.screen:
            pygame.display.flip()

    def background_update(self, delta_time: float) -> None:
        """Scroll both star layers."""
        self.near_stars.scroll(delta_time)
        self.far_stars.scroll(delta_time)

    def render_background(self) -> None:
        """Tile the far, then the near, star layer over the window."""
        if self.screen is None:
            return
        for layer in (self.far_stars, self.near_stars):
            if layer.texture is None or layer.width <= 0 or layer.height <= 0:
                continue
            for pos_y in range(int(layer.offset), self.height, layer.height):
                for pos_x in range(0, self.width, layer.width):
                    self.screen.blit(layer.texture, (pos_x, pos_y))

    # -- text ------------------------------------------------------------

    def _render_text(self, text: str, font: Optional[pygame.font.Font]) -> pygame.Surface:
        if font is None or self.screen is None:
            raise RuntimeError("no font or screen to draw text with")
        return font.render(text, False, _WHITE)

    def render_text_centered(self, text: str, pos_y: float, is_title: bool) -> Tuple[int, int]:
        """Draw text centred horizontally at a fraction of the height.

        Returns the point just right of the text's top edge.
        """
        font = self.title_font if is_title else self.text_font
        image = self._render_text(text, font)
        y = int((self.height - image.get_height()) * pos_y)
        x = self.width // 2 - image.get_width() // 2
        self.screen.blit(image, (x, y))
        return (x + image.get_width(), y)

    def render_text_pos(self, text: str, pos_x: int, pos_y: int, is_left: bool = True) -> None:
        """Draw text pos_x from the left edge, or from the right edge when not is_left."""
        image = self._render_text(text, self.text_font)
        x = pos_x if is_left else self.width - pos_x - image.get_width()
        self.screen.blit(image, (x, pos_y))

    # -- scores ----------------------------------------------------------

    def insert_leaderboard(self, score: int, name: str) -> None:
        """Add a score to the leaderboard."""
        self.leaderboard.insert(score, name)

    def save_data(self) -> None:
        """Write the leaderboard; a failure is logged."""
        try:
            self.leaderboard.save(self.save_path)
        except OSError as exc:
            log.error("Failed to open save file: %s", exc)

    def load_data(self) -> None:
        """Read the leaderboard; a missing file leaves it as it is."""
        try:
            self.leaderboard.load(self.save_path)
        except OSError as exc:
            log.info("Failed to open save file: %s", exc)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game."""
    parser = argparse.ArgumentParser(prog="starshooter", description="A vertical space shooter.")
    parser.parse_args(argv)
    game = Game()
    game.init()
    game.run()
    return 0