"""The playing field: the player's ship, enemies, shots, explosions and pickups."""

from __future__ import annotations

import dataclasses
import logging
import math
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pygame

from starshooter.objects import (
    Enemy,
    Explosion,
    Item,
    ItemType,
    Player,
    ProjectileEnemy,
    ProjectilePlayer,
)
from starshooter.scene import Scene

log = logging.getLogger(__name__)

_SOUND_FILES = {
    "player_shoot": "sound/laser_shoot4.wav",
    "enemy_shoot": "sound/xs_laser.wav",
    "player_explode": "sound/explosion1.wav",
    "enemy_explode": "sound/explosion3.wav",
    "hit": "sound/eff11.wav",
    "get_item": "sound/eff5.wav",
}

_SPAWN_CHANCE = 1 / 60.0  # about one enemy per second at 60 frames per second
_DROP_CHANCE = 0.5
_MARGIN = 32  # how far a shot may leave the screen before it is dropped

_UI_X = 10
_UI_Y = 10
_UI_SIZE = 32
_UI_OFFSET = 40


def _intersects(a: pygame.Rect, b: pygame.Rect) -> bool:
    """True when two non-empty rectangles overlap."""
    if a.w <= 0 or a.h <= 0 or b.w <= 0 or b.h <= 0:
        return False
    return a.x < b.x + b.w and b.x < a.x + a.w and a.y < b.y + b.h and b.y < a.y + a.h


class SceneMain(Scene):
    """The main game scene."""

    def __init__(self, game: Any, rng: Optional[random.Random] = None) -> None:
        super().__init__(game)
        self.rng = rng if rng is not None else random.Random()
        self.player = Player()
        self.is_dead = False
        self.score = 0
        self.timer_end = 0.0

        self.projectile_player_template = ProjectilePlayer()
        self.enemy_template = Enemy()
        self.projectile_enemy_template = ProjectileEnemy()
        self.explosion_template = Explosion()
        self.item_life_template = Item()

        self.projectiles_player: List[ProjectilePlayer] = []
        self.enemies: List[Enemy] = []
        self.projectiles_enemy: List[ProjectileEnemy] = []
        self.explosions: List[Explosion] = []
        self.items: List[Item] = []

        self.sounds: Dict[str, Any] = {}
        self.ui_health: Optional[pygame.Surface] = None
        self.ui_health_dim: Optional[pygame.Surface] = None
        self.score_font: Optional[Any] = None
        self._music_loaded = False

    # -- resources -------------------------------------------------------

    def _asset(self, relative: str) -> Path:
        return Path(getattr(self.game, "assets_dir", "assets")) / relative

    def _load_image(
        self, relative: str, divisor: int = 1
    ) -> Tuple[Optional[pygame.Surface], int, int]:
        try:
            image = pygame.image.load(str(self._asset(relative)))
        except (pygame.error, OSError) as exc:
            log.error("Failed to load image %s: %s", relative, exc)
            return None, 0, 0
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        width, height = image.get_width() // divisor, image.get_height() // divisor
        if divisor != 1:
            image = pygame.transform.scale(image, (width, height))
        return image, width, height

    def _play(self, name: str, channel: int = -1) -> None:
        sound = self.sounds.get(name)
        if sound is None or not pygame.mixer.get_init():
            return
        if channel >= 0:
            pygame.mixer.Channel(channel).play(sound)
        else:
            sound.play()

    def init(self) -> None:
        """Load music, sounds, images and fonts and place the player."""
        if pygame.mixer.get_init():
            try:
                pygame.mixer.music.load(
                    str(self._asset("music/03_Racing_Through_Asteroids_Loop.ogg"))
                )
                pygame.mixer.music.play(-1)
                self._music_loaded = True
            except (pygame.error, OSError) as exc:
                log.error("BGM Init Error: %s", exc)
            for name, relative in _SOUND_FILES.items():
                try:
                    self.sounds[name] = pygame.mixer.Sound(str(self._asset(relative)))
                except (pygame.error, OSError) as exc:
                    log.error("Failed to load sound %s: %s", relative, exc)

        health, _, _ = self._load_image("image/Health UI Black.png")
        if health is not None:
            self.ui_health = pygame.transform.scale(health, (_UI_SIZE, _UI_SIZE))
            self.ui_health_dim = self.ui_health.copy()
            self.ui_health_dim.fill((100, 100, 100), special_flags=pygame.BLEND_RGB_MULT)

        if pygame.font.get_init():
            try:
                self.score_font = pygame.font.Font(
                    str(self._asset("font/VonwaonBitmap-12px.ttf")), 24
                )
            except (pygame.error, OSError) as exc:
                log.error("Failed to load font: %s", exc)

        texture, width, height = self._load_image("image/SpaceShip.png", 4)
        if texture is None:
            log.error("Load Player Failed")
        self.player.texture, self.player.width, self.player.height = texture, width, height
        self.player.x = float(self.game.width // 2 - width // 2)
        self.player.y = float(self.game.height - height)

        for template, relative in (
            (self.projectile_player_template, "image/laser-1.png"),
            (self.enemy_template, "image/insect-2.png"),
            (self.projectile_enemy_template, "image/bullet-1.png"),
            (self.item_life_template, "image/bonus_life.png"),
        ):
            template.texture, template.width, template.height = self._load_image(relative, 4)

        sheet, width, height = self._load_image("effect/explosion.png")
        self.explosion_template.texture = sheet
        self.explosion_template.total_frame = width // height if height else 0
        self.explosion_template.width = height
        self.explosion_template.height = height

    def clean(self) -> None:
        """Drop every entity and release the scene's resources."""
        self.projectiles_player.clear()
        self.enemies.clear()
        self.projectiles_enemy.clear()
        self.explosions.clear()
        self.items.clear()
        self.sounds.clear()
        if self._music_loaded and pygame.mixer.get_init():
            pygame.mixer.music.stop()
            self._music_loaded = False
        self.ui_health = None
        self.ui_health_dim = None
        self.score_font = None
        self.player.texture = None
        for template in (
            self.projectile_player_template,
            self.enemy_template,
            self.projectile_enemy_template,
            self.explosion_template,
            self.item_life_template,
        ):
            template.texture = None

    # -- frame -----------------------------------------------------------

    def update(self, delta_time: float) -> None:
        """Advance every part of the scene by delta_time seconds."""
        self.keyboard_control(delta_time)
        self.update_player_projectiles(delta_time)
        self.update_enemy_projectiles(delta_time)
        self.spawn_enemy()
        self.update_enemies(delta_time)
        self.update_player(delta_time)
        self.update_explosions(delta_time)
        self.update_items(delta_time)
        if self.is_dead:
            self.change_scene_delayed(delta_time, 3)

    def render(self, surface: pygame.Surface) -> None:
        """Draw the whole scene."""
        self.render_player_projectiles(surface)
        self.render_enemy_projectiles(surface)
        if not self.is_dead and self.player.texture is not None:
            surface.blit(self.player.texture, self.player.rect())
        self.render_enemies(surface)
        self.render_explosions(surface)
        self.render_items(surface)
        self.render_ui(surface)

    def handle_event(self, event: Any) -> None:
        """The playing field reads the keyboard state instead of events."""

    # -- player ----------------------------------------------------------

    def keyboard_control(self, delta_time: float, pressed: Any = None) -> None:
        """Move the ship with W/A/S/D inside the window and fire with J."""
        if pressed is None:
            pressed = pygame.key.get_pressed()
        player = self.player
        step = delta_time * player.speed
        if pressed[pygame.K_w]:
            player.y -= step
        if pressed[pygame.K_s]:
            player.y += step
        if pressed[pygame.K_a]:
            player.x -= step
        if pressed[pygame.K_d]:
            player.x += step

        player.x = min(max(player.x, 0), self.game.width - player.width)
        player.y = min(max(player.y, 0), self.game.height - player.height)

        if pressed[pygame.K_j]:
            now = self.game.ticks()
            if now - player.last_shoot_time >= player.cool_down:
                self.shoot_player()
                player.last_shoot_time = now

    def shoot_player(self) -> None:
        """Fire a shot from the top centre of the ship."""
        shot = dataclasses.replace(self.projectile_player_template)
        shot.x = self.player.x + self.player.width // 2 - shot.width // 2
        shot.y = self.player.y
        self.projectiles_player.append(shot)
        self._play("player_shoot", channel=0)

    def update_player_projectiles(self, delta_time: float) -> None:
        """Move the player's shots, dropping those off screen or hitting an enemy."""
        remaining = []
        for shot in self.projectiles_player:
            shot.y -= shot.speed * delta_time
            if shot.y + _MARGIN <= 0:
                continue
            shot_rect = shot.rect()
            target = next(
                (enemy for enemy in self.enemies if _intersects(enemy.rect(), shot_rect)),
                None,
            )
            if target is not None:
                target.current_health -= shot.damage
                self._play("hit")
                continue
            remaining.append(shot)
        self.projectiles_player = remaining

    def render_player_projectiles(self, surface: pygame.Surface) -> None:
        """Draw the player's shots."""
        for shot in self.projectiles_player:
            if shot.texture is not None:
                surface.blit(shot.texture, shot.rect())

    def update_player(self, delta_time: float) -> None:
        """Handle the ship's death and its collisions with enemies."""
        if self.is_dead:
            return
        player = self.player
        if player.current_health <= 0:
            self.is_dead = True
            explosion = dataclasses.replace(self.explosion_template)
            explosion.x = player.x + player.width // 2 - explosion.width // 2
            explosion.y = player.y + player.height // 2 - explosion.height // 2
            explosion.start_time = self.game.ticks()
            self.explosions.append(explosion)
            self._play("player_explode")
            self.game.final_score = self.score
            return
        player_rect = player.rect()
        for enemy in self.enemies:
            if _intersects(enemy.rect(), player_rect):
                player.current_health -= 1
                enemy.current_health = 0

    # -- enemies ---------------------------------------------------------

    def spawn_enemy(self) -> None:
        """Now and then, add an enemy just above the top of the window."""
        if self.rng.random() > _SPAWN_CHANCE:
            return
        enemy = dataclasses.replace(self.enemy_template)
        enemy.x = self.rng.random() * (self.game.width - enemy.width)
        enemy.y = float(-enemy.height)
        self.enemies.append(enemy)

    def update_enemies(self, delta_time: float) -> None:
        """Move enemies down, let them fire, and blow up the destroyed ones."""
        now = self.game.ticks()
        remaining = []
        for enemy in self.enemies:
            enemy.y += enemy.speed * delta_time
            if enemy.y > self.game.height:
                continue
            if now - enemy.last_shoot_time > enemy.cool_down:
                self.shoot_enemy(enemy)
                enemy.last_shoot_time = now
            if enemy.current_health <= 0:
                self.enemy_explode(enemy)
                continue
            remaining.append(enemy)
        self.enemies = remaining

    def render_enemies(self, surface: pygame.Surface) -> None:
        """Draw the enemies."""
        for enemy in self.enemies:
            if enemy.texture is not None:
                surface.blit(enemy.texture, enemy.rect())

    def shoot_enemy(self, enemy: Enemy) -> None:
        """Fire a shot from the enemy's centre towards the player."""
        shot = dataclasses.replace(self.projectile_enemy_template)
        shot.x = enemy.x + enemy.width // 2 - shot.width // 2
        shot.y = enemy.y + enemy.height // 2 - shot.height // 2
        shot.direction = self.get_direction(enemy)
        self.projectiles_enemy.append(shot)
        self._play("enemy_shoot")

    def get_direction(self, enemy: Enemy) -> Tuple[float, float]:
        """Unit vector from the enemy's centre to the player's centre."""
        dx = (self.player.x + self.player.width // 2) - (enemy.x + enemy.width // 2)
        dy = (self.player.y + self.player.height // 2) - (enemy.y + enemy.height // 2)
        length = math.hypot(dx, dy)
        if length == 0:
            return (0.0, 0.0)
        return (dx / length, dy / length)

    def update_enemy_projectiles(self, delta_time: float) -> None:
        """Move enemy shots, dropping those off screen or hitting the player."""
        width, height = self.game.width, self.game.height
        player = self.player
        remaining = []
        for shot in self.projectiles_enemy:
            shot.x += shot.speed * shot.direction[0] * delta_time
            shot.y += shot.speed * shot.direction[1] * delta_time
            if (
                shot.y > height + _MARGIN
                or shot.x > width + _MARGIN
                or shot.y < -_MARGIN
                or shot.x < -_MARGIN
            ):
                continue
            # The hit box of an enemy shot is the size of the player's ship.
            shot_rect = pygame.Rect(int(shot.x), int(shot.y), player.width, player.height)
            if _intersects(shot_rect, player.rect()) and not self.is_dead:
                player.current_health -= shot.damage
                self._play("hit")
                continue
            remaining.append(shot)
        self.projectiles_enemy = remaining

    def render_enemy_projectiles(self, surface: pygame.Surface) -> None:
        """Draw enemy shots, turned by an angle taken from their position."""
        for shot in self.projectiles_enemy:
            if shot.texture is None:
                continue
            rect = shot.rect()
            angle = math.atan2(shot.y, shot.x)
            image = pygame.transform.scale(shot.texture, (max(rect.w, 0), max(rect.h, 0)))
            rotated = pygame.transform.rotate(image, -angle)
            surface.blit(rotated, rotated.get_rect(center=rect.center))

    def enemy_explode(self, enemy: Enemy) -> None:
        """Start an explosion at the enemy, score it and maybe drop an item."""
        explosion = dataclasses.replace(self.explosion_template)
        explosion.x = enemy.x + enemy.width // 2 - explosion.width // 2
        explosion.y = enemy.y + enemy.height // 2 - explosion.height // 2
        explosion.start_time = self.game.ticks()
        self.explosions.append(explosion)
        self._play("enemy_explode")
        self.score += 10
        if self.rng.random() < _DROP_CHANCE:
            self.drop_item(enemy)

    # -- explosions ------------------------------------------------------

    def update_explosions(self, delta_time: float) -> None:
        """Advance explosion animations, dropping those that have finished."""
        now = self.game.ticks()
        remaining = []
        for explosion in self.explosions:
            explosion.current_frame = (now - explosion.start_time) * explosion.fps // 1000
            if explosion.current_frame < explosion.total_frame:
                remaining.append(explosion)
        self.explosions = remaining

    def render_explosions(self, surface: pygame.Surface) -> None:
        """Draw the current frame of each explosion."""
        for explosion in self.explosions:
            if explosion.texture is None:
                continue
            area = pygame.Rect(
                explosion.current_frame * explosion.width, 0, explosion.width, explosion.height
            )
            surface.blit(explosion.texture, (int(explosion.x), int(explosion.y)), area)

    # -- items -----------------------------------------------------------

    def drop_item(self, enemy: Enemy) -> None:
        """Drop a life item at the enemy's centre, heading in a random direction."""
        item = dataclasses.replace(self.item_life_template)
        item.x = enemy.x + enemy.width // 2 - item.width // 2
        item.y = enemy.y + enemy.height // 2 - item.height // 2
        angle = self.rng.random() * 2 * math.pi
        item.direction = (math.cos(angle), math.sin(angle))
        self.items.append(item)

    def update_items(self, delta_time: float) -> None:
        """Move items, bounce them off the edges and let the player collect them."""
        width, height = self.game.width, self.game.height
        player_rect = self.player.rect()
        remaining = []
        for item in self.items:
            dx, dy = item.direction
            item.x += dx * item.speed * delta_time
            item.y += dy * item.speed * delta_time

            if item.x < 0 and item.bounce_count > 0:
                dx = -dx
                item.bounce_count -= 1
            if item.y < 0 and item.bounce_count > 0:
                dy = -dy
                item.bounce_count -= 1
            if item.x + item.width > width and item.bounce_count > 0:
                dx = -dx
                item.bounce_count -= 1
            if item.y + item.height > height and item.bounce_count > 0:
                dy = -dy
                item.bounce_count -= 1
            item.direction = (dx, dy)

            if (
                item.x + item.width < 0
                or item.x > width
                or item.y + item.height < 0
                or item.y > height
            ):
                continue
            if _intersects(item.rect(), player_rect):
                self.player_get_item(item)
                continue
            remaining.append(item)
        self.items = remaining

    def player_get_item(self, item: Item) -> None:
        """Apply a collected item and score it."""
        self.score += 5
        if item.type is ItemType.LIFE:
            self.player.current_health = min(
                self.player.current_health + 1, self.player.max_health
            )
        self._play("get_item")

    def render_items(self, surface: pygame.Surface) -> None:
        """Draw the items."""
        for item in self.items:
            if item.texture is not None:
                surface.blit(item.texture, item.rect())

    # -- interface -------------------------------------------------------

    def render_ui(self, surface: pygame.Surface) -> None:
        """Draw the health bar and the score."""
        if self.ui_health is not None and self.ui_health_dim is not None:
            for i in range(self.player.max_health):
                surface.blit(self.ui_health_dim, (_UI_X + i * _UI_OFFSET, _UI_Y))
            for i in range(self.player.current_health):
                surface.blit(self.ui_health, (_UI_X + i * _UI_OFFSET, _UI_Y))
        if self.score_font is not None:
            text = self.score_font.render(f"SCORE:{self.score}", False, (255, 255, 255))
            surface.blit(text, (self.game.width - 10 - text.get_width(), 10))

    def change_scene_delayed(self, delta_time: float, delay: float) -> None:
        """Switch to the end scene once delay seconds have passed."""
        self.timer_end += delta_time
        if self.timer_end > delay:
            self.game.start_end()