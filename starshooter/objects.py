"""Game entities: the player, enemies, projectiles, explosions, items and backgrounds."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple

import pygame


def _rect(x: float, y: float, width: int, height: int) -> pygame.Rect:
    # int() truncates toward zero, like a C cast from float to int.
    return pygame.Rect(int(x), int(y), width, height)


@dataclass
class Player:
    """The player's ship."""

    texture: Optional[pygame.Surface] = None
    x: float = 0.0
    y: float = 0.0
    width: int = 0
    height: int = 0
    speed: int = 300  # pixels per second
    current_health: int = 5
    max_health: int = 5
    cool_down: int = 300  # milliseconds between shots
    last_shoot_time: int = 0

    def rect(self) -> pygame.Rect:
        """Screen rectangle covered by the ship."""
        return _rect(self.x, self.y, self.width, self.height)


@dataclass
class ProjectilePlayer:
    """A shot fired by the player, travelling straight up."""

    texture: Optional[pygame.Surface] = None
    x: float = 0.0
    y: float = 0.0
    width: int = 0
    height: int = 0
    speed: int = 600  # pixels per second
    damage: int = 1

    def rect(self) -> pygame.Rect:
        """Screen rectangle covered by the shot."""
        return _rect(self.x, self.y, self.width, self.height)


@dataclass
class Enemy:
    """An enemy ship descending from the top of the screen."""

    texture: Optional[pygame.Surface] = None
    x: float = 0.0
    y: float = 0.0
    width: int = 0
    height: int = 0
    speed: int = 150
    current_health: int = 2
    cool_down: int = 2000  # milliseconds between shots
    last_shoot_time: int = 0

    def rect(self) -> pygame.Rect:
        """Screen rectangle covered by the enemy."""
        return _rect(self.x, self.y, self.width, self.height)


@dataclass
class ProjectileEnemy:
    """A shot fired by an enemy along a unit direction vector."""

    texture: Optional[pygame.Surface] = None
    x: float = 0.0
    y: float = 0.0
    direction: Tuple[float, float] = (0.0, 0.0)
    width: int = 0
    height: int = 0
    speed: int = 400
    damage: int = 1

    def rect(self) -> pygame.Rect:
        """Screen rectangle covered by the shot."""
        return _rect(self.x, self.y, self.width, self.height)


@dataclass
class Explosion:
    """A sprite-sheet explosion animation."""

    texture: Optional[pygame.Surface] = None
    x: float = 0.0
    y: float = 0.0
    width: int = 0
    height: int = 0
    current_frame: int = 0
    total_frame: int = 0
    start_time: int = 0  # milliseconds
    fps: int = 10


class ItemType(enum.Enum):
    """Kinds of pickup an item can be."""

    LIFE = enum.auto()
    SHIELD = enum.auto()
    TIME = enum.auto()


@dataclass
class Item:
    """A pickup that drifts and bounces off the screen edges a few times."""

    texture: Optional[pygame.Surface] = None
    x: float = 0.0
    y: float = 0.0
    direction: Tuple[float, float] = (0.0, 0.0)
    width: int = 0
    height: int = 0
    speed: int = 200
    bounce_count: int = 3
    type: ItemType = ItemType.LIFE

    def rect(self) -> pygame.Rect:
        """Screen rectangle covered by the item."""
        return _rect(self.x, self.y, self.width, self.height)


@dataclass
class Background:
    """A vertically scrolling, tiled star layer."""

    texture: Optional[pygame.Surface] = None
    x: float = 0.0
    y: float = 0.0
    offset: float = 0.0
    width: int = 0
    height: int = 0
    speed: int = 30

    def scroll(self, delta_time: float) -> None:
        """Advance the layer, wrapping the offset back by one tile height."""
        self.offset += self.speed * delta_time
        if self.offset >= 0:
            self.offset -= self.height