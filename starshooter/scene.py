"""Base class for the game's scenes."""

from __future__ import annotations

import abc
from typing import Any


class Scene(abc.ABC):
    """A screen of the game, driven by the game's loop."""

    def __init__(self, game: Any) -> None:
        self.game = game

    @abc.abstractmethod
    def init(self) -> None:
        """Load resources and start the scene."""

    @abc.abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the scene by delta_time seconds."""

    @abc.abstractmethod
    def render(self, surface: Any) -> None:
        """Draw the scene onto surface."""

    @abc.abstractmethod
    def clean(self) -> None:
        """Release what the scene holds."""

    @abc.abstractmethod
    def handle_event(self, event: Any) -> None:
        """React to one input event."""