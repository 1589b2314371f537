"""
Ball entity for the rally simulation.
"""

from __future__ import annotations

from dataclasses import dataclass

from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D

from rally_pong.constants import BALL_COLOR, BALL_HOT_COLOR
from rally_pong.entities.bounds import HorizontalBounds


@dataclass
class Ball:
    """
    Ball entity for the rally simulation.

    Horizontal extent is centred on ``position.x``; vertical checks use
    ``position.y`` and ``position.y + size.height`` directly.

    :ivar position (Position2D): Anchor point of the ball.
    :ivar size (Size2D): Size of the ball.
    :ivar color (str): Display colour, doubles as the near-paddle flag.
    """

    position: Position2D
    size: Size2D
    color: str = BALL_COLOR

    @property
    def bounds(self) -> HorizontalBounds:
        """Horizontal interval of the ball."""
        return HorizontalBounds.centered(self.position.x, self.size.width)

    @property
    def hot(self) -> bool:
        """Whether the ball is flagged as close to the player paddle."""
        return self.color == BALL_HOT_COLOR

    @hot.setter
    def hot(self, value: bool):
        self.color = BALL_HOT_COLOR if value else BALL_COLOR
