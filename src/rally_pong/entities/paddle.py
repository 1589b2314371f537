"""
Paddle entity for Rally Pong.
"""

from __future__ import annotations

from dataclasses import dataclass

from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D

from rally_pong.constants import PADDLE_COLOR
from rally_pong.entities.bounds import HorizontalBounds


@dataclass
class Paddle:
    """
    Paddle entity. Only ``position.x`` changes during a session.

    :ivar position (Position2D): Position of the paddle.
    :ivar size (Size2D): Size of the paddle.
    :ivar color (str): Display colour.
    """

    position: Position2D
    size: Size2D
    color: str = PADDLE_COLOR

    @property
    def bounds(self) -> HorizontalBounds:
        """Horizontal interval of the paddle."""
        return HorizontalBounds.centered(self.position.x, self.size.width)
