"""
Entities package for Rally Pong.
This package contains all entity definitions used in the simulation.
"""

from __future__ import annotations

from .ball import Ball
from .bounds import HorizontalBounds
from .paddle import Paddle

__all__ = [
    "Ball",
    "HorizontalBounds",
    "Paddle",
]
