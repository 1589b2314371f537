"""
Rally Pong: a terminal rally game built around a fixed-tick simulation.
"""

from __future__ import annotations

__version__ = "0.1.0"
