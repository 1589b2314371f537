"""
Exceptions raised by Rally Pong.
"""

from __future__ import annotations


class RallyPongError(Exception):
    """Base class for Rally Pong errors."""


class AudioUnavailableError(RallyPongError):
    """The audio device or a sound asset could not be loaded."""
