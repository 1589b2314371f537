"""
Shared fixtures for the Rally Pong test suite.
"""

from __future__ import annotations

import os

os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# pylint: disable=wrong-import-position
import pytest

from rally_pong.audio import SilentAudio
from rally_pong.config import RallyConfig
from rally_pong.sim.engine import PongEngine
from rally_pong.sim.models import Direction

# pylint: enable=wrong-import-position


def make_engine(variant: str = "classic", seed: int = 7, audio=None):
    """Seeded engine with the ball parked at the origin."""
    return PongEngine.create(
        RallyConfig(variant=variant, seed=seed),
        audio=audio if audio is not None else SilentAudio(),
        serve=False,
    )


def place_ball(engine, x, y, dir_x=None, dir_y=None):
    """Move the ball and optionally set its directions."""
    engine.state.ball.position.x = x
    engine.state.ball.position.y = y
    if dir_x is not None:
        engine.state.dir_x = dir_x
    if dir_y is not None:
        engine.state.dir_y = dir_y


def park_paddles(engine):
    """Move every paddle far outside the ball's reach."""
    engine.state.player.position.x = 1000.0
    if engine.state.cpu is not None:
        engine.state.cpu.position.x = 1000.0


@pytest.fixture
def audio():
    return SilentAudio()


@pytest.fixture
def classic(audio):
    engine = make_engine("classic", audio=audio)
    return engine


@pytest.fixture
def versus(audio):
    return make_engine("versus", audio=audio)


@pytest.fixture
def open_field(classic):
    """Classic engine, ball mid-arena, paddles out of the way."""
    park_paddles(classic)
    place_ball(classic, 80.0, 60.0, Direction.POSITIVE, Direction.POSITIVE)
    return classic


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class ScriptedInput:
    """
    Input source replaying ``(key, elapsed)`` events.

    ``elapsed=None`` waits out the full timeout. Once the script runs
    out, ``q`` is returned.
    """

    def __init__(self, clock: FakeClock, events):
        self.clock = clock
        self.events = list(events)
        self.timeouts: list[float] = []

    def poll(self, timeout):
        self.timeouts.append(timeout)
        if not self.events:
            return "q"
        key, elapsed = self.events.pop(0)
        self.clock.advance(timeout if elapsed is None else elapsed)
        return key


class RecordingRenderer:
    """Renderer keeping every snapshot it is given."""

    def __init__(self):
        self.frames = []

    def render(self, snapshot):
        self.frames.append(snapshot)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def renderer():
    return RecordingRenderer()
