"""
Real-time control loop.

Each iteration renders, polls input until the next tick is due, and
advances the simulation if a full tick interval has elapsed. Iterations
can outpace ticks when keys arrive quickly; drift between wall-clock time
and tick count is not compensated.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Protocol

from mini_arcade_core.utils import logger

from rally_pong.commands import CommandContext, command_for
from rally_pong.sim.engine import PongEngine
from rally_pong.sim.models import RenderSnapshot


class InputSource(Protocol):
    """Produces key names."""

    def poll(self, timeout: float) -> Optional[str]:
        """Wait at most ``timeout`` seconds for a key."""


class Renderer(Protocol):
    """Consumes snapshots."""

    def render(self, snapshot: RenderSnapshot):
        """Draw one frame."""


class ControlLoop:
    """
    Poll, maybe advance, always render.
    """

    def __init__(
        self,
        engine: PongEngine,
        input_source: InputSource,
        renderer: Renderer,
        *,
        tick_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        :param engine: Engine to drive.
        :type engine: PongEngine

        :param input_source: Where key presses come from.
        :type input_source: InputSource

        :param renderer: Where frames go.
        :type renderer: Renderer

        :param tick_seconds: Tick interval; defaults to the engine config.
        :type tick_seconds: float, optional

        :param clock: Monotonic time source in seconds.
        :type clock: Callable[[], float]
        """
        self.engine = engine
        self.input_source = input_source
        self.renderer = renderer
        self.tick_seconds = (
            engine.config.tick_seconds if tick_seconds is None else tick_seconds
        )
        self.clock = clock
        self.context = CommandContext(engine=engine)
        self.iterations = 0
        self.ticks = 0

    def poll_timeout(self, last_tick: float) -> float:
        """Time left until the next tick is due, floored at zero."""
        return max(0.0, self.tick_seconds - (self.clock() - last_tick))

    def run(self) -> int:
        """
        Run until a quit command arrives.

        :return: Number of simulation ticks advanced.
        :rtype: int
        """
        logger.info(
            f"Control loop started ({self.tick_seconds * 1000:.0f} ms tick)"
        )
        last_tick = self.clock()
        while self.context.running:
            self.iterations += 1
            self.renderer.render(self.engine.snapshot())

            key = self.input_source.poll(self.poll_timeout(last_tick))
            command = command_for(key)
            if command is not None:
                command.execute(self.context)
                if not self.context.running:
                    break

            if self.clock() - last_tick >= self.tick_seconds:
                self.engine.advance_tick()
                self.ticks += 1
                last_tick = self.clock()

            self.engine.check_win()

        logger.info(
            f"Control loop stopped after {self.ticks} ticks "
            f"in {self.iterations} iterations"
        )
        return self.ticks
