"""
Minimal CPU paddle controller for Rally Pong.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from rally_pong.sim.models import Direction, SimulationState


@dataclass
class CpuConfig:
    """
    Basic CPU behaviour settings.

    - step: distance moved per active tick, before jitter
    - gate_outcomes / gate_threshold: the paddle moves on a tick when a
      draw from ``range(gate_outcomes)`` is greater than ``gate_threshold``
      (4 of 9 outcomes by default, so it lags behind the ball)
    - midline_ratio: fraction of the arena height the ball must pass
      before the CPU reacts
    """

    step: float = 4.0
    gate_outcomes: int = 9
    gate_threshold: int = 4
    midline_ratio: float = 0.5


class CpuPaddleController:
    """
    Very simple CPU:
    - Wakes up only while the ball heads towards it past the midline.
    - On a coin-flip-ish gate, steps towards the side the ball travels to.
    - Never leaves the arena.
    """

    def __init__(
        self,
        *,
        config: CpuConfig | None = None,
        rng: random.Random | None = None,
    ):
        """
        :param config: The CPU configuration settings.
        :type config: CpuConfig, optional

        :param rng: Entropy source for the movement gate.
        :type rng: random.Random, optional
        """
        self.config = config or CpuConfig()
        self.rng = rng or random.Random()

    def active(self, state: SimulationState) -> bool:
        """Whether the ball is inbound and past the midline."""
        midline = state.arena.height * self.config.midline_ratio
        return (
            state.dir_y is Direction.POSITIVE
            and state.ball.position.y > midline
        )

    def compute_move(self, state: SimulationState) -> float:
        """
        Decide the CPU paddle's horizontal displacement for this tick.

        :param state: Current simulation state.
        :type state: SimulationState

        :return: Signed displacement, 0.0 when the paddle stays put.
        :rtype: float
        """
        cpu = state.cpu
        if cpu is None or not self.active(state):
            return 0.0

        if self.rng.randrange(self.config.gate_outcomes) <= (
            self.config.gate_threshold
        ):
            return 0.0

        ball_bounds = state.ball.bounds
        cpu_bounds = cpu.bounds
        step = self.config.step + state.rx

        if (
            state.dir_x is Direction.POSITIVE
            and cpu_bounds.left < ball_bounds.right
            and cpu.position.x + cpu.size.width < state.arena.right
        ):
            return step
        if (
            state.dir_x is Direction.NEGATIVE
            and cpu_bounds.right > ball_bounds.left
            and cpu.position.x > state.arena.left
        ):
            return -step
        return 0.0

    def apply(self, state: SimulationState) -> float:
        """Move the CPU paddle and return the displacement applied."""
        move = self.compute_move(state)
        if move and state.cpu is not None:
            state.cpu.position.x += move
        return move
