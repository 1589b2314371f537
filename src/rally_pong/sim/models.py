"""
Simulation models: arena, direction flags, state and tick context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rally_pong.constants import (
    LEVEL_BASE,
    LEVEL_STEP,
    RAMP_INTERVAL,
    START_VX,
    START_VY,
)
from rally_pong.entities import Ball, HorizontalBounds, Paddle
from rally_pong.random_signal import RandomSignal
from rally_pong.sim.telemetry import TelemetryBuffer


class Direction(Enum):
    """Travel direction along one axis."""

    POSITIVE = 1
    NEGATIVE = -1

    @property
    def sign(self) -> int:
        """+1 or -1."""
        return self.value

    def flipped(self) -> Direction:
        """The opposite direction."""
        if self is Direction.POSITIVE:
            return Direction.NEGATIVE
        return Direction.POSITIVE


class ScoringPolicy(Enum):
    """
    How the vertical walls behave.

    SIMPLE: both walls just bounce, the player scores on paddle returns.
    SCORED: the top wall costs a point, the bottom wall earns one.
    """

    SIMPLE = "simple"
    SCORED = "scored"


@dataclass(frozen=True)
class Arena:
    """
    Axis-aligned playfield with integer bounds.

    :ivar left (int): Left edge.
    :ivar top (int): Lowest y value.
    :ivar width (int): Horizontal extent.
    :ivar height (int): Vertical extent.
    """

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Right edge."""
        return self.left + self.width

    @property
    def bottom(self) -> int:
        """Highest y value."""
        return self.top + self.height


# Justification: the simulation state is one flat record
# pylint: disable=too-many-instance-attributes
@dataclass
class SimulationState:
    """
    Everything one rally session mutates.

    :ivar arena (Arena): Playfield bounds.
    :ivar ball (Ball): Ball entity.
    :ivar player (Paddle): Player paddle.
    :ivar cpu (Optional[Paddle]): CPU paddle, when the variant has one.
    :ivar signal (RandomSignal): Source of jitter and telemetry samples.
    :ivar telemetry (TelemetryBuffer): Rolling sample window.
    :ivar vx (float): Horizontal speed.
    :ivar vy (float): Vertical speed.
    :ivar rx (float): Horizontal jitter re-rolled on vertical bounces.
    :ivar dir_x (Direction): Horizontal travel direction.
    :ivar dir_y (Direction): Vertical travel direction.
    :ivar score (int): Current score, never negative.
    :ivar tick_count (int): Ticks advanced since start or reset.
    :ivar bump (int): Percent progress towards the next speed ramp.
    :ivar bump_tick (int): Ticks since the last speed ramp.
    :ivar ramp_interval (int): Ticks between speed ramps (power of two).
    :ivar win (bool): Latched once the win score is reached.
    :ivar win_time (float): Seconds of play at the win transition.
    """

    arena: Arena
    ball: Ball
    player: Paddle
    signal: RandomSignal
    telemetry: TelemetryBuffer
    cpu: Optional[Paddle] = None

    vx: float = START_VX
    vy: float = START_VY
    rx: float = 0.0
    dir_x: Direction = Direction.POSITIVE
    dir_y: Direction = Direction.POSITIVE

    score: int = 0
    tick_count: int = 0

    bump: int = 0
    bump_tick: int = 0
    ramp_interval: int = RAMP_INTERVAL

    win: bool = False
    win_time: float = 0.0

    @property
    def level(self) -> int:
        """Difficulty level derived from the horizontal speed."""
        return int((self.vx - LEVEL_BASE) / LEVEL_STEP + 1.0)


# pylint: enable=too-many-instance-attributes


@dataclass
class TickContext:
    """
    Context for one simulation tick.

    :ivar state (SimulationState): State being advanced.
    :ivar cues (list[str]): Sound cues raised during the tick, in order.
    :ivar won (bool): Set when this tick latched the win flag.
    :ivar ball_bounds (HorizontalBounds): Ball interval at tick start.
    :ivar player_bounds (HorizontalBounds): Player interval at tick start.
    :ivar cpu_bounds (Optional[HorizontalBounds]): CPU interval at tick
        start, when there is a CPU paddle.
    """

    state: SimulationState
    cues: list[str] = field(default_factory=list)
    won: bool = False

    ball_bounds: Optional[HorizontalBounds] = None
    player_bounds: Optional[HorizontalBounds] = None
    cpu_bounds: Optional[HorizontalBounds] = None

    def cue(self, name: str):
        """Queue a sound cue unless the game is already won."""
        if not self.state.win:
            self.cues.append(name)


# Justification: mirrors the state fields the renderer reads
# pylint: disable=too-many-instance-attributes
@dataclass(frozen=True)
class RenderSnapshot:
    """
    Read-only view of the state for a renderer.

    Positions are ``(x, y, width, height)`` tuples.
    """

    arena: tuple[int, int, int, int]
    ball: tuple[float, float, float, float]
    ball_color: str
    player: tuple[float, float, float, float]
    cpu: Optional[tuple[float, float, float, float]]
    score: int
    win_score: int
    bump: int
    level: int
    win: bool
    win_time: float
    blink: bool
    telemetry: tuple[int, ...]
    victory_playing: bool = False


# pylint: enable=too-many-instance-attributes
