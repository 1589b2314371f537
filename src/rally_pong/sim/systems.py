"""
Per-tick systems for the rally simulation.

Each system handles one step of a tick; the engine runs them through a
``mini_arcade_core`` ``SystemPipeline``, which sorts them by ``order``.
"""

from __future__ import annotations

from dataclasses import dataclass

from rally_pong.constants import (
    HOT_ZONE_Y,
    RAMP_VX,
    RAMP_VY,
    TELEMETRY_MASK,
    TICK_MS,
    WIN_SCORE,
)
from rally_pong.controllers.cpu import CpuPaddleController
from rally_pong.random_signal import RandomSignal
from rally_pong.sim.models import Direction, ScoringPolicy, TickContext

BOUNCE_CUE = "bounce"
VICTORY_CUE = "victory"


def x_randomize(signal: RandomSignal) -> float:
    """
    Map one fresh sample from ``signal`` to a horizontal jitter.

    :param signal: A signal over ``[0, 100)``.
    :type signal: RandomSignal

    :return: +0.1, -0.1 or 0.0.
    :rtype: float
    """
    return jitter_for(next(signal))


def jitter_for(value: int) -> float:
    """Three-way jitter mapping: >=66 -> +0.1, >=33 -> -0.1, else 0.0."""
    if value >= 66:
        return 0.1
    if value >= 33:
        return -0.1
    return 0.0


@dataclass
class BoundsSystem:
    """
    Capture the horizontal intervals of every entity for this tick.
    """

    name: str = "rally_bounds"
    order: int = 10

    def step(self, ctx: TickContext):
        """Store the tick-start intervals on the context."""
        state = ctx.state
        ctx.ball_bounds = state.ball.bounds
        ctx.player_bounds = state.player.bounds
        if state.cpu is not None:
            ctx.cpu_bounds = state.cpu.bounds


@dataclass
class HorizontalWallSystem:
    """
    Bounce the ball off the left and right walls.

    The right-hand check uses the full ball width past the anchor.
    """

    name: str = "rally_horizontal_wall"
    order: int = 20

    def step(self, ctx: TickContext):
        """Flip dir_x when the ball leaves the arena sideways."""
        state = ctx.state
        x = state.ball.position.x
        if (
            x < state.arena.left
            or x + state.ball.size.width > state.arena.right
        ):
            state.dir_x = state.dir_x.flipped()


@dataclass
class VerticalWallSystem:
    """
    Bounce the ball off the top and bottom walls, scoring when the
    policy says so.
    """

    policy: ScoringPolicy = ScoringPolicy.SIMPLE
    name: str = "rally_vertical_wall"
    order: int = 30

    def step(self, ctx: TickContext):
        """Apply the configured vertical wall policy."""
        state = ctx.state
        y = state.ball.position.y
        crossed_top = y < state.arena.top
        crossed_bottom = y + state.ball.size.height > state.arena.bottom

        if self.policy is ScoringPolicy.SIMPLE:
            if crossed_top or crossed_bottom:
                state.dir_y = state.dir_y.flipped()
            return

        if crossed_top:
            state.dir_y = state.dir_y.flipped()
            state.rx = x_randomize(state.signal)
            if state.score > 0:
                state.score -= 1
        if crossed_bottom:
            state.dir_y = state.dir_y.flipped()
            state.rx = x_randomize(state.signal)
            state.score += 1


@dataclass
class CpuPaddleSystem:
    """
    Let the CPU controller move its paddle.
    """

    controller: CpuPaddleController | None = None
    name: str = "rally_cpu_paddle"
    order: int = 40

    def enabled(self, ctx: TickContext) -> bool:
        """Whether there is a CPU paddle to drive."""
        return self.controller is not None and ctx.state.cpu is not None

    def step(self, ctx: TickContext):
        """Move the CPU paddle."""
        self.controller.apply(ctx.state)


@dataclass
class CpuCollisionSystem:
    """
    Send the ball back up when it reaches the CPU paddle.
    """

    name: str = "rally_cpu_collision"
    order: int = 50

    def step(self, ctx: TickContext):
        """Bounce off the CPU paddle's contact line."""
        state = ctx.state
        cpu = state.cpu
        if cpu is None or ctx.cpu_bounds is None:
            return

        if state.ball.position.y <= cpu.position.y - cpu.size.height:
            return
        if not ctx.ball_bounds.straddles(ctx.cpu_bounds):
            return

        if state.dir_y is Direction.POSITIVE:
            ctx.cue(BOUNCE_CUE)
        state.dir_y = Direction.NEGATIVE


@dataclass
class PlayerCollisionSystem:
    """
    Handle the ball meeting the player paddle.

    Under the simple policy a returned ball is worth a point.
    """

    policy: ScoringPolicy = ScoringPolicy.SIMPLE
    hot_zone_y: float = HOT_ZONE_Y
    name: str = "rally_player_collision"
    order: int = 60

    def step(self, ctx: TickContext):
        """Flag the near-paddle state and return the ball."""
        state = ctx.state
        ball = state.ball
        player = state.player

        if not ctx.ball_bounds.straddles(ctx.player_bounds):
            ball.hot = False
            return

        if ball.position.y < self.hot_zone_y:
            ball.hot = True

        if ball.position.y < player.position.y + player.size.height:
            if state.dir_y is Direction.NEGATIVE:
                ctx.cue(BOUNCE_CUE)
                if self.policy is ScoringPolicy.SIMPLE:
                    state.score += 1
            state.dir_y = Direction.POSITIVE


@dataclass
class IntegrationSystem:
    """
    Move the ball one explicit Euler step.
    """

    name: str = "rally_integration"
    order: int = 70

    def step(self, ctx: TickContext):
        """Advance the ball along both axes."""
        state = ctx.state
        position = state.ball.position
        position.x += state.dir_x.sign * (state.vx + state.rx)
        position.y += state.dir_y.sign * state.vy


@dataclass
class SpeedRampSystem:
    """
    Count the tick and speed the ball up every ``ramp_interval`` ticks.
    """

    name: str = "rally_speed_ramp"
    order: int = 80

    def step(self, ctx: TickContext):
        """Update bump progress, tick counters and the ramp."""
        state = ctx.state
        interval = state.ramp_interval

        state.bump = int(state.bump_tick / interval * 100.0)

        state.tick_count += 1
        state.bump_tick += 1

        if state.tick_count & (interval - 1) == 0:
            state.vx += RAMP_VX
            state.vy += RAMP_VY
            state.bump_tick = 0


@dataclass
class TelemetrySystem:
    """
    Feed the telemetry window once the game is won.
    """

    mask: int = TELEMETRY_MASK
    name: str = "rally_telemetry"
    order: int = 90

    def step(self, ctx: TickContext):
        """Push one sample every sixteenth tick while in the win state."""
        state = ctx.state
        if not state.win:
            return
        if state.tick_count & self.mask == self.mask:
            state.telemetry.push(next(state.signal))


@dataclass
class WinSystem:
    """
    Latch the win flag the first time the score reaches the target.
    """

    win_score: int = WIN_SCORE
    tick_ms: float = TICK_MS
    name: str = "rally_win"
    order: int = 100

    def step(self, ctx: TickContext):
        """Capture the win time and raise the victory cue once."""
        state = ctx.state
        if state.win or state.score < self.win_score:
            return

        state.win_time = state.tick_count * self.tick_ms / 1000.0
        ctx.cue(VICTORY_CUE)
        state.win = True
        ctx.won = True

