"""
Rally simulation engine.

Owns the simulation state and the ordered systems that advance it, and
forwards the sound cues raised by a tick to the audio player.
"""

from __future__ import annotations

import random
from typing import Optional

from mini_arcade_core.scenes.systems import SystemPipeline
from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D
from mini_arcade_core.utils import logger

from rally_pong.audio import AudioPlayer, Playback, SilentAudio
from rally_pong.config import RallyConfig
from rally_pong.constants import (
    ARENA_RECT,
    BALL_SIZE,
    BLINK_MASK,
    CPU_START,
    PADDLE_SIZE,
    PADDLE_STEP,
    PLAYER_START,
    SERVE_X,
    SERVE_Y,
    SIGNAL_LOWER,
    SIGNAL_UPPER,
    START_VX,
    START_VY,
    TELEMETRY_CAPACITY,
)
from rally_pong.controllers.cpu import CpuPaddleController
from rally_pong.entities import Ball, Paddle
from rally_pong.random_signal import RandomSignal
from rally_pong.sim.models import (
    Arena,
    Direction,
    RenderSnapshot,
    SimulationState,
    TickContext,
)
from rally_pong.sim.systems import (
    VICTORY_CUE,
    BoundsSystem,
    CpuCollisionSystem,
    CpuPaddleSystem,
    HorizontalWallSystem,
    IntegrationSystem,
    PlayerCollisionSystem,
    SpeedRampSystem,
    TelemetrySystem,
    VerticalWallSystem,
    WinSystem,
)
from rally_pong.sim.telemetry import TelemetryBuffer


def _box(entity) -> tuple[float, float, float, float]:
    return (
        entity.position.x,
        entity.position.y,
        entity.size.width,
        entity.size.height,
    )


def build_state(
    config: RallyConfig, rng: random.Random
) -> SimulationState:
    """
    Create a fresh state for ``config``, with the ball at the origin.

    :param config: Session configuration.
    :type config: RallyConfig

    :param rng: Source the signal's entropy is seeded from.
    :type rng: random.Random

    :return: New simulation state.
    :rtype: SimulationState
    """
    rules = config.rules
    signal = RandomSignal(
        SIGNAL_LOWER,
        SIGNAL_UPPER,
        rng=random.Random(rng.getrandbits(64)),
    )
    telemetry = TelemetryBuffer(
        signal.take(TELEMETRY_CAPACITY), capacity=TELEMETRY_CAPACITY
    )

    pad_w, pad_h = PADDLE_SIZE
    cpu = None
    if rules.has_cpu_opponent:
        cpu = Paddle(
            position=Position2D(*CPU_START),
            size=Size2D(pad_w, pad_h),
        )

    return SimulationState(
        arena=Arena(*ARENA_RECT),
        ball=Ball(
            position=Position2D(0.0, 0.0),
            size=Size2D(*BALL_SIZE),
        ),
        player=Paddle(
            position=Position2D(*PLAYER_START),
            size=Size2D(pad_w, pad_h),
        ),
        cpu=cpu,
        signal=signal,
        telemetry=telemetry,
        ramp_interval=rules.ramp_interval,
    )


def build_pipeline(
    config: RallyConfig,
    win_system: WinSystem,
    controller: Optional[CpuPaddleController] = None,
) -> SystemPipeline[TickContext]:
    """Assemble the tick systems for the configured rules."""
    rules = config.rules
    pipeline: SystemPipeline[TickContext] = SystemPipeline()
    pipeline.extend(
        [
            BoundsSystem(),
            HorizontalWallSystem(),
            VerticalWallSystem(policy=rules.scoring_policy),
            PlayerCollisionSystem(policy=rules.scoring_policy),
            IntegrationSystem(),
            SpeedRampSystem(),
            TelemetrySystem(),
            win_system,
        ]
    )
    if rules.has_cpu_opponent:
        pipeline.extend(
            [CpuPaddleSystem(controller=controller), CpuCollisionSystem()]
        )
    return pipeline


class PongEngine:
    """
    Drives one rally session.
    """

    def __init__(
        self,
        state: SimulationState,
        pipeline: SystemPipeline[TickContext],
        *,
        win_system: WinSystem | None = None,
        config: RallyConfig | None = None,
        audio: AudioPlayer | None = None,
        rng: random.Random | None = None,
    ):
        """
        :param state: State to advance; the engine owns it from now on.
        :type state: SimulationState

        :param pipeline: Ordered tick systems.
        :type pipeline: SystemPipeline[TickContext]

        :param win_system: Win detector shared with the pipeline, used by
            ``check_win`` between ticks.
        :type win_system: WinSystem, optional

        :param config: Session configuration.
        :type config: RallyConfig, optional

        :param audio: Where sound cues go.
        :type audio: AudioPlayer, optional

        :param rng: Source for serving the ball.
        :type rng: random.Random, optional
        """
        self.state = state
        self.pipeline = pipeline
        self.config = config or RallyConfig()
        self.audio = audio or SilentAudio()
        self.rng = rng or random.Random()
        self.win_system = win_system or WinSystem(
            win_score=self.config.win_score, tick_ms=self.config.tick_ms
        )
        self.victory: Optional[Playback] = None

    @classmethod
    def create(
        cls,
        config: RallyConfig | None = None,
        *,
        audio: AudioPlayer | None = None,
        serve: bool = True,
    ) -> PongEngine:
        """
        Build an engine, its state and its systems from ``config``.

        :param config: Session configuration.
        :type config: RallyConfig, optional

        :param audio: Where sound cues go.
        :type audio: AudioPlayer, optional

        :param serve: Place the ball at a random starting point.
        :type serve: bool

        :return: Ready-to-run engine.
        :rtype: PongEngine
        """
        config = config or RallyConfig()
        rng = random.Random(config.seed)
        state = build_state(config, rng)
        controller = None
        if config.rules.has_cpu_opponent:
            controller = CpuPaddleController(
                rng=random.Random(rng.getrandbits(64))
            )
        win_system = WinSystem(
            win_score=config.win_score, tick_ms=config.tick_ms
        )
        engine = cls(
            state,
            build_pipeline(config, win_system, controller),
            win_system=win_system,
            config=config,
            audio=audio,
            rng=rng,
        )
        if serve:
            engine.serve()
        return engine

    def serve(self):
        """Drop the ball at a random point of the serve area."""
        self.state.ball.position.x = self.rng.uniform(*SERVE_X)
        self.state.ball.position.y = self.rng.uniform(*SERVE_Y)

    def advance_tick(self) -> TickContext:
        """
        Advance the simulation by one fixed step and play its cues.

        :return: The tick context, with the cues raised during the tick.
        :rtype: TickContext
        """
        ctx = TickContext(state=self.state)
        self.pipeline.step(ctx)
        self._dispatch(ctx)
        if ctx.won:
            logger.info(
                f"Win reached after {self.state.win_time:.2f}s "
                f"({self.state.tick_count} ticks)"
            )
        return ctx

    def check_win(self) -> bool:
        """
        Latch the win state if the score has reached the target.

        :return: True if this call made the transition.
        :rtype: bool
        """
        ctx = TickContext(state=self.state)
        self.win_system.step(ctx)
        self._dispatch(ctx)
        return ctx.won

    def _dispatch(self, ctx: TickContext):
        for cue in ctx.cues:
            playback = self.audio.play(cue)
            if cue == VICTORY_CUE:
                self.victory = playback

    @property
    def victory_playing(self) -> bool:
        """Whether the victory cue is still playing."""
        return self.victory is not None and not self.victory.done()

    def reset(self):
        """
        Restore speeds, counters, score and win state.

        Ball and paddle positions and the telemetry window are left as
        they are.
        """
        state = self.state
        state.vx = START_VX
        state.vy = START_VY
        state.rx = 0.0
        state.score = 0
        state.tick_count = 0
        state.bump = 0
        state.bump_tick = 0
        state.win = False
        state.win_time = 0.0
        self.victory = None
        logger.info("Game reset")

    def move_player(self, direction: Direction, step: float = PADDLE_STEP):
        """
        Move the player paddle one step, staying inside the arena.

        :param direction: POSITIVE for right, NEGATIVE for left.
        :type direction: Direction

        :param step: Distance to move.
        :type step: float
        """
        paddle = self.state.player
        arena = self.state.arena
        if direction is Direction.POSITIVE:
            if paddle.position.x + paddle.size.width < arena.right:
                paddle.position.x += step
        elif paddle.position.x > arena.left:
            paddle.position.x -= step

    def snapshot(self) -> RenderSnapshot:
        """Read-only view of the current state for rendering."""
        state = self.state
        arena = state.arena
        return RenderSnapshot(
            arena=(arena.left, arena.top, arena.width, arena.height),
            ball=_box(state.ball),
            ball_color=state.ball.color,
            player=_box(state.player),
            cpu=_box(state.cpu) if state.cpu is not None else None,
            score=state.score,
            win_score=self.config.win_score,
            bump=state.bump,
            level=state.level,
            win=state.win,
            win_time=state.win_time,
            blink=state.tick_count & BLINK_MASK == BLINK_MASK,
            telemetry=tuple(state.telemetry),
            victory_playing=self.victory_playing,
        )
