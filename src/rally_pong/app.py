"""
Main application for Rally Pong.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from blessed import Terminal
from mini_arcade_core.utils import logger

from rally_pong.audio import open_audio
from rally_pong.config import RallyConfig
from rally_pong.constants import ASSETS_ROOT
from rally_pong.loop import ControlLoop
from rally_pong.sim.engine import PongEngine
from rally_pong.terminal import (
    TerminalInput,
    TerminalRenderer,
    terminal_session,
)
from rally_pong.variants import DEFAULT_VARIANT, VARIANT_PRESETS


def build_parser() -> argparse.ArgumentParser:
    """Command-line options."""
    parser = argparse.ArgumentParser(
        prog="rally-pong",
        description="Terminal rally game. Left/Right move, r resets, q quits.",
    )
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANT_PRESETS),
        default=DEFAULT_VARIANT,
        help="rule set to play (default: %(default)s)",
    )
    parser.add_argument(
        "--mute", action="store_true", help="disable sound cues"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed every random source"
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=ASSETS_ROOT,
        help="directory holding pong.wav and victory.wav",
    )
    return parser


def config_from_args(argv: Optional[Sequence[str]] = None) -> RallyConfig:
    """Parse ``argv`` into a session configuration."""
    args = build_parser().parse_args(argv)
    return RallyConfig(
        variant=args.variant,
        assets_root=args.assets,
        seed=args.seed,
        mute=args.mute,
    )


def run(config: RallyConfig | None = None) -> int:
    """
    Main entry point for Rally Pong.

    - Opens the audio player, falling back to silence.
    - Builds the engine for the configured rule set.
    - Runs the control loop inside a terminal session that is always
      restored on exit.

    :return: Number of ticks played.
    :rtype: int
    """
    config = config or RallyConfig()
    audio = open_audio(config.audio_enabled, config.assets_root)
    try:
        engine = PongEngine.create(config, audio=audio)
        term = Terminal()
        logger.info(f"Starting Rally Pong ({config.rules.name})...")
        with terminal_session(term):
            loop = ControlLoop(
                engine, TerminalInput(term), TerminalRenderer(term)
            )
            return loop.run()
    finally:
        audio.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Console script entry point; returns the process exit status."""
    config = config_from_args(argv)
    try:
        run(config)
    except KeyboardInterrupt:
        return 0
    except Exception as exc:  # pylint: disable=broad-exception-caught
        print(f"rally-pong: {exc!r}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
