"""
Constants for Rally Pong.
"""

from __future__ import annotations

import os
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent
ASSETS_ROOT = Path(
    os.environ.get("RALLY_PONG_ASSETS", PACKAGE_ROOT / "assets")
)

# Fixed simulation step.
TICK_MS = 25

WIN_SCORE = 10

# Arena as (left, top, width, height).
ARENA_RECT = (10, 10, 150, 100)

BALL_SIZE = (5.0, 5.0)
PADDLE_SIZE = (10.0, 3.0)
PLAYER_START = (10.0, 10.0)
CPU_START = (10.0, 105.0)

# Serve area, half-open ranges.
SERVE_X = (10.0, 90.0)
SERVE_Y = (10.0, 100.0)

START_VX = 1.0
START_VY = 1.0
RAMP_VX = 0.2
RAMP_VY = 0.1
RAMP_INTERVAL = 1024

PADDLE_STEP = 5.0

# Player paddle "hot" zone.
HOT_ZONE_Y = 30.0

SIGNAL_LOWER = 0
SIGNAL_UPPER = 100

TELEMETRY_CAPACITY = 200
TELEMETRY_MASK = 0xF
BLINK_MASK = 0x20

# level = (vx - LEVEL_BASE) / LEVEL_STEP + 1
LEVEL_BASE = 0.8
LEVEL_STEP = 0.2

BALL_COLOR = "red"
BALL_HOT_COLOR = "yellow"
PADDLE_COLOR = "white"

SOUNDS = {
    "bounce": "pong.wav",
    "victory": "victory.wav",
}
