"""
Simulation package: state models, per-tick systems and the engine.
"""

from __future__ import annotations

from .models import (
    Arena,
    Direction,
    RenderSnapshot,
    ScoringPolicy,
    SimulationState,
    TickContext,
)
from .telemetry import TelemetryBuffer

__all__ = [
    "Arena",
    "Direction",
    "RenderSnapshot",
    "ScoringPolicy",
    "SimulationState",
    "TelemetryBuffer",
    "TickContext",
]
