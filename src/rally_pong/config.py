"""
Runtime configuration for Rally Pong.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rally_pong.constants import ASSETS_ROOT, TICK_MS, WIN_SCORE
from rally_pong.variants import DEFAULT_VARIANT, Variant, get_variant


@dataclass
class RallyConfig:
    """
    Session configuration.

    :ivar variant (str): Name of the capability preset.
    :ivar tick_ms (int): Simulation step in milliseconds.
    :ivar win_score (int): Score that wins the game.
    :ivar assets_root (Path): Directory holding the sound cues.
    :ivar seed (Optional[int]): Seed for every random source, if set.
    :ivar mute (bool): Force silent audio regardless of the variant.
    """

    variant: str = DEFAULT_VARIANT
    tick_ms: int = TICK_MS
    win_score: int = WIN_SCORE
    assets_root: Path = field(default_factory=lambda: ASSETS_ROOT)
    seed: Optional[int] = None
    mute: bool = False

    @property
    def rules(self) -> Variant:
        """Resolved capability preset."""
        return get_variant(self.variant)

    @property
    def tick_seconds(self) -> float:
        """Simulation step in seconds."""
        return self.tick_ms / 1000.0

    @property
    def audio_enabled(self) -> bool:
        """Whether sound cues should be played."""
        return self.rules.has_audio and not self.mute
