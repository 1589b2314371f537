"""
Capability presets for the three Rally Pong rule sets.
"""

from __future__ import annotations

from dataclasses import dataclass

from mini_arcade_core.utils import logger

from rally_pong.constants import RAMP_INTERVAL
from rally_pong.sim.models import ScoringPolicy


@dataclass(frozen=True)
class Variant:
    """
    Capability flags for a rule set.

    :ivar name (str): Preset name.
    :ivar has_cpu_opponent (bool): Whether a CPU paddle guards the far wall.
    :ivar has_audio (bool): Whether sound cues are played.
    :ivar scoring_policy (ScoringPolicy): How vertical wall contact scores.
    :ivar ramp_interval (int): Ticks between speed ramps (power of two).
    :ivar allow_reset (bool): Whether the reset key is honoured.
    """

    name: str
    has_cpu_opponent: bool = False
    has_audio: bool = False
    scoring_policy: ScoringPolicy = ScoringPolicy.SIMPLE
    ramp_interval: int = RAMP_INTERVAL
    allow_reset: bool = True


VARIANT_PRESETS: dict[str, Variant] = {
    # plain wall bounce, points for paddle returns
    "classic": Variant(name="classic", allow_reset=False),
    # same rules with sound and a faster ramp
    "arcade": Variant(name="arcade", has_audio=True, ramp_interval=512),
    # CPU opponent on the far wall, points scored at the walls
    "versus": Variant(
        name="versus",
        has_cpu_opponent=True,
        has_audio=True,
        scoring_policy=ScoringPolicy.SCORED,
    ),
}

DEFAULT_VARIANT = "versus"


def get_variant(name: str | None) -> Variant:
    """
    Look up a preset by name, falling back to the default one.

    :param name: Preset name (case-insensitive).
    :type name: str | None

    :return: The matching preset.
    :rtype: Variant
    """
    key = (name or DEFAULT_VARIANT).lower()
    variant = VARIANT_PRESETS.get(key)
    if variant is None:
        logger.warning(
            f"Unknown variant {name!r}, using {DEFAULT_VARIANT!r} instead"
        )
        variant = VARIANT_PRESETS[DEFAULT_VARIANT]
    return variant
