"""
Sound cue playback.

Playing a cue never blocks: callers get a ``Playback`` handle and can poll
``done()``. A missing device or asset degrades to ``SilentAudio``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional, Protocol

from mini_arcade_core.utils import logger

from rally_pong.constants import ASSETS_ROOT, SOUNDS
from rally_pong.errors import AudioUnavailableError

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Justification: the prompt switch must be set before pygame is imported
# pylint: disable=wrong-import-position,wrong-import-order
import pygame  # noqa: E402

# pylint: enable=wrong-import-position,wrong-import-order


class Playback(Protocol):
    """Handle on a cue that was started."""

    def done(self) -> bool:
        """Whether the cue has finished playing."""


class AudioPlayer(Protocol):
    """Anything that can play named sound cues."""

    def play(self, cue: str) -> Playback:
        """Start playing ``cue`` without blocking."""

    def close(self):
        """Release the output device."""


class FinishedPlayback:
    """Playback that is already over."""

    def done(self) -> bool:
        return True


class SilentAudio:
    """
    Audio player that plays nothing.
    """

    def __init__(self):
        self.played: list[str] = []

    def play(self, cue: str) -> Playback:
        """Record the cue and return a finished playback."""
        self.played.append(cue)
        return FinishedPlayback()

    def close(self):
        """Nothing to release."""


class ChannelPlayback:
    """
    Playback running on a pygame mixer channel.
    """

    def __init__(self, channel: Optional[pygame.mixer.Channel], sound):
        self.channel = channel
        self.sound = sound

    def done(self) -> bool:
        if self.channel is None:
            return True
        return not (
            self.channel.get_busy() and self.channel.get_sound() is self.sound
        )


class PygameAudio:
    """
    Audio player backed by ``pygame.mixer``.

    The mixer is shared by every cue and outlives each of them.
    """

    def __init__(
        self,
        sounds: Mapping[str, str] | None = None,
        assets_root: Path = ASSETS_ROOT,
    ):
        """
        :param sounds: Cue name to file name, relative to ``assets_root``.
        :type sounds: Mapping[str, str], optional

        :param assets_root: Directory holding the sound files.
        :type assets_root: Path

        :raises AudioUnavailableError: If the mixer or any asset fails.
        """
        sounds = dict(SOUNDS if sounds is None else sounds)
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            raise AudioUnavailableError(
                f"Audio device unavailable: {exc}"
            ) from exc

        self._sounds: dict[str, pygame.mixer.Sound] = {}
        for cue, filename in sounds.items():
            path = Path(assets_root) / filename
            if not path.is_file():
                self.close()
                raise AudioUnavailableError(f"Missing sound asset: {path}")
            try:
                self._sounds[cue] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                self.close()
                raise AudioUnavailableError(
                    f"Could not load {path}: {exc}"
                ) from exc

    def play(self, cue: str) -> Playback:
        """Start ``cue`` on a free channel."""
        sound = self._sounds.get(cue)
        if sound is None:
            logger.warning(f"Unknown sound cue: {cue}")
            return FinishedPlayback()
        return ChannelPlayback(sound.play(), sound)

    def close(self):
        """Shut the mixer down."""
        if pygame.mixer.get_init():
            pygame.mixer.quit()


def open_audio(
    enabled: bool = True,
    assets_root: Path = ASSETS_ROOT,
    sounds: Mapping[str, str] | None = None,
) -> AudioPlayer:
    """
    Build the best available audio player.

    :param enabled: False forces silence.
    :type enabled: bool

    :param assets_root: Directory holding the sound files.
    :type assets_root: Path

    :return: A pygame player, or a silent one if audio cannot start.
    :rtype: AudioPlayer
    """
    if not enabled:
        return SilentAudio()
    try:
        return PygameAudio(sounds=sounds, assets_root=assets_root)
    except AudioUnavailableError as exc:
        logger.warning(f"{exc}; continuing without sound")
        return SilentAudio()
