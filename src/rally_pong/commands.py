"""
Module defining input commands for Rally Pong.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from mini_arcade_core.engine.commands import Command
from mini_arcade_core.utils import logger

from rally_pong.sim.models import Direction

if TYPE_CHECKING:
    from rally_pong.sim.engine import PongEngine


@dataclass
class CommandContext:
    """
    What terminal commands act on, in place of the runtime-services
    context of the arcade engine.

    :ivar engine (PongEngine): The running engine.
    :ivar running (bool): Cleared to stop the control loop.
    """

    engine: PongEngine
    running: bool = True


class QuitCommand(Command):
    """Command to stop the control loop."""

    def execute(self, context: CommandContext):
        logger.info("Quit requested")
        context.running = False


class ResetCommand(Command):
    """
    Command to restart the game, if the rules allow it.
    """

    def execute(self, context: CommandContext):
        if not context.engine.config.rules.allow_reset:
            return
        context.engine.reset()


class MovePaddleCommand(Command):
    """
    Command to move the player paddle one step.
    """

    def __init__(self, direction: Direction):
        """
        :param direction: POSITIVE for right, NEGATIVE for left.
        :type direction: Direction
        """
        self.direction = direction

    def execute(self, context: CommandContext):
        context.engine.move_player(self.direction)


KEY_BINDINGS: dict[str, Callable[[], Command]] = {
    "q": QuitCommand,
    "r": ResetCommand,
    "KEY_LEFT": lambda: MovePaddleCommand(Direction.NEGATIVE),
    "KEY_RIGHT": lambda: MovePaddleCommand(Direction.POSITIVE),
}


def command_for(key: Optional[str]) -> Optional[Command]:
    """
    Translate a key name into a command.

    :param key: Printable character or ``KEY_*`` name.
    :type key: Optional[str]

    :return: The bound command, or None for unbound keys.
    :rtype: Optional[Command]
    """
    if not key:
        return None
    factory = KEY_BINDINGS.get(key)
    return factory() if factory is not None else None
