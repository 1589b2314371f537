from __future__ import annotations

from mini_arcade_core.engine.commands import Command

from rally_pong.commands import (
    CommandContext,
    MovePaddleCommand,
    QuitCommand,
    ResetCommand,
    command_for,
)
from rally_pong.sim.models import Direction


def test_key_bindings():
    assert isinstance(command_for("q"), QuitCommand)
    assert isinstance(command_for("r"), ResetCommand)
    left = command_for("KEY_LEFT")
    right = command_for("KEY_RIGHT")
    assert left.direction is Direction.NEGATIVE
    assert right.direction is Direction.POSITIVE
    assert command_for("z") is None
    assert command_for(None) is None


def test_commands_follow_engine_protocol():
    for key in ("q", "r", "KEY_LEFT", "KEY_RIGHT"):
        assert Command in type(command_for(key)).__mro__


def test_quit_clears_running(classic):
    context = CommandContext(engine=classic)
    QuitCommand().execute(context)
    assert not context.running


def test_move_command(classic):
    MovePaddleCommand(Direction.POSITIVE).execute(
        CommandContext(engine=classic)
    )
    assert classic.state.player.position.x == 15.0
