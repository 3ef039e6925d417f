"""
Confirmation Gate — Decide whether a destructive operation may proceed

Destructive commands call require_confirmation() before issuing the remote
delete/deploy/cancel call. With --autoconfirm the prompt is skipped; the
message builder is only invoked when a prompt is actually shown.
"""

from typing import TYPE_CHECKING, Callable, Optional

import structlog

from ..console import Console, get_console
from ..errors import NotConfirmedError
from .arguments import get_bool_param

if TYPE_CHECKING:
    from ..commands.base import Command

logger = structlog.get_logger()


def confirm_command(
    command: "Command",
    message_builder: Callable[[], str],
    console: Optional[Console] = None,
) -> bool:
    """
    Return True if the command may proceed.

    Args:
        command: Command whose "autoconfirm" argument is checked
        message_builder: Builds the prompt text (called lazily)
        console: Console to prompt on (process default if None)
    """
    if get_bool_param(command.arguments.get("autoconfirm")):
        return True

    console = console or get_console()

    message = message_builder()
    if console.suppress_prompts:
        message = ""

    logger.debug("confirmation_requested", subject=command.subject, predicate=command.predicate)
    return console.ask(message)


def require_confirmation(
    command: "Command",
    message_builder: Callable[[], str],
    console: Optional[Console] = None,
) -> None:
    """
    Raise NotConfirmedError unless the command is confirmed.
    """
    if not confirm_command(command, message_builder, console):
        raise NotConfirmedError()
