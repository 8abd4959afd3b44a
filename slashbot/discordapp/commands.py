# slashbot/discordapp/commands.py

"""
Slash Command Handlers.

Each handler receives the invocation's options and returns the response
Discord should render. Handlers are looked up by exact, case-sensitive
command name through `COMMAND_HANDLERS`; there is no fallback handler.
"""

# Standard library imports
import logging
import random
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

# Local application imports
from .errors import MissingOptionError
from .interactions import ChannelMessage, CommandOption, InteractionResponse

LOGGER = logging.getLogger(__name__)

Handler = Callable[[Sequence[CommandOption]], InteractionResponse]

DICE_FACES = 6


def get_option(options: Sequence[CommandOption], name: str) -> Optional[CommandOption]:
    """Returns the first option called `name`, or None."""
    for option in options:
        if option.name == name:
            return option
    return None


# ==============================================================================
# 1. Command Handlers
# ==============================================================================

def handle_dice(options: Sequence[CommandOption]) -> InteractionResponse:
    """Rolls a six-sided die: a uniform integer in the inclusive range 1..6."""
    roll = random.randint(1, DICE_FACES)
    return ChannelMessage(content=str(roll))


def handle_echo(options: Sequence[CommandOption]) -> InteractionResponse:
    """
    Repeats the `message` option back to the channel, unchanged.

    Discord enforces required options from the command schema, so a missing
    `message` means the command was registered wrongly or the payload was
    not sent by Discord.

    Raises:
        MissingOptionError: `message` is absent or not a string.
    """
    option = get_option(options, "message")
    if option is None or not isinstance(option.value, str):
        raise MissingOptionError("echo", "message")
    return ChannelMessage(content=option.value)


# ==============================================================================
# 2. Registry
# ==============================================================================

COMMAND_HANDLERS: Mapping[str, Handler] = MappingProxyType({
    "dice": handle_dice,
    "echo": handle_echo,
})


def lookup_command(name: str) -> Optional[Handler]:
    handler = COMMAND_HANDLERS.get(name)
    if handler is None:
        LOGGER.debug(f"No handler registered for command '{name}'.")
    return handler
