# slashbot/discordapp/interactions.py

"""
Interaction Envelope Types and Parser.

Discord tags every interaction and every reply with a small integer. This
module turns those integers into a closed set of value types at the boundary:
an inbound body becomes a `Ping`, an `ApplicationCommand` or `Unsupported`,
and a reply is either a `Pong` or a `ChannelMessage`. Nothing past this module
compares raw type numbers.
"""

# Standard library imports
import json
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Tuple, Union

# Local application imports
from .errors import MalformedBody
from .security import VerifiedBody


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2


class InteractionCallbackType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4


# ==============================================================================
# 1. Inbound Interactions
# ==============================================================================

@dataclass(frozen=True)
class CommandOption:
    """A single `{name, value}` pair from `data.options`."""
    name: str
    value: Any = None


@dataclass(frozen=True)
class Ping:
    pass


@dataclass(frozen=True)
class ApplicationCommand:
    """
    A slash command invocation.

    Attributes:
        name (str): The command name exactly as registered, e.g. "dice".
        options (tuple): The options in the order Discord sent them.
    """
    name: str
    options: Tuple[CommandOption, ...] = ()


@dataclass(frozen=True)
class Unsupported:
    """Any well-formed JSON envelope this bot does not handle."""
    type: Any = None


Interaction = Union[Ping, ApplicationCommand, Unsupported]


# ==============================================================================
# 2. Outbound Responses
# ==============================================================================

@dataclass(frozen=True)
class Pong:
    def to_dict(self) -> Dict[str, Any]:
        return {"type": int(InteractionCallbackType.PONG)}


@dataclass(frozen=True)
class ChannelMessage:
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": int(InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE),
            "data": {"content": self.content},
        }


InteractionResponse = Union[Pong, ChannelMessage]


# ==============================================================================
# 3. Parsing
# ==============================================================================

def parse_interaction(verified: VerifiedBody) -> Interaction:
    """
    Decodes a verified request body into an `Interaction`.

    Only bodies that fail to decode as JSON are errors. Anything that decodes
    but does not look like a ping or a well-formed command comes back as
    `Unsupported`, so the caller can decide how to reject it.

    Raises:
        MalformedBody: The body is not valid JSON (or not valid UTF-8).
    """
    try:
        payload = json.loads(verified.content)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors; very deep
        # nesting exhausts the decoder's recursion limit instead.
        raise MalformedBody(str(e)) from e

    if not isinstance(payload, dict):
        return Unsupported()

    interaction_type = payload.get("type")
    if isinstance(interaction_type, bool) or not isinstance(interaction_type, int):
        return Unsupported(interaction_type)

    if interaction_type == InteractionType.PING:
        return Ping()
    if interaction_type == InteractionType.APPLICATION_COMMAND:
        return _parse_application_command(payload)
    return Unsupported(interaction_type)


def _parse_application_command(payload: Dict[str, Any]) -> Interaction:
    data = payload.get("data")
    if not isinstance(data, dict):
        return Unsupported(InteractionType.APPLICATION_COMMAND)

    name = data.get("name")
    if not isinstance(name, str) or not name:
        return Unsupported(InteractionType.APPLICATION_COMMAND)

    raw_options = data.get("options")
    if raw_options is None:
        raw_options = []
    if not isinstance(raw_options, list):
        return Unsupported(InteractionType.APPLICATION_COMMAND)

    options = []
    for entry in raw_options:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            return Unsupported(InteractionType.APPLICATION_COMMAND)
        options.append(CommandOption(name=entry["name"], value=entry.get("value")))

    return ApplicationCommand(name=name, options=tuple(options))
