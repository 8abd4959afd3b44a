# slashbot/discordapp/dispatcher.py

"""
Interaction Dispatcher.

`dispatch` is the whole request pipeline, independent of any web framework:

    headers -> signature -> JSON envelope -> route -> (status, body)

Every expected failure along the way is an `InteractionError` subclass and is
turned into its fixed error body here. Anything else is a bug and is left to
propagate to the transport layer.
"""

# Standard library imports
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Third-party imports
from nacl.signing import VerifyKey

# Local application imports
from .commands import lookup_command
from .errors import InteractionError, MissingOptionError, UnrecognizedInteraction
from .interactions import (ApplicationCommand, Interaction, InteractionResponse,
                           Ping, Pong, parse_interaction)
from .security import RawRequest, authenticate

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """The HTTP status code and JSON body to send back to Discord."""
    status: int
    body: Dict[str, Any] = field(default_factory=dict)


def route(interaction: Interaction) -> InteractionResponse:
    """
    Picks the response for an already parsed interaction.

    Raises:
        UnrecognizedInteraction: Unknown command, unsupported interaction type,
                                 or a command invoked without its required options.
    """
    if isinstance(interaction, Ping):
        return Pong()

    if isinstance(interaction, ApplicationCommand):
        handler = lookup_command(interaction.name)
        if handler is None:
            raise UnrecognizedInteraction(f"unknown command '{interaction.name}'")
        try:
            return handler(interaction.options)
        except MissingOptionError as e:
            raise UnrecognizedInteraction(str(e)) from e

    raise UnrecognizedInteraction(f"unsupported interaction type {interaction.type!r}")


def dispatch(
    request: RawRequest,
    trusted_key: VerifyKey,
    *,
    timestamp_tolerance: Optional[int] = None,
    now: Optional[float] = None,
) -> DispatchResult:
    """
    Authenticates, parses and routes one interaction.

    Args:
        request: The raw body and signature headers of the inbound call.
        trusted_key: The application's Ed25519 public key.
        timestamp_tolerance: Optional replay window in seconds; None disables it.
        now: Current UNIX time, for tests. Defaults to the wall clock.

    Returns:
        A `DispatchResult`. This function does not raise for any request
        input; only programming errors escape.
    """
    try:
        verified = authenticate(
            request, trusted_key, timestamp_tolerance=timestamp_tolerance, now=now
        )
        interaction = parse_interaction(verified)
        response = route(interaction)
    except InteractionError as e:
        LOGGER.warning(f"Rejected interaction with {e.status} ({type(e).__name__}): {e.reason}")
        return DispatchResult(status=e.status, body=e.to_dict())

    LOGGER.info(f"Handled {type(interaction).__name__} interaction with {type(response).__name__}.")
    return DispatchResult(status=200, body=response.to_dict())
