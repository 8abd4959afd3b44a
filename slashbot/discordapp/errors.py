# slashbot/discordapp/errors.py

"""
Error Taxonomy for the Discord Interactions Endpoint.

Every rejected request maps to exactly one of the `InteractionError`
subclasses below, and each subclass carries a fixed HTTP status, title and
detail. The messages are deliberately generic: nothing about keys, signatures
or parser internals is ever echoed back to the caller.
"""

from typing import Dict


class InteractionError(Exception):
    """
    Base class for all expected, per-request rejections.

    Attributes:
        status (int): The HTTP status code returned to the platform.
        title (str): A short, human-readable summary of the problem.
        detail (str): A longer explanation, safe to expose publicly.
    """
    status = 400
    title = "Bad Request"
    detail = "The request could not be processed."

    def __init__(self, reason: str = ""):
        # `reason` is for logs only; it never reaches the response body.
        super().__init__(reason or self.detail)
        self.reason = reason

    def to_dict(self) -> Dict[str, str]:
        """Returns the JSON error body sent back to the caller."""
        return {"title": self.title, "detail": self.detail}


class MissingCredentials(InteractionError):
    status = 401
    title = "Unauthorized"
    detail = "Headers for signature is missing."


class InvalidSignature(InteractionError):
    status = 401
    title = "Unauthorized"
    detail = "Your signature is invalid."


class MalformedBody(InteractionError):
    status = 400
    title = "Broken Request Body"
    detail = "Your request's body is broken."


class UnrecognizedInteraction(InteractionError):
    status = 400
    title = "Unexpected Request Body"
    detail = "Your request's body is something different from our expectations."


class MissingOptionError(ValueError):
    """Raised by a command handler when a required option is absent or mistyped."""

    def __init__(self, command: str, option: str):
        super().__init__(f"Command '{command}' requires a string option '{option}'.")
        self.command = command
        self.option = option


class ConfigurationError(ValueError):
    """Raised when the trusted public key cannot be loaded from configuration."""
