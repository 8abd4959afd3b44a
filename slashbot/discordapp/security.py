# slashbot/discordapp/security.py

"""
Request Authentication for Discord Interactions.

Discord signs every interaction it delivers with the application's Ed25519
key. The signed message is the `X-Signature-Timestamp` header value followed
immediately by the raw request body, and the signature arrives hex-encoded in
the `X-Signature-Ed25519` header.

This module holds everything needed to check that signature:
- `load_trusted_key`: turns the configured public key into a `VerifyKey`.
- `verify_signature`: the pure Ed25519 check over `timestamp || body`.
- `is_timestamp_fresh`: an optional replay window on the timestamp.
- `authenticate`: the header -> signature -> freshness pipeline, which is the
  only producer of a `VerifiedBody`.
"""

# Standard library imports
import binascii
import time
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Union

# Third-party imports
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

# Local application imports
from .errors import ConfigurationError, InvalidSignature, MissingCredentials

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"

PUBLIC_KEY_SIZE = 32


# ==============================================================================
# 1. Request Values
# ==============================================================================

@dataclass(frozen=True)
class RawRequest:
    """
    An inbound call exactly as the transport received it.

    Attributes:
        body (bytes): The raw, unparsed request body.
        signature (str): The `X-Signature-Ed25519` header value, if sent.
        timestamp (str): The `X-Signature-Timestamp` header value, if sent.
    """
    body: bytes
    signature: Optional[str] = None
    timestamp: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    @classmethod
    def from_headers(cls, body: Union[bytes, str], headers: Mapping[str, str]) -> "RawRequest":
        """Builds a request from any header mapping, matching names case-insensitively."""
        return cls(
            body=body,
            signature=find_header(headers, SIGNATURE_HEADER),
            timestamp=find_header(headers, TIMESTAMP_HEADER),
        )


@dataclass(frozen=True)
class VerifiedBody:
    """
    A request body whose signature has been checked against the trusted key.

    Only `authenticate` creates these. The envelope parser accepts nothing
    else, so an interaction is never built from an unverified body.
    """
    content: bytes


class HeaderState(Enum):
    PRESENT = "present"
    EMPTY = "empty"
    ABSENT = "absent"


def header_state(value: Optional[str]) -> HeaderState:
    """Collapses the transport's idea of a missing header into one of three states."""
    if value is None:
        return HeaderState.ABSENT
    if not value.strip():
        return HeaderState.EMPTY
    return HeaderState.PRESENT


def find_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup over a plain mapping."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


# ==============================================================================
# 2. Key Loading & Signature Verification
# ==============================================================================

def load_trusted_key(value: Union[str, bytes, None]) -> VerifyKey:
    """
    Loads the application's public key from configuration.

    Args:
        value: Either the 64-character hex string shown in the Discord
               developer portal, or the 32 raw key bytes.

    Returns:
        A `VerifyKey` usable with `verify_signature`.

    Raises:
        ConfigurationError: If the key is missing, not hex, or the wrong size.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ConfigurationError("Missing Discord public key.")

    if isinstance(value, str):
        try:
            raw = binascii.unhexlify(value.strip())
        except (binascii.Error, ValueError) as e:
            raise ConfigurationError("Discord public key is not valid hex.") from e
    elif isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        raise ConfigurationError(f"Unsupported public key type: {type(value).__name__}.")

    if len(raw) != PUBLIC_KEY_SIZE:
        raise ConfigurationError(
            f"Discord public key must be {PUBLIC_KEY_SIZE} bytes, got {len(raw)}."
        )
    return VerifyKey(raw)


def verify_signature(trusted_key: VerifyKey, body: bytes, timestamp: str, signature_hex: str) -> bool:
    """
    Checks an Ed25519 detached signature over `timestamp || body`.

    Malformed hex is reported as `False`, same as a wrong signature. The
    comparison itself is done by libsodium in constant time.
    """
    try:
        signature = binascii.unhexlify(signature_hex)
    except (binascii.Error, ValueError):
        return False

    message = timestamp.encode("utf-8") + body
    try:
        trusted_key.verify(message, signature)
    except (BadSignatureError, ValueError):
        # ValueError covers signatures of the wrong length.
        return False
    return True


def is_timestamp_fresh(timestamp: str, tolerance: Optional[int], now: Optional[float] = None) -> bool:
    """
    Returns False when the timestamp is outside `tolerance` seconds of `now`.

    A `tolerance` of None disables the check entirely.
    """
    if tolerance is None:
        return True
    try:
        sent_at = int(timestamp)
    except (TypeError, ValueError):
        return False
    current = time.time() if now is None else now
    return abs(current - sent_at) <= tolerance


def authenticate(
    request: RawRequest,
    trusted_key: VerifyKey,
    *,
    timestamp_tolerance: Optional[int] = None,
    now: Optional[float] = None,
) -> VerifiedBody:
    """
    Runs the full authentication pipeline for one request.

    Raises:
        MissingCredentials: A signature header is absent or empty.
        InvalidSignature: The signature does not match, or the timestamp is stale.
    """
    signature_state = header_state(request.signature)
    timestamp_state = header_state(request.timestamp)
    if signature_state is not HeaderState.PRESENT or timestamp_state is not HeaderState.PRESENT:
        raise MissingCredentials(
            f"signature header {signature_state.value}, timestamp header {timestamp_state.value}"
        )

    if not verify_signature(trusted_key, request.body, request.timestamp, request.signature):
        raise InvalidSignature("signature mismatch")

    if not is_timestamp_fresh(request.timestamp, timestamp_tolerance, now):
        raise InvalidSignature("timestamp outside tolerance")

    return VerifiedBody(request.body)
