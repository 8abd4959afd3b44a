from __future__ import annotations

import json
import os

import pytest
from nacl.signing import SigningKey

SEED = b"SeedForTest234567890123456789012"
SIGNING_KEY = SigningKey(SEED)
PUBLIC_KEY_HEX = SIGNING_KEY.verify_key.encode().hex()

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "slashbot.settings")
os.environ["DISCORD_PUBLIC_KEY"] = PUBLIC_KEY_HEX
os.environ.pop("DISCORD_TIMESTAMP_TOLERANCE", None)

import django  # noqa: E402
from django.test.utils import setup_test_environment  # noqa: E402

django.setup()
setup_test_environment()


def sign(body: bytes | str, timestamp: str, key: SigningKey = SIGNING_KEY) -> str:
    if isinstance(body, str):
        body = body.encode("utf-8")
    return key.sign(timestamp.encode("utf-8") + body).signature.hex()


def flip_bit(signature_hex: str, bit: int) -> str:
    raw = bytearray(bytes.fromhex(signature_hex))
    raw[bit // 8] ^= 1 << (bit % 8)
    return raw.hex()


@pytest.fixture
def signing_key() -> SigningKey:
    return SIGNING_KEY


@pytest.fixture
def trusted_key():
    return SIGNING_KEY.verify_key


@pytest.fixture
def signed_headers():
    def _make(body: bytes | str, timestamp: str = "12345") -> dict:
        return {
            "X-Signature-Ed25519": sign(body, timestamp),
            "X-Signature-Timestamp": timestamp,
        }

    return _make


@pytest.fixture
def command_body():
    def _make(name: str, options: list | None = None) -> str:
        data: dict = {"name": name}
        if options is not None:
            data["options"] = options
        return json.dumps({"type": 2, "data": data})

    return _make
