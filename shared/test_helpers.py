"""
Test helper functions and factory methods for the token gate services.
"""

import json
from typing import Any, Dict, Optional

import jwt
from jwt.utils import base64url_decode, base64url_encode

TEST_SECRET = "test-signing-secret-with-at-least-32-bytes"
OTHER_SECRET = "another-signing-secret-with-32-plus-bytes"

# 2024-01-01T00:00:00Z
T0 = 1704067200.0

BASE64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def set(self, now: float) -> None:
        self.now = now


def create_raw_token(
    payload: Dict[str, Any],
    secret: Optional[str] = TEST_SECRET,
    algorithm: str = "HS256",
    headers: Optional[Dict[str, Any]] = None,
) -> str:
    """Sign an arbitrary payload, bypassing the issuer's and PyJWT's claim checks."""
    body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    return jwt.PyJWS().encode(body, secret, algorithm=algorithm, headers=headers)


def replace_signature_char(token: str, index: int) -> str:
    """Swap one character of the signature segment for another base64url character."""
    head, signature = token.rsplit(".", 1)
    original = signature[index]
    replacement = BASE64URL_ALPHABET[(BASE64URL_ALPHABET.index(original) + 1) % len(BASE64URL_ALPHABET)]
    return f"{head}.{signature[:index]}{replacement}{signature[index + 1:]}"


def flip_signature_byte(token: str, index: int) -> str:
    """Flip every bit of one decoded signature byte and re-encode."""
    head, signature = token.rsplit(".", 1)
    raw = bytearray(base64url_decode(signature))
    raw[index] ^= 0xFF
    return f"{head}.{base64url_encode(bytes(raw)).decode('ascii')}"


def flip_signature_bit(token: str, index: int, bit: int) -> str:
    """Flip one bit of one character of the signature segment, as sent on the wire."""
    head, signature = token.rsplit(".", 1)
    flipped = chr(ord(signature[index]) ^ (1 << bit))
    return f"{head}.{signature[:index]}{flipped}{signature[index + 1:]}"
