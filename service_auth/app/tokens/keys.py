"""
Signing key material shared by the token issuer and verifier.
"""

from dataclasses import dataclass, field
from typing import Callable

from shared.config import BaseConfig, FALLBACK_SECRET_KEY

# Fixed for every token this service mints or accepts.
ALGORITHM = "HS256"

# Returns seconds since epoch; injected so expiry can be tested deterministically.
Clock = Callable[[], float]


@dataclass(frozen=True)
class SigningKey:
    """HMAC secret loaded once at startup and never mutated afterwards."""

    secret: bytes = field(repr=False)
    is_fallback: bool = False

    @classmethod
    def from_config(cls, config: BaseConfig) -> "SigningKey":
        """Build the key from ``SECRET_KEY``, falling back to the insecure literal."""
        if config.secret_key is None:
            return cls(secret=FALLBACK_SECRET_KEY.encode("utf-8"), is_fallback=True)
        return cls(secret=config.secret_key.encode("utf-8"))

    @classmethod
    def from_secret(cls, secret: str) -> "SigningKey":
        return cls(secret=secret.encode("utf-8"))
