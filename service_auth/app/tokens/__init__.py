"""
Bearer token primitives for the Auth service.

- keys: the HMAC signing key shared by issuance and verification.
- claims: the ``sub``/``exp`` payload model.
- issuer: mints HS256 tokens with a fixed lifetime.
- verifier: checks signature and expiry against an injectable clock.
"""

from .claims import Claims
from .issuer import TOKEN_LIFETIME, TokenIssuer
from .keys import ALGORITHM, Clock, SigningKey
from .verifier import TokenVerifier

__all__ = [
    "ALGORITHM",
    "Claims",
    "Clock",
    "SigningKey",
    "TOKEN_LIFETIME",
    "TokenIssuer",
    "TokenVerifier",
]
