"""
Token verification for the Auth service.
"""

import json
import time

import jwt
from jwt.utils import base64url_decode, base64url_encode

from shared.errors import TokenVerificationError, VerifyErrorKind
from shared.logging import get_logger
from .claims import Claims
from .keys import ALGORITHM, Clock, SigningKey


class TokenVerifier:
    """Checks signature and expiry of tokens minted by ``TokenIssuer``.

    The outcome depends only on the token, the signing key and the clock.
    No leeway is applied: a token whose ``exp`` is not strictly in the future
    is expired.
    """

    def __init__(self, signing_key: SigningKey, *, clock: Clock = time.time) -> None:
        self.signing_key = signing_key
        self.clock = clock
        self.logger = get_logger("auth.verifier")

    def verify(self, token: str) -> Claims:
        """Verify a raw token and return its claims.

        Raises:
            TokenVerificationError: with ``kind`` set to why it was refused.
        """
        self._check_signature_segment(token)

        try:
            payload = jwt.decode(
                token,
                self.signing_key.secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "require": ["sub", "exp"]},
            )
        except jwt.InvalidSignatureError as exc:
            raise self._fail(VerifyErrorKind.SIGNATURE_MISMATCH, str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise self._fail(VerifyErrorKind.MALFORMED_TOKEN, str(exc)) from exc
        except jwt.PyJWTError as exc:
            # The key itself cannot be used for HMAC, so nothing can be verified with it.
            self.logger.error("Signing key rejected by HMAC backend", error=str(exc))
            raise self._fail(VerifyErrorKind.SIGNATURE_MISMATCH, str(exc)) from exc

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        if not isinstance(subject, str):
            raise self._fail(VerifyErrorKind.MALFORMED_TOKEN, "sub must be a string")
        if isinstance(expires_at, bool) or not isinstance(expires_at, int):
            raise self._fail(VerifyErrorKind.MALFORMED_TOKEN, "exp must be an integer")

        if expires_at <= self.clock():
            raise self._fail(VerifyErrorKind.EXPIRED, "token has expired")

        self.logger.info("Token is valid", subject=subject)
        return Claims(sub=subject, exp=expires_at)

    def _check_signature_segment(self, token: str) -> None:
        """Refuse a well-formed token whose signature segment is not canonical base64url.

        Only applies once the header and payload decode; anything earlier is
        left to PyJWT to classify.
        """
        if token.count(".") < 2:
            return
        header_segment, payload_segment, signature_segment = token.split(".", 2)
        try:
            header = json.loads(base64url_decode(header_segment))
            base64url_decode(payload_segment)
        except (ValueError, TypeError):
            return
        if not isinstance(header, dict):
            return

        # Base64url leaves spare bits in the final character, and the decoder
        # skips characters outside the alphabet.
        try:
            canonical = base64url_encode(base64url_decode(signature_segment)).decode("ascii")
        except (ValueError, TypeError):
            canonical = None
        if canonical != signature_segment:
            raise self._fail(VerifyErrorKind.SIGNATURE_MISMATCH, "non-canonical signature encoding")

    def _fail(self, kind: VerifyErrorKind, reason: str) -> TokenVerificationError:
        self.logger.warning("Invalid token", kind=kind.value, reason=reason)
        return TokenVerificationError(kind, reason=reason)
