"""
Token issuance for the Auth service.
"""

import time
from datetime import timedelta

import jwt

from shared.errors import IssueErrorKind, TokenIssueError
from shared.logging import get_logger
from .claims import Claims
from .keys import ALGORITHM, Clock, SigningKey

TOKEN_LIFETIME = timedelta(minutes=60)


class TokenIssuer:
    """Mints signed, time-limited bearer tokens."""

    def __init__(
        self,
        signing_key: SigningKey,
        *,
        lifetime: timedelta = TOKEN_LIFETIME,
        clock: Clock = time.time,
    ) -> None:
        if int(lifetime.total_seconds()) < 1:
            raise ValueError("token lifetime must be at least one second")
        self.signing_key = signing_key
        self.lifetime = lifetime
        self.clock = clock
        self.logger = get_logger("auth.issuer")

    @property
    def lifetime_seconds(self) -> int:
        return int(self.lifetime.total_seconds())

    def issue(self, subject: str) -> str:
        """Issue a token for ``subject`` that expires one lifetime from now.

        Raises:
            TokenIssueError: the key cannot be used to sign.
        """
        claims = Claims(sub=subject, exp=int(self.clock()) + self.lifetime_seconds)

        self.logger.info("Creating token", subject=subject)

        if not self.signing_key.secret:
            self.logger.error("Error creating the token", subject=subject, error="empty signing key")
            raise TokenIssueError(IssueErrorKind.SIGNING_FAILURE, reason="empty signing key")

        try:
            return jwt.encode(claims.model_dump(), self.signing_key.secret, algorithm=ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            self.logger.error("Error creating the token", subject=subject, error=str(exc))
            raise TokenIssueError(IssueErrorKind.SIGNING_FAILURE, reason=str(exc)) from exc
