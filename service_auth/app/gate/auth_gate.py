"""
Authentication gate for protected Auth service routes.
"""

from typing import Optional

from fastapi import HTTPException, Request, status

from shared.errors import TokenVerificationError
from shared.logging import get_logger, set_subject_context
from shared.metrics import MetricsCollector
from ..tokens.claims import Claims
from ..tokens.verifier import TokenVerifier

BEARER_PREFIX = "Bearer "

# Same body for every refusal so callers cannot tell expired from forged.
UNAUTHORIZED_DETAIL = "Unauthorized"


def extract_token(authorization: str) -> str:
    """Strip one leading ``Bearer `` if present; a bare token passes through."""
    if authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return authorization


class AuthGate:
    """FastAPI dependency that admits requests carrying a valid bearer token.

    Use as ``Depends(gate)``. On success the decoded claims are returned and
    stored on ``request.state.claims``; on any failure the request is refused
    with 401 before the handler runs.
    """

    def __init__(self, verifier: TokenVerifier, metrics: Optional[MetricsCollector] = None):
        self.verifier = verifier
        self.metrics = metrics
        self.logger = get_logger("auth.gate")

    async def __call__(self, request: Request) -> Claims:
        return self.authenticate_request(request)

    def authenticate_request(self, request: Request) -> Claims:
        """Authenticate an incoming request from its ``authorization`` header."""
        authorization = request.headers.get("authorization")
        if authorization is None:
            self._record("missing_header")
            self.logger.warning("Unauthorized access attempt", reason="missing_header")
            raise self._reject()

        try:
            claims = self.verifier.verify(extract_token(authorization))
        except TokenVerificationError as exc:
            self._record(exc.kind.value)
            self.logger.warning("Unauthorized access attempt", reason=exc.kind.value)
            raise self._reject() from exc

        self._record("valid")
        request.state.claims = claims
        set_subject_context(claims.sub)
        return claims

    def _record(self, outcome: str) -> None:
        if self.metrics is not None:
            self.metrics.increment_counter("token_validations_total", status=outcome)

    @staticmethod
    def _reject() -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=UNAUTHORIZED_DETAIL,
            headers={"WWW-Authenticate": "Bearer"},
        )
