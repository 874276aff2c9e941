"""
Auth service: issues bearer tokens and gates the protected route with them.
"""

import time
from datetime import timedelta
from typing import Any, Dict, Optional

from fastapi import Depends, status
from pydantic import BaseModel, Field

from shared.base_service import BaseService
from shared.config import ServiceConfig
from .gate.auth_gate import AuthGate
from .tokens.claims import Claims
from .tokens.issuer import TokenIssuer
from .tokens.keys import Clock, SigningKey
from .tokens.verifier import TokenVerifier

SERVICE_PORT = 3030


class TokenRequest(BaseModel):
    """Request model for token issuance."""
    subject: str = Field(..., min_length=1, description="Subject to issue the token to")


class TokenResponse(BaseModel):
    """Response model for token issuance."""
    access_token: str
    token_type: str = "Bearer"
    expires_in: int


class AuthService(BaseService):
    """Auth service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None, clock: Clock = time.time):
        super().__init__("auth", SERVICE_PORT, config)

        self.signing_key = SigningKey.from_config(self.config)
        if self.signing_key.is_fallback:
            self.logger.warning(
                "Using insecure fallback signing key; set SECRET_KEY",
                env=self.config.env,
            )

        self.token_issuer = TokenIssuer(
            self.signing_key,
            lifetime=timedelta(minutes=self.config.token_lifetime_minutes),
            clock=clock,
        )
        self.token_verifier = TokenVerifier(self.signing_key, clock=clock)
        self.auth_gate = AuthGate(self.token_verifier, metrics=self.metrics)

        self._setup_auth_routes()

    def _setup_auth_routes(self):
        """Set up auth-specific routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "auth",
                "message": "Token gate - Auth Service",
                "version": "1.0.0"
            }

        if self.config.token_endpoint_enabled:
            @self.app.post("/auth/token", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
            async def issue_token(request: TokenRequest):
                """Issue a bearer token for a subject."""
                token = self.token_issuer.issue(request.subject)
                self.metrics.increment_counter("tokens_issued_total")
                return TokenResponse(
                    access_token=token,
                    expires_in=self.token_issuer.lifetime_seconds,
                )

        @self.app.get("/protected", response_model=Dict[str, Any])
        async def protected_route(claims: Claims = Depends(self.auth_gate)):
            """Echo the caller's decoded claims."""
            self.logger.info("Accessing protected route", subject=claims.sub)
            return claims.model_dump()


def create_app(config: Optional[ServiceConfig] = None, clock: Clock = time.time):
    """Create FastAPI application."""
    service = AuthService(config=config, clock=clock)
    return service.app


if __name__ == "__main__":
    service = AuthService()
    service.run()
