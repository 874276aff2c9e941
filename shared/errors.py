"""
Shared error handling for the token gate services.
"""

from enum import Enum
from typing import Dict, Any, Optional
from pydantic import BaseModel

from .logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for token gate services."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class AuthenticationError(AccessLayerException):
    """Authentication-related errors."""

    status_code = 401

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("AUTHENTICATION_ERROR", message, details)


class ServiceError(AccessLayerException):
    """Service-related errors."""

    status_code = 500

    def __init__(self, message: str = "Service error", details: Optional[Dict[str, Any]] = None):
        super().__init__("SERVICE_ERROR", message, details)


class VerifyErrorKind(str, Enum):
    """Why a presented token was refused."""

    MALFORMED_TOKEN = "malformed_token"
    SIGNATURE_MISMATCH = "signature_mismatch"
    EXPIRED = "expired"


class IssueErrorKind(str, Enum):
    """Why a token could not be minted."""

    SIGNING_FAILURE = "signing_failure"


class TokenVerificationError(AuthenticationError):
    """A presented token failed verification.

    ``kind`` is for logs, metrics and tests only. Callers facing the network
    must not echo it back.
    """

    def __init__(self, kind: VerifyErrorKind, reason: Optional[str] = None):
        self.kind = kind
        self.reason = reason
        super().__init__("Invalid token")


class TokenIssueError(ServiceError):
    """The signing step failed; this is a configuration fault, not a client one."""

    def __init__(self, kind: IssueErrorKind = IssueErrorKind.SIGNING_FAILURE, reason: Optional[str] = None):
        self.kind = kind
        self.reason = reason
        super().__init__("Error creating the token")
