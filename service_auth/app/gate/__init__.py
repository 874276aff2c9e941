"""
Request gate for protected routes.
"""

from .auth_gate import AuthGate, BEARER_PREFIX, UNAUTHORIZED_DETAIL, extract_token

__all__ = [
    "AuthGate",
    "BEARER_PREFIX",
    "UNAUTHORIZED_DETAIL",
    "extract_token",
]
