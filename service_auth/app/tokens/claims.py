"""
Claims carried inside every bearer token.
"""

from pydantic import BaseModel, ConfigDict, Field


class Claims(BaseModel):
    """Decoded token payload.

    Field names are part of the wire format and must stay ``sub`` and ``exp``.
    """

    model_config = ConfigDict(frozen=True)

    sub: str = Field(..., description="Subject the token was issued to")
    exp: int = Field(..., description="Expiry, seconds since epoch")
