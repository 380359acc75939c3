"""
Pydantic schemas for session endpoints.

The session request is signed as-is into the JWT, so extra fields (email,
display name) ride along with the required ``uid``.
"""

from pydantic import BaseModel, ConfigDict, Field


class SessionRequest(BaseModel):
    """Body of POST /api/jwt."""

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"uid": "u1", "email": "driver@example.com"}},
    )

    uid: str = Field(..., min_length=1, description="User identifier to embed in the token")


class SessionResponse(BaseModel):
    success: bool = True
