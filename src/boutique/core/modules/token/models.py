"""Bearer token models."""

from datetime import datetime
from typing import NewType

from pydantic import BaseModel, Field

AuthToken = NewType("AuthToken", str)


class TokenClaims(BaseModel):
    """Decoded bearer token claims, the request Principal once verified."""

    email: str = Field(..., description="Email of the user the token was issued for")
    iat: datetime = Field(..., description="Issued at")
    exp: datetime = Field(..., description="Expires at")


Principal = TokenClaims
