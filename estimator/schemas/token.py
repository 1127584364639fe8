"""
Login response and the decoded claims of a contractor's access token.
"""

from typing import Optional

from pydantic import BaseModel, Field


class Token(BaseModel):
    """Bearer token handed back by ``POST /auth/login``."""

    access_token: str
    token_type: str = "bearer"


class TokenPayload(BaseModel):
    # Contractor profile id; tokens are issued per profile, never per user
    sub: Optional[int] = Field(default=None, gt=0)
