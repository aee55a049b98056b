"""Auth domain type definitions for type safety."""

from typing import Optional

from pydantic import BaseModel, Field


class AuthJwtPayload(BaseModel):
    """Claims read from an identity provider token."""

    sub: Optional[str] = Field(None, description="Subject (identity provider user ID)")
    email: Optional[str] = Field(None, description="User email address")
    iss: Optional[str] = Field(None, description="Token issuer")
    aud: Optional[str | list[str]] = Field(None, description="Token audience")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    session_id: Optional[str] = Field(None, description="Session identifier")

    model_config = {"extra": "allow"}
