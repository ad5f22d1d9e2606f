from uuid import UUID

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    username: str = Field(default="", description="Username")
    password: str = Field(default="", description="Password", repr=False)


class LoginResponse(BaseModel):
    """Access token plus the identity it was issued for."""

    token: str
    username: str
    name: str | None = None


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    username: str
    user_id: UUID
    jti: str
    token_type: str = "access"
