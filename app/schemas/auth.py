"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """New account. Presence and length are checked by the auth service, not here."""

    username: str | None = Field(default=None, description="Display name, unique")
    email: str | None = Field(default=None, description="Login identifier, unique")
    password: str | None = Field(default=None, description="Plain-text password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email used at registration")
    password: str | None = Field(default=None, description="Password")


class MessageResponse(BaseModel):
    message: str


class UserSummary(BaseModel):
    """Public view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: str


class LoginResponse(BaseModel):
    """JWT plus the user it was issued for. Send it as: Authorization: Bearer <token>"""

    token: str = Field(..., description="JWT access token")
    user: UserSummary


class TokenIdentity(BaseModel):
    """Claims decoded from a verified bearer token."""

    id: int
    role: str
    iat: int | None = None
    exp: int


class MeResponse(BaseModel):
    user: TokenIdentity
