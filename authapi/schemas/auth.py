"""Authentication schemas.

Request bodies accept missing fields so the handlers can answer with the
same presence-check messages the API has always returned.
"""

from pydantic import BaseModel, ConfigDict


class UserRegister(BaseModel):
    """User registration request."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class UserLogin(BaseModel):
    """User login request."""

    email: str | None = None
    password: str | None = None


class TokenClaims(BaseModel):
    """Identity claims carried by a session token."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    email: str | None = None


class LoginData(BaseModel):
    """Authenticated user plus session token."""

    id: int
    name: str
    email: str
    token: str


class LoginResponse(BaseModel):
    data: LoginData
