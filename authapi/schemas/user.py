"""User schemas."""

from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Create a user without a password."""

    name: str | None = None
    email: str | None = None


class UserUpdate(BaseModel):
    """Update a user. Omitted fields are left unchanged."""

    name: str | None = None
    email: str | None = None


class UserResponse(BaseModel):
    """Public view of a user. Never includes credential material."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class RegisterResponse(BaseModel):
    message: str
    user: UserResponse


class UserEnvelope(BaseModel):
    data: UserResponse
    message: str


class UserListEnvelope(BaseModel):
    data: list[UserResponse]
    message: str


class MessageResponse(BaseModel):
    message: str
