"""Pydantic schemas for API requests and responses."""

from authapi.schemas.auth import LoginData, LoginResponse, TokenClaims, UserLogin, UserRegister
from authapi.schemas.user import (
    MessageResponse,
    RegisterResponse,
    UserCreate,
    UserEnvelope,
    UserListEnvelope,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "TokenClaims",
    "LoginData",
    "LoginResponse",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "RegisterResponse",
    "UserEnvelope",
    "UserListEnvelope",
    "MessageResponse",
]
