"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from authapi.api.dependencies import get_current_claims, get_user_service
from authapi.errors import MissingFieldsError, UserNotFoundError
from authapi.schemas.auth import TokenClaims
from authapi.schemas.user import (
    MessageResponse,
    UserCreate,
    UserEnvelope,
    UserListEnvelope,
    UserResponse,
    UserUpdate,
)
from authapi.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/validations", response_model=UserEnvelope)
def create_user(
    user_data: UserCreate,
    current_user: Annotated[TokenClaims, Depends(get_current_claims)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Create a user without a password."""
    if not user_data.name or not user_data.email:
        raise MissingFieldsError("Name and email are required fields")

    user = users.create(name=user_data.name, email=user_data.email)
    return UserEnvelope(data=UserResponse.model_validate(user), message="User created")


@router.get("", response_model=UserListEnvelope)
def list_users(
    users: Annotated[UserService, Depends(get_user_service)],
):
    """List all users."""
    return UserListEnvelope(
        data=[UserResponse.model_validate(u) for u in users.list_users()],
        message="User list",
    )


@router.get("/{user_id}", response_model=UserEnvelope)
def get_user(
    user_id: int,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Get a single user."""
    user = users.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError()
    return UserEnvelope(data=UserResponse.model_validate(user), message="User details")


@router.patch("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: Annotated[TokenClaims, Depends(get_current_claims)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Update a user's name and/or email."""
    user = users.update(user_id, name=user_data.name, email=user_data.email)
    return UserEnvelope(data=UserResponse.model_validate(user), message=f"User {user_id} updated")


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: Annotated[TokenClaims, Depends(get_current_claims)],
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Delete a user."""
    users.delete(user_id)
    return MessageResponse(message=f"User {user_id} deleted")
