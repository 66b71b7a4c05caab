"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from authapi.api.dependencies import get_identity_provider, get_user_service
from authapi.errors import MissingFieldsError, UserNotFoundError, WrongCredentialError
from authapi.schemas.auth import LoginData, LoginResponse, UserLogin, UserRegister
from authapi.schemas.user import RegisterResponse, UserResponse
from authapi.services.auth import get_password_hash, issue_user_token, verify_password
from authapi.services.google_oauth import GoogleIdentityProvider
from authapi.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.get("/auth/google")
def google_login(
    provider: Annotated[GoogleIdentityProvider, Depends(get_identity_provider)],
):
    """Redirect to the Google consent screen."""
    return RedirectResponse(provider.build_authorization_url(), status_code=status.HTTP_302_FOUND)


@router.get("/auth/google/callback", response_model=LoginResponse)
def google_callback(
    provider: Annotated[GoogleIdentityProvider, Depends(get_identity_provider)],
    users: Annotated[UserService, Depends(get_user_service)],
    code: str | None = None,
):
    """Exchange the authorization code, find-or-create the user, issue a token."""
    if not code:
        raise MissingFieldsError("Authorization code is required")

    identity = provider.exchange_code(code)
    user = users.get_or_create_by_email(identity.email, identity.name)
    logger.info(f"Google login for user {user.id}")

    return LoginResponse(
        data=LoginData(id=user.id, name=user.name, email=user.email, token=issue_user_token(user))
    )


@router.post("/register", response_model=RegisterResponse)
def register(
    user_data: UserRegister,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user with a password."""
    if not user_data.name or not user_data.email or not user_data.password:
        raise MissingFieldsError("Name, email, and password are required fields")

    user = users.create(
        name=user_data.name,
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
    )

    return RegisterResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    users: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    if not credentials.email:
        raise MissingFieldsError("Email is required", key="message")

    user = users.get_by_email(credentials.email)
    if not user:
        raise UserNotFoundError("User not found", key="message")

    if not user.password_hash:
        raise UserNotFoundError("Password not set", key="message")

    if not credentials.password or not verify_password(credentials.password, user.password_hash):
        logger.info(f"Failed login for user {user.id}")
        raise WrongCredentialError()

    return LoginResponse(
        data=LoginData(id=user.id, name=user.name, email=user.email, token=issue_user_token(user))
    )
