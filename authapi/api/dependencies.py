"""FastAPI dependencies for authentication and database."""

import logging
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from authapi.database import get_db
from authapi.errors import AuthError, MissingTokenError, UnauthorizedError
from authapi.schemas.auth import TokenClaims
from authapi.services.auth import decode_access_token
from authapi.services.google_oauth import GoogleIdentityProvider
from authapi.services.user_service import UserService

logger = logging.getLogger(__name__)


def get_current_claims(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> TokenClaims:
    """Verify the bearer token and attach its claims to the request.

    The header is ``<scheme> <token>``; the scheme itself is not checked.
    Expired and invalid tokens get the same response.
    """
    if not authorization:
        raise MissingTokenError()

    parts = authorization.split()
    if len(parts) < 2:
        logger.info("Rejected token: no token after scheme")
        raise UnauthorizedError()

    try:
        payload = decode_access_token(parts[1])
        claims = TokenClaims.model_validate(payload)
    except AuthError as e:
        logger.info(f"Rejected token: {type(e).__name__}")
        raise UnauthorizedError() from e
    except ValueError as e:
        logger.info(f"Rejected token: bad claims ({e})")
        raise UnauthorizedError() from e

    request.state.user = claims
    return claims


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db)


def get_identity_provider(request: Request) -> GoogleIdentityProvider:
    """Get the Google identity provider created at startup."""
    return request.app.state.identity_provider
