"""Error taxonomy for the API.

Service-level token errors (``AuthError`` and subclasses) never reach the
client directly; the auth dependency maps them to ``UnauthorizedError``.
Every ``AuthAPIError`` is rendered by a single exception handler as
``{key: message}`` with its status code.
"""

from fastapi import status


class AuthError(Exception):
    """Token could not be verified."""


class InvalidTokenError(AuthError):
    """Bad signature, malformed token or missing identity claim."""


class TokenExpiredError(AuthError):
    """Token signature is valid but its expiry has passed."""


class AuthAPIError(Exception):
    """Base error carrying the HTTP status and the JSON body key."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    key: str = "error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, key: str | None = None) -> None:
        self.message = message or self.default_message
        if key is not None:
            self.key = key
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Convert to the response body."""
        return {self.key: self.message}


class MissingFieldsError(AuthAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class MissingTokenError(AuthAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    key = "message"
    default_message = "Token required"


class UnauthorizedError(AuthAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    key = "message"
    default_message = "Unauthorized"


class WrongCredentialError(AuthAPIError):
    status_code = status.HTTP_403_FORBIDDEN
    key = "message"
    default_message = "Wrong password"


class UserNotFoundError(AuthAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class EmailAlreadyRegisteredError(AuthAPIError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class IdentityProviderError(AuthAPIError):
    """Google could not be reached or returned an unusable identity.

    ``detail`` is for logs only; the client always gets the generic message.
    """

    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Google authentication failed"

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__()
