"""Google OAuth2 identity provider.

The login flow has two legs. ``build_authorization_url`` produces the consent
screen URL the browser is redirected to; Google then calls back with a
one-time ``code`` which ``exchange_code`` trades for the caller's verified
email and name.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from authapi.config import Settings
from authapi.errors import IdentityProviderError

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

DEFAULT_SCOPES = (
    "https://www.googleapis.com/auth/userinfo.email",
    "https://www.googleapis.com/auth/userinfo.profile",
)


@dataclass(frozen=True)
class GoogleIdentity:
    """Verified identity returned by Google."""

    email: str
    name: str


class GoogleIdentityProvider:
    """OAuth2 web-server flow against Google."""

    def __init__(
        self,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str,
        http_client: httpx.Client,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.http_client = http_client

    @classmethod
    def from_settings(
        cls, settings: Settings, http_client: httpx.Client
    ) -> "GoogleIdentityProvider":
        return cls(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_redirect_uri,
            http_client=http_client,
        )

    def is_configured(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def build_authorization_url(self, scopes: tuple[str, ...] | list[str] = DEFAULT_SCOPES) -> str:
        """Build the consent screen URL."""
        params = {
            "client_id": self.client_id or "",
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
            "access_type": "offline",
            "include_granted_scopes": "true",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    def exchange_code(self, code: str) -> GoogleIdentity:
        """Exchange an authorization code for the user's email and name.

        Raises:
            IdentityProviderError: network failure, an error status from
                Google, or a profile without email or name.
        """
        try:
            token_resp = self.http_client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
            token_resp.raise_for_status()
            token_data = token_resp.json()
            if not isinstance(token_data, dict):
                raise IdentityProviderError("Token response is not a JSON object")
            access_token = token_data.get("access_token")
            if not access_token:
                raise IdentityProviderError("Token response has no access_token")

            user_resp = self.http_client.get(
                GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            user_resp.raise_for_status()
            user_info = user_resp.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Google: {e}")
            raise IdentityProviderError(f"HTTP error calling Google: {e}") from e
        except ValueError as e:
            logger.error(f"Unparsable response from Google: {e}")
            raise IdentityProviderError(f"Unparsable response from Google: {e}") from e

        if not isinstance(user_info, dict):
            logger.warning(f"Google profile is not a JSON object: {user_info}")
            raise IdentityProviderError("Google profile is not a JSON object")

        email = user_info.get("email")
        name = user_info.get("name")
        if not email or not name:
            logger.warning(f"Google profile missing email or name: {user_info}")
            raise IdentityProviderError("Google profile missing email or name")

        return GoogleIdentity(email=email, name=name)
