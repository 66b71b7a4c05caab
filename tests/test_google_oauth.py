"""Tests for the Google identity provider and the OAuth routes."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from authapi.errors import IdentityProviderError
from authapi.models.user import User
from authapi.services.auth import decode_access_token
from authapi.services.google_oauth import (
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
    GoogleIdentity,
    GoogleIdentityProvider,
)


def make_provider(handler) -> GoogleIdentityProvider:
    return GoogleIdentityProvider(
        client_id="client-id",
        client_secret="client-secret",
        redirect_uri="http://localhost:5000/auth/google/callback",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def google_handler(userinfo, token_status: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == GOOGLE_TOKEN_URL:
            if token_status != 200:
                return httpx.Response(token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "google-access", "expires_in": 3599})
        if str(request.url) == GOOGLE_USERINFO_URL:
            assert request.headers["Authorization"] == "Bearer google-access"
            return httpx.Response(200, json=userinfo)
        return httpx.Response(404)

    return handler


class TestAuthorizationUrl:
    def test_url_params(self):
        provider = make_provider(google_handler({}))
        url = urlparse(provider.build_authorization_url())
        params = parse_qs(url.query)

        assert url.netloc == "accounts.google.com"
        assert params["client_id"] == ["client-id"]
        assert params["redirect_uri"] == ["http://localhost:5000/auth/google/callback"]
        assert params["response_type"] == ["code"]
        assert params["access_type"] == ["offline"]
        assert params["include_granted_scopes"] == ["true"]
        assert "https://www.googleapis.com/auth/userinfo.email" in params["scope"][0]

    def test_url_is_deterministic(self):
        provider = make_provider(google_handler({}))
        first = provider.build_authorization_url(["a", "b"])
        assert first == provider.build_authorization_url(["a", "b"])


class TestExchangeCode:
    def test_returns_identity(self):
        provider = make_provider(google_handler({"email": "g@x.com", "name": "Gee", "id": "123"}))
        assert provider.exchange_code("code") == GoogleIdentity(email="g@x.com", name="Gee")

    def test_missing_name_raises(self):
        provider = make_provider(google_handler({"email": "g@x.com"}))
        with pytest.raises(IdentityProviderError):
            provider.exchange_code("code")

    def test_token_error_raises(self):
        provider = make_provider(google_handler({}, token_status=400))
        with pytest.raises(IdentityProviderError):
            provider.exchange_code("bad-code")

    def test_network_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        provider = make_provider(handler)
        with pytest.raises(IdentityProviderError):
            provider.exchange_code("code")

    def test_token_response_without_access_token_raises(self):
        def handler(request):
            return httpx.Response(200, json={"token_type": "Bearer"})

        provider = make_provider(handler)
        with pytest.raises(IdentityProviderError):
            provider.exchange_code("code")

    def test_non_json_token_response_raises(self, caplog):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        provider = make_provider(handler)
        with pytest.raises(IdentityProviderError):
            provider.exchange_code("code")
        assert "Unparsable response from Google" in caplog.text

    def test_non_object_token_response_raises(self):
        def handler(request):
            return httpx.Response(200, json=[1])

        provider = make_provider(handler)
        with pytest.raises(IdentityProviderError):
            provider.exchange_code("code")

    def test_non_object_profile_raises(self):
        provider = make_provider(google_handler(["g@x.com", "Gee"]))
        with pytest.raises(IdentityProviderError):
            provider.exchange_code("code")


def test_google_login_redirects(client):
    response = client.get("/auth/google", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"].startswith("https://accounts.example.com/consent")


def test_google_callback_creates_user(client, db, identity_provider):
    identity_provider.identities["good"] = GoogleIdentity(email="g@x.com", name="Gee")

    response = client.get("/auth/google/callback", params={"code": "good"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["email"] == "g@x.com"

    user = db.query(User).filter(User.email == "g@x.com").one()
    assert user.password_hash is None
    assert decode_access_token(data["token"])["id"] == user.id


def test_google_callback_reuses_existing_user(client, auth_headers, identity_provider):
    identity_provider.identities["again"] = GoogleIdentity(email=auth_headers.email, name="Ignored")

    response = client.get("/auth/google/callback", params={"code": "again"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == auth_headers.user_id
    assert data["name"] == "Test User"


def test_google_callback_provider_failure_is_generic(client):
    response = client.get("/auth/google/callback", params={"code": "unknown"})
    assert response.status_code == 502
    assert response.json() == {"error": "Google authentication failed"}


def test_google_callback_requires_code(client):
    response = client.get("/auth/google/callback")
    assert response.status_code == 400
