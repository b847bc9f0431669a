"""
Tests for Google OAuth - client, schemas and credential files.

Tests for:
- GoogleAuthClient.get_authorization_url()
- exchange_code_for_tokens() / refresh_access_token()
- load_client_config() and TokenStore
- StoredToken expiry

All token endpoint calls are mocked.
"""

import json
import os
import stat
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from gcal_conky.environments.base import (
    AuthenticationError,
    CredentialsError,
    OAuthTokens,
    TokenExpiredError,
)
from gcal_conky.environments.google.auth import (
    CALENDAR_SCOPES,
    GoogleAuthClient,
    GoogleAuthConfig,
    StoredToken,
    TokenStore,
    load_client_config,
)


CLIENT_SECRETS = {
    "installed": {
        "client_id": "123.apps.googleusercontent.com",
        "client_secret": "s3cret",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
        "redirect_uris": ["http://localhost"],
    }
}


@pytest.fixture
def auth_config():
    return GoogleAuthConfig.from_client_secrets(CLIENT_SECRETS)


@pytest.fixture
def auth_client(auth_config):
    return GoogleAuthClient(auth_config)


# ===========================================================================
# CONFIG
# ===========================================================================

class TestClientConfig:
    """Tests for client secret parsing."""

    def test_installed_section(self, auth_config):
        assert auth_config.client_id == "123.apps.googleusercontent.com"
        assert auth_config.client_secret == "s3cret"
        assert auth_config.redirect_uri == "http://localhost"

    def test_web_section_and_defaults(self):
        config = GoogleAuthConfig.from_client_secrets(
            {"web": {"client_id": "id", "client_secret": "secret"}}
        )
        assert config.token_uri == "https://oauth2.googleapis.com/token"
        assert config.redirect_uri == "http://localhost"

    def test_unknown_layout(self):
        with pytest.raises(KeyError):
            GoogleAuthConfig.from_client_secrets({"other": {}})

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text(json.dumps(CLIENT_SECRETS))
        assert load_client_config(path).client_id == "123.apps.googleusercontent.com"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(CredentialsError) as exc_info:
            load_client_config(tmp_path / "missing.json")
        assert exc_info.value.path.endswith("missing.json")

    @pytest.mark.parametrize("content", ["not json", "[]", '{"installed": {"client_id": "x"}}'])
    def test_load_invalid_file(self, tmp_path, content):
        path = tmp_path / "credentials.json"
        path.write_text(content)
        with pytest.raises(CredentialsError):
            load_client_config(path)


# ===========================================================================
# AUTHORIZATION URL
# ===========================================================================

class TestAuthorizationUrl:
    """Tests for get_authorization_url()."""

    def test_url_parameters(self, auth_client):
        url = auth_client.get_authorization_url(scopes=CALENDAR_SCOPES, state="xyz")
        parsed = urlparse(url)
        query = parse_qs(parsed.query)

        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://accounts.google.com/o/oauth2/auth"
        assert query["client_id"] == ["123.apps.googleusercontent.com"]
        assert query["scope"] == ["https://www.googleapis.com/auth/calendar.readonly"]
        assert query["state"] == ["xyz"]
        assert query["access_type"] == ["offline"]
        assert query["response_type"] == ["code"]
        assert query["redirect_uri"] == ["http://localhost"]

    def test_generate_state_is_random(self):
        assert GoogleAuthClient.generate_state() != GoogleAuthClient.generate_state()


# ===========================================================================
# TOKEN ENDPOINT
# ===========================================================================

class TestTokenExchange:
    """Tests for exchange_code_for_tokens() and refresh_access_token()."""

    @pytest.mark.asyncio
    async def test_exchange_success(self, auth_client):
        with patch.object(auth_client, "_post_token", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = httpx.Response(200, json={
                "access_token": "ya29.new",
                "expires_in": 3599,
                "refresh_token": "1//refresh",
                "scope": CALENDAR_SCOPES[0],
                "token_type": "Bearer",
            })

            tokens = await auth_client.exchange_code_for_tokens("4/code")

        assert tokens.access_token == "ya29.new"
        assert tokens.refresh_token == "1//refresh"
        assert tokens.scopes == CALENDAR_SCOPES
        assert tokens.expires_at > datetime.now(timezone.utc)

        sent = mock_post.call_args[0][0]
        assert sent["code"] == "4/code"
        assert sent["grant_type"] == "authorization_code"
        assert sent["redirect_uri"] == "http://localhost"

    @pytest.mark.asyncio
    async def test_exchange_rejected(self, auth_client):
        with patch.object(auth_client, "_post_token", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = httpx.Response(
                400, json={"error": "invalid_grant", "error_description": "Malformed auth code."}
            )

            with pytest.raises(AuthenticationError) as exc_info:
                await auth_client.exchange_code_for_tokens("bad")

        assert "Malformed auth code." in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_exchange_network_error(self, auth_client):
        with patch.object(auth_client, "_post_token", new_callable=AsyncMock) as mock_post:
            mock_post.side_effect = httpx.ConnectError("offline")

            with pytest.raises(AuthenticationError):
                await auth_client.exchange_code_for_tokens("4/code")

    @pytest.mark.asyncio
    async def test_refresh_keeps_refresh_token(self, auth_client):
        with patch.object(auth_client, "_post_token", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = httpx.Response(200, json={"access_token": "ya29.fresh", "expires_in": 3599})

            tokens = await auth_client.refresh_access_token("1//refresh")

        assert tokens.access_token == "ya29.fresh"
        assert tokens.refresh_token == "1//refresh"
        assert mock_post.call_args[0][0]["grant_type"] == "refresh_token"

    @pytest.mark.asyncio
    async def test_refresh_rejected(self, auth_client):
        with patch.object(auth_client, "_post_token", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = httpx.Response(400, json={"error": "invalid_grant"})

            with pytest.raises(TokenExpiredError) as exc_info:
                await auth_client.refresh_access_token("1//revoked")

        assert "invalid_grant" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_refresh_non_json_error(self, auth_client):
        with patch.object(auth_client, "_post_token", new_callable=AsyncMock) as mock_post:
            mock_post.return_value = httpx.Response(502, text="Bad Gateway")

            with pytest.raises(TokenExpiredError) as exc_info:
                await auth_client.refresh_access_token("1//refresh")

        assert "Bad Gateway" in str(exc_info.value)


# ===========================================================================
# TOKEN FILE
# ===========================================================================

class TestStoredToken:
    """Tests for StoredToken expiry handling."""

    NOW = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)

    def test_without_expiry_never_expires(self):
        assert not StoredToken(access_token="a").is_expired(self.NOW)

    def test_future_expiry(self):
        token = StoredToken(access_token="a", expiry=self.NOW + timedelta(minutes=5))
        assert not token.is_expired(self.NOW)

    def test_expiring_within_ten_seconds_counts_as_expired(self):
        token = StoredToken(access_token="a", expiry=self.NOW + timedelta(seconds=5))
        assert token.is_expired(self.NOW)

    def test_naive_expiry_is_utc(self):
        token = StoredToken(access_token="a", expiry=datetime(2026, 10, 18, 8, 0))
        assert token.is_expired(self.NOW)

    def test_from_oauth_tokens(self):
        token = StoredToken.from_oauth_tokens(
            OAuthTokens(access_token="a", refresh_token="r", expires_at=self.NOW)
        )
        assert token.refresh_token == "r"
        assert token.expiry == self.NOW


class TestTokenStore:
    """Tests for TokenStore load/save."""

    def test_load_missing_returns_none(self, tmp_path):
        assert TokenStore(tmp_path / "token.json").load() is None

    def test_save_then_load(self, tmp_path):
        store = TokenStore(tmp_path / "nested" / "token.json")
        token = StoredToken(
            access_token="ya29.a",
            refresh_token="1//r",
            expiry=datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc),
        )
        store.save(token)

        assert store.load() == token
        data = json.loads(store.path.read_text())
        assert set(data) == {"access_token", "token_type", "refresh_token", "expiry"}

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_saved_file_is_private(self, tmp_path):
        store = TokenStore(tmp_path / "token.json")
        store.save(StoredToken(access_token="a"))
        assert stat.S_IMODE(store.path.stat().st_mode) == 0o600

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "token.json"
        path.write_text("{broken")
        with pytest.raises(CredentialsError):
            TokenStore(path).load()
