"""
Google OAuth Client - Handles OAuth 2.0 flow with Google APIs.

This client implements the installed-application variant of the
authorization code flow: the user opens the authorization URL, grants
access, and pastes the code back into the terminal.

OAuth 2.0 Flow Implementation:
==============================
1. get_authorization_url() → User opens it in a browser
2. exchange_code_for_tokens() → Pasted code becomes access + refresh token
3. refresh_access_token() → Renew expired access tokens on later runs

References:
===========
- OAuth 2.0 for installed apps: https://developers.google.com/identity/protocols/oauth2/native-app
- Token endpoint: https://oauth2.googleapis.com/token
"""

import logging
import secrets
from typing import List
from urllib.parse import urlencode

import httpx

from gcal_conky.environments.base import (
    EnvironmentProvider,
    OAuthTokens,
    AuthenticationError,
    TokenExpiredError,
)
from gcal_conky.environments.google.auth.schemas import (
    GoogleAuthConfig,
    GoogleTokenResponse,
)


logger = logging.getLogger("gcal_conky.environments.google.auth")


class GoogleAuthClient(EnvironmentProvider):
    """
    Google OAuth 2.0 Client implementation.

    Example Usage:
        config = load_client_config(settings.CREDENTIALS_FILE)
        client = GoogleAuthClient(config)

        # Step 1: Show auth URL
        auth_url = client.get_authorization_url(
            scopes=CALENDAR_SCOPES,
            state=client.generate_state(),
        )

        # Step 2: Exchange the code the user pasted
        tokens = await client.exchange_code_for_tokens(code="4/0Ab...")
    """

    provider_name = "google"

    def __init__(self, config: GoogleAuthConfig, timeout: float = 30.0):
        """
        Initialize the Google OAuth client.

        Args:
            config: Client id/secret and endpoints from the client secret file
            timeout: HTTP timeout in seconds
        """
        self.config = config
        self.timeout = timeout

    # -------------------------------------------------------------------------
    # AUTHORIZATION URL
    # -------------------------------------------------------------------------

    def get_authorization_url(
        self,
        scopes: List[str],
        state: str,
        access_type: str = "offline",
        prompt: str = "consent",
    ) -> str:
        """
        Generate the Google OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request (e.g., CALENDAR_SCOPES)
            state: CSRF protection token
            access_type: "offline" for refresh token, "online" for access only
            prompt: "consent" forces consent screen (gets refresh token)

        Returns:
            Full authorization URL to open in a browser
        """
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
            "state": state,
            "access_type": access_type,
            "prompt": prompt,
        }

        auth_url = f"{self.config.auth_uri}?{urlencode(params)}"

        logger.info(
            f"Generated Google auth URL with {len(scopes)} scopes",
            extra={"scopes": scopes}
        )

        return auth_url

    # -------------------------------------------------------------------------
    # TOKEN ENDPOINT
    # -------------------------------------------------------------------------

    async def _post_token(self, data: dict) -> httpx.Response:
        async with httpx.AsyncClient() as client:
            return await client.post(
                self.config.token_uri,
                data=data,
                timeout=self.timeout,
            )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            error_data = response.json() if response.content else {}
        except ValueError:
            error_data = {}
        return error_data.get("error_description") or error_data.get("error") or response.text

    async def exchange_code_for_tokens(self, code: str) -> OAuthTokens:
        """
        Exchange authorization code for access and refresh tokens.

        Args:
            code: Authorization code pasted by the user

        Returns:
            OAuthTokens with access_token, refresh_token, expiration, etc.

        Raises:
            AuthenticationError: If token exchange fails
        """
        token_data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self.config.redirect_uri,
        }

        logger.info("Exchanging authorization code for tokens")

        try:
            response = await self._post_token(token_data)
        except httpx.RequestError as e:
            logger.error(f"Network error during token exchange: {e}")
            raise AuthenticationError(f"Network error: {e}")

        if response.status_code != 200:
            error_msg = self._error_message(response)
            logger.error(f"Token exchange failed: {error_msg}")
            raise AuthenticationError(f"Token exchange failed: {error_msg}")

        token_response = GoogleTokenResponse(**response.json())

        logger.info(
            "Successfully obtained Google tokens",
            extra={
                "has_refresh_token": token_response.refresh_token is not None,
                "expires_in": token_response.expires_in,
            }
        )

        return token_response.to_oauth_tokens()

    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Args:
            refresh_token: The refresh token from initial authorization

        Returns:
            OAuthTokens with new access_token (refresh_token kept if Google omits it)

        Raises:
            TokenExpiredError: If refresh token is invalid or revoked
        """
        refresh_data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        logger.info("Refreshing access token")

        try:
            response = await self._post_token(refresh_data)
        except httpx.RequestError as e:
            logger.error(f"Network error during token refresh: {e}")
            raise TokenExpiredError(f"Network error: {e}")

        if response.status_code != 200:
            error_msg = self._error_message(response)
            logger.error(f"Token refresh failed: {error_msg}")
            raise TokenExpiredError(f"Token refresh failed: {error_msg}")

        token_response = GoogleTokenResponse(**response.json())

        logger.info(
            "Successfully refreshed access token",
            extra={"expires_in": token_response.expires_in}
        )

        return token_response.to_oauth_tokens(fallback_refresh_token=refresh_token)

    # -------------------------------------------------------------------------
    # UTILITY METHODS
    # -------------------------------------------------------------------------

    @staticmethod
    def generate_state() -> str:
        """Generate a cryptographically secure state parameter."""
        return secrets.token_urlsafe(32)
