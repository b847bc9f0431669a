"""
Credential Service - Keep a usable Google access token on disk.

Flow:
=====
1. Load the token file
2. Token still valid → use it
3. Token expired and a refresh token exists → refresh, save, use it
4. Otherwise → interactive authorization (only when allowed), save, use it

conky runs the widget without a terminal, so the interactive step is only
taken when the user runs `gcal-conky --auth`; a widget run without a usable
token fails with AuthenticationError instead of waiting for input.
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Callable, Optional

from gcal_conky.environments.base import AuthenticationError
from gcal_conky.environments.google.auth.client import GoogleAuthClient
from gcal_conky.environments.google.auth.schemas import CALENDAR_SCOPES, StoredToken
from gcal_conky.environments.google.auth.storage import TokenStore


logger = logging.getLogger("gcal_conky.services.credentials")


def console_prompt(auth_url: str) -> str:
    """Show the authorization URL on stderr and read the code from stdin."""
    print(
        "Go to the following link in your browser then type the "
        f"authorization code: \n{auth_url}",
        file=sys.stderr,
    )
    return input().strip()


class CredentialService:
    """
    Provides access tokens backed by the token file.

    Attributes:
        auth_client: OAuth client used for code exchange and refresh
        store: Token file
        prompt: Callable showing the auth URL and returning the pasted code
    """

    def __init__(
        self,
        auth_client: GoogleAuthClient,
        store: TokenStore,
        prompt: Callable[[str], str] = console_prompt,
    ):
        self.auth_client = auth_client
        self.store = store
        self.prompt = prompt

    async def authorize(self) -> StoredToken:
        """
        Run the interactive authorization and persist the token.

        Raises:
            AuthenticationError: If no code is entered or the exchange fails
        """
        auth_url = self.auth_client.get_authorization_url(
            scopes=CALENDAR_SCOPES,
            state=self.auth_client.generate_state(),
        )
        try:
            code = self.prompt(auth_url)
        except EOFError:
            code = ""
        if not code:
            raise AuthenticationError("Unable to read authorization code")

        tokens = await self.auth_client.exchange_code_for_tokens(code)
        token = StoredToken.from_oauth_tokens(tokens)
        self.store.save(token)
        return token

    async def get_access_token(
        self,
        interactive: bool = False,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Return a valid access token, refreshing or authorizing as needed.

        Args:
            interactive: Allow the browser/code-paste flow when no token is usable
            now: Current time for the expiry check (defaults to now, UTC)

        Raises:
            AuthenticationError: If no token is usable and interactive is False
            TokenExpiredError: If the refresh is rejected
            CredentialsError: If the token file cannot be read or written
        """
        now = now or datetime.now(timezone.utc)
        token = self.store.load()

        if token is not None and not token.is_expired(now):
            return token.access_token

        if token is not None and token.refresh_token:
            logger.info("Stored access token expired, refreshing")
            tokens = await self.auth_client.refresh_access_token(token.refresh_token)
            token = StoredToken.from_oauth_tokens(tokens)
            self.store.save(token)
            return token.access_token

        if not interactive:
            raise AuthenticationError(
                f"No usable token in {self.store.path}; run 'gcal-conky --auth' first"
            )

        token = await self.authorize()
        return token.access_token
