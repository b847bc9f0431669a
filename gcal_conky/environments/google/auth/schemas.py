"""
Google OAuth Schemas - Data structures for Google authentication.

This module defines the data structures used in the Google OAuth flow
and the on-disk token format. Using Pydantic models ensures type safety
and validation.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from gcal_conky.environments.base import OAuthTokens


# ---------------------------------------------------------------------------
# OAUTH SCOPE CONSTANTS
# ---------------------------------------------------------------------------
# Reference: https://developers.google.com/identity/protocols/oauth2/scopes
# If modifying these scopes, delete the previously saved token file.

CALENDAR_SCOPES = [
    "https://www.googleapis.com/auth/calendar.readonly",
]

# Tokens this close to expiry are refreshed before use
EXPIRY_DELTA = timedelta(seconds=10)


# ---------------------------------------------------------------------------
# CONFIGURATION
# ---------------------------------------------------------------------------

class GoogleAuthConfig(BaseModel):
    """
    OAuth client configuration.

    Loaded from the client secret JSON downloaded from Google Cloud
    Console, which nests these fields under "installed" (desktop app)
    or "web".
    """
    client_id: str = Field(..., description="Google OAuth Client ID")
    client_secret: str = Field(..., description="Google OAuth Client Secret")
    redirect_uri: str = Field(default="http://localhost", description="OAuth callback URL")
    auth_uri: str = Field(default="https://accounts.google.com/o/oauth2/auth")
    token_uri: str = Field(default="https://oauth2.googleapis.com/token")

    @classmethod
    def from_client_secrets(cls, data: Dict[str, Any]) -> "GoogleAuthConfig":
        """
        Build the config from a parsed client secret file.

        Raises:
            KeyError: If neither "installed" nor "web" is present
        """
        section = data.get("installed") or data.get("web")
        if section is None:
            raise KeyError("client secret file has no 'installed' or 'web' section")

        values = {
            key: section[key]
            for key in ("client_id", "client_secret", "auth_uri", "token_uri")
            if key in section
        }
        redirect_uris = section.get("redirect_uris") or []
        if redirect_uris:
            values["redirect_uri"] = redirect_uris[0]
        return cls(**values)


# ---------------------------------------------------------------------------
# TOKEN RESPONSES
# ---------------------------------------------------------------------------

class GoogleTokenResponse(BaseModel):
    """
    Response from Google's token endpoint.

    This is what Google returns when we exchange an auth code for tokens,
    or when we refresh an access token.

    Example response from Google:
    {
        "access_token": "ya29.a0AfB_byC...",
        "expires_in": 3599,
        "refresh_token": "1//0eXyz...",
        "scope": "https://www.googleapis.com/auth/calendar.readonly",
        "token_type": "Bearer"
    }
    """
    access_token: str = Field(..., description="OAuth access token")
    token_type: str = Field(default="Bearer", description="Token type (usually Bearer)")
    expires_in: Optional[int] = Field(None, description="Seconds until expiration")
    refresh_token: Optional[str] = Field(None, description="Refresh token for renewal")
    scope: Optional[str] = Field(None, description="Space-separated scopes granted")

    def get_scopes_list(self) -> List[str]:
        """Convert space-separated scope string to list."""
        if self.scope:
            return self.scope.split()
        return []

    def get_expires_at(self) -> Optional[datetime]:
        """Calculate expiration datetime from expires_in seconds."""
        if self.expires_in:
            return datetime.now(timezone.utc) + timedelta(seconds=self.expires_in)
        return None

    def to_oauth_tokens(self, fallback_refresh_token: Optional[str] = None) -> OAuthTokens:
        """Convert to the provider-agnostic OAuthTokens."""
        return OAuthTokens(
            access_token=self.access_token,
            token_type=self.token_type,
            refresh_token=self.refresh_token or fallback_refresh_token,
            expires_at=self.get_expires_at(),
            scopes=self.get_scopes_list(),
        )


# ---------------------------------------------------------------------------
# PERSISTED TOKEN
# ---------------------------------------------------------------------------

class StoredToken(BaseModel):
    """
    Token as written to the token file.

    Example:
    {
        "access_token": "ya29.a0AfB_byC...",
        "token_type": "Bearer",
        "refresh_token": "1//0eXyz...",
        "expiry": "2026-10-18T09:30:00+00:00"
    }
    """
    access_token: str
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    expiry: Optional[datetime] = None

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Check if the access token is expired or about to expire."""
        if self.expiry is None:
            return False
        now = now or datetime.now(timezone.utc)
        expiry = self.expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return expiry - EXPIRY_DELTA <= now

    @classmethod
    def from_oauth_tokens(cls, tokens: OAuthTokens) -> "StoredToken":
        return cls(
            access_token=tokens.access_token,
            token_type=tokens.token_type,
            refresh_token=tokens.refresh_token,
            expiry=tokens.expires_at,
        )
