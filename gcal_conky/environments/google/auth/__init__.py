"""
Google Auth Module - OAuth 2.0 Authentication for Google Calendar

OAuth 2.0 Flow Overview (first run):
====================================
1. The widget is started once from a terminal with --auth
2. It prints the authorization URL with the calendar scope
3. The user grants access in the browser and pastes the code back
4. The code is exchanged for access + refresh tokens
5. Tokens are written to the token file

Later runs load the token file and refresh the access token when it
has expired.
"""

from gcal_conky.environments.google.auth.client import GoogleAuthClient
from gcal_conky.environments.google.auth.schemas import (
    GoogleAuthConfig,
    GoogleTokenResponse,
    StoredToken,
    CALENDAR_SCOPES,
)
from gcal_conky.environments.google.auth.storage import TokenStore, load_client_config

__all__ = [
    "GoogleAuthClient",
    "GoogleAuthConfig",
    "GoogleTokenResponse",
    "StoredToken",
    "TokenStore",
    "load_client_config",
    "CALENDAR_SCOPES",
]
