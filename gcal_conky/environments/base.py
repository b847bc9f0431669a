"""
Base classes and interfaces for calendar data sources.

This module defines the contracts the widget relies on:
- EnvironmentProvider: Abstract base for OAuth providers (strategy for auth)
- EventSource: Abstract base for anything that lists upcoming events

The widget service only knows EventSource, so the Google client can be
replaced by a fake in tests or by another provider later.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from gcal_conky.environments.google.calendar.schemas import CalendarEvent


# ---------------------------------------------------------------------------
# CUSTOM EXCEPTIONS
# ---------------------------------------------------------------------------
# Everything that can go wrong while obtaining events. The widget service
# catches this family and degrades to a grid-only display.


class EnvironmentError(Exception):
    """Base exception for all data-source errors."""
    pass


class AuthenticationError(EnvironmentError):
    """Raised when authentication with a provider fails."""
    pass


class TokenExpiredError(EnvironmentError):
    """Raised when an OAuth token has expired and refresh failed."""
    pass


class CredentialsError(EnvironmentError):
    """Raised when the client secret or token file is missing or invalid."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class APIError(EnvironmentError):
    """Raised when an API call to the provider fails."""

    def __init__(self, message: str, status_code: Optional[int] = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


# ---------------------------------------------------------------------------
# DATA STRUCTURES
# ---------------------------------------------------------------------------


@dataclass
class OAuthTokens:
    """
    Standardized token data from any OAuth provider.

    Returned by code exchange and refresh; persisted by the token store.
    """
    access_token: str
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    scopes: Optional[List[str]] = None


# ---------------------------------------------------------------------------
# ABSTRACT BASE CLASSES
# ---------------------------------------------------------------------------


class EnvironmentProvider(ABC):
    """
    Abstract base class for OAuth providers.

    The widget runs as a desktop program, so the provider implements the
    installed-app flow: the user opens the authorization URL, pastes the
    code back, and the provider exchanges and later refreshes tokens.
    """

    provider_name: str = ""

    @abstractmethod
    def get_authorization_url(self, scopes: List[str], state: str) -> str:
        """
        Generate the OAuth authorization URL.

        Args:
            scopes: List of OAuth scopes to request
            state: CSRF protection state parameter

        Returns:
            URL the user opens in a browser
        """
        pass

    @abstractmethod
    async def exchange_code_for_tokens(self, code: str) -> OAuthTokens:
        """
        Exchange authorization code for access/refresh tokens.

        Raises:
            AuthenticationError: If code exchange fails
        """
        pass

    @abstractmethod
    async def refresh_access_token(self, refresh_token: str) -> OAuthTokens:
        """
        Use refresh token to get a new access token.

        Raises:
            TokenExpiredError: If refresh token is invalid/expired
        """
        pass


class EventSource(ABC):
    """
    Abstract base class for calendar data sources.

    Implementations return events sorted by start time, with recurring
    events already expanded into single instances.
    """

    service_name: str = ""
    required_scopes: List[str] = []

    @abstractmethod
    async def list_upcoming_events(self, max_results: int = 10) -> List["CalendarEvent"]:
        """
        List events starting from now.

        Args:
            max_results: Maximum number of events to return

        Returns:
            Events ordered by start time

        Raises:
            EnvironmentError: If the events cannot be fetched
        """
        pass
