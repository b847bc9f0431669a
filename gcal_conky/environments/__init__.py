"""
Environments Module - Calendar data sources

environments/
├── __init__.py           # Module exports
├── base.py               # Exceptions, token structure, abstract interfaces
└── google/               # Google Calendar + OAuth

The widget service depends only on EventSource and the EnvironmentError
family defined in base.py.
"""

from gcal_conky.environments.base import (
    EnvironmentProvider,
    EventSource,
    EnvironmentError,
    AuthenticationError,
    TokenExpiredError,
    CredentialsError,
    APIError,
    OAuthTokens,
)

__all__ = [
    "EnvironmentProvider",
    "EventSource",
    "EnvironmentError",
    "AuthenticationError",
    "TokenExpiredError",
    "CredentialsError",
    "APIError",
    "OAuthTokens",
]
