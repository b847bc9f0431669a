"""
Google Environment Module - Google Calendar integration

Architecture:
=============
google/
├── __init__.py           # Module exports
├── auth/                 # OAuth authentication
│   ├── client.py         # Installed-app OAuth flow
│   ├── schemas.py        # Auth data structures and token file format
│   └── storage.py        # Client secret loading, token persistence
└── calendar/             # Google Calendar API
    ├── client.py         # Calendar API client
    ├── schemas.py        # Calendar data structures
    └── renderer.py       # Agenda text rendering for conky

Usage:
======
    from gcal_conky.environments.google import GoogleAuthClient, GoogleCalendarClient

    auth_client = GoogleAuthClient(load_client_config(settings.CREDENTIALS_FILE))
    tokens = await auth_client.refresh_access_token(stored.refresh_token)

    calendar = GoogleCalendarClient(access_token=tokens.access_token)
    events = await calendar.list_upcoming_events()
"""

from gcal_conky.environments.google.auth import GoogleAuthClient, TokenStore, CALENDAR_SCOPES
from gcal_conky.environments.google.calendar import GoogleCalendarClient, CalendarEvent

__all__ = [
    "GoogleAuthClient",
    "GoogleCalendarClient",
    "CalendarEvent",
    "TokenStore",
    "CALENDAR_SCOPES",
]
