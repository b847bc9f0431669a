"""
Google Calendar Module - Calendar API Integration

This module fetches upcoming events from Google Calendar and renders them
as the agenda panel of the widget.

Features:
=========
- List upcoming events (recurring events expanded, ordered by start)
- Group events by day with Today/Tomorrow/weekday labels
- Explicit all-day event formatting
"""

from gcal_conky.environments.google.calendar.client import GoogleCalendarClient
from gcal_conky.environments.google.calendar.schemas import (
    CalendarEvent,
    CalendarEventsResponse,
    EventTime,
    MalformedTimeError,
)
from gcal_conky.environments.google.calendar.renderer import (
    CalendarRenderer,
    DayGroup,
    format_events,
    group_by_day,
)

__all__ = [
    "GoogleCalendarClient",
    "CalendarEvent",
    "CalendarEventsResponse",
    "EventTime",
    "MalformedTimeError",
    "CalendarRenderer",
    "DayGroup",
    "format_events",
    "group_by_day",
]
