"""
Google Calendar Schemas - Data structures for calendar operations.

These Pydantic models represent Google Calendar API responses
in a clean, typed format for use throughout the widget.

Event times are kept as the strings Google sent and parsed on demand, so a
bad value surfaces as MalformedTimeError at the point where a date or a
clock time is actually needed.

Reference: https://developers.google.com/calendar/api/v3/reference
"""

import datetime as dt
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# YYYY-MM-DDTHH:MM, the minimum a timed value must carry
_DATE_TIME_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")


class MalformedTimeError(ValueError):
    """
    Raised when an event date or time value cannot be parsed.

    Not an EnvironmentError: it signals bad event data,
    not a failure to fetch it.
    """

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value


class EventTime(BaseModel):
    """
    Event start or end time.

    Google Calendar API returns times in one of two formats:
    - dateTime: For timed events (e.g., "2024-01-15T10:00:00-05:00")
    - date: For all-day events (e.g., "2024-01-15")
    """
    model_config = ConfigDict(populate_by_name=True)

    date_time: Optional[str] = Field(None, alias="dateTime")
    date: Optional[str] = Field(None)  # YYYY-MM-DD format for all-day events
    time_zone: Optional[str] = Field(None, alias="timeZone")

    def is_all_day(self) -> bool:
        """Check if this is an all-day event (date only, no time)."""
        return bool(self.date) and not self.date_time

    def calendar_date(self) -> dt.date:
        """
        Get the calendar date, preferring dateTime over date.

        The date is taken as written; no timezone conversion is applied.

        Raises:
            MalformedTimeError: If neither value holds a YYYY-MM-DD date
        """
        value = self.date_time or self.date
        if not value:
            raise MalformedTimeError("Event time has neither dateTime nor date")
        try:
            return dt.datetime.strptime(value[:10], "%Y-%m-%d").date()
        except ValueError:
            raise MalformedTimeError(f"Invalid event date: {value!r}", value=value)

    def clock_time(self) -> dt.time:
        """
        Get the wall-clock time of a timed event.

        Raises:
            MalformedTimeError: If there is no dateTime (all-day event) or it
                is shorter than YYYY-MM-DDTHH:MM or does not parse
        """
        value = self.date_time
        if not value:
            raise MalformedTimeError("All-day event has no time of day", value=self.date)
        if not _DATE_TIME_PREFIX.match(value):
            raise MalformedTimeError(f"Invalid event dateTime: {value!r}", value=value)
        try:
            parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise MalformedTimeError(f"Invalid event dateTime: {value!r}", value=value)
        return parsed.time()


class CalendarEvent(BaseModel):
    """
    A Google Calendar event.

    Contains the fields of the API event resource the widget displays.

    Reference: https://developers.google.com/calendar/api/v3/reference/events
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique event identifier")
    summary: Optional[str] = Field(None, description="Event title")
    location: Optional[str] = Field(None, description="Event location")

    # Times
    start: Optional[EventTime] = Field(None, description="Event start time")
    end: Optional[EventTime] = Field(None, description="Event end time")

    # Status
    status: Optional[str] = Field(None, description="confirmed, tentative, cancelled")

    html_link: Optional[str] = Field(None, alias="htmlLink")

    def is_all_day(self) -> bool:
        """Check if this is an all-day event."""
        if self.start:
            return self.start.is_all_day()
        return False

    def get_display_title(self) -> str:
        """Get a display-friendly title (with fallback)."""
        return self.summary or "(No title)"

    def get_start_date(self) -> dt.date:
        """
        Get the calendar date the event starts on.

        Raises:
            MalformedTimeError: If the event has no usable start
        """
        if not self.start:
            raise MalformedTimeError(f"Event {self.id} has no start time")
        return self.start.calendar_date()


class CalendarEventsResponse(BaseModel):
    """
    Response from the Calendar Events list API.

    Contains a list of events and pagination info.
    """
    model_config = ConfigDict(populate_by_name=True)

    kind: Optional[str] = Field(None)
    summary: Optional[str] = Field(None, description="Calendar title")
    time_zone: Optional[str] = Field(None, alias="timeZone")
    items: List[CalendarEvent] = Field(default_factory=list)
    next_page_token: Optional[str] = Field(None, alias="nextPageToken")
