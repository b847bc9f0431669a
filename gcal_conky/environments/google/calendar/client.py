"""
Google Calendar API Client - Fetch upcoming calendar events.

This client provides the read side of the Google Calendar API the widget
needs. It handles API requests, error handling, and response parsing.

API Reference:
==============
- Events API: https://developers.google.com/calendar/api/v3/reference/events

Usage Example:
==============
    from gcal_conky.environments.google.calendar import GoogleCalendarClient

    client = GoogleCalendarClient(access_token="ya29.xxx")

    # Get the next 10 events
    events = await client.list_upcoming_events(max_results=10)
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

import httpx

from gcal_conky.environments.base import EventSource, APIError
from gcal_conky.environments.google.auth.schemas import CALENDAR_SCOPES
from gcal_conky.environments.google.calendar.schemas import (
    CalendarEvent,
    CalendarEventsResponse,
)


logger = logging.getLogger("gcal_conky.environments.google.calendar")


class GoogleCalendarClient(EventSource):
    """
    Google Calendar API client.

    Requires a valid access token with calendar.readonly scope.

    Attributes:
        access_token: Google OAuth access token with calendar scope
        calendar_id: Calendar read by list_upcoming_events ("primary")
        timeout: Seconds before a request is abandoned

    Example:
        client = GoogleCalendarClient(access_token="ya29.xxx")
        events = await client.list_upcoming_events()
    """

    service_name = "calendar"
    required_scopes = CALENDAR_SCOPES

    # Google Calendar API base URL
    BASE_URL = "https://www.googleapis.com/calendar/v3"

    def __init__(self, access_token: str, calendar_id: str = "primary", timeout: float = 30.0):
        """
        Initialize the Calendar client.

        Args:
            access_token: Valid Google OAuth access token with calendar scope
            calendar_id: Calendar identifier ("primary" for the user's main calendar)
            timeout: HTTP timeout in seconds
        """
        self.access_token = access_token
        self.calendar_id = calendar_id
        self.timeout = timeout

    # -------------------------------------------------------------------------
    # HTTP CLIENT MANAGEMENT
    # -------------------------------------------------------------------------

    def _get_headers(self) -> dict:
        """Get authorization headers for API requests."""
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
    ) -> dict:
        """
        Make an authenticated request to the Calendar API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path (e.g., "/calendars/primary/events")
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            APIError: If the request fails
        """
        url = f"{self.BASE_URL}{endpoint}"

        async with httpx.AsyncClient() as client:
            try:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(),
                    params=params,
                    timeout=self.timeout,
                )
            except httpx.RequestError as e:
                logger.error(f"Network error in Calendar API: {e}")
                raise APIError(f"Network error: {e}")

        if response.status_code == 401:
            logger.error("Calendar API: Unauthorized (token may be expired)")
            raise APIError(
                "Unauthorized - access token may be expired",
                status_code=401,
                response=response.text,
            )

        if response.status_code == 403:
            logger.error("Calendar API: Forbidden (scope may be missing)")
            raise APIError(
                "Forbidden - calendar scope may not be granted",
                status_code=403,
                response=response.text,
            )

        if response.status_code != 200:
            error_detail = response.text
            logger.error(f"Calendar API error: {response.status_code} - {error_detail}")
            raise APIError(
                f"API request failed: {error_detail}",
                status_code=response.status_code,
                response=error_detail,
            )

        return response.json()

    # -------------------------------------------------------------------------
    # CALENDAR EVENTS
    # -------------------------------------------------------------------------

    async def list_upcoming_events(
        self,
        max_results: int = 10,
        calendar_id: Optional[str] = None,
        time_min: Optional[datetime] = None,
    ) -> List[CalendarEvent]:
        """
        List upcoming events from a calendar.

        Recurring events are expanded into single instances and results
        are ordered by start time, which the agenda grouping relies on.

        Args:
            max_results: Maximum number of events to return (1-2500)
            calendar_id: Override the client's calendar
            time_min: Start of time range (defaults to now)

        Returns:
            List of CalendarEvent objects
        """
        calendar_id = calendar_id or self.calendar_id

        if time_min is None:
            time_min = datetime.now(timezone.utc)

        params = {
            "maxResults": max(1, min(max_results, 2500)),
            "timeMin": time_min.isoformat(),
            "singleEvents": "true",
            "orderBy": "startTime",
            "showDeleted": "false",
        }

        logger.info(
            "Fetching calendar events",
            extra={
                "calendar_id": calendar_id,
                "max_results": max_results,
                "time_min": time_min.isoformat(),
            }
        )

        response_data = await self._make_request(
            method="GET",
            endpoint=f"/calendars/{calendar_id}/events",
            params=params,
        )

        events_response = CalendarEventsResponse(**response_data)

        logger.info(f"Fetched {len(events_response.items)} calendar events")

        return events_response.items
