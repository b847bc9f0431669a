"""
Tests for GoogleCalendarClient.

Tests for:
- list_upcoming_events() request parameters and response parsing
- _make_request() error mapping (401, 403, 5xx, network)

All HTTP calls are mocked for fast, reliable tests.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from gcal_conky.environments.base import APIError
from gcal_conky.environments.google.calendar.client import GoogleCalendarClient


# ===========================================================================
# FIXTURES
# ===========================================================================

@pytest.fixture
def calendar_client():
    """Create a calendar client with mock token."""
    return GoogleCalendarClient(access_token="mock_access_token")


def _api_response(items: list) -> dict:
    return {
        "kind": "calendar#events",
        "summary": "Primary",
        "timeZone": "Europe/Berlin",
        "items": items,
    }


SAMPLE_ITEMS = [
    {
        "id": "1",
        "summary": "Standup",
        "status": "confirmed",
        "start": {"dateTime": "2026-10-18T09:00:00+02:00", "timeZone": "Europe/Berlin"},
        "end": {"dateTime": "2026-10-18T09:15:00+02:00", "timeZone": "Europe/Berlin"},
    },
    {
        "id": "2",
        "summary": "Holiday",
        "status": "confirmed",
        "start": {"date": "2026-10-19"},
        "end": {"date": "2026-10-20"},
        "htmlLink": "https://www.google.com/calendar/event?eid=abc",
    },
]


# ===========================================================================
# LIST_UPCOMING_EVENTS TESTS
# ===========================================================================

class TestListUpcomingEvents:
    """Tests for list_upcoming_events()."""

    @pytest.mark.asyncio
    async def test_parses_events(self, calendar_client):
        with patch.object(calendar_client, "_make_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = _api_response(SAMPLE_ITEMS)

            events = await calendar_client.list_upcoming_events()

        assert [e.id for e in events] == ["1", "2"]
        assert events[0].start.date_time == "2026-10-18T09:00:00+02:00"
        assert events[1].is_all_day()
        assert events[1].html_link.startswith("https://")

    @pytest.mark.asyncio
    async def test_request_parameters(self, calendar_client):
        time_min = datetime(2026, 10, 18, 7, 0, tzinfo=timezone.utc)

        with patch.object(calendar_client, "_make_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = _api_response([])

            await calendar_client.list_upcoming_events(max_results=10, time_min=time_min)

        call_kwargs = mock_request.call_args[1]
        assert call_kwargs["method"] == "GET"
        assert call_kwargs["endpoint"] == "/calendars/primary/events"
        params = call_kwargs["params"]
        assert params["maxResults"] == 10
        assert params["timeMin"] == "2026-10-18T07:00:00+00:00"
        assert params["singleEvents"] == "true"
        assert params["orderBy"] == "startTime"
        assert params["showDeleted"] == "false"

    @pytest.mark.asyncio
    async def test_calendar_id_override(self):
        client = GoogleCalendarClient(access_token="t", calendar_id="team@example.com")

        with patch.object(client, "_make_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = _api_response([])
            await client.list_upcoming_events()
            assert mock_request.call_args[1]["endpoint"] == "/calendars/team@example.com/events"

            await client.list_upcoming_events(calendar_id="other")
            assert mock_request.call_args[1]["endpoint"] == "/calendars/other/events"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("requested, sent", [(0, 1), (10, 10), (5000, 2500)])
    async def test_max_results_is_clamped(self, calendar_client, requested, sent):
        with patch.object(calendar_client, "_make_request", new_callable=AsyncMock) as mock_request:
            mock_request.return_value = _api_response([])
            await calendar_client.list_upcoming_events(max_results=requested)

        assert mock_request.call_args[1]["params"]["maxResults"] == sent

    @pytest.mark.asyncio
    async def test_api_error_propagates(self, calendar_client):
        with patch.object(calendar_client, "_make_request", new_callable=AsyncMock) as mock_request:
            mock_request.side_effect = APIError("API error", status_code=500)

            with pytest.raises(APIError) as exc_info:
                await calendar_client.list_upcoming_events()

        assert exc_info.value.status_code == 500


# ===========================================================================
# _MAKE_REQUEST TESTS
# ===========================================================================

class TestMakeRequest:
    """Tests for HTTP status handling in _make_request()."""

    @pytest.mark.asyncio
    async def test_success_returns_json(self, calendar_client):
        with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_http:
            mock_http.return_value = httpx.Response(200, json={"items": []})

            data = await calendar_client._make_request("GET", "/calendars/primary/events")

        assert data == {"items": []}
        headers = mock_http.call_args[1]["headers"]
        assert headers["Authorization"] == "Bearer mock_access_token"
        assert mock_http.call_args[1]["url"] == (
            "https://www.googleapis.com/calendar/v3/calendars/primary/events"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status, fragment", [
        (401, "Unauthorized"),
        (403, "Forbidden"),
        (500, "API request failed"),
    ])
    async def test_error_status(self, calendar_client, status, fragment):
        with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_http:
            mock_http.return_value = httpx.Response(status, text="error body")

            with pytest.raises(APIError) as exc_info:
                await calendar_client._make_request("GET", "/calendars/primary/events")

        assert fragment in str(exc_info.value)
        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_network_error(self, calendar_client):
        with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_http:
            mock_http.side_effect = httpx.ConnectError("connection refused")

            with pytest.raises(APIError) as exc_info:
                await calendar_client._make_request("GET", "/calendars/primary/events")

        assert "Network error" in str(exc_info.value)
        assert exc_info.value.status_code is None
