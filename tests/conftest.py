"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- A fixed reference date (Sunday 2026-10-18)
- A CalendarEvent factory accepting API-style time strings
- Logger cleanup so stderr handlers never outlive a captured test
"""

import logging
import re
from datetime import date
from typing import Optional

import pytest

from gcal_conky.environments.google.calendar.schemas import CalendarEvent


MARKUP_PATTERN = re.compile(r"\$\{color\d+\}")


def _strip_markup(text: str) -> str:
    """Remove conky color variables, leaving the visible text."""
    return MARKUP_PATTERN.sub("", text)


def _event_time(value: Optional[str]) -> Optional[dict]:
    if value is None:
        return None
    if len(value) == 10:
        return {"date": value}
    return {"dateTime": value}


def make_event(
    start: str,
    end: str,
    summary: Optional[str] = "Event",
    status: Optional[str] = "confirmed",
    location: Optional[str] = None,
    event_id: str = "evt",
) -> CalendarEvent:
    """Build an event the way the API returns it ("date" or "dateTime")."""
    return CalendarEvent(
        **{
            "id": event_id,
            "summary": summary,
            "status": status,
            "location": location,
            "start": _event_time(start),
            "end": _event_time(end),
        }
    )


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def today() -> date:
    """A Sunday, so the grid must start on the Monday before it."""
    return date(2026, 10, 18)


@pytest.fixture
def event_factory():
    return make_event


@pytest.fixture
def strip_markup():
    return _strip_markup


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging during a test."""
    yield
    package_logger = logging.getLogger("gcal_conky")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
