"""
Calendar Text Renderer - Generate the agenda panel for conky.

This module converts Google Calendar events into the right-hand panel of the
widget: events grouped under one label line per day.

Output:
=======
    Today, 2026-10-18
    ${color1}09:00-10:00${color0} [con] Standup
    ${color1}14:00-15:00${color0} [con] Review
                @Room 2
    Tomorrow, 2026-10-19
    ${color1}all-day    ${color0} [con] Holiday
    Wednesday, 2026-10-21
    ...

Design Goals:
=============
1. Events keep the order the data source returned (sorted by start time)
2. A label line is only emitted when the date changes
3. Clock times are shown as written by the data source (no tz conversion)
4. Lines are not escaped here; the compositor escapes at the output boundary

Usage:
======
    from gcal_conky.environments.google.calendar import CalendarRenderer

    renderer = CalendarRenderer()
    lines = renderer.render_events(events, reference_date=date.today())
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List, Sequence, Union

from gcal_conky.environments.google.calendar.schemas import CalendarEvent, MalformedTimeError
from gcal_conky.widget.markup import CONKY, Markup


logger = logging.getLogger("gcal_conky.environments.google.calendar.renderer")


NO_EVENTS_MESSAGE = "No upcoming events found."

WEEKDAY_NAMES = [
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
]

# Width of "HH:MM-HH:MM"; all-day events are padded to it
TIME_RANGE_WIDTH = 11
ALL_DAY_TEXT = "all-day"

LOCATION_INDENT = " " * 12

# Longest error text shown in the right panel
ERROR_MAX_WIDTH = 80


@dataclass
class DayGroup:
    """Events sharing one calendar date, shown under one label line."""
    day: date
    label: str
    events: List[CalendarEvent] = field(default_factory=list)


def day_label(day: date, today: date) -> str:
    """
    Build the label line for a day.

    Returns:
        "Today, YYYY-MM-DD", "Tomorrow, YYYY-MM-DD" or "<Weekday>, YYYY-MM-DD"
    """
    if day == today:
        prefix = "Today"
    elif day == today + timedelta(days=1):
        prefix = "Tomorrow"
    else:
        prefix = WEEKDAY_NAMES[day.weekday()]
    return f"{prefix}, {day.isoformat()}"


def group_by_day(events: Sequence[CalendarEvent], today: date) -> List[DayGroup]:
    """
    Partition events into consecutive same-date groups.

    Events are never reordered: a new group starts whenever an event's
    date differs from the previous event's date.

    Raises:
        MalformedTimeError: If an event has no usable start date
    """
    groups: List[DayGroup] = []
    for event in events:
        day = event.get_start_date()
        if not groups or groups[-1].day != day:
            groups.append(DayGroup(day=day, label=day_label(day, today)))
        groups[-1].events.append(event)
    return groups


class CalendarRenderer:
    """
    Renders calendar events as conky text lines.

    Attributes:
        markup: Highlight strategy (CONKY color variables or PLAIN text)
    """

    def __init__(self, markup: Markup = CONKY):
        self.markup = markup

    def _format_time_range(self, event: CalendarEvent) -> str:
        """Format "HH:MM-HH:MM", or the all-day placeholder."""
        if event.is_all_day():
            return ALL_DAY_TEXT.ljust(TIME_RANGE_WIDTH)

        if not event.start or not event.end:
            raise MalformedTimeError(f"Event {event.id} is missing a start or end time")

        start = event.start.clock_time()
        end = event.end.clock_time()
        return f"{start.strftime('%H:%M')}-{end.strftime('%H:%M')}"

    def _render_event(self, event: CalendarEvent) -> List[str]:
        """Render a single event as one line, plus one for its location."""
        time_text = self.markup.highlight(self._format_time_range(event))
        status = (event.status or "")[:3]
        lines = [f"{time_text} [{status}] {event.get_display_title()}"]

        if event.location:
            lines.append(f"{LOCATION_INDENT}@{event.location}")

        return lines

    def render_events(
        self,
        events: Sequence[CalendarEvent],
        reference_date: Union[date, datetime],
    ) -> List[str]:
        """
        Render events grouped by day.

        Args:
            events: Events sorted by start time
            reference_date: "Today" for the Today/Tomorrow labels

        Returns:
            Label and event lines, or the single "no events" line

        Raises:
            MalformedTimeError: If a timed event carries a bad dateTime
        """
        if not events:
            return [NO_EVENTS_MESSAGE]

        if isinstance(reference_date, datetime):
            reference_date = reference_date.date()

        output: List[str] = []
        for group in group_by_day(events, reference_date):
            output.append(group.label)
            for event in group.events:
                output.extend(self._render_event(event))

        logger.debug(f"Rendered {len(events)} events into {len(output)} lines")
        return output

    def render_error(self, error_message: str) -> List[str]:
        """
        Render the panel shown when events cannot be fetched.

        Used when the data source fails (e.g., token expired, no network).
        The message is folded onto one line and shortened, since API errors
        carry multi-line response bodies.
        """
        message = " ".join(error_message.split())
        if len(message) > ERROR_MAX_WIDTH:
            message = message[:ERROR_MAX_WIDTH - 3] + "..."
        return [f"Calendar unavailable: {message}"]


def format_events(
    events: Sequence[CalendarEvent],
    reference_date: Union[date, datetime],
    markup: Markup = CONKY,
) -> List[str]:
    """Shortcut for CalendarRenderer(markup).render_events(...)."""
    return CalendarRenderer(markup).render_events(events, reference_date)
