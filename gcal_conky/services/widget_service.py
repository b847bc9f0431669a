"""
Widget Service - Build the complete widget text.

Architecture:
=============
1. Build the calendar grid for the reference date (left panel)
2. Fetch upcoming events from the event source
3. Render the events grouped by day (right panel)
4. Zip both panels into output lines

The two panels are independent; the compositor is the only place they meet.
A failing event source does not take the grid down: the right panel is
replaced by a one-line error and the result is flagged as degraded.

Usage:
======
    service = WidgetService(event_source=GoogleEventSource(credentials))
    result = await service.render(reference_date=date.today())
    for line in result.lines:
        print(line)
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Union

from gcal_conky.environments.base import EnvironmentError, EventSource
from gcal_conky.environments.google.calendar.renderer import CalendarRenderer
from gcal_conky.widget.compositor import zip_columns
from gcal_conky.widget.grid import DEFAULT_WEEKS, build_grid
from gcal_conky.widget.markup import CONKY, Markup


logger = logging.getLogger("gcal_conky.services.widget")


@dataclass
class WidgetResult:
    """Rendered widget lines plus the fetch error, if any."""
    lines: List[str]
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


class WidgetService:
    """
    Composes the grid and the agenda.

    Attributes:
        event_source: Where events come from (None renders the grid only)
        weeks: Grid rows
        max_results: Events requested from the source
        markup: Highlight/escape strategy
    """

    def __init__(
        self,
        event_source: Optional[EventSource] = None,
        weeks: int = DEFAULT_WEEKS,
        max_results: int = 10,
        markup: Markup = CONKY,
    ):
        self.event_source = event_source
        self.weeks = weeks
        self.max_results = max_results
        self.markup = markup
        self.renderer = CalendarRenderer(markup)

    async def render(self, reference_date: Union[date, datetime]) -> WidgetResult:
        """
        Render the widget for the given day.

        Args:
            reference_date: "Today" for grid highlight and agenda labels

        Returns:
            WidgetResult; error is set when the event source failed

        Raises:
            MalformedTimeError: If an event carries a bad time value
        """
        grid = build_grid(reference_date, self.weeks, self.markup)

        if self.event_source is None:
            return WidgetResult(lines=zip_columns(grid, [], self.markup))

        error = None
        try:
            events = await self.event_source.list_upcoming_events(max_results=self.max_results)
        except EnvironmentError as e:
            logger.error(f"Unable to retrieve upcoming events: {e}")
            error = str(e)
            agenda = self.renderer.render_error(error)
        else:
            agenda = self.renderer.render_events(events, reference_date)

        return WidgetResult(lines=zip_columns(grid, agenda, self.markup), error=error)
