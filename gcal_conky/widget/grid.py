"""
Calendar Grid - the multi-week month grid shown in the left panel.

Layout:
=======
    ${color1}    Mo Di Mi Do Fr Sa So ${color0}
        12 13 14 15 16 17 18
        19 20 21 22 23 24 25
    Nov 26 27 28 29 30 31  1
         2  3  4  5  6  7  8

- Weeks start on Monday (ISO weekday numbering, Sunday = 7)
- The first row is the week containing the reference date
- A week containing the 1st of a month gets that month's abbreviation
- Every row has the same visible width (GRID_ROW_WIDTH)
"""

from datetime import date, datetime, timedelta
from typing import Iterator, List, Union

from gcal_conky.widget.markup import CONKY, Markup


HEADER = "    Mo Di Mi Do Fr Sa So "

MONTH_ABBR = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

DEFAULT_WEEKS = 14

# 4 characters of month label + 7 cells of "%2d "
GRID_ROW_WIDTH = len(HEADER)

_BLANK_LABEL = "    "


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def first_day_of_week(day: Union[date, datetime]) -> date:
    """Return the Monday on or before the given day."""
    day = _as_date(day)
    return day - timedelta(days=day.isoweekday() - 1)


def last_day_of_week(day: Union[date, datetime]) -> date:
    """Return the Sunday ending the week of the given day."""
    return first_day_of_week(day) + timedelta(days=6)


def week_rows(reference_date: Union[date, datetime], weeks: int = DEFAULT_WEEKS) -> Iterator[List[date]]:
    """
    Yield one list of 7 dates (Monday..Sunday) per grid row.

    The first row is the week containing reference_date.
    """
    start = first_day_of_week(reference_date)
    for week in range(weeks):
        yield [start + timedelta(days=week * 7 + weekday) for weekday in range(7)]


def month_label(week: List[date], markup: Markup = CONKY) -> str:
    """
    Return the 4-character label slot for a week row.

    The label names the month whose 1st falls inside the week, which is
    the case exactly when the week's Sunday is one of the first 7 days
    of its month.
    """
    last_day = week[-1]
    if last_day.day <= 7:
        return markup.highlight(MONTH_ABBR[last_day.month - 1]) + " "
    return _BLANK_LABEL


def render_week(week: List[date], today: date, markup: Markup = CONKY) -> str:
    """Render one grid row: month label followed by 7 day cells."""
    row = month_label(week, markup)
    for day in week:
        cell = f"{day.day:2d} "
        if day == today:
            cell = markup.highlight(cell)
        row += cell
    return row


def build_grid(
    reference_date: Union[date, datetime],
    weeks: int = DEFAULT_WEEKS,
    markup: Markup = CONKY,
) -> List[str]:
    """
    Build the calendar grid lines.

    Args:
        reference_date: "Today"; only the calendar date is used
        weeks: Number of week rows (must be positive)
        markup: Highlight strategy (CONKY or PLAIN)

    Returns:
        weeks + 1 lines: the header followed by one line per week

    Raises:
        ValueError: If weeks is not positive
    """
    if weeks < 1:
        raise ValueError(f"weeks must be a positive integer, got: {weeks}")

    today = _as_date(reference_date)
    output = [markup.highlight(HEADER)]
    for week in week_rows(today, weeks):
        output.append(render_week(week, today, markup))
    return output
