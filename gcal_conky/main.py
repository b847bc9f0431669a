"""
Main entry point - render the widget text for conky.

Run with: gcal-conky  (or python -m gcal_conky)

conky example:
    ${execpi 300 gcal-conky}

First run (stores the OAuth token):
    gcal-conky --auth

Exit codes:
    0  widget rendered
    1  rendered without events (fetch failed, see stderr)
    2  bad configuration or malformed event data
"""

import argparse
import asyncio
import logging
import sys
from datetime import date, datetime
from typing import List, Optional

from pydantic import ValidationError

from gcal_conky.core.config import Settings
from gcal_conky.core.log import setup_logging
from gcal_conky.environments.base import EnvironmentError
from gcal_conky.environments.google.calendar.schemas import MalformedTimeError
from gcal_conky.services.calendar_source import GoogleEventSource
from gcal_conky.services.widget_service import WidgetService
from gcal_conky.widget.markup import PLAIN, Markup


logger = logging.getLogger("gcal_conky.main")

EXIT_OK = 0
EXIT_DEGRADED = 1
EXIT_ERROR = 2


def _iso_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got: {value}")


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gcal-conky",
        description="Calendar grid and upcoming Google Calendar events for conky.",
    )
    parser.add_argument("--weeks", type=_positive_int, help="number of week rows in the grid")
    parser.add_argument("--max-results", type=_positive_int, help="number of upcoming events to list")
    parser.add_argument("--calendar", help="calendar id (default: primary)")
    parser.add_argument("--today", type=_iso_date, help="render as if today were YYYY-MM-DD")
    parser.add_argument("--plain", action="store_true", default=None, help="no conky markup")
    parser.add_argument("--grid-only", action="store_true", help="do not fetch events")
    parser.add_argument("--auth", action="store_true", help="authorize with Google and store the token")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level (default: WARNING)",
    )
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """
    Return settings with command-line values taking precedence.

    Raises:
        ValidationError: If a command-line value breaks a settings bound
    """
    overrides = {
        "WEEKS": args.weeks,
        "MAX_RESULTS": args.max_results,
        "CALENDAR_ID": args.calendar,
        "PLAIN": args.plain,
        "LOG_LEVEL": args.log_level,
    }
    merged = settings.model_dump()
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.model_validate(merged)


def build_event_source(settings: Settings) -> GoogleEventSource:
    return GoogleEventSource(
        credentials_file=settings.CREDENTIALS_FILE,
        token_file=settings.TOKEN_FILE,
        calendar_id=settings.CALENDAR_ID,
        timeout=settings.REQUEST_TIMEOUT,
    )


async def authorize(settings: Settings) -> int:
    """Run the interactive OAuth flow and store the token."""
    source = build_event_source(settings)
    try:
        await source.credential_service().authorize()
    except EnvironmentError as e:
        logger.error(f"Authorization failed: {e}")
        return EXIT_ERROR
    print(f"Token stored in {settings.TOKEN_FILE}", file=sys.stderr)
    return EXIT_OK


async def run(settings: Settings, reference_date: date, grid_only: bool = False) -> int:
    """Render the widget and write it to stdout, one print per line."""
    markup = PLAIN if settings.PLAIN else Markup(accent=settings.HIGHLIGHT_COLOR)
    service = WidgetService(
        event_source=None if grid_only else build_event_source(settings),
        weeks=settings.WEEKS,
        max_results=settings.MAX_RESULTS,
        markup=markup,
    )

    try:
        result = await service.render(reference_date)
    except MalformedTimeError as e:
        logger.error(f"Malformed event data: {e}")
        return EXIT_ERROR

    for line in result.lines:
        print(line)

    return EXIT_DEGRADED if result.degraded else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = apply_overrides(Settings(), args)
    except ValidationError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return EXIT_ERROR

    setup_logging(settings.LOG_LEVEL)

    if args.auth:
        return asyncio.run(authorize(settings))

    reference_date = args.today or date.today()
    return asyncio.run(run(settings, reference_date, grid_only=args.grid_only))


if __name__ == "__main__":
    sys.exit(main())
