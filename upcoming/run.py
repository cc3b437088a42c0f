"""CLI entry point — fetch upcoming events and print them by day.

Usage:
    upcoming                 # every event in the next seven days
    upcoming -s              # merged busy blocks instead of events
    upcoming -t 48h          # look two days ahead
    upcoming -c work@example.com -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from google.auth.exceptions import GoogleAuthError, TransportError
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error
from rich.console import Console
from rich.markup import escape

from upcoming.collapse import Interval, collapse
from upcoming.config import DEFAULTS, LOG_LEVEL, NO_EVENTS_MESSAGE, load_settings, parse_duration
from upcoming.filters import visible_events
from upcoming.present import render_detail, render_summary
from upcoming.resolve import normalize_event
from upcoming.sources.base import EventSource
from upcoming.sources.google_calendar import GoogleCalendarSource

logger = logging.getLogger(__name__)


def build_lines(
    raw_events: Iterable[Dict[str, Any]],
    summarize: bool,
    today: date,
    settings: Optional[Dict[str, Any]] = None,
    tz: Optional[tzinfo] = None,
) -> List[str]:
    """Run raw events through resolve → filter → (collapse) → present.

    Returns the output lines; a single "no events" line when nothing survives.
    """
    settings = settings or load_settings()
    separator = settings.get("separator", DEFAULTS["separator"])
    normalized = (normalize_event(raw, tz) for raw in raw_events)
    events = list(visible_events(
        (e for e in normalized if e is not None),
        skip_colored=settings.get("skip_colored", True),
    ))

    if not events:
        return [NO_EVENTS_MESSAGE]

    if summarize:
        # Bounded by max_results, so buffering is fine
        blocks = collapse(Interval(e.start, e.end) for e in events)
        logger.debug("Collapsed %d events into %d blocks", len(events), len(blocks))
        return render_summary(blocks, today, separator=separator)

    width = settings.get("summary_width", DEFAULTS["summary_width"])
    return render_detail(events, today, width=width, separator=separator)


def run(source: EventSource, summarize: bool, lookahead: timedelta, settings: Dict[str, Any],
        now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> List[str]:
    """Query ``source`` for [now, now + lookahead) and build the output lines."""
    now = now or datetime.now().astimezone()
    try:
        window_end = now + lookahead
    except OverflowError:
        raise ValueError(f"lookahead {lookahead} reaches past the last representable date") from None
    raw_events = source.fetch_events(now, window_end)
    # Without tz, all-day dates take the local offset in force on their own day
    return build_lines(raw_events, summarize, now.date(), settings, tz=tz)


def _configure_logging(verbosity: int):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = (LOG_LEVEL or "WARNING").upper()
        if not isinstance(logging.getLevelName(level), int):
            level = logging.WARNING
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List or summarize upcoming calendar events")
    parser.add_argument("-s", "--summarize", action="store_true",
                        help="Print merged busy blocks instead of individual events")
    parser.add_argument("-t", "--lookahead", metavar="DURATION",
                        help="How far ahead to look, e.g. 168h, 2d, 1h30m (default from settings)")
    parser.add_argument("-c", "--calendar", metavar="ID",
                        help="Calendar to list (default from settings)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (-vv for debug)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    console = Console(stderr=True)

    try:
        settings = load_settings()
        lookahead = parse_duration(args.lookahead or settings.get("lookahead"))
        source = GoogleCalendarSource(
            calendar_id=args.calendar or settings.get("calendar_id"),
            max_results=settings.get("max_results"),
        )
        lines = run(source, args.summarize, lookahead, settings)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Setup error:[/bold red] {escape(str(e))}", highlight=False)
        return 1
    except (HttpError, HttpLib2Error, TransportError, OSError) as e:
        console.print(f"[bold red]Calendar error:[/bold red] {escape(str(e))}", highlight=False)
        return 1
    except GoogleAuthError as e:
        console.print(f"[bold red]Auth error:[/bold red] {escape(str(e))}", highlight=False)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
