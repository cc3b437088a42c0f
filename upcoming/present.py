"""Render events and busy blocks as day-grouped text lines.

The only state carried across a rendering is the day of the previous line.
It is threaded through ``advance_day`` as an explicit fold, starting from
today so nothing is printed above the first of today's events.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Iterable, List, Sequence, Tuple, TypeVar

from upcoming.collapse import Interval
from upcoming.config import DEFAULTS
from upcoming.resolve import NormalizedEvent

T = TypeVar("T")

SEPARATOR = DEFAULTS["separator"]
SUMMARY_WIDTH = DEFAULTS["summary_width"]

DATE_FORMAT = "%Y-%m-%d"
START_FORMAT = "%Y-%m-%d %H:%M"
END_FORMAT = "%H:%M"


def day_of(when: datetime) -> date:
    """Calendar day of ``when`` in its own zone."""
    return when.date()


def advance_day(previous_day: date, day: date, separator: str = SEPARATOR) -> Tuple[List[str], date]:
    """One fold step: the lines to emit before an item on ``day``, and the new tracked day."""
    if day != previous_day:
        return [separator], day
    return [], previous_day


def _render(
    items: Iterable[T],
    today: date,
    start_of: Callable[[T], datetime],
    format_line: Callable[[T], str],
    separator: str,
) -> List[str]:
    lines: List[str] = []
    previous_day = today
    for item in items:
        emitted, previous_day = advance_day(previous_day, day_of(start_of(item)), separator)
        lines.extend(emitted)
        lines.append(format_line(item))
    return lines


def format_start(when: datetime, all_day: bool = False) -> str:
    return when.strftime(DATE_FORMAT if all_day else START_FORMAT)


def format_end(when: datetime, all_day: bool = False) -> str:
    return when.strftime(DATE_FORMAT if all_day else END_FORMAT)


def format_detail(event: NormalizedEvent, width: int = SUMMARY_WIDTH) -> str:
    """``<start>-<end> <summary padded> <url>`` plus ``[status: link]`` when not accepted."""
    line = "%s-%s %-*s %s" % (
        format_start(event.start, event.all_day),
        format_end(event.end, event.end_all_day),
        width,
        event.summary,
        event.url,
    )
    if event.response_status and event.response_status != "accepted":
        line += f" [{event.response_status}: {event.web_link}]"
    return line


def format_block(interval: Interval) -> str:
    return f"{format_start(interval.start)}-{format_end(interval.end)}"


def render_detail(
    events: Iterable[NormalizedEvent],
    today: date,
    width: int = SUMMARY_WIDTH,
    separator: str = SEPARATOR,
) -> List[str]:
    return _render(
        events, today,
        start_of=lambda e: e.start,
        format_line=lambda e: format_detail(e, width),
        separator=separator,
    )


def render_summary(
    blocks: Sequence[Interval],
    today: date,
    separator: str = SEPARATOR,
) -> List[str]:
    return _render(blocks, today, start_of=lambda b: b.start, format_line=format_block, separator=separator)

