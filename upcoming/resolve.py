"""Field resolution for raw Google Calendar events.

Turns one event resource (a dict as returned by the Calendar API) into a
NormalizedEvent: start/end instants, the all-day flag, the meeting URL and
the signed-in user's RSVP status.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# First http(s) link inside free-text locations
_URL_PATTERN = re.compile(r'https?://\S+')


@dataclass(frozen=True)
class Instant:
    when: datetime
    all_day: bool


@dataclass(frozen=True)
class NormalizedEvent:
    """A raw event reduced to the fields filtering and rendering use."""

    start: datetime
    end: datetime
    all_day: bool
    summary: str = ""
    url: str = ""
    response_status: Optional[str] = None
    web_link: str = ""
    color_id: str = ""
    end_all_day: bool = False


def _parse_date(text: str, tz: Optional[tzinfo]) -> Optional[Instant]:
    try:
        day = datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return None
    # Local midnight takes the offset in force on that date, not today's
    when = day.replace(tzinfo=tz) if tz is not None else day.astimezone()
    return Instant(when, all_day=True)


def _parse_timestamp(text: str, tz: Optional[tzinfo]) -> Optional[Instant]:
    try:
        when = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    # RFC 3339 requires an offset; a naive value is not a timestamp
    if when.tzinfo is None:
        return None
    return Instant(when, all_day=False)


_PARSERS: Tuple[Callable[[str, Optional[tzinfo]], Optional[Instant]], ...] = (
    _parse_date,
    _parse_timestamp,
)


def parse_instant(text: Optional[str], tz: Optional[tzinfo] = None) -> Optional[Instant]:
    """Parse a date-only or RFC 3339 value, trying date-only first.

    Date-only values become midnight in ``tz``, or in the local zone with the
    offset that applies on that date when ``tz`` is omitted.
    Returns None when nothing parses.
    """
    if not text:
        return None
    text = text.strip()
    for parser in _PARSERS:
        parsed = parser(text, tz)
        if parsed is not None:
            return parsed
    return None


def _boundary_text(boundary: Optional[Dict[str, Any]]) -> str:
    boundary = boundary or {}
    return boundary.get("dateTime") or boundary.get("date") or ""


def start_text(raw: Dict[str, Any]) -> str:
    return _boundary_text(raw.get("start"))


def end_text(raw: Dict[str, Any]) -> str:
    return _boundary_text(raw.get("end"))


def response_status(raw: Dict[str, Any]) -> Optional[str]:
    """Return the RSVP of the attendee flagged ``self``, or None.

    None also covers organizers without a self attendee record.
    """
    for attendee in raw.get("attendees") or []:
        if attendee.get("self"):
            return attendee.get("responseStatus") or None
    return None


def _conference_url(conference: Optional[Dict[str, Any]]) -> str:
    if not conference:
        return ""
    for entry in conference.get("entryPoints") or []:
        code = entry.get("meetingCode")
        if code:
            return f"{entry.get('uri', '')} (meeting:{code} pass:{entry.get('password', '')})"
    return ""


def resolve_url(raw: Dict[str, Any]) -> str:
    """Pick the link to show for an event.

    Order: a link in the location text, then the first conference entry
    point with a meeting code, then the location text as-is.
    """
    location = raw.get("location") or ""

    match = _URL_PATTERN.search(location)
    if match:
        return match.group(0)

    url = _conference_url(raw.get("conferenceData"))
    if url:
        return url

    return location


def normalize_event(raw: Dict[str, Any], tz: Optional[tzinfo] = None) -> Optional[NormalizedEvent]:
    """Build a NormalizedEvent, or None if its start or end cannot be parsed."""
    start = parse_instant(start_text(raw), tz)
    end = parse_instant(end_text(raw), tz)
    if start is None or end is None:
        logger.warning(
            "Skipping event %r: unparseable start %r or end %r",
            raw.get("summary", ""), start_text(raw), end_text(raw),
        )
        return None

    return NormalizedEvent(
        start=start.when,
        end=end.when,
        all_day=start.all_day,
        end_all_day=end.all_day,
        summary=raw.get("summary") or "",
        url=resolve_url(raw),
        response_status=response_status(raw),
        web_link=raw.get("htmlLink") or "",
        color_id=raw.get("colorId") or "",
    )
