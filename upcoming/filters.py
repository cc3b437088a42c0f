"""Visibility rules — which normalized events are never shown."""

from __future__ import annotations

from typing import Iterable, Iterator

from upcoming.resolve import NormalizedEvent

DECLINED = "declined"


def is_visible(event: NormalizedEvent, skip_colored: bool = True) -> bool:
    """False for color-tagged events (personal away time) and declined invites."""
    if skip_colored and event.color_id:
        return False
    return event.response_status != DECLINED


def visible_events(events: Iterable[NormalizedEvent], skip_colored: bool = True) -> Iterator[NormalizedEvent]:
    for event in events:
        if is_visible(event, skip_colored=skip_colored):
            yield event
