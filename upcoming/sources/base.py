"""Base event source — the query side of the pipeline."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List


class EventSource:
    """Base class for anything that can list raw calendar events.

    Implementations return events ascending by start time, with deleted
    entries excluded and recurring events already expanded.
    """

    source_name: str = ""

    def fetch_events(self, window_start: datetime, window_end: datetime) -> List[Dict[str, Any]]:
        """Override in subclasses to return raw events in [window_start, window_end)."""
        raise NotImplementedError
