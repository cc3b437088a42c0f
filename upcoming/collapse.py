"""Merge time-ordered intervals into the minimal set of busy blocks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List


@dataclass(frozen=True)
class Interval:
    start: datetime
    end: datetime


def collapse(intervals: Iterable[Interval]) -> List[Interval]:
    """Collapse intervals sorted ascending by start.

    Intervals that overlap or touch (start equal to the previous end) are
    merged; ones fully inside the current block are dropped. The input is
    not re-sorted.
    """
    out: List[Interval] = []
    current = None

    for interval in intervals:
        if current is None:
            current = interval
        elif interval.start > current.end:
            out.append(current)
            current = interval
        elif interval.end > current.end:
            current = Interval(current.start, interval.end)

    if current is not None:
        out.append(current)
    return out
