import time
from datetime import timezone

import pytest


@pytest.fixture
def utc():
    return timezone.utc


@pytest.fixture
def make_event():
    """Factory for raw Calendar API event dicts with timed boundaries."""

    def _make(start, end, summary="Meeting", **extra):
        event = {
            "summary": summary,
            "start": {"dateTime": start},
            "end": {"dateTime": end},
            "htmlLink": f"https://calendar.example/event?eid={summary.lower().replace(' ', '-')}",
        }
        event.update(extra)
        return event

    return _make


@pytest.fixture
def make_all_day():
    def _make(start, end, summary="Holiday", **extra):
        event = {
            "summary": summary,
            "start": {"date": start},
            "end": {"date": end},
        }
        event.update(extra)
        return event

    return _make


@pytest.fixture
def attendee():
    """Factory for attendee entries; ``is_self`` marks the signed-in account."""

    def _make(response, is_self=True, email="me@example.com"):
        entry = {"email": email, "responseStatus": response}
        if is_self:
            entry["self"] = True
        return entry

    return _make


@pytest.fixture
def pacific_local_time(monkeypatch):
    """Run with America/Los_Angeles as the process-local zone (PDT ends 2026-11-01)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
