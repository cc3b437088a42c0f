from datetime import date, datetime, timedelta, timezone

from upcoming.collapse import Interval
from upcoming.present import (
    SEPARATOR,
    advance_day,
    day_of,
    format_block,
    format_detail,
    render_detail,
    render_summary,
)
from upcoming.resolve import NormalizedEvent

UTC = timezone.utc
TODAY = date(2026, 10, 18)


def event(day, start, end, summary="Meeting", **fields):
    sh, sm = map(int, start.split(":"))
    eh, em = map(int, end.split(":"))
    return NormalizedEvent(
        start=datetime(2026, 10, day, sh, sm, tzinfo=UTC),
        end=datetime(2026, 10, day, eh, em, tzinfo=UTC),
        all_day=False,
        summary=summary,
        **fields,
    )


class TestAdvanceDay:
    def test_same_day_emits_nothing(self):
        assert advance_day(TODAY, TODAY) == ([], TODAY)

    def test_new_day_emits_separator(self):
        tomorrow = TODAY + timedelta(days=1)
        assert advance_day(TODAY, tomorrow) == ([SEPARATOR], tomorrow)

    def test_custom_separator(self):
        assert advance_day(TODAY, date(2026, 10, 19), "==") == (["=="], date(2026, 10, 19))


def test_day_of_uses_the_timestamps_own_zone():
    late = datetime(2026, 10, 18, 23, 30, tzinfo=timezone(timedelta(hours=-7)))
    assert day_of(late) == date(2026, 10, 18)


class TestFormatDetail:
    def test_accepted_has_no_annotation(self):
        line = format_detail(event(19, "10:00", "10:30", "Standup",
                                   url="https://meet.example/abc", response_status="accepted"))
        assert line == "2026-10-19 10:00-10:30 " + "Standup".ljust(40) + " https://meet.example/abc"

    def test_no_status_has_no_annotation(self):
        line = format_detail(event(19, "10:00", "10:30", "Focus"))
        assert line == "2026-10-19 10:00-10:30 " + "Focus".ljust(40) + " "

    def test_other_status_is_annotated(self):
        line = format_detail(event(19, "14:00", "15:00", "Review", url="Room 4",
                                   response_status="needsAction", web_link="https://cal.example/e1"))
        assert line.endswith(" Room 4 [needsAction: https://cal.example/e1]")

    def test_long_summary_is_not_truncated(self):
        summary = "x" * 50
        line = format_detail(event(19, "10:00", "10:30", summary, url="u"))
        assert f" {summary} u" in line

    def test_custom_width(self):
        line = format_detail(event(19, "10:00", "10:30", "ab", url="u"), width=5)
        assert line == "2026-10-19 10:00-10:30 ab    u"

    def test_all_day_renders_dates(self):
        holiday = NormalizedEvent(
            start=datetime(2026, 10, 20, tzinfo=UTC),
            end=datetime(2026, 10, 21, tzinfo=UTC),
            all_day=True,
            end_all_day=True,
            summary="Holiday",
        )
        assert format_detail(holiday).startswith("2026-10-20-2026-10-21 Holiday")


def test_format_block():
    block = Interval(datetime(2026, 10, 19, 9, 0, tzinfo=UTC), datetime(2026, 10, 19, 11, 0, tzinfo=UTC))
    assert format_block(block) == "2026-10-19 09:00-11:00"


class TestRenderDetail:
    def test_separator_per_new_day(self):
        events = [
            event(19, "09:00", "09:30", "One"),
            event(19, "11:00", "12:00", "Two"),
            event(20, "09:00", "09:30", "Three"),
        ]
        lines = render_detail(events, TODAY)
        assert lines[0] == SEPARATOR
        assert lines[3] == SEPARATOR
        assert lines.count(SEPARATOR) == 2
        assert [l.split()[2] for l in lines if l != SEPARATOR] == ["One", "Two", "Three"]

    def test_no_separator_before_todays_events(self):
        lines = render_detail([event(18, "15:00", "16:00", "Today")], TODAY)
        assert lines == [format_detail(event(18, "15:00", "16:00", "Today"))]

    def test_empty(self):
        assert render_detail([], TODAY) == []


def test_render_summary():
    blocks = [
        Interval(datetime(2026, 10, 18, 15, 0, tzinfo=UTC), datetime(2026, 10, 18, 16, 0, tzinfo=UTC)),
        Interval(datetime(2026, 10, 19, 9, 0, tzinfo=UTC), datetime(2026, 10, 19, 11, 0, tzinfo=UTC)),
        Interval(datetime(2026, 10, 19, 13, 0, tzinfo=UTC), datetime(2026, 10, 19, 13, 30, tzinfo=UTC)),
    ]
    assert render_summary(blocks, TODAY) == [
        "2026-10-18 15:00-16:00",
        SEPARATOR,
        "2026-10-19 09:00-11:00",
        "2026-10-19 13:00-13:30",
    ]
