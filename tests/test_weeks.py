"""Tests for week windows and event filtering."""

from datetime import date, datetime, timedelta, timezone

import pytest

from core.config import WEEKDAYS
from core.weeks import (
    current_week,
    event_local_date,
    filter_within,
    next_week,
    week_start_on_or_before,
)
from models.events import WeekWindow


@pytest.mark.parametrize(
    "today, expected",
    [
        (date(2025, 11, 2), date(2025, 11, 2)),  # Sunday itself
        (date(2025, 11, 5), date(2025, 11, 2)),
        (date(2025, 11, 8), date(2025, 11, 2)),  # Saturday
        (date(2025, 11, 9), date(2025, 11, 9)),
    ],
)
def test_week_start_on_or_before_sunday(today, expected, sunday):
    assert week_start_on_or_before(today, sunday) == expected


def test_week_start_on_or_before_monday():
    assert week_start_on_or_before(date(2025, 11, 2), WEEKDAYS["monday"]) == date(2025, 10, 27)
    assert week_start_on_or_before(date(2025, 11, 3), WEEKDAYS["monday"]) == date(2025, 11, 3)


def test_current_week_spans_seven_days(tz, sunday):
    window = current_week(datetime(2025, 11, 5, 12, 0, tzinfo=tz), tz, sunday)
    assert window == WeekWindow(start=date(2025, 11, 2), end=date(2025, 11, 8))
    assert window.end - window.start == timedelta(days=6)


def test_next_week_is_contiguous(tz, sunday):
    now = datetime(2025, 12, 30, 23, 0, tzinfo=tz)
    this_week = current_week(now, tz, sunday)
    following = next_week(now, tz, sunday)

    assert following.start == this_week.start + timedelta(days=7)
    assert following.start == this_week.end + timedelta(days=1)
    assert following.end == following.start + timedelta(days=6)


def test_windows_do_not_depend_on_call_order(tz, sunday):
    now = datetime(2025, 11, 5, 12, 0, tzinfo=tz)
    following = next_week(now, tz, sunday)
    this_week = current_week(now, tz, sunday)
    assert this_week.start == date(2025, 11, 2)
    assert following.start == date(2025, 11, 9)


def test_current_week_uses_configured_timezone(tz, sunday):
    # Saturday 23:30 UTC is already Sunday in Madrid
    now = datetime(2025, 11, 8, 23, 30, tzinfo=timezone.utc)
    assert current_week(now, tz, sunday).start == date(2025, 11, 9)


def test_event_local_date(tz, make_event):
    assert event_local_date(make_event("x", date(2025, 1, 3)), tz) == date(2025, 1, 3)
    late_utc = datetime(2025, 1, 2, 23, 30, tzinfo=timezone.utc)
    assert event_local_date(make_event("x", late_utc), tz) == date(2025, 1, 3)
    assert event_local_date(make_event("x", None), tz) is None


def test_filter_within_is_inclusive(tz, make_event):
    window = WeekWindow(start=date(2025, 11, 2), end=date(2025, 11, 8))
    events = [
        make_event("before", date(2025, 11, 1)),
        make_event("first", date(2025, 11, 2)),
        make_event("last", datetime(2025, 11, 8, 23, 59, tzinfo=tz)),
        make_event("after", date(2025, 11, 9)),
    ]
    assert [e["summary"] for e in filter_within(events, window, tz)] == ["first", "last"]


def test_filter_within_uses_start_only(tz, make_event):
    window = WeekWindow(start=date(2025, 11, 2), end=date(2025, 11, 8))
    spanning = make_event("Long leave", date(2025, 11, 7), end=date(2025, 11, 20))
    started_before = make_event("Earlier leave", date(2025, 10, 30), end=date(2025, 11, 4))
    assert filter_within([spanning, started_before], window, tz) == [spanning]


def test_filter_within_excludes_other_kinds(tz, make_event):
    window = WeekWindow(start=date(2025, 11, 2), end=date(2025, 11, 8))
    events = [
        make_event("Ana's birthday!", date(2025, 11, 3)),
        make_event("Europe/Madrid", date(2025, 11, 3), kind="VTIMEZONE"),
        make_event("Renew lease", date(2025, 11, 3), kind="VTODO"),
    ]
    assert [e["kind"] for e in filter_within(events, window, tz)] == ["VEVENT"]


def test_this_and_next_week_are_disjoint(tz, sunday, make_event):
    now = datetime(2025, 11, 5, 12, 0, tzinfo=tz)
    events = [make_event(f"day {n}", date(2025, 11, 1) + timedelta(days=n)) for n in range(16)]

    this_week = filter_within(events, current_week(now, tz, sunday), tz)
    following = filter_within(events, next_week(now, tz, sunday), tz)

    assert len(this_week) == len(following) == 7
    assert not {e["uid"] for e in this_week} & {e["uid"] for e in following}
