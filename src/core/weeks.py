"""
Week window calculation and event filtering.

All functions are pure: they take a reference instant and return new values.
"""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from models.events import EVENT_KIND, CalendarEvent, WeekWindow

WEEK_LENGTH = timedelta(days=7)


def local_today(now: datetime, tz: ZoneInfo) -> date:
    """Calendar date of `now` in `tz`. Naive datetimes are taken as local already."""
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(tz).date()


def week_start_on_or_before(day: date, week_start: int) -> date:
    """Most recent `week_start` weekday (0=Monday ... 6=Sunday) at or before `day`."""
    return day - timedelta(days=(day.weekday() - week_start) % 7)


def current_week(now: datetime, tz: ZoneInfo, week_start: int) -> WeekWindow:
    start = week_start_on_or_before(local_today(now, tz), week_start)
    return WeekWindow(start=start, end=start + timedelta(days=6))


def next_week(now: datetime, tz: ZoneInfo, week_start: int) -> WeekWindow:
    this_week = current_week(now, tz, week_start)
    return WeekWindow(start=this_week.start + WEEK_LENGTH, end=this_week.end + WEEK_LENGTH)


def event_local_date(event: CalendarEvent, tz: ZoneInfo) -> date | None:
    """Local calendar date of the event start (all-day dates are used as is)."""
    start = event["start"]
    if start is None:
        return None
    if isinstance(start, datetime):
        return local_today(start, tz)
    return start


def is_schedulable(event: CalendarEvent) -> bool:
    return event["kind"] == EVENT_KIND


def filter_within(events: list[CalendarEvent], window: WeekWindow, tz: ZoneInfo) -> list[CalendarEvent]:
    """
    Select schedulable events that start inside `window`.

    Only the start is considered; an event ending after the window still
    belongs to the week it starts in.
    """
    selected = []
    for event in events:
        if not is_schedulable(event):
            continue
        day = event_local_date(event, tz)
        if day is not None and day in window:
            selected.append(event)
    return selected
