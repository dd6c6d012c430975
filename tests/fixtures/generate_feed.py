#!/usr/bin/env python3
"""
Generate a sample ICS feed covering two weeks of announcements.

Used by the test suite and handy for trying the digest locally:

    uv run python tests/fixtures/generate_feed.py 2025-11-02
"""

import random
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from faker import Faker
from icalendar import Calendar, Event, Todo

# Output file
FEED_FILE = Path(__file__).parent / "sample.ics"

HOLIDAYS = [
    "Día de Todos los Santos",
    "Día de la Constitución",
    "Inmaculada Concepción",
    "Navidad",
    "Año Nuevo",
]


def make_calendar() -> Calendar:
    cal = Calendar()
    cal.add("prodid", "-//weekly-calendar-digest//sample feed//EN")
    cal.add("version", "2.0")
    return cal


def make_event(uid: str, summary: str, day: date, all_day: bool = True) -> Event:
    """All-day event by default, otherwise a 09:00-10:00 UTC event."""
    event = Event()
    event.add("uid", uid)
    event.add("summary", summary)
    if all_day:
        event.add("dtstart", day)
        event.add("dtend", day + timedelta(days=1))
    else:
        start = datetime(day.year, day.month, day.day, 9, 0, tzinfo=timezone.utc)
        event.add("dtstart", start)
        event.add("dtend", start + timedelta(hours=1))
    return event


def build_sample_feed(week_start: date, seed: int = 0) -> tuple[str, dict[str, list[str]]]:
    """
    Build an ICS feed with one announcement of each kind per week.

    Returns the feed text and the expected display names per bucket for the
    week starting at `week_start`, in feed order.
    """
    fake = Faker()
    Faker.seed(seed)
    rng = random.Random(seed)

    cal = make_calendar()
    expected: dict[str, list[str]] = {
        "first_day": [],
        "birthday": [],
        "anniversary": [],
        "leave": [],
        "holiday": [],
    }

    for week in range(2):
        offset = timedelta(days=7 * week)
        this_week = week == 0

        def day(n: int) -> date:
            return week_start + offset + timedelta(days=n)

        newcomer = fake.unique.first_name()
        birthday = fake.unique.first_name()
        veteran = fake.unique.first_name()
        rookie = fake.unique.first_name()
        absent = fake.unique.first_name()
        years = rng.randint(2, 9)
        days = rng.randint(1, 15)
        holiday = HOLIDAYS[rng.randrange(len(HOLIDAYS))]

        cal.add_component(make_event(f"first-{week}", f"{newcomer}'s first day!", day(1)))
        cal.add_component(make_event(f"birthday-{week}", f"{birthday}'s birthday!", day(2)))
        cal.add_component(make_event(f"anniversary-{week}", f"{years} years of {veteran} at the company!", day(3)))
        cal.add_component(make_event(f"rookie-{week}", f"{rookie}'s first year anniversary!", day(3), all_day=False))
        cal.add_component(make_event(f"leave-{week}", f"{absent} is on leave for {days} days", day(4)))
        cal.add_component(make_event(f"holiday-{week}", holiday, day(5)))

        if this_week:
            expected["first_day"].append(newcomer)
            expected["birthday"].append(birthday)
            expected["anniversary"].extend([veteran, rookie])
            expected["leave"].append(absent)
            expected["holiday"].append(holiday)

    # Outside both windows
    cal.add_component(make_event("old", "Old news", week_start - timedelta(days=1)))
    cal.add_component(make_event("later", "Far future", week_start + timedelta(days=14)))

    # Not a VEVENT, must never show up
    todo = Todo()
    todo.add("uid", "todo-1")
    todo.add("summary", "Renew the office lease")
    todo.add("dtstart", week_start + timedelta(days=1))
    cal.add_component(todo)

    return cal.to_ical().decode("utf-8"), expected


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python generate_feed.py <week-start YYYY-MM-DD>")
        sys.exit(1)

    start = datetime.strptime(sys.argv[1], "%Y-%m-%d").date()
    text, _ = build_sample_feed(start)
    FEED_FILE.write_text(text, encoding="utf-8")
    print(f"Sample feed written to: {FEED_FILE}")
