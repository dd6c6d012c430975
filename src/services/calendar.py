"""
Calendar feed fetching and ICS parsing.
"""

import httpx
from icalendar import Calendar

from core.config import CALENDAR_FEED_URL, HTTP_TIMEOUT_SECONDS
from models.events import CalendarEvent


class FeedFetchError(RuntimeError):
    """The calendar feed could not be downloaded or parsed."""


async def fetch_calendar_feed(url: str | None = None, client: httpx.AsyncClient | None = None) -> str:
    """
    Download the ICS feed and return its text.

    Raises:
        FeedFetchError: if no URL is configured or the request fails
    """
    url = url or CALENDAR_FEED_URL
    if not url:
        raise FeedFetchError("No calendar feed URL configured (CALENDAR_FEED_URL)")

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS, follow_redirects=True)

    try:
        response = await client.get(url)
        response.raise_for_status()
        return response.text
    except httpx.HTTPError as e:
        raise FeedFetchError(f"Could not fetch calendar feed: {e}") from e
    finally:
        if owns_client:
            await client.aclose()


def _value(component, name: str):
    """Decoded date/datetime of a property, or None."""
    prop = component.get(name)
    if prop is None:
        return None
    return getattr(prop, "dt", None)


def parse_calendar_feed(text: str) -> dict[str, dict]:
    """
    Parse ICS text into entries keyed by UID.

    Every top-level component is kept and tagged with its kind (VEVENT,
    VTIMEZONE, ...) so callers decide what is eligible.
    """
    try:
        calendar = Calendar.from_ical(text)
    except (ValueError, IndexError, KeyError) as e:
        raise FeedFetchError(f"Could not parse calendar feed: {e}") from e

    entries = {}
    for index, component in enumerate(calendar.subcomponents):
        uid = str(component.get("UID") or f"{component.name}-{index}")
        key = uid
        suffix = 1
        while key in entries:
            suffix += 1
            key = f"{uid}#{suffix}"

        entries[key] = {
            "uid": uid,
            "kind": component.name,
            "summary": str(component.get("SUMMARY") or "").strip(),
            "start": _value(component, "DTSTART"),
            "end": _value(component, "DTEND"),
        }
    return entries


def extract_calendar_events(feed: dict[str, dict]) -> list[CalendarEvent]:
    """Convert parsed feed entries into CalendarEvent dicts, in feed order."""
    return [
        {
            "uid": entry["uid"],
            "summary": entry["summary"],
            "start": entry["start"],
            "end": entry["end"],
            "kind": entry["kind"],
        }
        for entry in feed.values()
    ]


async def load_calendar_events(url: str | None = None, client: httpx.AsyncClient | None = None) -> list[CalendarEvent]:
    """Fetch, parse and convert the feed."""
    text = await fetch_calendar_feed(url, client)
    return extract_calendar_events(parse_calendar_feed(text))


def format_feed_event(event: CalendarEvent) -> str:
    return f"Event: {event['summary']}, Start: {event['start']}, End: {event['end']}"
