#!/usr/bin/env python3
"""
List every event in the calendar feed with the category it would get.

Usage:
    uv run python src/scripts/list_feed_events.py
"""

import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.classification import classify_event, resolve_rules
from core.config import load_matchers
from core.weeks import is_schedulable
from services.calendar import load_calendar_events


async def main():
    """List all feed events and their classification."""
    rules = resolve_rules(load_matchers())

    print("Fetching calendar feed...\n")
    events = await load_calendar_events()
    eligible = [event for event in events if is_schedulable(event)]

    print(f"Found {len(eligible)} events ({len(events) - len(eligible)} other entries skipped)\n")
    print("=" * 80)

    for event in eligible:
        classified = classify_event(event, rules)
        print(f"\n{event['summary']}")
        print(f"  Start: {event['start']}")
        print(f"  End: {event['end']}")
        print(f"  Category: {classified['category'].value}")
        if classified["fields"]:
            print(f"  Fields: {classified['fields']}")

    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
