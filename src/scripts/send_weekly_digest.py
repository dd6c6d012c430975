#!/usr/bin/env python3
"""
Send the weekly calendar digest to Slack.

Fetches the ICS feed, buckets events into this week and next week, classifies
them with the configured matchers, prints the digest and posts it to Slack.

Usage:
    uv run python src/scripts/send_weekly_digest.py
    uv run python src/scripts/send_weekly_digest.py --date 2025-11-07 --dry-run
"""

import argparse
import asyncio
import sys
import traceback
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.classification import resolve_rules
from core.config import DIGEST_LANGUAGE, DIGEST_TIMEZONE, WEEK_START, load_matchers
from models.events import EVENT_KIND
from services.calendar import format_feed_event, load_calendar_events
from services.digest import build_weekly_digest, print_digest
from services.slack import build_slack_message, send_digest_message, send_error_message


def get_reference_time(as_of_date_str: str | None, tz: ZoneInfo) -> datetime:
    """
    Reference instant for the week windows.

    Args:
        as_of_date_str: Optional date string (YYYY-MM-DD). Uses now if None.
    """
    if as_of_date_str:
        return datetime.strptime(as_of_date_str, "%Y-%m-%d").replace(tzinfo=tz)
    return datetime.now(tz)


async def main(as_of_date_str: str | None = None, dry_run: bool = False) -> int:
    """Main entry point. Returns the process exit status."""
    tz = ZoneInfo(DIGEST_TIMEZONE)

    try:
        # 1. Load matcher rules
        rules = resolve_rules(load_matchers())
        print(f"Loaded {len(rules)} matcher rule(s)")

        # 2. Fetch the calendar feed
        events = await load_calendar_events()
        for event in events:
            if event["kind"] == EVENT_KIND:
                print(format_feed_event(event))

        # 3. Build the digest
        now = get_reference_time(as_of_date_str, tz)
        digest = build_weekly_digest(events, now, rules, tz, WEEK_START, DIGEST_LANGUAGE)
        print_digest(digest)

        if dry_run:
            print("\nDry run, nothing sent.")
            return 0

        # 4. Post to Slack
        await send_digest_message(build_slack_message(digest))
        print("\nDone!")
        return 0

    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        await send_error_message(e)
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Send the weekly calendar digest to Slack")
    parser.add_argument(
        "--date",
        help="As-of date (YYYY-MM-DD). The digest covers the week containing it. Defaults to today.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the digest without posting it to Slack.",
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(main(args.date, args.dry_run)))
