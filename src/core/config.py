"""
Configuration constants and environment setup.
"""

import json
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
MATCHERS_FILE = os.environ.get("MATCHERS_FILE", "")

# =============================================================================
# CALENDAR FEED
# =============================================================================

CALENDAR_FEED_URL = os.environ.get("CALENDAR_FEED_URL", "")
HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "30"))

# =============================================================================
# WEEK WINDOWS
# =============================================================================

WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

DIGEST_TIMEZONE = os.environ.get("DIGEST_TIMEZONE", "Europe/Madrid")


def parse_week_start(value: str) -> int:
    """Map a weekday name to its number (monday=0), warning and using sunday when unknown."""
    name = (value or "").strip().lower()
    if name not in WEEKDAYS:
        print(f"Warning: unknown WEEK_START {value!r}. Using sunday.")
        return WEEKDAYS["sunday"]
    return WEEKDAYS[name]


WEEK_START = parse_week_start(os.environ.get("WEEK_START", "sunday"))

# =============================================================================
# MATCHERS
# =============================================================================

# Evaluated top to bottom, first match wins.
DEFAULT_MATCHERS = [
    ("firstDayAnnouncement", "%s's first day!"),
    ("birthdayAnnouncement", "%s's birthday!"),
    ("companyAnniversaryAnnouncementFirstYear", "%s's first year anniversary!"),
    ("companyAnniversaryAnnouncementMultipleYears", "%d years of %s at the company!"),
    ("leaveAnnouncement", "%s is on leave for %d days"),
]

# =============================================================================
# DIGEST / SLACK
# =============================================================================

DIGEST_LANGUAGE = os.environ.get("DIGEST_LANGUAGE", "es")
COMPANY_NAME = os.environ.get("COMPANY_NAME", "Orbitant")

SLACK_BOT_TOKEN = os.environ.get("SLACK_BOT_TOKEN", "")
SLACK_APP_TOKEN = os.environ.get("SLACK_APP_TOKEN", "")
SLACK_CHANNEL_ID = os.environ.get("SLACK_CHANNEL_ID", "")
SLACK_ERROR_CHANNEL_ID = os.environ.get("SLACK_ERROR_CHANNEL_ID", "")

# Next week's sections posted to Slack; the console always shows every bucket.
NEXT_WEEK_SLACK_BUCKETS = [
    name.strip()
    for name in os.environ.get("NEXT_WEEK_SLACK_BUCKETS", "holiday").split(",")
    if name.strip()
]


def load_matchers(path: str | Path | None = None) -> list[tuple[str, str]]:
    """
    Load matcher templates as an ordered list of (key, template) pairs.

    The JSON file holds a single object; its key order is the rule priority.
    Falls back to DEFAULT_MATCHERS when no file is configured or it can't be read.
    """
    path = path or MATCHERS_FILE
    if not path:
        return list(DEFAULT_MATCHERS)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Warning: could not read matchers file {path}: {e}. Using defaults.")
        return list(DEFAULT_MATCHERS)

    if not isinstance(data, dict):
        print(f"Warning: matchers file {path} must contain a JSON object. Using defaults.")
        return list(DEFAULT_MATCHERS)

    return [(str(key), value) for key, value in data.items()]
