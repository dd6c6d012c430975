"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

# Add src and tests to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from core.classification import resolve_rules
from core.config import DEFAULT_MATCHERS, WEEKDAYS
from fixtures.generate_feed import build_sample_feed

MADRID = ZoneInfo("Europe/Madrid")

# Sunday 2 November 2025 starts the sample week; "now" is the Wednesday after.
SAMPLE_WEEK_START = date(2025, 11, 2)
SAMPLE_NOW = datetime(2025, 11, 5, 12, 0, tzinfo=MADRID)


@pytest.fixture
def tz():
    return MADRID


@pytest.fixture
def sunday():
    return WEEKDAYS["sunday"]


@pytest.fixture
def rules():
    """Rules for the default matcher templates."""
    return resolve_rules(DEFAULT_MATCHERS)


@pytest.fixture
def make_event():
    """Factory for CalendarEvent dicts."""

    def _make_event(summary, start=date(2025, 11, 4), end=None, kind="VEVENT", uid=None):
        return {
            "uid": uid or summary,
            "summary": summary,
            "start": start,
            "end": end,
            "kind": kind,
        }

    return _make_event


@pytest.fixture
def sample_events(make_event):
    """One event per category, all in the sample week."""
    return [
        make_event("Ana's first day!", date(2025, 11, 3)),
        make_event("Marta's birthday!", date(2025, 11, 4)),
        make_event("4 years of Luis at the company!", date(2025, 11, 5)),
        make_event("Pablo's first year anniversary!", date(2025, 11, 5)),
        make_event("Sara is on leave for 5 days", date(2025, 11, 6)),
        make_event("Fiesta local", date(2025, 11, 7)),
    ]


@pytest.fixture
def sample_feed():
    """Faker-generated ICS feed and the expected names for the sample week."""
    return build_sample_feed(SAMPLE_WEEK_START)
