"""
Data models for calendar events, matcher rules and digest sections.

Events and classification results are TypedDicts (plain dictionaries that
flow through the pipeline); rules and week windows are frozen dataclasses
since they are built once and never change.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, TypedDict

EVENT_KIND = "VEVENT"


class CalendarEvent(TypedDict):
    """Calendar entry read from the feed."""
    uid: str
    summary: str
    start: datetime | date | None
    end: datetime | date | None
    kind: str


class Bucket(Enum):
    """Output buckets, declared in display order."""

    FIRST_DAY = "first_day"
    BIRTHDAY = "birthday"
    ANNIVERSARY = "anniversary"
    LEAVE = "leave"
    HOLIDAY = "holiday"


@dataclass(frozen=True)
class FieldLayout:
    """Fields a category extracts, split by placeholder type."""

    text_fields: tuple[str, ...] = ()
    int_fields: tuple[str, ...] = ()
    constants: dict[str, Any] = field(default_factory=dict)


class Category(Enum):
    """Closed set of event categories a matcher rule can resolve to."""

    FIRST_DAY = "first_day"
    BIRTHDAY = "birthday"
    ANNIVERSARY_FIRST_YEAR = "anniversary_first_year"
    ANNIVERSARY_MULTI_YEAR = "anniversary_multi_year"
    LEAVE = "leave"
    UNCLASSIFIED = "unclassified"

    @property
    def bucket(self) -> Bucket:
        return CATEGORY_BUCKETS[self]

    @property
    def layout(self) -> FieldLayout:
        return CATEGORY_LAYOUTS[self]


CATEGORY_BUCKETS = {
    Category.FIRST_DAY: Bucket.FIRST_DAY,
    Category.BIRTHDAY: Bucket.BIRTHDAY,
    Category.ANNIVERSARY_FIRST_YEAR: Bucket.ANNIVERSARY,
    Category.ANNIVERSARY_MULTI_YEAR: Bucket.ANNIVERSARY,
    Category.LEAVE: Bucket.LEAVE,
    Category.UNCLASSIFIED: Bucket.HOLIDAY,
}

CATEGORY_LAYOUTS = {
    Category.FIRST_DAY: FieldLayout(text_fields=("name",)),
    Category.BIRTHDAY: FieldLayout(text_fields=("name",)),
    Category.ANNIVERSARY_FIRST_YEAR: FieldLayout(text_fields=("name",), constants={"years": 1}),
    Category.ANNIVERSARY_MULTI_YEAR: FieldLayout(text_fields=("name",), int_fields=("years",)),
    Category.LEAVE: FieldLayout(text_fields=("name",), int_fields=("days",)),
    Category.UNCLASSIFIED: FieldLayout(),
}


@dataclass(frozen=True)
class MatcherRule:
    """Configured matcher: a category paired with its compiled template."""

    key: str
    category: Category
    template: str
    pattern: re.Pattern
    placeholders: tuple[str, ...] = ()


class ClassifiedEvent(TypedDict):
    """Event with its category and the fields extracted from its summary."""
    event: CalendarEvent
    category: Category
    fields: dict[str, Any]


CategorizedBuckets = dict[Bucket, list[ClassifiedEvent]]


@dataclass(frozen=True)
class WeekWindow:
    """Seven-day date range, inclusive on both ends."""

    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


class DigestSection(TypedDict):
    """Labelled block of display lines for one bucket."""
    bucket: Bucket
    title: str
    lines: list[str]


@dataclass
class WeeklyDigest:
    """Sections for the current and the following week."""

    this_week: WeekWindow
    next_week: WeekWindow
    this_week_sections: list[DigestSection]
    next_week_sections: list[DigestSection]
    this_week_buckets: CategorizedBuckets
    next_week_buckets: CategorizedBuckets
    language: str = "es"
