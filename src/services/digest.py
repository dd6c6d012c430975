"""
Weekly digest building: week partitioning, classification and display lines.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from core.classification import classify_events
from core.weeks import current_week, event_local_date, filter_within, next_week
from models.events import (
    Bucket,
    CalendarEvent,
    CategorizedBuckets,
    ClassifiedEvent,
    DigestSection,
    MatcherRule,
    WeeklyDigest,
    WeekWindow,
)

THIS_WEEK = "this_week"
NEXT_WEEK = "next_week"

# =============================================================================
# LABELS
# =============================================================================

SECTION_TITLES = {
    "es": {
        Bucket.FIRST_DAY: "Nuevas incorporaciones",
        Bucket.BIRTHDAY: "Cumpleaños",
        Bucket.ANNIVERSARY: "Aniversarios de empresa",
        Bucket.LEAVE: "Ausencias",
        Bucket.HOLIDAY: "Días festivos",
    },
    "en": {
        Bucket.FIRST_DAY: "First Days",
        Bucket.BIRTHDAY: "Birthdays",
        Bucket.ANNIVERSARY: "Anniversaries",
        Bucket.LEAVE: "Leaves",
        Bucket.HOLIDAY: "Holidays",
    },
}

# Overrides for next week's sections
NEXT_WEEK_TITLES = {
    "es": {Bucket.HOLIDAY: "Días festivos para la próxima semana"},
    "en": {Bucket.HOLIDAY: "Holidays next week"},
}

UNITS = {
    "es": {"years": "año(s)", "days": "día(s)"},
    "en": {"years": "year(s)", "days": "day(s)"},
}

INTRO_TEXTS = {
    "es": "Aquí tienes el resumen semanal de {company}",
    "en": "Here is the weekly summary for {company}",
}

THIS_WEEK_HEADERS = {
    "es": "Eventos de esta semana",
    "en": "Events this week",
}

WEEK_HEADINGS = {
    THIS_WEEK: "=== Events This Week ===",
    NEXT_WEEK: "=== Events Next Week ===",
}


def _language(language: str) -> str:
    return language if language in SECTION_TITLES else "en"


def intro_text(company_name: str, language: str) -> str:
    return INTRO_TEXTS[_language(language)].format(company=company_name)


def this_week_header(language: str) -> str:
    return THIS_WEEK_HEADERS[_language(language)]


# =============================================================================
# FORMATTING
# =============================================================================


def format_day_month(value: datetime | date, tz: ZoneInfo) -> str:
    """Format as DD/MM in local calendar terms, e.g. '03/01'."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(tz)
    return f"{value.day:02d}/{value.month:02d}"


def format_event_line(classified: ClassifiedEvent, language: str, tz: ZoneInfo) -> str:
    """Display line for one classified event, without the bullet."""
    event = classified["event"]
    fields = classified["fields"]
    bucket = classified["category"].bucket
    units = UNITS[_language(language)]

    day = event_local_date(event, tz)
    when = f" ({format_day_month(day, tz)})" if day is not None else ""

    if bucket in (Bucket.FIRST_DAY, Bucket.BIRTHDAY):
        return f"{fields['name']}{when}"
    if bucket == Bucket.ANNIVERSARY:
        return f"{fields['name']} - {fields['years']} {units['years']}{when}"
    if bucket == Bucket.LEAVE:
        return f"{fields['name']} - {fields['days']} {units['days']}{when}"
    return f"{event['summary']}{when}"


def section_title(bucket: Bucket, week_label: str, language: str) -> str:
    language = _language(language)
    if week_label == NEXT_WEEK and bucket in NEXT_WEEK_TITLES[language]:
        return NEXT_WEEK_TITLES[language][bucket]
    return SECTION_TITLES[language][bucket]


def build_sections(
    categorized: CategorizedBuckets, week_label: str, language: str, tz: ZoneInfo
) -> list[DigestSection]:
    """
    Build one section per non-empty bucket, in display order.

    Lines keep classification order; empty buckets produce no section.
    """
    sections = []
    for bucket in Bucket:
        classified_events = categorized.get(bucket) or []
        if not classified_events:
            continue
        sections.append(
            {
                "bucket": bucket,
                "title": section_title(bucket, week_label, language),
                "lines": [format_event_line(c, language, tz) for c in classified_events],
            }
        )
    return sections


# =============================================================================
# DIGEST
# =============================================================================


def build_week(
    events: list[CalendarEvent],
    window: WeekWindow,
    week_label: str,
    rules: list[MatcherRule],
    tz: ZoneInfo,
    language: str,
) -> tuple[CategorizedBuckets, list[DigestSection]]:
    categorized = classify_events(filter_within(events, window, tz), rules)
    return categorized, build_sections(categorized, week_label, language, tz)


def build_weekly_digest(
    events: list[CalendarEvent],
    now: datetime,
    rules: list[MatcherRule],
    tz: ZoneInfo,
    week_start: int,
    language: str,
) -> WeeklyDigest:
    """Partition events into this and next week, classify each and build sections."""
    this_window = current_week(now, tz, week_start)
    next_window = next_week(now, tz, week_start)

    this_buckets, this_sections = build_week(events, this_window, THIS_WEEK, rules, tz, language)
    next_buckets, next_sections = build_week(events, next_window, NEXT_WEEK, rules, tz, language)

    return WeeklyDigest(
        this_week=this_window,
        next_week=next_window,
        this_week_sections=this_sections,
        next_week_sections=next_sections,
        this_week_buckets=this_buckets,
        next_week_buckets=next_buckets,
        language=_language(language),
    )


def format_console_digest(digest: WeeklyDigest) -> list[str]:
    """Console mirror of the digest: a heading per week, then each section."""
    lines = []
    for week_label, window, sections in (
        (THIS_WEEK, digest.this_week, digest.this_week_sections),
        (NEXT_WEEK, digest.next_week, digest.next_week_sections),
    ):
        lines.append(f"\n{WEEK_HEADINGS[week_label]} ({window.start} - {window.end})")
        if not sections:
            lines.append("  (no events)")
        for section in sections:
            lines.append(f"\n{section['title']}:")
            lines.extend(f"  - {line}" for line in section["lines"])
    return lines


def print_digest(digest: WeeklyDigest):
    for line in format_console_digest(digest):
        print(line)
