"""
Event classification against configured matcher rules.
"""

from collections.abc import Iterable, Mapping

from core.patterns import compile_pattern, placeholder_kinds
from models.events import (
    Bucket,
    CalendarEvent,
    CategorizedBuckets,
    Category,
    ClassifiedEvent,
    MatcherRule,
)

# Configuration key -> category
RULE_KEYS = {
    "firstDayAnnouncement": Category.FIRST_DAY,
    "birthdayAnnouncement": Category.BIRTHDAY,
    "companyAnniversaryAnnouncementFirstYear": Category.ANNIVERSARY_FIRST_YEAR,
    "companyAnniversaryAnnouncementMultipleYears": Category.ANNIVERSARY_MULTI_YEAR,
    "leaveAnnouncement": Category.LEAVE,
}

ANNIVERSARY_KEY_MARKER = "Anniversary"


class ExtractionError(ValueError):
    """A rule matched but its captures can't fill the category's fields."""


def resolve_category(key: str, template) -> Category | None:
    """Map a configuration key to its category, None if unknown."""
    if key in RULE_KEYS:
        return RULE_KEYS[key]
    if ANNIVERSARY_KEY_MARKER in key:
        if "d" in placeholder_kinds(template):
            return Category.ANNIVERSARY_MULTI_YEAR
        return Category.ANNIVERSARY_FIRST_YEAR
    return None


def resolve_rules(matchers: Iterable[tuple[str, str]] | Mapping[str, str]) -> list[MatcherRule]:
    """
    Build the ordered rule list from (key, template) pairs.

    Rule order is matcher order. Unknown keys are skipped and templates that
    can't fill their category's fields are reported, but nothing raises.
    """
    if isinstance(matchers, Mapping):
        matchers = matchers.items()

    rules = []
    for key, template in matchers:
        category = resolve_category(key, template)
        if category is None:
            print(f"Warning: unknown matcher key '{key}', skipping rule")
            continue

        kinds = placeholder_kinds(template)
        layout = category.layout
        if kinds and (
            kinds.count("s") != len(layout.text_fields) or kinds.count("d") != len(layout.int_fields)
        ):
            print(
                f"Warning: matcher '{key}' template {template!r} doesn't provide "
                f"{len(layout.text_fields)} text and {len(layout.int_fields)} number placeholder(s)"
            )

        rules.append(
            MatcherRule(
                key=key,
                category=category,
                template=template,
                pattern=compile_pattern(template),
                placeholders=kinds,
            )
        )
    return rules


def extract_fields(rule: MatcherRule, captures: tuple) -> dict:
    """
    Assign captures to the rule category's fields.

    %s captures fill text fields in template order and %d captures fill
    integer fields in template order, so "%s's %d year anniversary" and
    "%d years of %s" both produce {years, name}. Text captures are kept
    exactly as matched, surrounding whitespace included.
    """
    layout = rule.category.layout
    texts = [value for kind, value in zip(rule.placeholders, captures) if kind == "s"]
    numbers = [value for kind, value in zip(rule.placeholders, captures) if kind == "d"]

    if len(captures) != len(rule.placeholders):
        raise ExtractionError(
            f"rule '{rule.key}' expected {len(rule.placeholders)} captures, got {len(captures)}"
        )
    if len(texts) < len(layout.text_fields) or len(numbers) < len(layout.int_fields):
        raise ExtractionError(f"rule '{rule.key}' template can't fill {rule.category.name} fields")

    fields = {}
    for name, value in zip(layout.text_fields, texts):
        if value is None:
            raise ExtractionError(f"rule '{rule.key}' capture for '{name}' is missing")
        fields[name] = value
    for name, value in zip(layout.int_fields, numbers):
        try:
            fields[name] = int(value)
        except (TypeError, ValueError):
            raise ExtractionError(f"rule '{rule.key}' capture for '{name}' is not a number: {value!r}")
    fields.update(layout.constants)
    return fields


def classify_event(event: CalendarEvent, rules: list[MatcherRule]) -> ClassifiedEvent:
    """Classify a single event; the first matching rule wins."""
    summary = event["summary"] or ""

    for rule in rules:
        match = rule.pattern.match(summary)
        if not match:
            continue
        try:
            fields = extract_fields(rule, match.groups())
        except ExtractionError as e:
            print(f"Warning: could not extract fields from '{summary}': {e}")
            break
        return {"event": event, "category": rule.category, "fields": fields}

    return {"event": event, "category": Category.UNCLASSIFIED, "fields": {}}


def empty_buckets() -> CategorizedBuckets:
    return {bucket: [] for bucket in Bucket}


def classify_events(events: Iterable[CalendarEvent], rules: list[MatcherRule]) -> CategorizedBuckets:
    """
    Sort events into buckets.

    Every event lands in exactly one bucket; order within a bucket follows
    input order. Unmatched events (and events whose extraction failed) go to
    the holiday bucket with no fields.
    """
    buckets = empty_buckets()
    for event in events:
        classified = classify_event(event, rules)
        buckets[classified["category"].bucket].append(classified)
    return buckets
