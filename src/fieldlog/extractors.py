"""Field extractors: one pure function per log field.

Every extractor looks at a single unit of text and returns its best guess
plus whether anything actually matched. None of them depend on each other,
so they can run in any order.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timezone
from typing import NamedTuple

from fieldlog.lexicon import KnownLocation
from fieldlog.models import (
    UNNAMED_PERSONNEL,
    UNSPECIFIED_EQUIPMENT,
    UNSPECIFIED_MATERIAL,
    ActivityCategory,
)


class FieldMatch(NamedTuple):
    value: str
    matched: bool


class ActivityMatch(NamedTuple):
    category: ActivityCategory
    activity_type: str
    matched: bool


_MEASUREMENT_RE = re.compile(
    r"\b\d+(?:\.\d+)?\s*(?:meters|m|kg|liters|L|feet|ft|gallons|gal|psi|mph|tons)\b",
    re.IGNORECASE,
)

_DATE_RE = re.compile(
    r"\b(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]* "
    r"(\d{1,2})(?:st|nd|rd|th)?,? (\d{4})\b",
    re.IGNORECASE,
)

_MONTHS = {
    name: number
    for number, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"),
        start=1,
    )
}

# Bounds for using a first sentence as the activity type: [min, max)
_SENTENCE_MIN = 10
_SENTENCE_MAX = 100


def extract_location(text: str, locations: Iterable[KnownLocation]) -> FieldMatch:
    """Return the first known location whose name appears verbatim in the text."""
    for location in locations:
        if location.name in text:
            return FieldMatch(location.name, True)
    return FieldMatch("", False)


def extract_activity(
    text: str,
    activities: Mapping[ActivityCategory, Sequence[str]],
    index: int,
) -> ActivityMatch:
    """Classify the activity and pull a short type phrase.

    Categories and their keywords are tried in declaration order and the
    first keyword found (case-insensitive substring) decides the category.

    Args:
        text: Unit text
        activities: Ordered category -> keywords table
        index: 0-based unit index, used for the "Activity N" fallback

    Returns:
        ActivityMatch with category, type phrase and whether a keyword hit
    """
    lowered = text.lower()
    for category, keywords in activities.items():
        for keyword in keywords:
            if keyword in lowered:
                return ActivityMatch(category, _activity_phrase(text, keyword), True)

    return ActivityMatch(ActivityCategory.UNSPECIFIED, _fallback_activity_type(text, index), False)


def _activity_phrase(text: str, keyword: str) -> str:
    match = re.search(rf"\b{re.escape(keyword)}\w*\b(?:\s+\w+){{0,3}}", text, re.IGNORECASE)
    if match:
        return match.group(0).strip()
    return keyword[:1].upper() + keyword[1:]


def _fallback_activity_type(text: str, index: int) -> str:
    first_sentence = text.split(".", 1)[0].strip()
    if _SENTENCE_MIN <= len(first_sentence) < _SENTENCE_MAX:
        return first_sentence
    return f"Activity {index + 1}"


def _qualified_match(text: str, words: Iterable[str], sentinel: str) -> FieldMatch:
    """First lexicon word present in the text, with one preceding word if any."""
    for word in words:
        if word in text:
            match = re.search(rf"\b(?:\w+\s+)?{re.escape(word)}\b", text, re.IGNORECASE)
            return FieldMatch(match.group(0).strip() if match else word, True)
    return FieldMatch(sentinel, False)


def extract_personnel(text: str, personnel: Iterable[str]) -> FieldMatch:
    return _qualified_match(text, personnel, UNNAMED_PERSONNEL)


def extract_equipment(text: str, equipment: Iterable[str]) -> FieldMatch:
    return _qualified_match(text, equipment, UNSPECIFIED_EQUIPMENT)


def extract_material(text: str, materials: Iterable[str]) -> FieldMatch:
    return _qualified_match(text, materials, UNSPECIFIED_MATERIAL)


def extract_measurement(text: str) -> FieldMatch:
    """First number-with-unit in the text, e.g. ``"12.5 meters"``."""
    match = _MEASUREMENT_RE.search(text)
    if match:
        return FieldMatch(match.group(0), True)
    return FieldMatch("", False)


def extract_date(text: str) -> datetime | None:
    """Parse the first "Mar 3rd, 2023" style date as UTC midnight.

    Returns None when no date is mentioned or the mention is not a real
    calendar date (e.g. "Feb 30, 2023").
    """
    match = _DATE_RE.search(text)
    if not match:
        return None

    month = _MONTHS[match.group(1).lower()]
    try:
        return datetime(int(match.group(3)), month, int(match.group(2)), tzinfo=timezone.utc)
    except ValueError:
        return None
