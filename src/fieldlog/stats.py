"""Aggregate views over extracted records for dashboard summaries."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from pydantic import BaseModel

from fieldlog.models import LogRecord, LogStatus


class LocationGroup(BaseModel):
    """How many records fall at one location, with its coordinates if known."""

    location: str
    count: int = 0
    coordinates: tuple[float, float] | None = None


def status_counts(records: Iterable[LogRecord]) -> dict[str, int]:
    """Count records per status; every status is present, zero or not."""
    counts = {status.value: 0 for status in LogStatus}
    for record in records:
        counts[record.status.value] += 1
    return counts


def category_counts(records: Iterable[LogRecord]) -> dict[str, int]:
    """Count records per activity category, in first-seen order."""
    return dict(Counter(record.activity_category.value for record in records))


def location_groups(records: Iterable[LogRecord]) -> list[LocationGroup]:
    """Group records by location in first-seen order.

    The first record at a location that carries coordinates supplies them.
    """
    groups: dict[str, LocationGroup] = {}
    for record in records:
        group = groups.setdefault(record.location, LocationGroup(location=record.location))
        group.count += 1
        if group.coordinates is None and record.coordinates is not None:
            group.coordinates = record.coordinates
    return list(groups.values())
