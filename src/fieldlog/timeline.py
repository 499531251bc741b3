"""Clock injection and sequential timestamp derivation."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from fieldlog.models import TranscriptionMetadata

Clock = Callable[[], datetime]

TIME_STEP = timedelta(minutes=10)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


class FixedClock:
    """Clock that always returns the same instant."""

    def __init__(self, moment: datetime):
        self.moment = as_utc(moment)

    def __call__(self) -> datetime:
        return self.moment


def resolve_base_time(metadata: TranscriptionMetadata | None, now: datetime) -> datetime:
    """Start of the run's timeline: the recording date at UTC midnight, else ``now``."""
    if metadata is not None and metadata.recorded_date is not None:
        d = metadata.recorded_date
        return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
    return as_utc(now)


def sequential_timestamp(base: datetime, index: int, step: timedelta = TIME_STEP) -> datetime:
    return base + step * index
