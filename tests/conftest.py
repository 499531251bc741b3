"""Shared fixtures for fieldlog tests."""

from datetime import datetime, timezone

import pytest

from fieldlog.identity import SequentialIds
from fieldlog.pipeline import ExtractionEngine
from fieldlog.timeline import FixedClock

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    """A clock frozen at 2024-06-01 12:00 UTC."""
    return FixedClock(NOW)


@pytest.fixture
def engine(clock):
    """Engine with built-in lexicon, fixed clock and counter ids."""
    return ExtractionEngine(clock=clock, id_factory=SequentialIds())
