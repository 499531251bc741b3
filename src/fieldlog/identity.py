"""Record identifiers: primary ids, reference ids and episode ids."""

from __future__ import annotations

import itertools
import re
import threading
import uuid
from collections.abc import Callable
from datetime import datetime

IdFactory = Callable[[], str]

_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_DROP_RE = re.compile(r"[^\w\s-]")


def uuid_factory() -> str:
    return str(uuid.uuid4())


class SequentialIds:
    """Counter-backed id factory for reproducible runs and tests."""

    def __init__(self, prefix: str = "log", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self.prefix}-{n:04d}"


def make_reference_id(run_time: datetime, index: int) -> str:
    """Human-readable tag: last five digits of the run's epoch millis plus unit index.

    Unique within a run; two runs may collide.
    """
    millis = int(run_time.timestamp() * 1000)
    return f"REF-{millis % 100000:05d}-{index}"


def make_episode_id(title: str, base_time: datetime) -> str | None:
    """Slug of the video title plus the timeline's base date, e.g. ``site-walk-20240101``.

    Only word characters and hyphens survive, so the id is safe in file names.
    """
    slug = _SLUG_DROP_RE.sub("", title).strip()
    if not slug:
        return None
    return f"{_WHITESPACE_RE.sub('-', slug).lower()}-{base_time:%Y%m%d}"
