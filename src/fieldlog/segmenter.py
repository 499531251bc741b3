"""Split transcription text into paragraph units."""

from __future__ import annotations

import re

from fieldlog.models import Unit

MIN_UNIT_LENGTH = 20

# A line break followed by one or more (possibly whitespace-only) empty lines.
_BLANK_LINE_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n)+")


def segment(text: str, min_length: int = MIN_UNIT_LENGTH) -> list[Unit]:
    """Split text on blank lines into indexed units.

    Paragraphs shorter than ``min_length`` characters (after stripping
    surrounding whitespace) are dropped. Indices count only the paragraphs
    that survive the filter.

    Args:
        text: Raw transcription text
        min_length: Minimum paragraph length to keep

    Returns:
        Ordered list of units, empty if nothing qualifies
    """
    if not text or not text.strip():
        return []

    paragraphs = (p.strip() for p in _BLANK_LINE_RE.split(text))
    kept = [p for p in paragraphs if len(p) >= min_length]
    return [Unit(index=i, text=p) for i, p in enumerate(kept)]
