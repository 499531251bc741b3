"""Keyword-driven lifecycle status classification."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from fieldlog.models import LogStatus

# Checked in this order regardless of where markers appear in the text.
STATUS_PRECEDENCE = (
    LogStatus.IN_PROGRESS,
    LogStatus.PLANNED,
    LogStatus.DELAYED,
    LogStatus.CANCELLED,
)


def classify_status(text: str, markers: Mapping[LogStatus, Sequence[str]]) -> LogStatus:
    """Return the first status in precedence order with a marker in the text.

    Args:
        text: Unit text
        markers: Lowercase marker phrases per status

    Returns:
        The matched status, or COMPLETED when no marker is present
    """
    lowered = text.lower()
    for status in STATUS_PRECEDENCE:
        if any(marker in lowered for marker in markers.get(status, ())):
            return status
    return LogStatus.COMPLETED
