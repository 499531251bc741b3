"""Push extraction bundles to a downstream log store via REST API."""

from __future__ import annotations

import logging
import os

import requests

from fieldlog.models import ExtractionOutcome
from fieldlog.output import build_bundle

logger = logging.getLogger(__name__)


def push_bundle(
    outcome: ExtractionOutcome,
    text: str,
    transcription_id: str,
    summary: str = "",
) -> dict:
    """Store one transcription's logs with the configured log store.

    Reads LOG_SINK_ENDPOINT and LOG_SINK_API_KEY from environment.
    Returns silently if not configured; request failures are logged and
    reported in the returned status, not raised.
    """
    endpoint = os.getenv("LOG_SINK_ENDPOINT", "").rstrip("/")
    api_key = os.getenv("LOG_SINK_API_KEY", "")
    if not endpoint or not api_key:
        logger.debug("Log sink not configured, skipping push")
        return {"status": "skipped", "reason": "not configured"}

    if not outcome.records:
        return {"status": "skipped", "reason": outcome.reason.value}

    headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
    url = f"{endpoint}/transcriptions/{transcription_id}"
    payload = build_bundle(outcome, text, transcription_id, summary)

    try:
        resp = requests.put(url, headers=headers, json=payload, timeout=10)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning("Failed to push transcription %s: %s", transcription_id, e)
        return {"status": "error", "error": str(e), "stored": 0}

    return {"status": "complete", "stored": len(outcome.records)}
