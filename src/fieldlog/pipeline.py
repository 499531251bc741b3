"""Extraction pipeline: transcription text in, ordered activity logs out."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from fieldlog.assembler import RecordAssembler
from fieldlog.config import Config
from fieldlog.geo import CoordinateResolver, StaticCoordinateResolver
from fieldlog.identity import IdFactory, uuid_factory
from fieldlog.lexicon import Lexicon, ensure_valid, load_lexicon
from fieldlog.models import (
    ExtractionOutcome,
    LogRecord,
    OutcomeReason,
    TranscriptionMetadata,
    Unit,
    UnitDiagnostic,
)
from fieldlog.segmenter import segment
from fieldlog.timeline import Clock, as_utc, resolve_base_time, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UnitResult:
    """Either a record or the reason a unit was skipped."""

    index: int
    record: LogRecord | None = None
    diagnostic: UnitDiagnostic | None = None


def _coerce_metadata(metadata: TranscriptionMetadata | dict | None) -> TranscriptionMetadata | None:
    if metadata is None or isinstance(metadata, TranscriptionMetadata):
        return metadata
    return TranscriptionMetadata.model_validate(metadata)


class ExtractionEngine:
    """Turns transcription text into activity log records.

    The lexicon is validated once up front; a corrupted table raises
    ``LexiconError`` here rather than failing unit by unit.
    """

    def __init__(
        self,
        lexicon: Lexicon | None = None,
        config: Config | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
        resolver: CoordinateResolver | None = None,
    ):
        self.config = config or Config()
        if lexicon is None:
            lexicon = load_lexicon(self.config.lexicon_path)
        self.lexicon = ensure_valid(lexicon)
        self.clock = clock or utc_now
        self.id_factory = id_factory or uuid_factory
        self.resolver = resolver or StaticCoordinateResolver(self.lexicon)

    def run(
        self,
        text: str,
        metadata: TranscriptionMetadata | dict | None = None,
    ) -> ExtractionOutcome:
        """Extract log records and report why the result looks the way it does.

        Args:
            text: Raw transcription text, may be empty
            metadata: Optional title, recording date and default location

        Returns:
            ExtractionOutcome with records in unit order, a reason code and
            a diagnostic for every skipped unit
        """
        metadata = _coerce_metadata(metadata)
        if not text or not text.strip():
            logger.info("Empty transcription, nothing to extract")
            return ExtractionOutcome(reason=OutcomeReason.EMPTY_INPUT)

        units = segment(text, self.config.min_unit_length)
        if not units:
            logger.info("No paragraph long enough to extract from")
            return ExtractionOutcome(reason=OutcomeReason.NO_QUALIFYING_UNITS)

        run_time = as_utc(self.clock())
        assembler = RecordAssembler(
            self.lexicon,
            base_time=resolve_base_time(metadata, run_time),
            run_time=run_time,
            metadata=metadata,
            id_factory=self.id_factory,
            resolver=self.resolver,
            time_step=timedelta(minutes=self.config.time_step_minutes),
        )

        results = self._run_units(assembler, units)
        records = [r.record for r in results if r.record is not None]
        diagnostics = [r.diagnostic for r in results if r.diagnostic is not None]

        logger.info(f"Extracted {len(records)} records from {len(units)} units")
        if diagnostics:
            logger.warning(f"Skipped {len(diagnostics)} of {len(units)} units")

        reason = OutcomeReason.OK
        if not records:
            reason = OutcomeReason.ALL_UNITS_FAILED

        return ExtractionOutcome(
            records=records,
            reason=reason,
            units=len(units),
            diagnostics=diagnostics,
        )

    def extract(
        self,
        text: str,
        metadata: TranscriptionMetadata | dict | None = None,
    ) -> list[LogRecord]:
        return self.run(text, metadata).records

    def _run_units(self, assembler: RecordAssembler, units: list[Unit]) -> list[UnitResult]:
        workers = self.config.max_workers
        if workers <= 1 or len(units) == 1:
            return [_run_unit(assembler, unit) for unit in units]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_run_unit, assembler, unit) for unit in units]
            results = [f.result() for f in as_completed(futures)]
        return sorted(results, key=lambda r: r.index)


def _run_unit(assembler: RecordAssembler, unit: Unit) -> UnitResult:
    try:
        return UnitResult(unit.index, record=assembler.assemble(unit))
    except Exception as e:
        logger.warning(f"Skipping unit {unit.index}: {type(e).__name__}: {e}")
        return UnitResult(
            unit.index,
            diagnostic=UnitDiagnostic(
                index=unit.index, error_type=type(e).__name__, message=str(e)
            ),
        )


def extract(
    text: str,
    metadata: TranscriptionMetadata | dict | None = None,
    **engine_options: Any,
) -> list[LogRecord]:
    """Extract log records from a transcription with a fresh engine."""
    return ExtractionEngine(**engine_options).extract(text, metadata)


def extract_with_diagnostics(
    text: str,
    metadata: TranscriptionMetadata | dict | None = None,
    **engine_options: Any,
) -> ExtractionOutcome:
    """Like ``extract`` but returns the full outcome with reason and diagnostics."""
    return ExtractionEngine(**engine_options).run(text, metadata)
