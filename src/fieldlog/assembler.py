"""Combine per-field extraction results into complete log records."""

from __future__ import annotations

from datetime import datetime, timedelta

from fieldlog.classifier import classify_status
from fieldlog.extractors import (
    extract_activity,
    extract_date,
    extract_equipment,
    extract_location,
    extract_material,
    extract_measurement,
    extract_personnel,
)
from fieldlog.geo import CoordinateResolver, NullCoordinateResolver
from fieldlog.identity import IdFactory, make_episode_id, make_reference_id, uuid_factory
from fieldlog.lexicon import Lexicon
from fieldlog.models import UNKNOWN_LOCATION, LogRecord, TranscriptionMetadata, Unit
from fieldlog.timeline import TIME_STEP, sequential_timestamp


class RecordAssembler:
    """Builds one LogRecord per unit for a single extraction run.

    Everything that is shared across the run (timeline base, run instant,
    metadata defaults) is fixed at construction, so units can be assembled
    in any order or concurrently.
    """

    def __init__(
        self,
        lexicon: Lexicon,
        base_time: datetime,
        run_time: datetime,
        metadata: TranscriptionMetadata | None = None,
        id_factory: IdFactory = uuid_factory,
        resolver: CoordinateResolver | None = None,
        time_step: timedelta = TIME_STEP,
    ):
        self.lexicon = lexicon
        self.base_time = base_time
        self.run_time = run_time
        self.metadata = metadata or TranscriptionMetadata()
        self.id_factory = id_factory
        self.resolver = resolver or NullCoordinateResolver()
        self.time_step = time_step
        self.episode_id = make_episode_id(self.metadata.title, base_time)

    def assemble(self, unit: Unit) -> LogRecord:
        """Extract every field from the unit and validate the resulting record.

        Missing fields become sentinel values; this never raises for
        absent data. Exceptions only come from a misbehaving extractor or
        a record that fails validation.
        """
        text = unit.text
        lexicon = self.lexicon

        location = extract_location(text, lexicon.locations)
        activity = extract_activity(text, lexicon.activities, unit.index)
        explicit_date = extract_date(text)

        coordinates = None
        if location.matched:
            coordinates = self.resolver.resolve(location.value)

        return LogRecord(
            id=self.id_factory(),
            timestamp=explicit_date or sequential_timestamp(self.base_time, unit.index, self.time_step),
            location=location.value or self.metadata.location.strip() or UNKNOWN_LOCATION,
            activity_category=activity.category,
            activity_type=activity.activity_type,
            equipment=extract_equipment(text, lexicon.equipment).value,
            personnel=extract_personnel(text, lexicon.personnel).value,
            material=extract_material(text, lexicon.materials).value,
            measurement=extract_measurement(text).value,
            status=classify_status(text, lexicon.status_markers),
            notes=text,
            reference_id=make_reference_id(self.run_time, unit.index),
            coordinates=coordinates,
            episode_id=self.episode_id,
        )
