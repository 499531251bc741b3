"""Pydantic models for structured activity logs extracted from transcriptions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNKNOWN_LOCATION = "Unknown Location"
UNNAMED_PERSONNEL = "Unnamed Personnel"
UNSPECIFIED_EQUIPMENT = "Unspecified Equipment"
UNSPECIFIED_MATERIAL = "Unspecified Material"


class ActivityCategory(str, Enum):
    """Closed set of activity categories."""

    INSTALLATION = "Installation"
    MAINTENANCE = "Maintenance"
    MONITORING = "Monitoring"
    CONSTRUCTION = "Construction"
    TRANSPORTATION = "Transportation"
    EXTRACTION = "Extraction"
    PROCESSING = "Processing"
    UNSPECIFIED = "Unspecified"


class LogStatus(str, Enum):
    """Lifecycle state of a logged activity."""

    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    PLANNED = "planned"
    DELAYED = "delayed"
    CANCELLED = "cancelled"


class OutcomeReason(str, Enum):
    """Why a run produced the records it did."""

    OK = "ok"
    EMPTY_INPUT = "empty-input"
    NO_QUALIFYING_UNITS = "no-qualifying-units"
    ALL_UNITS_FAILED = "all-units-failed"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TranscriptionMetadata(_CamelModel):
    """Optional context supplied alongside a transcription."""

    title: str = Field(default="", description="Video title")
    recorded_date: date | None = Field(default=None, description="When it was recorded")
    location: str = Field(default="", description="Default location for the logs")

    @field_validator("title", "location", mode="before")
    @classmethod
    def _null_as_blank(cls, value):
        return "" if value is None else value


@dataclass(frozen=True)
class Unit:
    """One paragraph of the input and its position among the kept paragraphs."""

    index: int
    text: str


class LogRecord(_CamelModel):
    """A single activity log entry extracted from one unit."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    timestamp: datetime
    location: str = Field(min_length=1)
    activity_category: ActivityCategory
    activity_type: str = Field(min_length=1)
    equipment: str = Field(min_length=1)
    personnel: str = Field(min_length=1)
    material: str = Field(min_length=1)
    measurement: str = Field(default="", description="Number with unit, or empty")
    status: LogStatus = LogStatus.COMPLETED
    notes: str = Field(min_length=1, description="Source paragraph")
    reference_id: str = Field(min_length=1)
    coordinates: tuple[float, float] | None = Field(
        default=None, description="(longitude, latitude) of a known location"
    )
    episode_id: str | None = None

    def to_dict(self) -> dict:
        """JSON-ready dict with camelCase keys; absent optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class UnitDiagnostic(_CamelModel):
    """Why a unit was skipped."""

    index: int
    error_type: str
    message: str = ""


class ExtractionOutcome(_CamelModel):
    """The complete result of one extraction run."""

    records: list[LogRecord] = Field(default_factory=list)
    reason: OutcomeReason = OutcomeReason.OK
    units: int = Field(default=0, description="Units that survived segmentation")
    diagnostics: list[UnitDiagnostic] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.records
