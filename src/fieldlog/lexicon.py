"""Lexicon tables: the domain vocabulary the field extractors match against.

The built-in tables cover the field sites and vocabulary the dashboard was
built around. A YAML file can override any subset of them:

    locations:
      - name: Sanchez Site
        coordinates: [-97.8331, 30.1872]
      - Delta Junction
    activities:
      Installation: [install, mounting]
      Maintenance: [maintain, repair]
    personnel: [Engineer, Technician]

Table order is significant: the first matching entry wins.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
)

from fieldlog.models import ActivityCategory, LogStatus

logger = logging.getLogger(__name__)

Word = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class LexiconError(ValueError):
    """Raised when a lexicon table is unreadable or malformed."""


class KnownLocation(BaseModel):
    """A named site, optionally pinned to (longitude, latitude)."""

    model_config = ConfigDict(frozen=True)

    name: Word
    coordinates: tuple[float, float] | None = None


class Lexicon(BaseModel):
    """Ordered vocabulary tables. Read-only once built."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    locations: tuple[KnownLocation, ...] = Field(default_factory=tuple)
    activities: dict[ActivityCategory, tuple[Word, ...]] = Field(default_factory=dict)
    personnel: tuple[Word, ...] = Field(default_factory=tuple)
    equipment: tuple[Word, ...] = Field(default_factory=tuple)
    materials: tuple[Word, ...] = Field(default_factory=tuple)
    status_markers: dict[LogStatus, tuple[Word, ...]] = Field(default_factory=dict)

    @field_validator("locations", mode="before")
    @classmethod
    def _names_as_locations(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    @field_validator("activities")
    @classmethod
    def _check_activities(cls, value: dict) -> dict:
        if ActivityCategory.UNSPECIFIED in value:
            raise ValueError("'Unspecified' is the fallback category and takes no keywords")
        return {category: tuple(k.lower() for k in keywords) for category, keywords in value.items()}

    @field_validator("status_markers")
    @classmethod
    def _check_status_markers(cls, value: dict) -> dict:
        if LogStatus.COMPLETED in value:
            raise ValueError("'completed' is the default status and takes no markers")
        return {status: tuple(m.lower() for m in markers) for status, markers in value.items()}


DEFAULT_LOCATIONS = (
    KnownLocation(name="Massey's Test Facility", coordinates=(-97.7431, 30.2672)),
    KnownLocation(name="Sanchez Site", coordinates=(-97.8331, 30.1872)),
    KnownLocation(name="Delta Junction", coordinates=(-97.6531, 30.3472)),
    KnownLocation(name="North Ridge", coordinates=(-97.7231, 30.4272)),
    KnownLocation(name="West Portal", coordinates=(-97.9131, 30.2472)),
    KnownLocation(name="South Basin", coordinates=(-97.7631, 30.1272)),
    KnownLocation(name="East Quarry", coordinates=(-97.6131, 30.2772)),
    KnownLocation(name="Central Processing", coordinates=(-97.7731, 30.2972)),
)

DEFAULT_ACTIVITIES = {
    ActivityCategory.INSTALLATION: ("install", "mounting", "placement", "setup"),
    ActivityCategory.MAINTENANCE: ("maintain", "maintenance", "repair", "service", "check", "inspect"),
    ActivityCategory.MONITORING: ("monitor", "measure", "record", "analyze", "test"),
    ActivityCategory.CONSTRUCTION: ("construct", "build", "assemble", "develop"),
    ActivityCategory.TRANSPORTATION: ("transport", "move", "ship", "deliver"),
    ActivityCategory.EXTRACTION: ("extract", "mine", "drill", "excavate"),
    ActivityCategory.PROCESSING: ("process", "refine", "treat", "filter"),
}

DEFAULT_PERSONNEL = (
    "Engineer", "Technician", "Operator", "Supervisor", "Team", "Crew", "Specialist", "Consultant",
)

DEFAULT_EQUIPMENT = (
    "Excavator", "Drill", "Pump", "Crane", "Loader", "Truck", "Sensor", "Generator",
    "Compressor", "Conveyor", "Filter", "Tank", "Valve", "Pipe",
)

DEFAULT_MATERIALS = (
    "Water", "Soil", "Rock", "Concrete", "Steel", "Sand", "Gravel", "Oil",
    "Gas", "Chemical", "Cement", "Timber", "Clay", "Mineral",
)

DEFAULT_STATUS_MARKERS = {
    LogStatus.IN_PROGRESS: ("in progress", "ongoing"),
    LogStatus.PLANNED: ("plan", "schedule", "will be"),
    LogStatus.DELAYED: ("delay", "postpone"),
    LogStatus.CANCELLED: ("cancel", "abort"),
}

DEFAULT_LEXICON = Lexicon(
    locations=DEFAULT_LOCATIONS,
    activities=DEFAULT_ACTIVITIES,
    personnel=DEFAULT_PERSONNEL,
    equipment=DEFAULT_EQUIPMENT,
    materials=DEFAULT_MATERIALS,
    status_markers=DEFAULT_STATUS_MARKERS,
)


def build_lexicon(data: Any) -> Lexicon:
    """
    Build a lexicon from a mapping of table overrides.

    Tables missing from ``data`` keep their built-in contents.

    Raises:
        LexiconError: If ``data`` is not a mapping or a table is malformed.
    """
    if data is None:
        return DEFAULT_LEXICON
    if not isinstance(data, dict):
        raise LexiconError(f"Lexicon must be a mapping of tables, got {type(data).__name__}")

    merged = DEFAULT_LEXICON.model_dump()
    merged.update(data)
    try:
        return Lexicon.model_validate(merged)
    except ValidationError as e:
        raise LexiconError(f"Invalid lexicon: {e}") from e


def load_lexicon(path: str = "") -> Lexicon:
    """
    Load lexicon tables from a YAML file.

    Args:
        path: Path to YAML lexicon file; empty means built-in tables

    Returns:
        The merged Lexicon. A missing file falls back to the built-in tables.

    Raises:
        LexiconError: If the file exists but is not valid YAML or fails validation.
    """
    if not path:
        return DEFAULT_LEXICON

    filepath = Path(path).expanduser()
    if not filepath.exists():
        logger.warning(f"Lexicon file not found: {path}, using built-in tables")
        return DEFAULT_LEXICON

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LexiconError(f"Could not parse lexicon {path}: {e}") from e

    lexicon = build_lexicon(data)
    logger.info(f"Loaded lexicon overrides from {path}: {sorted(data or {})}")
    return lexicon


def ensure_valid(lexicon: Any) -> Lexicon:
    """Re-validate a lexicon before use; a corrupted table is fatal."""
    if not isinstance(lexicon, Lexicon):
        raise LexiconError(f"Expected a Lexicon, got {type(lexicon).__name__}")
    try:
        return Lexicon.model_validate(lexicon.model_dump())
    except ValidationError as e:
        raise LexiconError(f"Corrupted lexicon: {e}") from e
