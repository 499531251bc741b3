"""Configuration management for the fieldlog CLI and engine."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _parse_bool(value: str | None) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return False
    return value.lower() in ("true", "1", "yes", "on")


@dataclass
class Config:
    """Configuration for the extraction engine."""

    lexicon_path: str = ""
    min_unit_length: int = 20
    time_step_minutes: int = 10
    max_workers: int = 1
    output_dir: str = "./output/"
    verbose: bool = False


def load_config() -> Config:
    """
    Load configuration from environment variables and .env file.

    Returns:
        Config instance with all settings loaded.
    """
    load_dotenv()

    return Config(
        lexicon_path=os.getenv("LEXICON_PATH", ""),
        min_unit_length=int(os.getenv("MIN_UNIT_LENGTH", "20")),
        time_step_minutes=int(os.getenv("TIME_STEP_MINUTES", "10")),
        max_workers=int(os.getenv("MAX_WORKERS", "1")),
        output_dir=os.getenv("OUTPUT_DIR", "./output/"),
        verbose=_parse_bool(os.getenv("VERBOSE")),
    )
