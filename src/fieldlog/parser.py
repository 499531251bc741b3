"""Parser module for transcription input files.

Handles plain text transcriptions and JSON request bodies of the form
``{"text": "...", "metadata": {"title": ..., "recordedDate": ..., "location": ...}}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def parse_text(file_path: str) -> tuple[str, dict[str, Any]]:
    """Parse a plain text file.

    Args:
        file_path: Path to the text file

    Returns:
        Tuple of (file_contents, info_dict) where info_dict contains:
        - "format": "text"
        - "chars": character count
    """
    with open(file_path, "r", encoding="utf-8") as f:
        contents = f.read()

    info: dict[str, Any] = {
        "format": "text",
        "chars": len(contents),
    }

    return contents, info


def parse_request(file_path: str) -> tuple[str, dict[str, Any]]:
    """Parse a JSON request body holding a transcription and its metadata.

    Args:
        file_path: Path to the JSON file

    Returns:
        Tuple of (text, info_dict) where info_dict contains:
        - "format": "json"
        - "chars": character count of the text
        - "metadata": the request's metadata object (may be empty)

    Raises:
        ValueError: If the file is not JSON or lacks a string "text" field
    """
    with open(file_path, "r", encoding="utf-8") as f:
        try:
            body = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

    if not isinstance(body, dict):
        raise ValueError(f"Expected a JSON object in {file_path}")

    text = body.get("text")
    if text is None:
        text = ""
    if not isinstance(text, str):
        raise ValueError(f'"text" must be a string in {file_path}')

    metadata = body.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError(f'"metadata" must be an object in {file_path}')

    info: dict[str, Any] = {
        "format": "json",
        "chars": len(text),
        "metadata": metadata,
    }

    return text, info


def parse_file(file_path: str) -> tuple[str, dict[str, Any]]:
    """Auto-detect file format and parse accordingly.

    Supports:
    - .json files (request bodies with text and metadata)
    - anything else is read as plain text

    Args:
        file_path: Path to the file

    Returns:
        Tuple of (text, info_dict)

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if path.suffix.lower() == ".json":
        return parse_request(file_path)
    return parse_text(file_path)
