"""JSON bundle, markdown timeline, run log and index writing for extraction runs."""

import json
import logging
from datetime import datetime
from pathlib import Path

from fieldlog.models import ExtractionOutcome, OutcomeReason
from fieldlog.stats import category_counts, location_groups, status_counts

logger = logging.getLogger(__name__)

_REASON_TEXT = {
    OutcomeReason.OK: "",
    OutcomeReason.EMPTY_INPUT: "The transcription was empty.",
    OutcomeReason.NO_QUALIFYING_UNITS: "No paragraph was long enough to extract a log from.",
    OutcomeReason.ALL_UNITS_FAILED: "Every paragraph failed extraction; see diagnostics.",
}


def describe_reason(reason: OutcomeReason) -> str:
    return _REASON_TEXT.get(reason, "")


def build_bundle(
    outcome: ExtractionOutcome,
    text: str,
    transcription_id: str,
    summary: str = "",
) -> dict:
    """
    Package records with their source text for storage or shipping.

    Args:
        outcome: Result of the extraction run
        text: Full raw transcription
        transcription_id: Key the bundle is stored under
        summary: Optional externally generated summary

    Returns:
        JSON-ready dict
    """
    return {
        "transcriptionId": transcription_id,
        "text": text,
        "summary": summary,
        "reason": outcome.reason.value,
        "units": outcome.units,
        "logs": [record.to_dict() for record in outcome.records],
        "diagnostics": [d.model_dump(by_alias=True) for d in outcome.diagnostics],
    }


def write_records_json(
    outcome: ExtractionOutcome,
    text: str,
    output_dir: str,
    transcription_id: str,
    summary: str = "",
) -> str:
    """Write the bundle to ``<output_dir>/<transcription_id>.json``; returns the path."""
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    filepath = output_path / f"{transcription_id}.json"
    bundle = build_bundle(outcome, text, transcription_id, summary)
    filepath.write_text(json.dumps(bundle, indent=2))
    logger.debug(f"Wrote {len(outcome.records)} logs to {filepath}")

    return str(filepath)


def write_timeline_markdown(
    outcome: ExtractionOutcome,
    output_dir: str,
    transcription_id: str,
    input_file: str,
    title: str = "",
) -> str:
    """
    Generate and write a markdown timeline of the extracted logs.

    Args:
        outcome: Result of the extraction run
        output_dir: Directory to write markdown file to
        transcription_id: Identifier of this transcription
        input_file: Name of input file
        title: Video title, if known

    Returns:
        Path to the generated markdown file
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    filepath = output_path / f"{transcription_id}.md"
    records = outcome.records

    lines = []

    heading = title or Path(input_file).name
    lines.append(f"# Activity Log: {heading}")
    lines.append("")
    lines.append(
        f"**Input:** `{input_file}` ({outcome.units} units, {len(records)} logs)"
    )
    lines.append(f"**Transcription:** `{transcription_id}`")
    lines.append("")

    if not records:
        lines.append("_No logs extracted._ " + describe_reason(outcome.reason))
        lines.append("")
    else:
        lines.append("## Status")
        for status, count in status_counts(records).items():
            if count:
                lines.append(f"- {status}: {count}")
        lines.append("")

        lines.append("## Categories")
        for category, count in category_counts(records).items():
            lines.append(f"- {category}: {count}")
        lines.append("")

        lines.append("## Locations")
        for group in location_groups(records):
            where = ""
            if group.coordinates:
                where = f" ({group.coordinates[1]:.4f}, {group.coordinates[0]:.4f})"
            lines.append(f"- **{group.location}**{where}: {group.count}")
        lines.append("")

        lines.append("## Timeline")
        for record in records:
            when = record.timestamp.strftime("%Y-%m-%d %H:%M")
            lines.append(
                f"- `{when}` **{record.activity_category.value}** {record.activity_type} "
                f"@ {record.location} [{record.status.value}]"
            )
            details = [record.personnel, record.equipment, record.material]
            if record.measurement:
                details.append(record.measurement)
            lines.append(f"  - {', '.join(details)} ({record.reference_id})")
        lines.append("")

    if outcome.diagnostics:
        lines.append("## Skipped Units")
        for diag in outcome.diagnostics:
            lines.append(f"- unit {diag.index}: {diag.error_type}: {diag.message}")
        lines.append("")

    content = "\n".join(lines).rstrip() + "\n"
    filepath.write_text(content)

    return str(filepath)


def append_run_log(
    output_dir: str,
    input_file: str,
    outcome: ExtractionOutcome,
    transcription_id: str,
) -> None:
    """
    Append a run entry to the runs.log file.

    Args:
        output_dir: Directory containing runs.log
        input_file: Name of input file
        outcome: Result of the extraction run
        transcription_id: Identifier of this transcription
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    log_file = output_path / "runs.log"

    fields = [
        datetime.now().isoformat(),
        input_file,
        str(outcome.units),
        str(len(outcome.records)),
        str(len(outcome.diagnostics)),
        outcome.reason.value,
        transcription_id,
    ]

    with open(log_file, "a") as f:
        f.write("\t".join(fields) + "\n")


def update_index(
    output_dir: str,
    input_file: str,
    outcome: ExtractionOutcome,
    transcription_id: str,
    output_file: str,
) -> None:
    """
    Update or create the index.json file with run metadata and stats.

    Args:
        output_dir: Directory containing index.json
        input_file: Name of input file
        outcome: Result of the extraction run
        transcription_id: Identifier of this transcription
        output_file: Name of the bundle file written for this run
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    index_file = output_path / "index.json"

    if index_file.exists():
        data = json.loads(index_file.read_text())
    else:
        data = {
            "version": "1.0",
            "generated": datetime.now().isoformat(),
            "total_transcriptions": 0,
            "total_logs": 0,
            "stats": {"status": {}, "category": {}},
            "transcriptions": [],
        }

    statuses = status_counts(outcome.records)
    categories = category_counts(outcome.records)

    for key, count in statuses.items():
        data["stats"]["status"][key] = data["stats"]["status"].get(key, 0) + count
    for key, count in categories.items():
        data["stats"]["category"][key] = data["stats"]["category"].get(key, 0) + count

    data["transcriptions"].append(
        {
            "date": datetime.now().isoformat(),
            "file": input_file,
            "transcription_id": transcription_id,
            "output_file": output_file,
            "logs": len(outcome.records),
            "skipped": len(outcome.diagnostics),
            "reason": outcome.reason.value,
        }
    )
    data["total_transcriptions"] = len(data["transcriptions"])
    data["total_logs"] = sum(t["logs"] for t in data["transcriptions"])
    data["generated"] = datetime.now().isoformat()

    temp_file = index_file.with_suffix(".json.tmp")
    temp_file.write_text(json.dumps(data, indent=2))
    temp_file.replace(index_file)
