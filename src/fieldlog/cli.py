"""Command line entry point: ``fieldlog process <file>``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from fieldlog.config import Config, load_config
from fieldlog.identity import uuid_factory
from fieldlog.lexicon import LexiconError
from fieldlog.output import (
    append_run_log,
    build_bundle,
    describe_reason,
    update_index,
    write_records_json,
    write_timeline_markdown,
)
from fieldlog.parser import parse_file
from fieldlog.pipeline import ExtractionEngine
from fieldlog.sink import push_bundle

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NO_LOGS = 2


def _parse_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("date must look like YYYY-MM-DD (e.g., 2024-01-01)") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fieldlog",
        description="Turn video transcriptions into structured activity logs.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("process", help="Extract activity logs from a transcription file")
    p.add_argument("file", help="Transcription .txt/.md file or .json request body")
    p.add_argument("--title", help="Video title")
    p.add_argument("--date", type=_parse_date, help="Recording date (YYYY-MM-DD)")
    p.add_argument("--location", help="Default location for logs without one")
    p.add_argument("--id", dest="transcription_id", help="Transcription id (default: random)")
    p.add_argument("--lexicon", help="YAML lexicon overrides (default: $LEXICON_PATH)")
    p.add_argument("--output-dir", help="Output directory (default: $OUTPUT_DIR)")
    p.add_argument("--workers", type=int, help="Worker threads for extraction")
    p.add_argument("--stdout", action="store_true", help="Print the JSON bundle instead of writing files")
    p.add_argument("--push", action="store_true", help="Push the bundle to $LOG_SINK_ENDPOINT")
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    return parser


def _apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    if args.lexicon:
        config.lexicon_path = args.lexicon
    if args.output_dir:
        config.output_dir = args.output_dir
    if args.workers:
        config.max_workers = args.workers
    if args.verbose:
        config.verbose = True
    return config


def cmd_process(args: argparse.Namespace, config: Config) -> int:
    try:
        text, info = parse_file(args.file)
    except (FileNotFoundError, ValueError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_FAILED

    metadata = dict(info.get("metadata", {}))
    if args.title:
        metadata["title"] = args.title
    if args.date:
        metadata["recordedDate"] = args.date
    if args.location:
        metadata["location"] = args.location

    try:
        engine = ExtractionEngine(config=config)
        outcome = engine.run(text, metadata)
    except LexiconError as e:
        print(f"✗ Lexicon error: {e}", file=sys.stderr)
        return EXIT_FAILED
    except ValidationError as e:
        print(f"✗ Invalid metadata: {e}", file=sys.stderr)
        return EXIT_FAILED

    transcription_id = args.transcription_id or uuid_factory()
    input_name = Path(args.file).name

    if args.stdout:
        print(json.dumps(build_bundle(outcome, text, transcription_id), indent=2))
    else:
        bundle_path = write_records_json(outcome, text, config.output_dir, transcription_id)
        md_path = write_timeline_markdown(
            outcome, config.output_dir, transcription_id, input_name, metadata.get("title") or ""
        )
        append_run_log(config.output_dir, input_name, outcome, transcription_id)
        update_index(
            config.output_dir, input_name, outcome, transcription_id, Path(bundle_path).name
        )
        print(f"✓ {len(outcome.records)} logs from {outcome.units} units → {bundle_path}")
        print(f"✓ Timeline → {md_path}")

    if args.push:
        result = push_bundle(outcome, text, transcription_id)
        print(f"✓ Push: {result['status']}", file=sys.stderr)

    if outcome.diagnostics:
        print(f"! Skipped {len(outcome.diagnostics)} units", file=sys.stderr)

    if outcome.is_empty:
        print(f"✗ No logs extracted: {describe_reason(outcome.reason)}", file=sys.stderr)
        return EXIT_NO_LOGS

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = _apply_overrides(load_config(), args)

    logging.basicConfig(
        level=logging.INFO if config.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "process":
        return cmd_process(args, config)
    return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
