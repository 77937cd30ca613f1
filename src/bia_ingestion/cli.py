# ============================================================================
# src/bia_ingestion/cli.py
# ============================================================================
"""
Command-line entry point.

Usage:
    bia-ingest report.txt
    bia-ingest report.txt --previous last_week.json
    bia-ingest report.txt --no-correct --trace --log-level DEBUG
    cat report.txt | bia-ingest -
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import logging_settings, pipeline_settings
from .core.context import MeasurementRecord
from .core.pipeline import IngestionPipeline
from .extractors import FieldExtractor, logging_tracer
from .utils.exceptions import BIAIngestionError
from .utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bia-ingest",
        description="Parse the OCR text of a BIA scale report into a measurement record"
    )
    parser.add_argument("report", help="OCR transcript file, or '-' for stdin")
    parser.add_argument(
        "--previous",
        type=Path,
        help="Previous measurement record (JSON) to validate against"
    )
    parser.add_argument(
        "--no-correct",
        action="store_true",
        help="Report issues without attempting auto-correction"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        default=logging_settings.TRACE_EXTRACTION,
        help="Log which pattern resolved each field"
    )
    parser.add_argument(
        "--log-level",
        default=logging_settings.LOG_LEVEL,
        help="Logging level (default: %(default)s)"
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: %(default)s)"
    )
    return parser


def read_report(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def load_previous(path: Optional[Path]) -> Optional[MeasurementRecord]:
    if path is None:
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    # Accept either a bare record or a previous run's full output
    if isinstance(data, dict) and isinstance(data.get("record"), dict):
        data = data["record"]
    return MeasurementRecord.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        level = "DEBUG" if args.trace else args.log_level
        setup_logging(level, logging_settings.LOG_FILE, logging_settings.LOG_JSON)

        text = read_report(args.report)
        previous = load_previous(args.previous)
        logger.debug(f"Read {len(text)} characters from {args.report}")
    except (OSError, json.JSONDecodeError, BIAIngestionError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    settings = pipeline_settings.model_copy(
        update={"ENABLE_AUTO_CORRECTION": pipeline_settings.ENABLE_AUTO_CORRECTION and not args.no_correct}
    )
    extractor = FieldExtractor(trace=logging_tracer() if args.trace else None)
    pipeline = IngestionPipeline(extractor=extractor, settings=settings)

    result = pipeline.process(text, previous)
    print(json.dumps(result.to_dict(), indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
