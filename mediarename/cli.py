#!/usr/bin/env python3
"""
Module: cli.py

Author: Michael Economou
Date: 2026-10-12

Command line entry point for mediarename.

Usage:
    mediarename DIRECTORY [options]
    python -m mediarename DIRECTORY [options]

Sets up logging, starts one shared ExifTool process, runs the rename
pipeline over DIRECTORY and prints one line per issue plus a summary.

Exit codes:
    0   every file was renamed or already carried its canonical name
    1   at least one file could not be processed, or startup failed
    2   invalid command line (argparse)
    130 interrupted
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time

from mediarename.config import APP_NAME, APP_VERSION, DEFAULT_WORKER_COUNT, MAX_SEQUENCE_INDEX
from mediarename.core.errors import FatalStartupError
from mediarename.core.file_pipeline import FilePipeline
from mediarename.core.name_allocator import NameAllocator
from mediarename.infra.external.exiftool_wrapper import ExifToolWrapper
from mediarename.models.outcome import RunReport
from mediarename.utils.logging.logger_factory import get_cached_logger
from mediarename.utils.logging.logger_setup import ConfigureLogger
from mediarename.utils.process_cleanup import cleanup_child_exiftool_processes

logger = get_cached_logger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Rename photos and videos to YYYY-MM-DD_HHMMSS_NN.ext "
            "using the capture time stored in their metadata."
        ),
    )
    parser.add_argument("directory", help="root directory to process (recursively)")
    parser.add_argument(
        "-w",
        "--workers",
        type=_positive_int,
        default=DEFAULT_WORKER_COUNT,
        help=f"number of worker threads (default: {DEFAULT_WORKER_COUNT})",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="show the planned names without renaming anything",
    )
    parser.add_argument("--exiftool", metavar="PATH", help="path to the exiftool executable")
    parser.add_argument(
        "--max-index",
        type=_positive_int,
        default=MAX_SEQUENCE_INDEX,
        help=f"highest _NN suffix tried per second (default: {MAX_SEQUENCE_INDEX})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug messages")
    parser.add_argument("--log-dir", metavar="DIR", help="directory for session log files")
    parser.add_argument("--no-log-file", action="store_true", help="log to the console only")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def validate_root(directory: str) -> str:
    """Return the absolute root directory or raise FatalStartupError."""
    root = os.path.abspath(os.path.expanduser(directory))
    if not os.path.isdir(root):
        raise FatalStartupError(f"not a directory: {directory}")
    return root


def create_extractor(exiftool_path: str | None = None) -> ExifToolWrapper:
    """Start the shared ExifTool process (FatalStartupError on failure)."""
    return ExifToolWrapper(exiftool_path)


def report_results(report: RunReport, dry_run: bool = False) -> None:
    """Emit one line per issue followed by the summary lines."""
    for error in report.errors:
        logger.error("%s: %s", error.file_name, error.cause)

    if dry_run:
        logger.info(
            "would rename: %d || already named: %d || issues: %d",
            report.planned_count,
            report.canonical_count,
            report.issue_count,
        )
    else:
        logger.info(
            "renamed: %d || already named: %d || issues: %d",
            report.renamed_count,
            report.canonical_count,
            report.issue_count,
        )
    logger.info("produced: %d || consumed: %d", report.produced, report.consumed)


def main(argv: list[str] | None = None) -> int:
    """Run mediarename with the given arguments (sys.argv when None)."""
    args = build_parser().parse_args(argv)

    ConfigureLogger(
        log_dir=args.log_dir,
        console_level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )
    logger.info("%s %s started at %s", APP_NAME, APP_VERSION, time.strftime("%Y-%m-%d %H:%M:%S"))

    try:
        root = validate_root(args.directory)
        extractor = create_extractor(args.exiftool)
    except FatalStartupError as e:
        logger.error("Cannot start: %s", e)
        return 1

    try:
        pipeline = FilePipeline(
            extractor,
            workers=args.workers,
            dry_run=args.dry_run,
            allocator=NameAllocator(max_index=args.max_index),
        )
        report = pipeline.run(root)
    except KeyboardInterrupt:
        logger.warning("Interrupted; files renamed so far keep their new names")
        return 130
    finally:
        extractor.close()
        cleanup_child_exiftool_processes()

    report_results(report, dry_run=args.dry_run)
    return 0 if report.issue_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
