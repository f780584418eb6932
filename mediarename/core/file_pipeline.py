"""
Module: file_pipeline.py

Author: Michael Economou
Date: 2026-10-12

Concurrent rename pipeline.

One discovery thread walks the library and feeds absolute paths into a
bounded queue; discovery blocks while the queue is full. Worker threads
take paths off the queue and move each file through

    extract -> classify -> resolve timestamp -> parse timestamp
            -> claim name -> rename

A failure at any step ends the work for that file only; it is recorded as a
FileError and the worker moves on. When the walk is over, discovery puts
one end-of-input marker per worker on the queue, and run() returns once
every worker has drained its share.

Features:
- Backpressure through a bounded queue.Queue
- Shared, thread-safe metadata extractor
- Exactly one ProcessingOutcome per discovered file
- Dry-run mode that plans names without touching the disk
- Optional progress callback, called from worker threads
"""

from __future__ import annotations

import os
import queue
import threading
import time
from collections.abc import Callable

from mediarename.config import DEFAULT_WORKER_COUNT, FILE_TYPE_FIELD, PIPELINE_QUEUE_SIZE
from mediarename.core.errors import (
    ErrorKind,
    ExtractionFailureError,
    MediaRenameError,
    RenameFailureError,
)
from mediarename.core.name_allocator import NameAllocator
from mediarename.core.timestamp_parser import TimestampParser
from mediarename.core.timestamp_resolver import TimestampResolver
from mediarename.core.type_classifier import TypeClassifier
from mediarename.models.metadata_record import MetadataRecord
from mediarename.models.outcome import FileError, OutcomeStatus, ProcessingOutcome, RunReport
from mediarename.services.interfaces import MetadataExtractorProtocol
from mediarename.utils.filesystem.directory_walker import iter_files, relative_name
from mediarename.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

_END_OF_INPUT = None


class FilePipeline:
    """Discovery -> queue -> workers rename pipeline.

    Args:
        extractor: Shared metadata extractor (must be thread-safe)
        workers: Number of worker threads (at least 1)
        queue_size: Capacity of the discovery queue
        dry_run: Plan names without renaming anything
        classifier, resolver, parser, allocator: Overridable collaborators
        progress_callback: Called with each ProcessingOutcome as it completes

    """

    def __init__(
        self,
        extractor: MetadataExtractorProtocol,
        *,
        workers: int = DEFAULT_WORKER_COUNT,
        queue_size: int = PIPELINE_QUEUE_SIZE,
        dry_run: bool = False,
        classifier: TypeClassifier | None = None,
        resolver: TimestampResolver | None = None,
        parser: TimestampParser | None = None,
        allocator: NameAllocator | None = None,
        progress_callback: Callable[[ProcessingOutcome], None] | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError("at least one worker is required")
        if queue_size < 1:
            raise ValueError("queue_size must be positive")

        self.extractor = extractor
        self.workers = workers
        self.queue_size = queue_size
        self.dry_run = dry_run
        self.classifier = classifier or TypeClassifier()
        self.resolver = resolver or TimestampResolver()
        self.parser = parser or TimestampParser()
        self.allocator = allocator or NameAllocator()
        self.progress_callback = progress_callback

        self._report_lock = threading.Lock()

    def run(self, root: str) -> RunReport:
        """Process every file below root and return the aggregated report."""
        root = os.path.abspath(root)
        work_queue: queue.Queue[str | None] = queue.Queue(maxsize=self.queue_size)
        report = RunReport()
        start_time = time.perf_counter()

        logger.info(
            "[FilePipeline] Processing %s (workers=%d, dry_run=%s)", root, self.workers, self.dry_run
        )

        discovery = threading.Thread(
            target=self._discover, args=(root, work_queue, report), name="discovery", daemon=True
        )
        worker_threads = [
            threading.Thread(
                target=self._work,
                args=(root, work_queue, report),
                name=f"worker-{index}",
                daemon=True,
            )
            for index in range(1, self.workers + 1)
        ]

        discovery.start()
        for thread in worker_threads:
            thread.start()

        discovery.join()
        for thread in worker_threads:
            thread.join()

        report.elapsed = time.perf_counter() - start_time
        logger.info(
            "[FilePipeline] Done in %.2fs: %d renamed, %d already named, %d issues",
            report.elapsed,
            report.renamed_count,
            report.canonical_count,
            report.issue_count,
        )
        return report

    def _discover(self, root: str, work_queue: queue.Queue, report: RunReport) -> None:
        """Walk the tree, queue every file, then close the queue."""
        try:
            for path in iter_files(root):
                work_queue.put(path)  # blocks while the queue is full
                report.produced += 1
        except Exception:
            logger.exception("[FilePipeline] Discovery stopped early")
        finally:
            for _ in range(self.workers):
                work_queue.put(_END_OF_INPUT)
            logger.debug(
                "[FilePipeline] Discovery finished: %d files", report.produced, extra={"dev_only": True}
            )

    def _work(self, root: str, work_queue: queue.Queue, report: RunReport) -> None:
        """Consume paths until the end-of-input marker."""
        while True:
            path = work_queue.get()
            try:
                if path is _END_OF_INPUT:
                    return
                with self._report_lock:
                    report.consumed += 1
                outcome = self.process_file(path, root)
                with self._report_lock:
                    report.outcomes.append(outcome)
                if self.progress_callback:
                    try:
                        self.progress_callback(outcome)
                    except Exception:
                        # Callback errors must not end the worker
                        logger.exception("[FilePipeline] Progress callback failed")
            finally:
                work_queue.task_done()

    def process_file(self, path: str, root: str | None = None) -> ProcessingOutcome:
        """Run one file through every step; never raises.

        Args:
            path: Absolute path of the file
            root: Run root used to build the reported relative name

        Returns:
            ProcessingOutcome for the file

        """
        name = relative_name(path, root) if root else os.path.basename(path)
        try:
            return self._process(path)
        except MediaRenameError as e:
            logger.debug("[FilePipeline] %s: %s", name, e, extra={"dev_only": True})
            return ProcessingOutcome.failure(path, FileError(name, e.kind, e.message))
        except Exception as e:
            logger.exception("[FilePipeline] Unexpected error while processing %s", name)
            return ProcessingOutcome.failure(path, FileError(name, ErrorKind.UNEXPECTED, str(e)))

    def _extract(self, path: str) -> MetadataRecord:
        try:
            record = self.extractor.extract(path)
        except Exception as e:
            raise ExtractionFailureError(str(e) or type(e).__name__, path) from e
        if not record.ok:
            raise ExtractionFailureError(record.error, path)
        return record

    def _process(self, path: str) -> ProcessingOutcome:
        record = self._extract(path)

        file_type = record.get(FILE_TYPE_FIELD)
        if not file_type:
            raise ExtractionFailureError(f"{FILE_TYPE_FIELD} not reported", path)
        extension = self.classifier.classify(file_type, path)

        raw_timestamp = self.resolver.resolve(record, path)
        point_in_time = self.parser.parse(raw_timestamp, path)

        target = self.allocator.claim(os.path.dirname(path), point_in_time, extension, path)
        try:
            if target == path:
                return ProcessingOutcome(path, OutcomeStatus.CANONICAL, target)

            if self.dry_run:
                logger.info(
                    "[FilePipeline] Would rename %s to %s",
                    os.path.basename(path),
                    os.path.basename(target),
                )
                return ProcessingOutcome(path, OutcomeStatus.PLANNED, target)

            logger.info(
                "[FilePipeline] Renaming %s to %s", os.path.basename(path), os.path.basename(target)
            )
            try:
                os.rename(path, target)
            except OSError as e:
                raise RenameFailureError(e.strerror or str(e), path) from e
            return ProcessingOutcome(path, OutcomeStatus.RENAMED, target)
        finally:
            if not self.dry_run:
                self.allocator.release(target)
