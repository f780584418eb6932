"""Module: errors.py

Author: Michael Economou
Date: 2026-10-12

Error taxonomy for a rename run.

Every failure carries an ErrorKind so reporting can tell the categories
apart without parsing messages. FatalStartupError is the only kind that
stops a run; every other kind is recorded against the file and the batch
continues.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    EXTRACTION_FAILURE = "extraction_failure"
    UNSUPPORTED_TYPE = "unsupported_type"
    TIMESTAMP_NOT_FOUND = "timestamp_not_found"
    TIMESTAMP_UNPARSEABLE = "timestamp_unparseable"
    ALLOCATION_EXHAUSTED = "allocation_exhausted"
    RENAME_FAILURE = "rename_failure"
    UNEXPECTED = "unexpected"  # bug or misbehaving collaborator, still per-file
    FATAL_STARTUP = "fatal_startup"

    @property
    def is_fatal(self) -> bool:
        return self is ErrorKind.FATAL_STARTUP


class MediaRenameError(Exception):
    """Base error for the project.

    Attributes:
        kind: Failure category
        message: Human readable cause
        path: File the error is attributed to (None for run-level errors)

    """

    kind: ErrorKind = ErrorKind.EXTRACTION_FAILURE

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class ExtractionFailureError(MediaRenameError):
    kind = ErrorKind.EXTRACTION_FAILURE


class UnsupportedTypeError(MediaRenameError):
    kind = ErrorKind.UNSUPPORTED_TYPE

    def __init__(self, file_type: str, path: str | None = None) -> None:
        super().__init__(f"not a supported type {file_type!r}", path)
        self.file_type = file_type


class TimestampNotFoundError(MediaRenameError):
    kind = ErrorKind.TIMESTAMP_NOT_FOUND

    def __init__(self, fields: tuple[str, ...], path: str | None = None) -> None:
        super().__init__(f"no timestamp in any of {', '.join(fields)}", path)
        self.fields = fields


class TimestampUnparseableError(MediaRenameError):
    kind = ErrorKind.TIMESTAMP_UNPARSEABLE

    def __init__(self, raw: str, path: str | None = None) -> None:
        super().__init__(f"cannot parse timestamp {raw!r}", path)
        self.raw = raw


class AllocationExhaustedError(MediaRenameError):
    kind = ErrorKind.ALLOCATION_EXHAUSTED

    def __init__(self, base_name: str, max_index: int, path: str | None = None) -> None:
        super().__init__(f"all {max_index} names taken for {base_name}", path)
        self.base_name = base_name
        self.max_index = max_index


class RenameFailureError(MediaRenameError):
    kind = ErrorKind.RENAME_FAILURE


class FatalStartupError(MediaRenameError):
    kind = ErrorKind.FATAL_STARTUP
