"""Data models for mediarename.

This package contains:
- MetadataRecord: Field mapping produced by the metadata extractor
- ProcessingOutcome, FileError, RunReport: Per-file and per-run results
"""

from mediarename.models.metadata_record import MetadataRecord
from mediarename.models.outcome import (
    FileError,
    OutcomeStatus,
    ProcessingOutcome,
    RunReport,
)

__all__ = [
    "FileError",
    "MetadataRecord",
    "OutcomeStatus",
    "ProcessingOutcome",
    "RunReport",
]
