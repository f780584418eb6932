"""
Service protocol definitions for mediarename.

Author: Michael Economou
Date: 2026-10-12

The rename pipeline only depends on these protocols, so tests can inject
in-memory fakes instead of a real ExifTool process.

Usage:
    from mediarename.services.interfaces import MetadataExtractorProtocol

    class FakeExtractor:
        def extract(self, path: str) -> MetadataRecord:
            return MetadataRecord(path, {"FileType": "JPEG"})

        def close(self) -> None:
            pass

    extractor: MetadataExtractorProtocol = FakeExtractor()
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from mediarename.models.metadata_record import MetadataRecord

__all__ = [
    "MetadataExtractorProtocol",
]


@runtime_checkable
class MetadataExtractorProtocol(Protocol):
    """Protocol for metadata extraction backends.

    One instance is shared by every pipeline worker, so implementations
    must be safe to call from several threads.
    """

    def extract(self, path: str) -> MetadataRecord:
        """Read the metadata of exactly one file.

        Per-file failures are reported through ``MetadataRecord.error``
        rather than raised.
        """
        ...

    def close(self) -> None:
        """Release the backend (processes, handles)."""
        ...
