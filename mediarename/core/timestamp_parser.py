"""Module: timestamp_parser.py

Author: Michael Economou
Date: 2026-10-12

Parses ExifTool timestamp strings.

Camera and tool output is inconsistent about sub-second precision and UTC
offsets, so a few strptime formats are tried in order, base format first:

    2023:05:01 10:15:30
    2023:05:01 10:15:30.123-05:00   (HEIC)
    2023:05:01 10:15:30-05:00       (MOV / MP4 with zone)

Offset-aware results keep the offset they were recorded with, so the name
reflects the wall-clock time shown by the camera.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from mediarename.config import TIMESTAMP_FORMATS
from mediarename.core.errors import TimestampUnparseableError


class TimestampParser:
    """Tries a list of strptime formats; the first match wins."""

    def __init__(self, formats: Sequence[str] = TIMESTAMP_FORMATS) -> None:
        if not formats:
            raise ValueError("at least one timestamp format is required")
        self.formats = tuple(formats)

    def parse_with_format(self, raw: str, path: str | None = None) -> tuple[datetime, str]:
        """Return the parsed value and the format that matched.

        Raises:
            TimestampUnparseableError: No format matches.

        """
        text = raw.strip()
        for fmt in self.formats:
            try:
                return datetime.strptime(text, fmt), fmt
            except ValueError:
                continue
        raise TimestampUnparseableError(raw, path)

    def parse(self, raw: str, path: str | None = None) -> datetime:
        return self.parse_with_format(raw, path)[0]


_default_parser = TimestampParser()


def parse(raw: str) -> datetime:
    """Parse with the default format list."""
    return _default_parser.parse(raw)
