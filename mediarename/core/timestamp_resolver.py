"""Module: timestamp_resolver.py

Author: Michael Economou
Date: 2026-10-12

Picks the raw capture timestamp out of a metadata record.

Different file types and ExifTool versions fill different fields, so the
lookup walks one type-agnostic chain of field names, most reliable first:

    DateTimeOriginal        JPEG, PNG, MP4
    CreationDate            MOV
    SubSecDateTimeOriginal  HEIC (sub-second precision)
    ContentCreateDate       MOV / MP4 fallback
    CreateDate              JPEG fallback

The first usable value wins. Blank values and the all-zero placeholder that
clock-less cameras write are skipped.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from mediarename.config import EMPTY_TIMESTAMP, TIMESTAMP_FIELDS
from mediarename.core.errors import TimestampNotFoundError
from mediarename.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


def is_usable(value: str | None) -> bool:
    if value is None:
        return False
    value = value.strip()
    return bool(value) and not value.startswith(EMPTY_TIMESTAMP)


class TimestampResolver:
    """Resolves the raw timestamp string of a record via a field fallback chain."""

    def __init__(self, fields: Sequence[str] = TIMESTAMP_FIELDS) -> None:
        if not fields:
            raise ValueError("at least one timestamp field is required")
        self.fields = tuple(fields)

    def resolve_field(self, record: Mapping[str, str], path: str | None = None) -> tuple[str, str]:
        """Return (field name, raw value) of the first usable field.

        Raises:
            TimestampNotFoundError: None of the fields holds a usable value.

        """
        for name in self.fields:
            value = record.get(name)
            if is_usable(value):
                return name, value.strip()
            if value is not None:
                logger.debug(
                    "[TimestampResolver] Skipping unusable %s=%r", name, value, extra={"dev_only": True}
                )
        raise TimestampNotFoundError(self.fields, path)

    def resolve(self, record: Mapping[str, str], path: str | None = None) -> str:
        """Return the first usable raw timestamp string of the record."""
        return self.resolve_field(record, path)[1]


_default_resolver = TimestampResolver()


def resolve(record: Mapping[str, str]) -> str:
    """Resolve with the default field chain."""
    return _default_resolver.resolve(record)
