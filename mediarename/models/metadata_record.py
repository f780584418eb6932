"""Module: metadata_record.py

Author: Michael Economou
Date: 2026-10-12

Immutable metadata snapshot for one file, as returned by the extractor.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _to_text(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(_to_text(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class MetadataRecord(Mapping[str, str]):
    """Field name -> string value mapping plus an optional extraction error.

    Attributes:
        path: File the metadata belongs to
        fields: Read-only view of the metadata fields
        error: Extraction error message, None when extraction succeeded

    """

    path: str
    fields: Mapping[str, str] = field(default_factory=dict)
    error: str | None = None

    def __post_init__(self) -> None:
        # Freeze a private copy so callers cannot mutate it afterwards
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_raw(cls, path: str, raw: Mapping[str, Any]) -> MetadataRecord:
        """Build a record from decoded ExifTool JSON (values stringified)."""
        return cls(path=path, fields={str(k): _to_text(v) for k, v in raw.items()})

    @classmethod
    def failed(cls, path: str, error: str) -> MetadataRecord:
        return cls(path=path, fields={}, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __getitem__(self, key: str) -> str:
        return self.fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)
