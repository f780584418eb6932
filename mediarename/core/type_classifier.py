"""Module: type_classifier.py

Author: Michael Economou
Date: 2026-10-12

Maps the file type tag reported by ExifTool to the extension used in the
canonical name.
"""

from __future__ import annotations

from collections.abc import Mapping

from mediarename.config import SUPPORTED_FILE_TYPES
from mediarename.core.errors import UnsupportedTypeError


class TypeClassifier:
    """Exact, case-sensitive lookup of supported type tags."""

    def __init__(self, supported: Mapping[str, str] | None = None) -> None:
        self._supported = dict(SUPPORTED_FILE_TYPES if supported is None else supported)

    @property
    def supported_types(self) -> tuple[str, ...]:
        return tuple(self._supported)

    def classify(self, file_type: str, path: str | None = None) -> str:
        """Return the extension for a reported type tag.

        Raises:
            UnsupportedTypeError: The tag is not in the supported set.

        """
        try:
            return self._supported[file_type]
        except KeyError:
            raise UnsupportedTypeError(file_type, path) from None


_default_classifier = TypeClassifier()


def classify(file_type: str) -> str:
    """Classify with the default supported-types table."""
    return _default_classifier.classify(file_type)
