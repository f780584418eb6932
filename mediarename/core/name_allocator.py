"""Module: name_allocator.py

Author: Michael Economou
Date: 2026-10-12

Deterministic, collision-free canonical names.

A canonical name is ``YYYY-MM-DD_HHMMSS_NN.ext`` where NN is the smallest
index (from 01) whose path is neither occupied by another file nor reserved
by another worker of the same run. A candidate occupied by the file being
renamed counts as free, which makes a second run over an already renamed
library a no-op.

Check-then-rename is not atomic against other processes writing the same
directory; within one run the reservation set closes the gap between
workers.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from datetime import datetime

from mediarename.config import MAX_SEQUENCE_INDEX, RENAME_FORMAT, SEQUENCE_PADDING
from mediarename.core.errors import AllocationExhaustedError
from mediarename.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


def _path_key(path: str) -> str:
    return os.path.normcase(os.path.abspath(path))


@dataclass(frozen=True)
class CandidateName:
    """One candidate target during allocation."""

    directory: str
    base_name: str
    index: int
    extension: str

    @property
    def filename(self) -> str:
        return f"{self.base_name}_{self.index:0{SEQUENCE_PADDING}d}{self.extension}"

    @property
    def path(self) -> str:
        return os.path.join(self.directory, self.filename)


def format_base_name(point_in_time: datetime) -> str:
    """Base name for a point in time, second precision."""
    return point_in_time.strftime(RENAME_FORMAT)


def _is_same_file(candidate: str, original: str) -> bool:
    if _path_key(candidate) == _path_key(original):
        return True
    if _path_key(candidate).lower() != _path_key(original).lower():
        # Any other entry is taken, even a hard link to the same inode
        return False
    try:
        # Case-insensitive filesystems: IMG.JPG and img.jpg are one entry
        return os.path.samefile(candidate, original)
    except OSError:
        return False


class NameAllocator:
    """Finds the first free canonical name in a directory.

    Thread-safe: claim() allocates and reserves under one lock so two
    workers never receive the same target.
    """

    def __init__(self, max_index: int = MAX_SEQUENCE_INDEX) -> None:
        if max_index < 1:
            raise ValueError("max_index must be at least 1")
        self.max_index = max_index
        self._reserved: set[str] = set()
        self._lock = threading.Lock()

    def _is_taken(self, candidate: str, original_path: str) -> bool:
        if _path_key(candidate) in self._reserved:
            return True
        if not os.path.lexists(candidate):
            return False
        return not _is_same_file(candidate, original_path)

    def allocate(
        self,
        directory: str,
        point_in_time: datetime,
        extension: str,
        original_path: str,
    ) -> str:
        """Return the first free canonical path; may equal original_path.

        Raises:
            AllocationExhaustedError: Every index up to max_index is taken.

        """
        base_name = format_base_name(point_in_time)
        for index in range(1, self.max_index + 1):
            candidate = CandidateName(directory, base_name, index, extension).path
            if not self._is_taken(candidate, original_path):
                return candidate
        raise AllocationExhaustedError(base_name, self.max_index, original_path)

    def claim(
        self,
        directory: str,
        point_in_time: datetime,
        extension: str,
        original_path: str,
    ) -> str:
        """Allocate a target and reserve it until release() is called."""
        with self._lock:
            target = self.allocate(directory, point_in_time, extension, original_path)
            self._reserved.add(_path_key(target))
        logger.debug(
            "[NameAllocator] Claimed %s for %s",
            os.path.basename(target),
            os.path.basename(original_path),
            extra={"dev_only": True},
        )
        return target

    def release(self, target: str) -> None:
        """Drop a reservation (the renamed file now occupies the path itself)."""
        with self._lock:
            self._reserved.discard(_path_key(target))

    @property
    def reserved_count(self) -> int:
        with self._lock:
            return len(self._reserved)


def allocate(directory: str, point_in_time: datetime, extension: str, original_path: str) -> str:
    """One-shot allocation without reservations."""
    return NameAllocator().allocate(directory, point_in_time, extension, original_path)
