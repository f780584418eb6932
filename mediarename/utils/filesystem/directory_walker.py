"""Module: directory_walker.py

Author: Michael Economou
Date: 2026-10-12

Recursive file discovery for a rename run.

Each directory is listed completely before its files are yielded, so a file
renamed inside an already listed directory is never discovered twice.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

from mediarename.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


def _log_walk_error(error: OSError) -> None:
    logger.warning("[DirectoryWalker] Cannot list %s: %s", error.filename, error.strerror)


def iter_files(root: str) -> Iterator[str]:
    """Yield absolute paths of all files below root (directories are skipped).

    Directory symlinks are not followed. Entries are sorted per directory so
    runs are reproducible.
    """
    root = os.path.abspath(root)
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            yield os.path.join(dirpath, filename)


def relative_name(path: str, root: str) -> str:
    """Path relative to the run root, used when reporting a file."""
    try:
        return os.path.relpath(path, root)
    except ValueError:
        # Different drives on Windows
        return os.path.basename(path)
