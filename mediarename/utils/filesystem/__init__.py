"""Filesystem utilities package.

Directory walking and path helpers.
"""

from mediarename.utils.filesystem.directory_walker import iter_files, relative_name

__all__ = [
    "iter_files",
    "relative_name",
]
