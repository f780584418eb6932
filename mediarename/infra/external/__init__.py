"""External tool integrations.

Author: Michael Economou
Date: 2026-10-12
"""

from mediarename.infra.external.exiftool_wrapper import ExifToolWrapper

__all__ = [
    "ExifToolWrapper",
]
