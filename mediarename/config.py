"""Module: config.py

Author: Michael Economou
Date: 2026-10-12

This module defines global configuration constants and settings used
throughout the mediarename tool. It centralizes logging defaults, ExifTool
settings, pipeline sizing and the naming rules.

Contains:
- Application information
- Logging settings
- External tools configuration
- Pipeline settings
- Naming rules (supported types, timestamp fields and formats)
"""

import os

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "mediarename"
APP_VERSION = "1.0"
APP_AUTHOR = "Michael Economou"

# =====================================
# LOGGING CONFIGURATION
# =====================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = "INFO"  # INFO, DEBUG, WARNING, ERROR

# File logging
LOG_TO_FILE = True
LOG_FILE_LEVEL = "INFO"
LOG_FILE_MAX_BYTES = 5_000_000  # 5MB per file
LOG_FILE_BACKUP_COUNT = 3

# Debug file logging
LOG_DEBUG_FILE_ENABLED = False
LOG_DEBUG_FILE_MAX_BYTES = 10_000_000
LOG_DEBUG_FILE_BACKUP_COUNT = 2

# Show dev-only records (extra={"dev_only": True}) in the console
SHOW_DEV_ONLY_IN_CONSOLE = False

# =====================================
# EXTERNAL TOOLS CONFIGURATION
# =====================================

# Environment variable that points to a specific exiftool executable
EXIFTOOL_PATH_ENV = "MEDIARENAME_EXIFTOOL"

# Seconds allowed for `exiftool -ver` during availability checks
EXIFTOOL_TIMEOUT_VERSION = 5

# Seconds allowed for a graceful `-stay_open False` shutdown
EXIFTOOL_CLOSE_TIMEOUT = 2.0

# Arguments sent with every metadata request to the persistent process
EXIFTOOL_READ_ARGS = (
    "-json",
    "-charset",
    "filename=UTF8",
    "-api",
    "largefilesupport=1",
)

# =====================================
# PIPELINE SETTINGS
# =====================================

# Capacity of the discovery -> worker queue (discovery blocks when full)
PIPELINE_QUEUE_SIZE = 100

# Metadata requests are serialized on one ExifTool process, so a handful of
# workers is enough to overlap renames with extraction.
DEFAULT_WORKER_COUNT = min(os.cpu_count() or 1, 4)

# Highest sequence index tried for one second-bucket before giving up
MAX_SEQUENCE_INDEX = 99

# =====================================
# NAMING RULES
# =====================================

# ExifTool FileType tag -> extension (exact, case-sensitive match)
SUPPORTED_FILE_TYPES = {
    "JPEG": ".jpg",
    "HEIC": ".heic",
    "PNG": ".png",
    "MP4": ".mp4",
    "MOV": ".mov",
}

# Metadata field carrying the file type tag
FILE_TYPE_FIELD = "FileType"

# Timestamp fields, most reliable first
TIMESTAMP_FIELDS = (
    "DateTimeOriginal",  # JPEG / PNG / MP4
    "CreationDate",  # MOV
    "SubSecDateTimeOriginal",  # HEIC, sub-second precision
    "ContentCreateDate",  # MOV / MP4 fallback
    "CreateDate",  # JPEG fallback
)

# Placeholder written by cameras without a clock
EMPTY_TIMESTAMP = "0000:00:00 00:00:00"

# strptime formats, tried in order
TIMESTAMP_FORMATS = (
    "%Y:%m:%d %H:%M:%S",
    "%Y:%m:%d %H:%M:%S.%f%z",
    "%Y:%m:%d %H:%M:%S%z",
)

# Base name of a canonical file (followed by _NN and the extension)
RENAME_FORMAT = "%Y-%m-%d_%H%M%S"
SEQUENCE_PADDING = 2
