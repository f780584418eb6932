"""Module: logger_setup.py

Author: Michael Economou
Date: 2026-10-12

This module provides the ConfigureLogger class for setting up logging for a
rename run. The root logger sends INFO and higher to the console, INFO and
higher to a rotating session log, and optionally DEBUG and higher to a
separate debug log.
"""

import contextlib
import logging
import os
import sys
from datetime import datetime

from mediarename.config import (
    APP_NAME,
    LOG_CONSOLE_LEVEL,
    LOG_DEBUG_FILE_BACKUP_COUNT,
    LOG_DEBUG_FILE_ENABLED,
    LOG_DEBUG_FILE_MAX_BYTES,
    LOG_FILE_BACKUP_COUNT,
    LOG_FILE_LEVEL,
    LOG_FILE_MAX_BYTES,
    LOG_TO_CONSOLE,
    LOG_TO_FILE,
    SHOW_DEV_ONLY_IN_CONSOLE,
)
from mediarename.utils.logging.logger_file_helper import add_file_handler
from mediarename.utils.logging.logger_helper import DevOnlyFilter


def get_user_config_dir(app_name: str = APP_NAME) -> str:
    """Get user configuration directory based on OS."""
    if os.name == "nt":
        base_dir = os.environ.get("APPDATA", os.path.expanduser("~"))
    else:
        base_dir = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(base_dir, app_name)


def get_default_log_dir() -> str:
    """Default directory for session logs."""
    return os.path.join(get_user_config_dir(), "logs")


class ConfigureLogger:
    """Configures process-wide logging for a run.

    Handlers are attached to the root logger once; calling it again in the
    same process is a no-op so tests and embedding callers keep their setup.
    """

    def __init__(
        self,
        log_name: str = APP_NAME,
        log_dir: str | None = None,
        console_level: int | None = None,
        log_to_file: bool = LOG_TO_FILE,
        debug_file: bool = LOG_DEBUG_FILE_ENABLED,
    ):
        """Initializes and configures the root logger.

        Args:
            log_name (str): Base name for the log files.
            log_dir (str): Directory to store log files (user config dir if None).
            console_level (int): Console level (LOG_CONSOLE_LEVEL if None).
            log_to_file (bool): Whether to write a rotating session log.
            debug_file (bool): Whether to write a separate DEBUG log.
        """
        if console_level is None:
            console_level = getattr(logging, LOG_CONSOLE_LEVEL, logging.INFO)

        self.log_dir = log_dir or get_default_log_dir()
        self.log_file_path: str | None = None

        self.logger = logging.getLogger()
        self.logger.setLevel(logging.DEBUG)  # Accept everything; handlers filter levels

        if getattr(self.logger, "_mediarename_configured", False):
            return
        self.logger._mediarename_configured = True

        if LOG_TO_CONSOLE:
            self._setup_console_handler(console_level)

        if log_to_file:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_file_path = os.path.join(self.log_dir, f"{log_name}_{timestamp}.log")
            add_file_handler(
                logger=self.logger,
                log_path=self.log_file_path,
                level=getattr(logging, LOG_FILE_LEVEL, logging.INFO),
                max_bytes=LOG_FILE_MAX_BYTES,
                backup_count=LOG_FILE_BACKUP_COUNT,
            )

            if debug_file:
                add_file_handler(
                    logger=self.logger,
                    log_path=os.path.join(self.log_dir, f"{log_name}_debug_{timestamp}.log"),
                    level=logging.DEBUG,
                    max_bytes=LOG_DEBUG_FILE_MAX_BYTES,
                    backup_count=LOG_DEBUG_FILE_BACKUP_COUNT,
                )

    def _setup_console_handler(self, level: int) -> None:
        self.logger.addHandler(create_console_handler(level))


def create_console_handler(level: int, stream=None) -> logging.StreamHandler:
    """Console handler with UTF-8-safe formatting and DevOnlyFilter.

    At DEBUG level (-v) dev-only records are shown as well.
    """
    console_handler = logging.StreamHandler(sys.stdout if stream is None else stream)

    with contextlib.suppress(Exception):
        console_handler.stream.reconfigure(encoding="utf-8")

    console_handler.setLevel(level)
    console_handler.addFilter(
        DevOnlyFilter(show_dev_only=SHOW_DEV_ONLY_IN_CONSOLE or level <= logging.DEBUG)
    )
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    return console_handler
