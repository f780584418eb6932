"""Module: logger_helper.py

Author: Michael Economou
Date: 2026-10-12

Provides utility functions for working with loggers in a safe and consistent way.
Includes functions to retrieve named loggers and to safely log Unicode
messages (file names from any camera or locale) to the console.

Functions:
get_logger(name): Returns a patched logger with UTF-8-safe logging methods.
safe_text(text): Replaces problematic Unicode characters with ASCII equivalents.
safe_log(logger_func, message): Logs a message safely, falling back to ASCII if needed.

DevOnlyFilter:
A logging filter that hides dev-only debug messages from the console,
while still allowing them to be stored in file logs.
"""

import logging
import re
from functools import partial

from mediarename.config import SHOW_DEV_ONLY_IN_CONSOLE

_REPLACEMENTS = {
    "→": "->",  # right arrow
    "—": "--",  # em dash
    "–": "-",  # en dash
    "…": "...",  # ellipsis
}
_REPLACEMENT_PATTERN = re.compile("|".join(map(re.escape, _REPLACEMENTS.keys())))


def safe_text(text: str) -> str:
    """Replaces unsupported Unicode characters with ASCII-safe alternatives.

    Characters without a known replacement are escaped so the console
    never raises on exotic file names.

    Args:
        text (str): The original text.

    Returns:
        str: ASCII-safe version of the text.
    """
    replaced = _REPLACEMENT_PATTERN.sub(lambda m: _REPLACEMENTS[m.group(0)], text)
    return replaced.encode("ascii", errors="backslashreplace").decode("ascii")


def safe_log(logger_func, message: str, *args, **kwargs):
    """Logs a message using the given logger function (e.g. logger.info),
    falling back to ASCII-safe output if UnicodeEncodeError occurs.
    """
    try:
        if not isinstance(message, str):
            message = repr(message)
        logger_func(message, *args, **kwargs)
    except UnicodeEncodeError:
        # Only text arguments are replaced so %d / %.2f placeholders still format
        safe_args = tuple(safe_text(a) if isinstance(a, str) else a for a in args)
        logger_func(safe_text(message), *safe_args, **kwargs)


def patch_logger_safe_methods(logger: logging.Logger) -> None:
    """Replaces logger's logging methods with safe_log-wrapped versions."""
    for method_name in ["debug", "info", "warning", "error", "critical"]:
        orig_func = getattr(logger, method_name)
        setattr(logger, method_name, partial(safe_log, orig_func))


def get_logger(name: str | None = None) -> logging.Logger:
    """Returns a logger with the given name, delegating output to the root logger.

    Args:
        name (str): Optional logger name (defaults to this module)

    Returns:
        logging.Logger: Patched logger instance
    """
    logger = logging.getLogger(name or __name__)

    # Root logger handles all output (console + files)
    logger.propagate = True

    if not getattr(logger, "_patched_for_safe_log", False):
        patch_logger_safe_methods(logger)
        logger._patched_for_safe_log = True

    return logger


class DevOnlyFilter(logging.Filter):
    """Hides records logged with extra={"dev_only": True} unless enabled.

    Args:
        show_dev_only (bool): Let dev-only records through (config default if None).
    """

    def __init__(self, show_dev_only: bool | None = None):
        super().__init__()
        self.show_dev_only = SHOW_DEV_ONLY_IN_CONSOLE if show_dev_only is None else show_dev_only

    def filter(self, record: logging.LogRecord) -> bool:
        if self.show_dev_only:
            return True
        return not getattr(record, "dev_only", False)
