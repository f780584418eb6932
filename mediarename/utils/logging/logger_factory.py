"""Module: logger_factory.py

Author: Michael Economou
Date: 2026-10-12

Logger factory with caching. Pipeline workers request loggers from
several threads, so lookups are guarded by a lock.
"""

import logging
import threading

from mediarename.utils.logging.logger_helper import get_logger


class LoggerFactory:
    """Thread-safe logger factory that keeps one logger per module name."""

    _loggers: dict[str, logging.Logger] = {}
    _lock = threading.Lock()
    _global_level: int | None = None

    @classmethod
    def get_logger(cls, name: str | None = None) -> logging.Logger:
        """Get or create a cached logger for the given name.

        Args:
            name (str): Logger name, typically __name__ from calling module

        Returns:
            logging.Logger: Cached logger instance
        """
        if name is None:
            import inspect

            frame = inspect.currentframe().f_back
            name = frame.f_globals.get("__name__", "unknown")

        with cls._lock:
            if name not in cls._loggers:
                logger = get_logger(name)
                if cls._global_level is not None:
                    logger.setLevel(cls._global_level)
                cls._loggers[name] = logger

            return cls._loggers[name]

    @classmethod
    def set_global_level(cls, level: int) -> None:
        """Set logging level for all cached loggers (and future ones)."""
        with cls._lock:
            cls._global_level = level
            for logger in cls._loggers.values():
                logger.setLevel(level)

    @classmethod
    def get_cached_names(cls) -> list[str]:
        """Names of all cached loggers."""
        with cls._lock:
            return list(cls._loggers.keys())

    @classmethod
    def clear_cache(cls) -> None:
        """Forget all cached loggers (the logging module keeps the instances)."""
        with cls._lock:
            cls._loggers.clear()
            cls._global_level = None


def get_cached_logger(name: str | None = None) -> logging.Logger:
    """Convenience function for getting a cached logger."""
    return LoggerFactory.get_logger(name)
