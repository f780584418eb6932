"""Module: process_cleanup.py

Author: Michael Economou
Date: 2026-10-12

Utility functions for cleaning up leftover ExifTool processes at exit.

Only children of the current process are touched, so other ExifTool users
on the machine are left alone.
"""

from __future__ import annotations

import contextlib

import psutil

from mediarename.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


def _is_exiftool(proc: psutil.Process) -> bool:
    try:
        name = (proc.name() or "").lower()
        if "exiftool" in name:
            return True
        cmdline = " ".join(proc.cmdline()).lower()
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
        return False
    return "exiftool" in cmdline and "-stay_open" in cmdline


def find_child_exiftool_processes() -> list[psutil.Process]:
    """ExifTool processes started by this process that are still alive."""
    try:
        children = psutil.Process().children(recursive=True)
    except psutil.Error:
        logger.debug("[ProcessCleanup] Cannot list child processes", extra={"dev_only": True})
        return []
    return [proc for proc in children if _is_exiftool(proc)]


def cleanup_child_exiftool_processes(*, graceful_wait_s: float = 0.5) -> int:
    """Terminate (then kill) leftover ExifTool child processes.

    Args:
        graceful_wait_s: Maximum time to wait for terminate() before kill()

    Returns:
        Number of processes that had to be stopped

    """
    processes = find_child_exiftool_processes()
    if not processes:
        logger.debug("[ProcessCleanup] No leftover ExifTool processes", extra={"dev_only": True})
        return 0

    logger.warning("[ProcessCleanup] Found %d leftover ExifTool processes", len(processes))

    for proc in processes:
        with contextlib.suppress(psutil.NoSuchProcess):
            proc.terminate()

    _, alive = psutil.wait_procs(processes, timeout=max(0.0, graceful_wait_s))
    for proc in alive:
        with contextlib.suppress(psutil.NoSuchProcess):
            logger.warning("[ProcessCleanup] Force-killing ExifTool process PID %d", proc.pid)
            proc.kill()

    return len(processes)
